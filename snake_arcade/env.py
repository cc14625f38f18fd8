import gymnasium as gym
from gymnasium import spaces
import numpy as np
import cv2
from collections import deque

from snake_arcade.config import CLASSIC, WINDOW_SCALE
from snake_arcade.game import Direction, Game
from snake_arcade.render import draw_frame, show_frame

# Length of the previous-actions history appended to the observation
SNAKE_LEN_GOAL = 30

EAT_REWARD = 10.0
DEATH_PENALTY = -10.0
STEP_PENALTY = -0.1


class SnakeEnv(gym.Env):
    metadata = {"render_modes": ["human", "rgb_array"], "render_fps": 15}

    def __init__(self, config=CLASSIC, render_mode=None, max_steps=5000):
        super().__init__()
        self.config = config
        self.render_mode = render_mode
        self.max_steps = max_steps

        # 4 discrete actions: 0=left, 1=right, 2=down, 3=up
        self.action_space = spaces.Discrete(4)

        # Observation: [head_x, head_y, food_dx, food_dy, length, dir_x, dir_y] + prev_actions
        obs_len = 7 + SNAKE_LEN_GOAL
        # Finite bounds for SB3; length can reach the cell count
        limit = float(max(config.grid_width * config.grid_height, config.grid_width + 1, config.grid_height + 1))
        self.observation_space = spaces.Box(low=-limit, high=limit, shape=(obs_len,), dtype=np.float32)

        self.window_name = "Snake"

        # Set in reset()
        self.game = None
        self.img = None
        self.prev_actions = None
        self.steps = 0
        self.max_score = 0

    # ---------- Gym API ----------
    def reset(self, *, seed=None, options=None):
        super().reset(seed=seed)

        if self.game is not None and self.game.score > self.max_score:
            self.max_score = self.game.score
            print(f"New maximum score registered: {self.max_score}")

        # The game draws food from the env's generator, so seeding the env seeds the game
        self.game = Game(self.config, rng=self.np_random)
        self.prev_actions = deque([-1] * SNAKE_LEN_GOAL, maxlen=SNAKE_LEN_GOAL)
        self.steps = 0

        if self.render_mode == "human":
            self._render_frame()
        return self._get_obs(), self._get_info()

    def step(self, action):
        intent = Direction.from_action(action)
        self.prev_actions.append(int(action))
        self.steps += 1

        prev_distance = self._food_distance()
        result = self.game.tick(intent)

        reward = 0.0
        terminated = self.game.game_over
        truncated = False

        if result.ate:
            reward += EAT_REWARD
        if terminated:
            reward += DEATH_PENALTY
        elif not result.ate:
            reward += 1.0 if self._food_distance() < prev_distance else -1.0
        reward += STEP_PENALTY

        if self.steps >= self.max_steps and not terminated:
            truncated = True

        if self.render_mode == "human":
            self._render_frame()

        return self._get_obs(), float(reward), terminated, truncated, self._get_info()

    def render(self):
        if self.render_mode == "rgb_array":
            return cv2.cvtColor(self._draw_frame(), cv2.COLOR_BGR2RGB)
        elif self.render_mode == "human":
            self._render_frame()

    def close(self):
        if self.render_mode == "human":
            cv2.destroyAllWindows()

    # ---------- Helpers ----------
    def _get_obs(self):
        snake = self.game.snake
        head = snake.head
        food = self.game.food.position
        base = [head.x, head.y, food.x - head.x, food.y - head.y, float(len(snake)),
                snake.direction.x, snake.direction.y]
        obs = np.array(base + list(self.prev_actions), dtype=np.float32)
        return np.clip(obs, self.observation_space.low, self.observation_space.high)

    def _get_info(self):
        return {
            "score": self.game.score,
            "length": len(self.game.snake),
            "collision": self.game.collision,
        }

    def _food_distance(self):
        head = self.game.snake.head
        food = self.game.food.position
        return abs(food.x - head.x) + abs(food.y - head.y)

    def _draw_frame(self):
        self.img = draw_frame(self.game, self.img)
        return self.img

    def _render_frame(self):
        show_frame(self._draw_frame(), self.window_name, WINDOW_SCALE)
        cv2.waitKey(int(1000 / self.metadata["render_fps"]))
