from collections import deque
from enum import Enum
from typing import NamedTuple, Optional

import numpy as np

from snake_arcade.config import (
    CLASSIC,
    GAME_OVER_SPEED,
    INITIAL_SPEED,
    MIN_SPEED,
    GameConfig,
)


class Point(NamedTuple):
    x: int
    y: int

    def moved(self, step):
        return Point(self.x + step.x, self.y + step.y)


class Direction(Enum):
    # Screen coordinates: y grows downwards
    LEFT = Point(-1, 0)
    RIGHT = Point(1, 0)
    DOWN = Point(0, 1)
    UP = Point(0, -1)

    @property
    def vector(self) -> Point:
        return self.value

    @property
    def horizontal(self) -> bool:
        return self.value.y == 0

    @classmethod
    def from_action(cls, action):
        """Map a discrete action (0=left, 1=right, 2=down, 3=up) to a Direction."""
        try:
            index = int(action)
        except (TypeError, ValueError):
            raise ValueError(f"invalid action: {action!r}") from None
        if not 0 <= index < len(ACTIONS):
            raise ValueError(f"invalid action: {action!r}")
        return ACTIONS[index]


ACTIONS = (Direction.LEFT, Direction.RIGHT, Direction.DOWN, Direction.UP)


class GameStatus(Enum):
    RUNNING = "running"
    GAME_OVER = "game_over"


class TickResult(NamedTuple):
    ate: bool = False
    collision: Optional[str] = None


class Snake:
    """
    Ordered body cells (head first), a unit direction vector and the
    number of segments still to be added at the tail.
    """

    def __init__(self, body, direction=Direction.RIGHT.vector, grow_counter=0):
        self.body = deque(Point(*p) for p in body)
        if not self.body:
            raise ValueError("snake body must not be empty")
        self.direction = Point(*direction)
        self.grow_counter = grow_counter

    @classmethod
    def spawn(cls, config: GameConfig):
        return cls([config.center])

    @property
    def head(self) -> Point:
        return self.body[0]

    def __len__(self):
        return len(self.body)

    def occupies(self, point) -> bool:
        return Point(*point) in self.body

    def move(self):
        self.body.appendleft(self.head.moved(self.direction))
        if self.grow_counter > 0:
            self.grow_counter -= 1
        else:
            self.body.pop()

    def steer(self, direction: Direction) -> bool:
        # Only a turn onto the other axis is accepted: this rejects both
        # reversals and repeats of the current heading
        current_horizontal = self.direction.y == 0
        if direction.horizontal == current_horizontal:
            return False
        self.direction = direction.vector
        return True


class Food:
    def __init__(self, position):
        self.position = Point(*position)

    @classmethod
    def spawn(cls, grid_width, grid_height, rng, occupied=None):
        if occupied:
            free = np.ones((grid_height, grid_width), dtype=bool)
            for x, y in occupied:
                if 0 <= x < grid_width and 0 <= y < grid_height:
                    free[y, x] = False
            ys, xs = np.nonzero(free)
            if len(xs):
                i = int(rng.integers(0, len(xs)))
                return cls((int(xs[i]), int(ys[i])))
        return cls((int(rng.integers(0, grid_width)), int(rng.integers(0, grid_height))))


class Game:
    """
    Snake game controller.

    ``update`` is called once per external frame and performs a logical
    ``tick`` every ``speed`` frames. The presentation layer reads
    ``snake.body``, ``food.position``, ``score`` and ``game_over`` between
    calls.
    """

    def __init__(self, config: GameConfig = CLASSIC, rng=None, seed=None):
        self.config = config
        self.rng = rng if rng is not None else np.random.default_rng(seed)
        self.restart()

    def restart(self):
        self.snake = Snake.spawn(self.config)
        self.food = self._spawn_food()
        self.score = 0
        self.game_over = False
        self.speed = INITIAL_SPEED
        self.update_counter = 0
        self.ticks = 0
        self.collision = None

    @property
    def state(self) -> GameStatus:
        return GameStatus.GAME_OVER if self.game_over else GameStatus.RUNNING

    def update(self, intent: Optional[Direction] = None, restart=False) -> bool:
        """Advance one frame. Returns True when the snake moved."""
        if self.game_over:
            if restart:
                self.restart()
            return False

        self.update_counter += 1
        if self.update_counter < self.speed:
            return False
        self.update_counter = 0

        self.tick(intent)
        return True

    def tick(self, intent: Optional[Direction] = None) -> TickResult:
        if self.game_over:
            return TickResult(collision=self.collision)

        self.snake.move()
        self.ticks += 1

        if intent is not None:
            self.snake.steer(intent)

        collision = self._check_collision()
        if collision:
            self.game_over = True
            self.speed = GAME_OVER_SPEED
            self.collision = collision
            return TickResult(collision=collision)

        if self.snake.head == self.food.position:
            self.score += 1
            self.snake.grow_counter += 1
            self.food = self._spawn_food()
            if self.speed > MIN_SPEED:
                self.speed -= 1
            return TickResult(ate=True)

        return TickResult()

    def in_bounds(self, point) -> bool:
        x, y = point
        return 0 <= x < self.config.grid_width and 0 <= y < self.config.grid_height

    def _check_collision(self):
        head = self.snake.head
        if not self.in_bounds(head):
            return "wall"
        if head in list(self.snake.body)[1:]:
            return "self"
        return None

    def _spawn_food(self):
        occupied = self.snake.body if self.config.food_avoids_snake else None
        return Food.spawn(self.config.grid_width, self.config.grid_height, self.rng, occupied)

    def __repr__(self):
        return (
            f"<Game state={self.state.value} score={self.score} "
            f"length={len(self.snake)} speed={self.speed}>"
        )
