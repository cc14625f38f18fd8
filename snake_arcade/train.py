import os
import time

from stable_baselines3 import PPO
from stable_baselines3.common.env_checker import check_env
from stable_baselines3.common.evaluation import evaluate_policy

from snake_arcade.config import CLASSIC
from snake_arcade.env import SnakeEnv

ALGO = "PPO"
MODELS_DIR = f"models/{ALGO}"
LOG_DIR = "logs"

TIMESTEPS = 10_000
NUM_ITERS = 10


def train(config=CLASSIC, timesteps=TIMESTEPS, iterations=NUM_ITERS,
          models_dir=MODELS_DIR, log_dir=LOG_DIR, max_steps=5000, eval_episodes=10, seed=None):
    """Train a PPO agent, saving a checkpoint after every round of `timesteps`."""
    os.makedirs(models_dir, exist_ok=True)
    os.makedirs(log_dir, exist_ok=True)

    # No rendering during training
    env = SnakeEnv(config, render_mode=None, max_steps=max_steps)

    model = PPO(
        "MlpPolicy",
        env,
        verbose=1,
        tensorboard_log=log_dir,
        n_steps=2048,
        batch_size=64,
        gae_lambda=0.95,
        gamma=0.99,
        n_epochs=10,
        learning_rate=3e-4,
        clip_range=0.2,
        seed=seed,
    )

    saved = []
    for i in range(1, iterations + 1):
        model.learn(total_timesteps=timesteps, reset_num_timesteps=False, tb_log_name=ALGO)
        path = os.path.join(models_dir, f"{timesteps * i}")
        model.save(path)
        saved.append(path + ".zip")
        print(f"Saved checkpoint {path}.zip")

    mean_reward, std_reward = evaluate_policy(model, env, n_eval_episodes=eval_episodes)
    print(f"Mean reward: {mean_reward:.2f} ± {std_reward:.2f}")

    env.close()
    return saved


def watch(model_path, config=CLASSIC, episodes=3, seed=None, max_steps=5000):
    """Play a saved model in an OpenCV window. Returns the score of each episode."""
    if not os.path.exists(model_path):
        raise FileNotFoundError(f"Model checkpoint not found: {model_path}")

    env = SnakeEnv(config, render_mode="human", max_steps=max_steps)
    model = PPO.load(model_path, env=env)

    scores = []
    try:
        obs, info = env.reset(seed=seed)
        for ep in range(episodes):
            terminated = truncated = False
            total_reward = 0.0
            while not (terminated or truncated):
                action, _ = model.predict(obs, deterministic=True)
                obs, reward, terminated, truncated, info = env.step(action)
                total_reward += reward
            scores.append(info["score"])
            print(f"Episode {ep + 1} -> score {info['score']}  reward {total_reward:.2f}")
            time.sleep(0.5)
            obs, info = env.reset()
    finally:
        env.close()
    return scores


def check(config=CLASSIC):
    env = SnakeEnv(config)
    check_env(env, warn=True)
    env.close()
