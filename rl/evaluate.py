"""
Evaluation script for a trained Retro Space autopilot
"""

import argparse
import time
from typing import Optional

import numpy as np

from stable_baselines3 import PPO
from stable_baselines3.common.vec_env import DummyVecEnv, VecNormalize

from retro_space import RetroSpaceEnv
from rl.configs.autopilot_config import ENV_CONFIG, REWARD_CONFIG


def evaluate_model(
    model_path: str,
    n_episodes: int = 10,
    render: bool = True,
    seed: Optional[int] = None,
    vec_normalize_path: Optional[str] = None,
):
    """
    Evaluate a trained model

    Args:
        model_path: Path to the saved model
        n_episodes: Number of episodes to evaluate
        render: Whether to open a window
        seed: Random seed for evaluation
        vec_normalize_path: Path to VecNormalize stats
    """
    model = PPO.load(model_path)

    render_mode = "human" if render else None
    base_env = RetroSpaceEnv(render_mode=render_mode, reward_weights=REWARD_CONFIG, **ENV_CONFIG)
    env = DummyVecEnv([lambda: base_env])

    if vec_normalize_path:
        env = VecNormalize.load(vec_normalize_path, env)
        env.training = False
        env.norm_reward = False

    episode_rewards = []
    episode_scores = []
    episode_lengths = []

    for episode in range(n_episodes):
        if seed is not None:
            env.seed(seed + episode)
        obs = env.reset()

        total_reward = 0.0
        steps = 0
        info = {}

        while True:
            action, _ = model.predict(obs, deterministic=True)
            obs, reward, done, infos = env.step(action)
            total_reward += float(reward[0])
            steps += 1
            info = infos[0]

            if render:
                time.sleep(1 / 60)

            if done[0]:
                break

        episode_rewards.append(total_reward)
        episode_scores.append(info.get("score", 0))
        episode_lengths.append(steps)

        print(f"Episode {episode + 1}/{n_episodes}: "
              f"Reward = {total_reward:.2f}, Score = {info.get('score', 0)}, "
              f"Level = {info.get('level', 1)}, Length = {steps}")

    env.close()

    mean_reward = np.mean(episode_rewards)
    std_reward = np.std(episode_rewards)
    mean_score = np.mean(episode_scores)
    mean_length = np.mean(episode_lengths)

    print("\n" + "="*50)
    print(f"Evaluation Results ({n_episodes} episodes):")
    print(f"Mean Reward: {mean_reward:.2f} ± {std_reward:.2f}")
    print(f"Mean Score: {mean_score:.0f}")
    print(f"Mean Episode Length: {mean_length:.1f}")
    print("="*50)

    return {
        "mean_reward": mean_reward,
        "std_reward": std_reward,
        "mean_score": mean_score,
        "mean_length": mean_length,
        "episode_rewards": episode_rewards,
    }


def compare_with_random(n_episodes: int = 10, seed: Optional[int] = None):
    """
    Evaluate a random policy baseline
    """
    print("Evaluating random policy baseline...")

    env = RetroSpaceEnv(render_mode=None, reward_weights=REWARD_CONFIG, **ENV_CONFIG)

    episode_rewards = []
    episode_scores = []

    for episode in range(n_episodes):
        obs, info = env.reset(seed=seed + episode if seed is not None else None)

        terminated = False
        truncated = False
        total_reward = 0.0

        while not (terminated or truncated):
            action = env.action_space.sample()
            obs, reward, terminated, truncated, info = env.step(action)
            total_reward += reward

        episode_rewards.append(total_reward)
        episode_scores.append(info["score"])

    env.close()

    mean_reward = np.mean(episode_rewards)
    std_reward = np.std(episode_rewards)

    print(f"\nRandom Policy Results ({n_episodes} episodes):")
    print(f"Mean Reward: {mean_reward:.2f} ± {std_reward:.2f}")
    print(f"Mean Score: {np.mean(episode_scores):.0f}")

    return {
        "mean_reward": mean_reward,
        "std_reward": std_reward,
    }


def main():
    parser = argparse.ArgumentParser(description="Evaluate a trained Retro Space autopilot")
    parser.add_argument(
        "model_path",
        type=str,
        help="Path to the trained model",
    )
    parser.add_argument(
        "--n-episodes",
        type=int,
        default=10,
        help="Number of evaluation episodes (default: 10)",
    )
    parser.add_argument(
        "--no-render",
        action="store_true",
        help="Disable rendering",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=42,
        help="Random seed (default: 42)",
    )
    parser.add_argument(
        "--vec-normalize",
        type=str,
        default=None,
        help="Path to VecNormalize stats file",
    )
    parser.add_argument(
        "--compare-random",
        action="store_true",
        help="Also evaluate random policy for comparison",
    )

    args = parser.parse_args()

    results = evaluate_model(
        model_path=args.model_path,
        n_episodes=args.n_episodes,
        render=not args.no_render,
        seed=args.seed,
        vec_normalize_path=args.vec_normalize,
    )

    if args.compare_random:
        print("\n")
        random_results = compare_with_random(
            n_episodes=args.n_episodes,
            seed=args.seed,
        )

        improvement = results["mean_reward"] - random_results["mean_reward"]
        print(f"\nImprovement over random: {improvement:.2f}")


if __name__ == "__main__":
    main()
