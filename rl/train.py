"""
Train a PPO autopilot for Retro Space using Stable-Baselines3

Usage:
    python -m rl.train --timesteps 200000 --n-envs 4
"""

import os
import argparse
from typing import Optional

from stable_baselines3 import PPO
from stable_baselines3.common.vec_env import DummyVecEnv, VecNormalize
from stable_baselines3.common.callbacks import CheckpointCallback, EvalCallback
from stable_baselines3.common.monitor import Monitor

from retro_space import RetroSpaceEnv
from rl.configs.autopilot_config import ENV_CONFIG, REWARD_CONFIG, PPO_CONFIG, TRAINING_CONFIG
from rl.metrics_callback import MetricsCallback


def make_env(render_mode: Optional[str] = None, seed: Optional[int] = None):
    """Factory function to create the environment"""
    def _init():
        env = RetroSpaceEnv(render_mode=render_mode, reward_weights=REWARD_CONFIG, **ENV_CONFIG)
        env = Monitor(env)
        if seed is not None:
            env.reset(seed=seed)
        return env
    return _init


def train_ppo(
    total_timesteps: Optional[int] = None,
    save_dir: str = "./models/ppo",
    log_dir: str = "./logs/ppo",
    tensorboard_log: Optional[str] = "./tensorboard_logs/ppo",
    n_envs: int = 4,
):
    """Train PPO agent on Retro Space"""

    if total_timesteps is None:
        total_timesteps = TRAINING_CONFIG["total_timesteps"]

    os.makedirs(save_dir, exist_ok=True)
    os.makedirs(log_dir, exist_ok=True)

    print(f"\n{'='*60}")
    print(f"Training PPO for {total_timesteps:,} timesteps...")
    print(f"Using {n_envs} parallel environments")
    print(f"{'='*60}\n")

    env = DummyVecEnv([make_env(seed=i) for i in range(n_envs)])
    env = VecNormalize(env, norm_obs=True, norm_reward=True)

    eval_env = DummyVecEnv([make_env(seed=100)])
    eval_env = VecNormalize(eval_env, norm_obs=True, norm_reward=False, training=False)

    checkpoint_callback = CheckpointCallback(
        save_freq=max(1, TRAINING_CONFIG["save_freq"] // n_envs),
        save_path=save_dir,
        name_prefix="ppo_retro_space",
    )

    eval_callback = EvalCallback(
        eval_env,
        best_model_save_path=save_dir,
        log_path=log_dir,
        eval_freq=max(1, TRAINING_CONFIG["eval_freq"] // n_envs),
        deterministic=True,
        render=False,
    )

    metrics_callback = MetricsCallback(
        log_dir=log_dir,
        algo_name="ppo",
        verbose=1,
    )

    model = PPO(
        env=env,
        tensorboard_log=tensorboard_log,
        **PPO_CONFIG
    )

    model.learn(
        total_timesteps=total_timesteps,
        callback=[checkpoint_callback, eval_callback, metrics_callback],
    )

    final_path = os.path.join(save_dir, "ppo_retro_space_final")
    model.save(final_path)
    env.save(os.path.join(save_dir, "vec_normalize.pkl"))

    print(f"\n{'='*60}")
    print(f"PPO Training complete! Model saved to {final_path}")
    summary = metrics_callback.get_summary()
    if summary:
        print(f"Mean Reward: {summary['mean_reward']:.2f} ± {summary['std_reward']:.2f}")
        print(f"Mean Score: {summary['mean_score']:.0f}  Best Level: {summary['max_level']}")
        print(f"Total Episodes: {summary['total_episodes']}")
    print(f"{'='*60}\n")

    return model, metrics_callback


def main():
    parser = argparse.ArgumentParser(description="Train a PPO autopilot for Retro Space")
    parser.add_argument(
        "--timesteps",
        type=int,
        default=None,
        help=f"Total timesteps to train (default: {TRAINING_CONFIG['total_timesteps']})",
    )
    parser.add_argument(
        "--n-envs",
        type=int,
        default=4,
        help="Number of parallel environments (default: 4)",
    )
    parser.add_argument(
        "--save-dir",
        type=str,
        default=os.path.join(TRAINING_CONFIG["model_dir"], "ppo"),
        help="Where to write checkpoints and the final model",
    )
    parser.add_argument(
        "--no-tensorboard",
        action="store_true",
        help="Disable TensorBoard logging",
    )

    args = parser.parse_args()

    train_ppo(
        total_timesteps=args.timesteps,
        save_dir=args.save_dir,
        n_envs=args.n_envs,
        tensorboard_log=None if args.no_tensorboard else os.path.join(TRAINING_CONFIG["tensorboard_log"], "ppo"),
    )


if __name__ == "__main__":
    main()
