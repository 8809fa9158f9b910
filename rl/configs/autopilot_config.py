"""
Training configuration for the Retro Space autopilot
"""

# Environment parameters (anything not listed falls back to GAME_CONFIG)
ENV_CONFIG = {
    # "render_mode": None,  # Don't render during training - it's too slow with parallel envs
    "max_steps": 5400,  # 90 seconds at 60 FPS
    "k_enemies": 5,
}

# Reward shaping
REWARD_CONFIG = {
    "R_KILL": 1.0,       # Reward for destroying an enemy
    "R_LIFE_LOST": 1.0,  # Penalty per life lost (escape or crash)
    "R_DEATH": 5.0,      # Game over penalty
    "R_TIME": 0.001,     # Small time penalty
}

# PPO hyperparameters
PPO_CONFIG = {
    "policy": "MlpPolicy",
    "learning_rate": 3e-4,
    "n_steps": 1024,
    "batch_size": 256,
    "n_epochs": 10,
    "gamma": 0.99,
    "gae_lambda": 0.95,
    "clip_range": 0.2,
    "ent_coef": 0.01,
    "vf_coef": 0.5,
    "max_grad_norm": 0.5,
    "verbose": 1,
}

TRAINING_CONFIG = {
    "total_timesteps": 500_000,
    "save_freq": 10_000,
    "eval_freq": 5_000,
    "log_dir": "./logs",
    "model_dir": "./models",
    "tensorboard_log": "./tensorboard_logs",
}
