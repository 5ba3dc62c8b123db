"""
Training configuration for the orbit environment
Reward shaping presets, algorithm hyperparameters and training settings
"""

# Environment parameters
ENV_CONFIG = {
    # "render_mode": None,  # Don't render during training - it's too slow with parallel envs
    "width": 800,
    "height": 600,
    "dt": 1/60,
    "max_steps": 3600,  # 60 seconds at 60 FPS
    "k_bullets": 5,
}

# Gameplay overrides passed through to OrbitConfig; these match its defaults, edit to tune
GAME_CONFIG = {
    "orbit_radius": 200.0,
    "coin_count": 30,
    "ship_speed": 0.04,
    "bullet_speed": 3.0,
}

# ==============================================================================
# REWARD SHAPING CONFIGURATIONS
# ==============================================================================

# BASELINE: coins matter, dying matters more
REWARD_CONFIG_BASELINE = {
    "name": "baseline",
    "description": "Balanced coin collection and survival",
    "R_COIN": 1.0,       # Reward per coin
    "R_LEVEL": 5.0,      # Bonus for clearing the path
    "R_DEATH": 10.0,     # Death penalty
    "R_SURVIVE": 0.001,  # Per-step survival bonus
    "R_REVERSE": 0.01,   # Cost of reversing (discourage jitter)
}

# SURVIVAL: stay alive first, coins are a side effect
REWARD_CONFIG_SURVIVAL = {
    "name": "survival",
    "description": "Prioritize dodging - higher death penalty and survival bonus",
    "R_COIN": 0.5,
    "R_LEVEL": 2.0,
    "R_DEATH": 25.0,
    "R_SURVIVE": 0.01,
    "R_REVERSE": 0.0,
}

REWARD_CONFIGS = {
    "baseline": REWARD_CONFIG_BASELINE,
    "survival": REWARD_CONFIG_SURVIVAL,
}

# ==============================================================================
# ALGORITHM HYPERPARAMETERS
# ==============================================================================

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

# DQN hyperparameters
DQN_CONFIG = {
    "policy": "MlpPolicy",
    "learning_rate": 1e-4,
    "buffer_size": 100_000,
    "learning_starts": 1000,
    "batch_size": 128,
    "tau": 1.0,
    "gamma": 0.99,
    "train_freq": 4,
    "gradient_steps": 1,
    "target_update_interval": 1000,
    "exploration_fraction": 0.1,
    "exploration_initial_eps": 1.0,
    "exploration_final_eps": 0.05,
    "verbose": 1,
}

# ==============================================================================
# TRAINING SETTINGS
# ==============================================================================

TRAINING_CONFIG = {
    "total_timesteps": 500_000,
    "save_freq": 10_000,
    "eval_freq": 5_000,
    "log_dir": "./logs",
    "model_dir": "./models",
    "tensorboard_log": "./tensorboard_logs",
}


def make_env_kwargs(reward_name: str = "baseline", **overrides):
    """Keyword arguments for OrbitEnv with a named reward preset"""
    kwargs = dict(ENV_CONFIG)
    kwargs["game_config"] = dict(GAME_CONFIG)
    reward = {k: v for k, v in REWARD_CONFIGS[reward_name].items()
              if k not in ("name", "description")}
    kwargs["reward_config"] = reward
    kwargs.update(overrides)
    return kwargs


if __name__ == "__main__":
    for name, cfg in REWARD_CONFIGS.items():
        print(f"  {name:10} | {cfg['description']}")
