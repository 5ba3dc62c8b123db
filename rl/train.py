"""
Training script for the orbit environment using Stable-Baselines3
Supports PPO and DQN with checkpointing, evaluation and metrics tracking.
"""

import os
import argparse
from typing import Optional

from stable_baselines3 import PPO, DQN
from stable_baselines3.common.vec_env import DummyVecEnv, VecNormalize
from stable_baselines3.common.callbacks import CheckpointCallback, EvalCallback
from stable_baselines3.common.monitor import Monitor

from game.orbit import OrbitEnv
from rl.configs.orbit_config import (
    PPO_CONFIG, DQN_CONFIG, TRAINING_CONFIG, REWARD_CONFIGS, make_env_kwargs,
)
from rl.metrics_callback import MetricsCallback, TensorboardMetricsCallback


def make_env(seed: Optional[int] = None, reward_name: str = "baseline"):
    """Factory function to create the environment"""
    def _init():
        env = OrbitEnv(**make_env_kwargs(reward_name))
        env = Monitor(env)
        if seed is not None:
            env.reset(seed=seed)
        return env
    return _init


def _callbacks(algo: str, eval_env, save_dir: str, log_dir: str, save_freq: int, eval_freq: int):
    checkpoint_callback = CheckpointCallback(
        save_freq=save_freq,
        save_path=save_dir,
        name_prefix=f"{algo}_orbit",
    )

    eval_callback = EvalCallback(
        eval_env,
        best_model_save_path=save_dir,
        log_path=log_dir,
        eval_freq=eval_freq,
        deterministic=True,
        render=False,
    )

    metrics_callback = MetricsCallback(
        log_dir=log_dir,
        algo_name=algo,
        verbose=1,
    )

    tb_callback = TensorboardMetricsCallback(verbose=0)
    return checkpoint_callback, eval_callback, metrics_callback, tb_callback


def _print_summary(algo: str, final_path: str, metrics_callback: MetricsCallback):
    print(f"\n{'='*60}")
    print(f"{algo.upper()} Training complete! Model saved to {final_path}")
    summary = metrics_callback.get_summary()
    if summary:
        print(f"Mean Reward: {summary['mean_reward']:.2f} ± {summary['std_reward']:.2f}")
        print(f"Mean Score: {summary['mean_score']:.1f}  Max Level: {summary['max_level']}")
        print(f"Total Episodes: {summary['total_episodes']}")
    print(f"{'='*60}\n")


def train_ppo(
    total_timesteps: int = None,
    save_dir: str = "./models/ppo",
    log_dir: str = "./logs/ppo",
    tensorboard_log: str = "./tensorboard_logs/ppo",
    n_envs: int = 4,
    reward_name: str = "baseline",
):
    """Train PPO agent on the orbit environment"""

    if total_timesteps is None:
        total_timesteps = TRAINING_CONFIG["total_timesteps"]

    os.makedirs(save_dir, exist_ok=True)
    os.makedirs(log_dir, exist_ok=True)

    print(f"\n{'='*60}")
    print(f"Training PPO for {total_timesteps:,} timesteps...")
    print(f"Using {n_envs} parallel environments, reward preset '{reward_name}'")
    print(f"{'='*60}\n")

    env = DummyVecEnv([make_env(seed=i, reward_name=reward_name) for i in range(n_envs)])
    env = VecNormalize(env, norm_obs=True, norm_reward=True)

    eval_env = DummyVecEnv([make_env(seed=100, reward_name=reward_name)])
    eval_env = VecNormalize(eval_env, norm_obs=True, norm_reward=False, training=False)

    callbacks = _callbacks(
        "ppo", eval_env, save_dir, log_dir,
        save_freq=TRAINING_CONFIG["save_freq"] // n_envs,
        eval_freq=TRAINING_CONFIG.get("eval_freq", 5000) // n_envs,
    )
    metrics_callback = callbacks[2]

    model = PPO(
        env=env,
        tensorboard_log=tensorboard_log,
        **PPO_CONFIG
    )

    model.learn(
        total_timesteps=total_timesteps,
        callback=list(callbacks),
    )

    final_path = os.path.join(save_dir, "ppo_orbit_final")
    model.save(final_path)
    env.save(os.path.join(save_dir, "vec_normalize.pkl"))

    _print_summary("ppo", final_path, metrics_callback)
    return model, metrics_callback


def train_dqn(
    total_timesteps: int = None,
    save_dir: str = "./models/dqn",
    log_dir: str = "./logs/dqn",
    tensorboard_log: str = "./tensorboard_logs/dqn",
    reward_name: str = "baseline",
):
    """Train DQN agent on the orbit environment"""

    if total_timesteps is None:
        total_timesteps = TRAINING_CONFIG["total_timesteps"]

    os.makedirs(save_dir, exist_ok=True)
    os.makedirs(log_dir, exist_ok=True)

    print(f"\n{'='*60}")
    print(f"Training DQN for {total_timesteps:,} timesteps...")
    print(f"Reward preset '{reward_name}'")
    print(f"{'='*60}\n")

    # Discrete(2) actions, no wrapper needed
    env = DummyVecEnv([make_env(seed=0, reward_name=reward_name)])
    eval_env = DummyVecEnv([make_env(seed=100, reward_name=reward_name)])

    callbacks = _callbacks(
        "dqn", eval_env, save_dir, log_dir,
        save_freq=TRAINING_CONFIG["save_freq"],
        eval_freq=TRAINING_CONFIG.get("eval_freq", 10000),
    )
    metrics_callback = callbacks[2]

    model = DQN(
        env=env,
        tensorboard_log=tensorboard_log,
        **DQN_CONFIG
    )

    model.learn(
        total_timesteps=total_timesteps,
        callback=list(callbacks),
    )

    final_path = os.path.join(save_dir, "dqn_orbit_final")
    model.save(final_path)

    _print_summary("dqn", final_path, metrics_callback)
    return model, metrics_callback


def main():
    parser = argparse.ArgumentParser(description="Train RL agent on orbit environment")
    parser.add_argument(
        "--algo",
        type=str,
        default="ppo",
        choices=["ppo", "dqn", "all"],
        help="RL algorithm to use (default: ppo)",
    )
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
        help="Number of parallel environments for PPO (default: 4)",
    )
    parser.add_argument(
        "--reward",
        type=str,
        default="baseline",
        choices=sorted(REWARD_CONFIGS),
        help="Reward shaping preset (default: baseline)",
    )

    args = parser.parse_args()

    if args.algo == "ppo":
        train_ppo(total_timesteps=args.timesteps, n_envs=args.n_envs, reward_name=args.reward)
    elif args.algo == "dqn":
        train_dqn(total_timesteps=args.timesteps, reward_name=args.reward)
    elif args.algo == "all":
        print("Training all algorithms sequentially...")
        train_dqn(total_timesteps=args.timesteps, reward_name=args.reward)
        train_ppo(total_timesteps=args.timesteps, n_envs=args.n_envs, reward_name=args.reward)


if __name__ == "__main__":
    main()
