"""
OrbitEnv - Gymnasium wrapper around a GameSession
--------------------------------------------------
- One ship circling the central turret, collecting coins on the orbit path
- Bullets fired from the centre at random angles, faster every level
- Discrete action space: 0 keep course, 1 reverse direction
- Vector observation: ship state + nearest coin offset + top-K nearest bullets
- Simulated millisecond clock (step * dt) so episodes are reproducible

Install:
    pip install gymnasium arcade numpy

Quick test:
    python -m game.orbit.orbit_env
"""

from __future__ import annotations

import math
from typing import Any, Dict, Optional

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from .config import OrbitConfig
from .entities import GameState
from .session import GameSession
from .utils import angle_delta, clamp, seed_everything

REWARD_CONFIG_DEFAULT = {
    "R_COIN": 1.0,       # per coin collected
    "R_LEVEL": 5.0,      # per cleared path
    "R_DEATH": 10.0,     # hit by a bullet
    "R_SURVIVE": 0.001,  # per step alive
    "R_REVERSE": 0.01,   # per direction change (discourage jitter)
}


class OrbitEnv(gym.Env):
    """Orbit-dodging environment; the agent only decides when to reverse"""

    metadata = {"render_modes": ["human", "rgb_array"], "render_fps": 60}

    def __init__(
        self,
        render_mode: Optional[str] = None,
        obs_mode: str = "vector",
        width: int = 800,
        height: int = 600,
        dt: float = 1 / 60,
        max_steps: int = 3600,  # 60s at 60 FPS
        k_bullets: int = 5,
        game_config: Optional[Dict[str, Any]] = None,
        reward_config: Optional[Dict[str, Any]] = None,
    ):
        super().__init__()

        assert obs_mode in ("vector",), "Only 'vector' observations are implemented."
        if k_bullets < 0:
            raise ValueError(f"k_bullets must be >= 0, got {k_bullets}")

        self.render_mode = render_mode
        self.obs_mode = obs_mode

        self.width = width
        self.height = height
        self.dt = dt
        self.max_steps = max_steps
        self.k_bullets = k_bullets

        self.reward_config = dict(REWARD_CONFIG_DEFAULT)
        if reward_config:
            self.reward_config.update(reward_config)

        # Simulated clock in milliseconds, fed to the session for spawn pacing
        self._sim_ms = 0.0
        self.session = GameSession(
            width=width,
            height=height,
            config=OrbitConfig(**(game_config or {})),
            clock=lambda: self._sim_ms,
        )

        self.action_space = spaces.Discrete(2)

        # Ship: cos(2) sin dir(1) progress(1) nearest coin offset(1)
        # Each bullet: rel pos(2) heading(2)
        obs_dim = 5 + self.k_bullets * 4
        self.observation_space = spaces.Box(
            low=-1.0, high=1.0, shape=(obs_dim,), dtype=np.float32
        )

        self._window = None
        self._step_count = 0
        self._events: Dict[str, float] = {}

    # ----------------------------
    # Gym API
    # ----------------------------

    def reset(self, seed: Optional[int] = None, options: Optional[dict] = None):
        super().reset(seed=seed)
        seed_everything(seed)

        self._step_count = 0
        self._sim_ms = 0.0
        self._events = {}

        self.session.reset()
        self.session.start()

        return self._get_obs(), self._get_info()

    def step(self, action):
        reversed_course = 0.0
        if int(action) == 1 and self.session.reverse_direction():
            reversed_course = 1.0

        self._sim_ms += self.dt * 1000.0
        self._events = dict(self.session.step())
        self._events["reverse"] = reversed_course

        reward = self._compute_reward()

        terminated = self.session.state is GameState.GAME_OVER
        self._step_count += 1
        truncated = self._step_count >= self.max_steps

        obs = self._get_obs()
        info = self._get_info()

        if self.render_mode == "human":
            self.render()

        return obs, reward, terminated, truncated, info

    # ----------------------------
    # Observation / reward / info
    # ----------------------------

    def _get_obs(self) -> np.ndarray:
        s = self.session
        cfg = s.config

        if s.ship is None:
            return np.zeros(self.observation_space.shape, dtype=np.float32)

        ship = s.ship
        sx, sy = s.ship_position()

        progress = 1.0 - s.coins_remaining() / max(1, len(s.coins))

        # Signed angular offset to the closest uncollected coin, in [-1, 1)
        coin_offset = 0.0
        remaining = [c for c in s.coins if not c.collected]
        if remaining:
            deltas = [angle_delta(c.angle, ship.angle) for c in remaining]
            coin_offset = min(deltas, key=abs) / math.pi

        obs_parts = [math.cos(ship.angle), math.sin(ship.angle),
                     float(ship.direction),
                     progress * 2 - 1,
                     coin_offset]

        # Bullets: top-K nearest to the ship
        scale = max(1e-6, cfg.orbit_radius * 2)
        bullets_sorted = sorted(
            s.bullets,
            key=lambda b: (b.x - sx) ** 2 + (b.y - sy) ** 2
        )
        for i in range(self.k_bullets):
            if i < len(bullets_sorted):
                b = bullets_sorted[i]
                obs_parts += [
                    clamp((b.x - sx) / scale, -1, 1),
                    clamp((b.y - sy) / scale, -1, 1),
                    math.cos(b.angle),
                    math.sin(b.angle),
                ]
            else:
                obs_parts += [0.0, 0.0, 0.0, 0.0]

        return np.array(obs_parts, dtype=np.float32)

    def _compute_reward(self) -> float:
        rc = self.reward_config
        reward = 0.0

        reward += rc["R_COIN"] * self._events.get("coins", 0.0)
        reward += rc["R_LEVEL"] * self._events.get("level_up", 0.0)
        reward -= rc["R_REVERSE"] * self._events.get("reverse", 0.0)

        if self._events.get("game_over", 0.0):
            reward -= rc["R_DEATH"]
        else:
            reward += rc["R_SURVIVE"]

        return float(reward)

    def _get_info(self) -> Dict[str, Any]:
        s = self.session
        return {
            "score": s.score,
            "level": s.level,
            "coins_remaining": s.coins_remaining(),
            "num_bullets": len(s.bullets),
            "alive": s.state is not GameState.GAME_OVER,
            "step": self._step_count,
        }

    # ----------------------------
    # Rendering with Arcade
    # ----------------------------

    def render(self):
        if self.render_mode is None:
            return None

        if self.render_mode == "human":
            if self._window is None:
                # Imported here so headless training never touches a display
                from .window import OrbitWindow
                self._window = OrbitWindow(self.session, self.width, self.height)
            self._window.on_draw()
            return None
        elif self.render_mode == "rgb_array":
            # TODO: read back an offscreen arcade framebuffer instead of a blank frame
            return np.zeros((self.height, self.width, 3), dtype=np.uint8)

    def close(self):
        if self._window is not None:
            self._window.close()
            self._window = None


# ----------------------------
# Quick sanity test
# ----------------------------

def run_random_episode(render: bool = True, seed: int = 42):
    """Run an episode with a random reversing policy"""
    env = OrbitEnv(render_mode="human" if render else None)
    obs, info = env.reset(seed=seed)

    terminated = False
    truncated = False
    total = 0.0

    print("Running episode... close the window to exit early.")

    import time
    while not (terminated or truncated):
        # Reverse rarely; a coin flip every frame just jitters in place
        action = 1 if env.np_random.random() < 0.02 else 0
        obs, reward, terminated, truncated, info = env.step(action)
        total += reward

        if render and env._window:
            env._window.dispatch_events()
            env._window.on_draw()
            env._window.flip()
            time.sleep(1 / 60)

    print(f"Random episode return: {total:.2f}  "
          f"score={info['score']} level={info['level']} steps={info['step']}")

    env.close()
    return total, info


if __name__ == "__main__":
    run_random_episode(render=True)
