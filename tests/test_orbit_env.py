import math

import numpy as np
import pytest
from gymnasium.utils.env_checker import check_env

from game.orbit import Bullet, GameState, OrbitEnv


@pytest.fixture
def env():
    e = OrbitEnv()
    yield e
    e.close()


def test_passes_gymnasium_checks():
    check_env(OrbitEnv(), skip_render_check=True)


def test_reset_starts_playing(env):
    obs, info = env.reset(seed=0)

    assert env.session.state is GameState.PLAYING
    assert obs.shape == env.observation_space.shape
    assert obs.dtype == np.float32
    assert env.observation_space.contains(obs)
    assert info["score"] == 0
    assert info["level"] == 1
    assert info["alive"]


def test_reset_after_game_over(env):
    env.reset(seed=0)
    env.session.end_game()
    env.reset(seed=1)
    assert env.session.state is GameState.PLAYING
    assert env.session.score == 0


def test_observation_size_follows_k_bullets():
    e = OrbitEnv(k_bullets=2)
    obs, _ = e.reset(seed=0)
    assert obs.shape == (5 + 2 * 4,)


def test_reverse_action_flips_direction(env):
    env.reset(seed=0)
    _, reward_keep, *_ = env.step(0)
    _, reward_flip, *_ = env.step(1)

    assert env.session.ship.direction == -1
    assert reward_flip < reward_keep


def test_coin_reward(env):
    env.reset(seed=0)
    _, reward, terminated, truncated, info = env.step(0)
    assert info["score"] == 1
    assert reward == pytest.approx(1.0 + 0.001)
    assert not terminated and not truncated


def test_bullets_spawn_on_simulated_clock(env):
    env.reset(seed=0)
    info = {}
    for _ in range(30):
        *_, info = env.step(0)
    assert info["num_bullets"] == 0

    for _ in range(40):
        *_, info = env.step(0)
    assert info["num_bullets"] == 1
    assert info["alive"]


def test_terminates_on_hit(env):
    env.reset(seed=0)
    s = env.session
    cfg = s.config
    a = s.ship.angle + cfg.ship_speed
    s.bullets.append(Bullet(
        x=cfg.center_x + math.cos(a) * (cfg.orbit_radius - 1),
        y=cfg.center_y + math.sin(a) * (cfg.orbit_radius - 1),
        angle=a,
        speed=cfg.bullet_speed,
    ))

    _, reward, terminated, truncated, info = env.step(0)

    assert terminated
    assert not info["alive"]
    assert reward < 0


def test_truncates_at_max_steps():
    e = OrbitEnv(max_steps=5)
    e.reset(seed=0)
    for i in range(5):
        _, _, terminated, truncated, _ = e.step(0)
    assert truncated
    assert not terminated


def test_reward_config_override():
    e = OrbitEnv(reward_config={"R_COIN": 3.0})
    e.reset(seed=0)
    _, reward, *_ = e.step(0)
    assert reward == pytest.approx(3.0 + 0.001)
    assert e.reward_config["R_DEATH"] == 10.0


def test_game_config_passthrough():
    e = OrbitEnv(game_config={"coin_count": 6})
    e.reset(seed=0)
    assert len(e.session.coins) == 6


def test_rgb_array_frame_shape():
    e = OrbitEnv(render_mode="rgb_array", width=320, height=240)
    e.reset(seed=0)
    frame = e.render()
    assert frame.shape == (240, 320, 3)


def test_negative_k_bullets_rejected():
    with pytest.raises(ValueError):
        OrbitEnv(k_bullets=-1)


def test_same_seed_same_rollout():
    def rollout(seed):
        e = OrbitEnv()
        e.reset(seed=seed)
        angles = []
        for _ in range(200):
            e.step(0)
            angles.extend(b.angle for b in e.session.bullets)
        return angles

    assert rollout(7) == rollout(7)
