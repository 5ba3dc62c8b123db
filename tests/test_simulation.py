import math

import pytest

from game.orbit import Bullet, GameState
from game.orbit.config import spawn_interval
from game.orbit.simulation import (
    advance_level,
    check_collisions,
    collect_coins,
    spawn_bullets,
    update_bullets,
    update_ship,
)
from game.orbit.utils import TWO_PI, seed_everything


def _bullet_at(session, angle, dist):
    cfg = session.config
    return Bullet(
        x=cfg.center_x + math.cos(angle) * dist,
        y=cfg.center_y + math.sin(angle) * dist,
        angle=angle,
        speed=cfg.bullet_speed,
    )


# ----------------------------
# Ship motion
# ----------------------------

@pytest.mark.parametrize("direction", [1, -1])
def test_ship_angle_stays_in_range(playing, direction):
    playing.ship.direction = direction
    for _ in range(2000):
        playing.step()
        assert 0 <= playing.ship.angle < TWO_PI


def test_ship_moves_by_speed(playing):
    update_ship(playing)
    assert playing.ship.angle == pytest.approx(playing.config.ship_speed)


def test_ship_wraps_backwards_past_zero(playing):
    playing.ship.direction = -1
    update_ship(playing)
    assert playing.ship.angle == pytest.approx(TWO_PI - playing.config.ship_speed)


def test_ship_position_follows_angle(playing):
    cfg = playing.config
    playing.ship.angle = math.pi / 2
    x, y = playing.ship_position()
    assert x == pytest.approx(cfg.center_x)
    assert y == pytest.approx(cfg.center_y + cfg.orbit_radius)


# ----------------------------
# Coins and levels
# ----------------------------

def test_collect_coin_under_ship(playing):
    assert collect_coins(playing) == 1
    assert playing.coins[0].collected
    assert playing.score == 1


def test_collected_coin_not_counted_twice(playing):
    collect_coins(playing)
    assert collect_coins(playing) == 0
    assert playing.score == 1


def test_far_coins_untouched(playing):
    collect_coins(playing)
    assert sum(c.collected for c in playing.coins) == 1


def test_level_advances_when_path_cleared(playing):
    cfg = playing.config
    for c in playing.coins[2:]:
        c.collected = True
    playing.coins[0].collected = True
    playing.score = len(playing.coins) - 1
    playing.bullets.append(_bullet_at(playing, 1.0, 50))
    playing.last_bullet_time = -5.0

    # Approach the last coin going backwards
    playing.ship.direction = -1
    playing.ship.angle = playing.coins[1].angle + cfg.ship_speed

    events = playing.step()

    assert events["coins"] == 1
    assert events["level_up"] == 1
    assert playing.level == 2
    assert playing.score == cfg.coin_count
    assert len(playing.coins) == cfg.coin_count
    assert not any(c.collected for c in playing.coins)
    assert playing.bullets == []
    assert playing.last_bullet_time == 0.0
    assert playing.ship.angle == playing.coins[0].angle
    assert playing.ship.direction == -1
    assert playing.state is GameState.PLAYING


def test_advance_level_keeps_ship(playing):
    ship = playing.ship
    ship.angle = 2.0
    ship.direction = -1
    advance_level(playing)
    assert playing.ship is ship
    assert ship.angle == 0.0
    assert ship.direction == -1
    assert ship.speed == playing.config.ship_speed


def test_empty_path_never_advances(playing):
    playing.coins = []
    playing.step()
    assert playing.level == 1


def test_score_never_decreases(playing):
    last = playing.score
    for _ in range(500):
        playing.step()
        assert playing.score >= last
        last = playing.score
    assert playing.score > 0


def test_four_coin_lap(small_session):
    s = small_session
    s.start()
    assert s.ship.angle == s.coins[0].angle

    for _ in range(200):
        s.step()
        if s.level == 2:
            break

    assert s.score == 4
    assert s.level == 2
    assert len(s.coins) == 4
    assert all(not c.collected for c in s.coins)
    assert s.state is GameState.PLAYING


# ----------------------------
# Bullets
# ----------------------------

@pytest.mark.parametrize("level,expected", [
    (1, 1000), (2, 900), (5, 600), (10, 100), (11, 100), (50, 100),
])
def test_spawn_interval_shrinks_to_floor(level, expected):
    assert spawn_interval(level) == expected


def test_spawn_waits_for_interval(playing):
    assert not spawn_bullets(playing, 1000.0)
    assert playing.bullets == []

    assert spawn_bullets(playing, 1000.5)
    assert len(playing.bullets) == 1
    assert playing.last_bullet_time == 1000.5

    assert not spawn_bullets(playing, 1500.0)
    assert len(playing.bullets) == 1


def test_spawn_no_catch_up(playing):
    assert spawn_bullets(playing, 1_000_000.0)
    assert len(playing.bullets) == 1


def test_spawn_faster_on_higher_levels(playing):
    playing.level = 6
    assert spawn_bullets(playing, 501.0)


def test_spawned_bullet_from_centre(playing):
    seed_everything(3)
    cfg = playing.config
    spawn_bullets(playing, 5000.0)
    b = playing.bullets[0]
    assert (b.x, b.y) == (cfg.center_x, cfg.center_y)
    assert 0 <= b.angle < TWO_PI
    assert b.speed == cfg.bullet_speed


def test_bullets_fly_straight(playing):
    cfg = playing.config
    b = _bullet_at(playing, 0.5, 0)
    playing.bullets.append(b)
    for _ in range(10):
        update_bullets(playing)
    assert math.hypot(b.x - cfg.center_x, b.y - cfg.center_y) == pytest.approx(10 * cfg.bullet_speed)
    assert math.atan2(b.y - cfg.center_y, b.x - cfg.center_x) == pytest.approx(0.5)


def test_bullet_past_bounding_radius_pruned(playing):
    # min(800, 600) / 2 + 50 = 350
    far = _bullet_at(playing, 0.0, 349)
    near = _bullet_at(playing, 0.0, 100)
    bullets = playing.bullets
    bullets.extend([far, near])

    update_bullets(playing)

    assert playing.bullets is bullets
    assert playing.bullets == [near]


def test_bullet_off_screen_pruned(session):
    session.resize(1000, 200)
    playing = session
    playing.start()
    # Inside the bounding radius (150) but below the bottom edge after moving
    b = _bullet_at(playing, math.pi / 2, 99)
    playing.bullets.append(b)
    update_bullets(playing)
    assert playing.bullets == []


# ----------------------------
# Collisions
# ----------------------------

def test_no_collision_when_clear(playing):
    playing.bullets.append(_bullet_at(playing, math.pi, 100))
    assert not check_collisions(playing)


def test_bullet_on_ship_is_fatal(playing):
    playing.bullets.append(_bullet_at(playing, playing.ship.angle, playing.config.orbit_radius))
    assert check_collisions(playing)


def test_hit_ends_game_and_stays_over(playing):
    cfg = playing.config
    next_angle = playing.ship.angle + cfg.ship_speed
    # Bullet moves 3px outward this step, still inside the combined radius
    playing.bullets.append(_bullet_at(playing, next_angle, cfg.orbit_radius - 1))

    events = playing.step()

    assert events["game_over"] == 1
    assert playing.state is GameState.GAME_OVER

    angle, score = playing.ship.angle, playing.score
    positions = [(b.x, b.y) for b in playing.bullets]
    for _ in range(10):
        assert playing.step(now=1e9)["game_over"] == 0
    assert playing.state is GameState.GAME_OVER
    assert playing.ship.angle == angle
    assert playing.score == score
    assert [(b.x, b.y) for b in playing.bullets] == positions
