"""
Per-frame simulation step
-------------------------
Every function here takes the session explicitly and mutates it in place.
Order within a frame:

1. ship moves along the orbit
2. coins under the ship are collected (a cleared path advances the level)
3. bullets move and leave the active set once out of range
4. at most one new bullet is fired from the centre
5. any bullet touching the ship ends the game
"""

from __future__ import annotations

import logging
import math
import random
from typing import TYPE_CHECKING, Dict

from .config import PRUNE_MARGIN, spawn_interval
from .entities import Bullet, GameState
from .path import generate_coins
from .utils import TWO_PI, circle_collide, distance, wrap_angle

if TYPE_CHECKING:
    from .session import GameSession

logger = logging.getLogger(__name__)


def update_ship(session: GameSession):
    ship = session.ship
    ship.angle = wrap_angle(ship.angle + ship.direction * ship.speed)


def collect_coins(session: GameSession) -> int:
    """Mark coins overlapping the ship as collected; returns how many were picked up"""
    cfg = session.config
    sx, sy = session.ship_position()
    reach = cfg.ship_radius + cfg.coin_size

    collected = 0
    for coin in session.coins:
        if coin.collected:
            continue
        if distance(sx, sy, coin.x, coin.y) < reach:
            coin.collected = True
            session.score += 1
            collected += 1
    return collected


def path_cleared(session: GameSession) -> bool:
    # An empty path never counts as cleared
    return bool(session.coins) and all(c.collected for c in session.coins)


def advance_level(session: GameSession):
    """Start the next level without leaving PLAYING.

    Bullets are cleared, the spawn timer restarts and a fresh coin path is
    laid out. The ship keeps its direction and speed and is moved back to
    the first coin.
    """
    cfg = session.config
    session.level += 1
    session.bullets.clear()
    session.last_bullet_time = 0.0
    session.coins = generate_coins(cfg.coin_count, cfg.orbit_radius, cfg.center_x, cfg.center_y)

    if session.ship is not None and session.coins:
        session.ship.angle = session.coins[0].angle

    logger.info("Level %d (score %d)", session.level, session.score)


def update_bullets(session: GameSession):
    """Move bullets in a straight line, then drop those out of range (in place)"""
    cfg = session.config
    width, height = session.width, session.height
    max_radius = min(width, height) / 2 + PRUNE_MARGIN

    bullets = session.bullets
    keep = 0
    for b in bullets:
        b.x += math.cos(b.angle) * b.speed
        b.y += math.sin(b.angle) * b.speed

        in_range = distance(b.x, b.y, cfg.center_x, cfg.center_y) < max_radius
        on_screen = 0 < b.x < width and 0 < b.y < height
        if in_range and on_screen:
            bullets[keep] = b
            keep += 1
    del bullets[keep:]


def spawn_bullets(session: GameSession, now: float) -> bool:
    """Fire one bullet from the centre if the level's spawn interval has elapsed"""
    cfg = session.config
    interval = spawn_interval(session.level, cfg.bullet_spawn_interval)
    if now - session.last_bullet_time <= interval:
        return False

    angle = random.random() * TWO_PI
    session.bullets.append(Bullet(
        x=cfg.center_x,
        y=cfg.center_y,
        angle=angle,
        speed=cfg.bullet_speed,
    ))
    session.last_bullet_time = now
    return True


def check_collisions(session: GameSession) -> bool:
    """True as soon as one bullet touches the ship"""
    cfg = session.config
    sx, sy = session.ship_position()
    for b in session.bullets:
        if circle_collide(sx, sy, cfg.ship_radius, b.x, b.y, cfg.bullet_radius):
            return True
    return False


def step(session: GameSession, now: float) -> Dict[str, float]:
    """Advance the session by one frame. No-op unless PLAYING."""
    events = {"coins": 0.0, "level_up": 0.0, "spawned": 0.0, "game_over": 0.0}
    if session.state is not GameState.PLAYING or session.ship is None:
        return events

    update_ship(session)

    events["coins"] += collect_coins(session)
    if path_cleared(session):
        advance_level(session)
        events["level_up"] += 1.0

    update_bullets(session)

    if spawn_bullets(session, now):
        events["spawned"] += 1.0

    if check_collisions(session):
        session.end_game()
        events["game_over"] += 1.0

    return events
