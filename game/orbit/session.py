"""
GameSession - the single owner of all per-game state
-----------------------------------------------------
Holds the ship, coins, bullets, score, level and spawn timer, and exposes
the input transitions of the game state machine:

    WAITING --start()--> PLAYING --(fatal collision)--> GAME_OVER
    WAITING / GAME_OVER --restart()--> WAITING

Each transition checks the current state first; inputs that arrive in the
wrong state are ignored. Renderers read the session between steps and
never write to it.
"""

from __future__ import annotations

import logging
import time
from dataclasses import replace
from typing import Any, Callable, Dict, List, Optional, Tuple

from . import simulation
from .config import OrbitConfig
from .entities import Bullet, Coin, GameState, Ship
from .path import generate_coins
from .utils import angle_delta

logger = logging.getLogger(__name__)


def wall_clock_ms() -> float:
    return time.monotonic() * 1000.0


class GameSession:
    """One single-player game, from WAITING through any number of levels to GAME_OVER"""

    def __init__(
        self,
        width: float = 800,
        height: float = 600,
        config: Optional[OrbitConfig] = None,
        clock: Optional[Callable[[], float]] = None,
    ):
        if width <= 0 or height <= 0:
            raise ValueError(f"Viewport must be positive, got {width}x{height}")

        # Own copy: the centre is per-session state
        self.config = replace(config) if config is not None else OrbitConfig()
        self.width = width
        self.height = height
        self.config.set_viewport(width, height)

        # Milliseconds; only used to pace bullet spawns
        self.clock = clock if clock is not None else wall_clock_ms

        self.state = GameState.WAITING
        self.score = 0
        self.level = 1
        self.ship: Optional[Ship] = None
        self.coins: List[Coin] = []
        self.bullets: List[Bullet] = []
        self.last_bullet_time = 0.0

        self.reset()

    # ----------------------------
    # Transitions
    # ----------------------------

    def reset(self):
        """Unconditional full reset back to WAITING with a fresh coin path"""
        cfg = self.config
        self.state = GameState.WAITING
        self.score = 0
        self.level = 1
        self.ship = None
        self.bullets = []
        self.last_bullet_time = 0.0
        self.coins = generate_coins(cfg.coin_count, cfg.orbit_radius, cfg.center_x, cfg.center_y)

    def start(self) -> bool:
        if self.state is not GameState.WAITING:
            logger.debug("start() ignored in %s", self.state.value)
            return False

        first_angle = self.coins[0].angle if self.coins else 0.0
        self.ship = Ship(angle=first_angle, direction=1, speed=self.config.ship_speed)
        self.state = GameState.PLAYING
        logger.info("Game started")
        return True

    def reverse_direction(self) -> bool:
        if self.state is not GameState.PLAYING or self.ship is None:
            logger.debug("reverse_direction() ignored in %s", self.state.value)
            return False

        self.ship.direction *= -1
        return True

    def restart(self) -> bool:
        if self.state is GameState.PLAYING:
            logger.debug("restart() ignored while playing")
            return False

        self.reset()
        logger.info("Game restarted")
        return True

    def end_game(self):
        if self.state is not GameState.PLAYING:
            return
        self.state = GameState.GAME_OVER
        logger.info("Game over - score %d, level %d", self.score, self.level)

    def resize(self, width: float, height: float) -> bool:
        """Follow a viewport change.

        The centre always moves. Unless the game is over, a fresh uncollected
        coin path is laid out around the new centre and a playing ship snaps
        to the coin nearest its current angle.
        """
        if width <= 0 or height <= 0:
            logger.debug("resize(%s, %s) ignored", width, height)
            return False

        cfg = self.config
        self.width = width
        self.height = height
        cfg.set_viewport(width, height)

        if self.state is GameState.GAME_OVER:
            return True

        self.coins = generate_coins(cfg.coin_count, cfg.orbit_radius, cfg.center_x, cfg.center_y)

        if self.state is GameState.PLAYING and self.ship is not None and self.coins:
            ship_angle = self.ship.angle
            nearest = min(self.coins, key=lambda c: abs(angle_delta(c.angle, ship_angle)))
            self.ship.angle = nearest.angle
        return True

    # ----------------------------
    # Frame update
    # ----------------------------

    def step(self, now: Optional[float] = None) -> Dict[str, float]:
        """Advance one frame; returns the frame's event counters"""
        if now is None:
            now = self.clock() if self.is_playing else 0.0
        return simulation.step(self, now)

    # ----------------------------
    # Read-only views
    # ----------------------------

    @property
    def is_playing(self) -> bool:
        return self.state is GameState.PLAYING

    @property
    def is_over(self) -> bool:
        return self.state is GameState.GAME_OVER

    def ship_position(self) -> Optional[Tuple[float, float]]:
        if self.ship is None:
            return None
        cfg = self.config
        return self.ship.position(cfg.center_x, cfg.center_y, cfg.orbit_radius)

    def coins_remaining(self) -> int:
        return sum(1 for c in self.coins if not c.collected)

    def snapshot(self) -> Dict[str, Any]:
        """Plain-data view of the session for HUDs and logs"""
        ship = None
        if self.ship is not None:
            x, y = self.ship_position()
            ship = {"angle": self.ship.angle, "direction": self.ship.direction, "x": x, "y": y}
        return {
            "state": self.state.value,
            "score": self.score,
            "level": self.level,
            "ship": ship,
            "coins": [(c.x, c.y, c.collected) for c in self.coins],
            "bullets": [(b.x, b.y, b.angle) for b in self.bullets],
        }
