"""
Game entity dataclasses
"""

import math
from dataclasses import dataclass
from enum import Enum
from typing import Tuple


@dataclass
class Ship:
    """Player ship travelling along the orbit path"""
    angle: float
    direction: int = 1  # 1 clockwise on screen, -1 counter-clockwise
    speed: float = 0.04  # rad per step

    def position(self, cx: float, cy: float, radius: float) -> Tuple[float, float]:
        """Derive the ship position from its angle (angle is the source of truth)"""
        return cx + math.cos(self.angle) * radius, cy + math.sin(self.angle) * radius


@dataclass
class Coin:
    """Collectible coin placed on the orbit path"""
    x: float
    y: float
    angle: float
    collected: bool = False


@dataclass
class Bullet:
    """Projectile fired outward from the central turret"""
    x: float
    y: float
    angle: float  # firing angle, fixed for the bullet's lifetime
    speed: float = 3.0  # px per step


class GameState(Enum):
    """Session lifecycle: WAITING -> PLAYING -> GAME_OVER, restart returns to WAITING"""
    WAITING = "waiting"
    PLAYING = "playing"
    GAME_OVER = "game_over"
