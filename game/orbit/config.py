"""
Geometry and gameplay parameters for the orbit game
"""

from dataclasses import dataclass

# Bullet spawn schedule (milliseconds)
BASE_SPAWN_INTERVAL = 1000.0
MIN_SPAWN_INTERVAL = 100.0
SPAWN_INTERVAL_REDUCTION = 100.0  # per level

# Bullets are pruned past min(width, height) / 2 + PRUNE_MARGIN from the centre
PRUNE_MARGIN = 50.0


@dataclass
class OrbitConfig:
    """Numeric parameters of one game session.

    Everything except the centre is fixed after construction; the centre
    follows the viewport and is recomputed on resize.
    """
    center_x: float = 0.0
    center_y: float = 0.0
    orbit_radius: float = 200.0  # radius of the coin path
    coin_count: int = 30  # coins per level
    coin_size: float = 8.0
    ship_radius: float = 12.0
    bullet_radius: float = 8.0
    ship_speed: float = 0.04  # rad per step
    bullet_speed: float = 3.0  # px per step
    bullet_spawn_interval: float = BASE_SPAWN_INTERVAL
    island_radius: float = 50.0

    def __post_init__(self):
        if self.coin_count <= 0:
            raise ValueError(f"coin_count must be positive, got {self.coin_count}")
        if self.orbit_radius <= 0:
            raise ValueError(f"orbit_radius must be positive, got {self.orbit_radius}")

    def set_viewport(self, width: float, height: float):
        """Recompute the centre point from the viewport size"""
        self.center_x = width / 2
        self.center_y = height / 2


def spawn_interval(level: int, base: float = BASE_SPAWN_INTERVAL) -> float:
    """Bullet spawn interval for a level; shrinks by a fixed step down to a floor"""
    return max(MIN_SPAWN_INTERVAL, base - (level - 1) * SPAWN_INTERVAL_REDUCTION)
