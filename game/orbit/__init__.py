"""Orbit game module - ship on a circular path dodging turret fire"""

from .config import OrbitConfig, spawn_interval
from .entities import Bullet, Coin, GameState, Ship
from .path import generate_coins
from .session import GameSession
from .orbit_env import OrbitEnv, run_random_episode

__all__ = [
    'OrbitConfig',
    'spawn_interval',
    'Bullet',
    'Coin',
    'GameState',
    'Ship',
    'generate_coins',
    'GameSession',
    'OrbitEnv',
    'run_random_episode',
]
