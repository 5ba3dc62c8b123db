"""
Utility functions for game mechanics
"""

from __future__ import annotations
import math
import random
from typing import Optional
import numpy as np

TWO_PI = math.pi * 2


def clamp(x: float, lo: float, hi: float) -> float:
    """Clamp value between low and high bounds"""
    return lo if x < lo else hi if x > hi else x


def distance(x1: float, y1: float, x2: float, y2: float) -> float:
    """Euclidean distance between two points"""
    return math.hypot(x1 - x2, y1 - y2)


def circle_collide(x1, y1, r1, x2, y2, r2) -> bool:
    """Check if two circles overlap (touching does not count)"""
    dx = x1 - x2
    dy = y1 - y2
    rr = r1 + r2
    return (dx * dx + dy * dy) < (rr * rr)


def wrap_angle(angle: float) -> float:
    """Wrap an angle one period into [0, 2pi); steps are smaller than a full turn"""
    if angle < 0:
        angle += TWO_PI
    elif angle >= TWO_PI:
        angle -= TWO_PI
    # -1e-17 + 2pi rounds to 2pi
    if angle >= TWO_PI:
        angle = 0.0
    return angle


def angle_delta(a: float, b: float) -> float:
    """Signed shortest rotation from b to a, in [-pi, pi)"""
    return (a - b + math.pi) % TWO_PI - math.pi


def seed_everything(py_seed: Optional[int]):
    """Seed all random number generators"""
    if py_seed is None:
        return
    random.seed(py_seed)
    np.random.seed(py_seed)
