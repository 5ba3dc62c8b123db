"""
Coin path generation
"""

import math
from typing import List

from .entities import Coin
from .utils import TWO_PI


def generate_coins(count: int, radius: float, cx: float, cy: float) -> List[Coin]:
    """Place `count` uncollected coins evenly around the orbit circle, starting at angle 0"""
    if count <= 0:
        return []

    step = TWO_PI / count
    coins = []
    for i in range(count):
        angle = i * step
        coins.append(Coin(
            x=cx + math.cos(angle) * radius,
            y=cy + math.sin(angle) * radius,
            angle=angle,
        ))
    return coins
