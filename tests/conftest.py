import pytest

from game.orbit import GameSession, OrbitConfig


def frozen_clock():
    # Never past the spawn interval, so no bullets appear on their own
    return 0.0


@pytest.fixture
def session():
    return GameSession(width=800, height=600, clock=frozen_clock)


@pytest.fixture
def playing(session):
    session.start()
    return session


@pytest.fixture
def small_session():
    cfg = OrbitConfig(coin_count=4, ship_speed=0.1, orbit_radius=100)
    return GameSession(width=800, height=600, config=cfg, clock=frozen_clock)
