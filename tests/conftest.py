import random

import pytest

from threebody.config import SimulationConfig
from threebody.data_models import Body
from threebody.vector_utils import Vector2


class FakeClock:
    def __init__(self, start=100.0):
        self.now = start

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def scenario_config():
    return SimulationConfig(gravity_strength=0.4, min_distance=10.0, force_cap=10000.0, force_scale=0.25)


def make_body(x, y, mass=40.0, vx=0.0, vy=0.0, color=(255, 255, 255)):
    return Body(position=Vector2(x, y), velocity=Vector2(vx, vy), mass=mass, color=color)
