"""Pytest configuration and shared fixtures."""

import logging
import random

import pytest

from core.vector import Vector3
from geometry.sphere import Sphere
from geometry.world import HittableList
from materials.lambertian import Lambertian


class FixedRandom(random.Random):
    """Generator whose random() always returns the same value."""

    def __init__(self, value):
        super().__init__(0)
        self.value = value

    def random(self):
        return self.value


class SequenceRandom(random.Random):
    """Generator replaying a fixed list of uniform() draws."""

    def __init__(self, draws, value=0.5):
        super().__init__(0)
        self.draws = list(draws)
        self.value = value

    def uniform(self, a, b):
        return self.draws.pop(0)

    def random(self):
        return self.value


@pytest.fixture(autouse=True)
def restore_root_logger():
    """Drop console handlers a test installs on the root logger and reset its level."""
    root = logging.getLogger()
    before, level = set(root.handlers), root.level
    yield
    for handler in list(root.handlers):
        if handler not in before and getattr(handler, "_pathtracer_console", False):
            root.removeHandler(handler)
    root.setLevel(level)


@pytest.fixture
def rng():
    """Seeded generator so property checks are reproducible."""
    return random.Random(1234)


@pytest.fixture
def ground_world():
    """Radius 100 diffuse sphere whose top touches the origin."""
    world = HittableList()
    world.add(Sphere(Vector3(0, -100, 0), 100, Lambertian(Vector3(0.5, 0.5, 0.5))))
    return world


def assert_vec_close(actual, expected, abs_tol=1e-9):
    assert actual.x == pytest.approx(expected.x, abs=abs_tol)
    assert actual.y == pytest.approx(expected.y, abs=abs_tol)
    assert actual.z == pytest.approx(expected.z, abs=abs_tol)
