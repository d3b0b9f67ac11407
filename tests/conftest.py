import random

import pytest

from twoqueue.config import DEFAULTS, apply_overrides


@pytest.fixture
def rng():
    return random.Random(12345)


@pytest.fixture
def make_cfg():
    """Build a run config on top of DEFAULTS with a fixed seed."""
    def _make(**sim):
        overrides = {"sim": {"seed": 7}}
        routing = sim.pop("overflow_to_other", None)
        overrides["sim"].update(sim)
        if routing is not None:
            overrides["routing"] = {"overflow_to_other": routing}
        return apply_overrides(DEFAULTS, overrides)
    return _make


class FixedRng:
    """Stand-in RNG returning scripted coin flips and uniforms."""
    def __init__(self, flips=(), uniforms=()):
        self.flips = list(flips)
        self.uniforms = list(uniforms)
        self.calls = 0

    def randrange(self, n):
        self.calls += 1
        return self.flips.pop(0)

    def random(self):
        self.calls += 1
        return self.uniforms.pop(0)


@pytest.fixture
def fixed_rng():
    return FixedRng
