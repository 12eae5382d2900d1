import itertools

import pytest

from archery_mc.models import ShooterProfile, Target, SimulationConfig
from archery_mc.sampling import GaussianSource


class SequenceSource(GaussianSource):
    """Replays a fixed list of deviates forever."""

    def __init__(self, values):
        self._values = itertools.cycle(values)
        self.calls = 0

    def next_gaussian(self):
        self.calls += 1
        return float(next(self._values))


@pytest.fixture
def sequence_source():
    return SequenceSource


@pytest.fixture
def default_config():
    return SimulationConfig(
        shooter=ShooterProfile(1.5),
        target=Target(2.0),
        seed=20100101,
    )
