import numpy as np
import pytest

from boids import Flock, FlockSettings


@pytest.fixture
def settings():
    return FlockSettings(count=2, bounds=500.0, seed=0).validate()


@pytest.fixture
def make_flock(settings):
    """Build a flock from literal positions/velocities, optionally overriding settings."""
    def _make(positions, velocities, **overrides):
        s = settings.with_overrides(**overrides) if overrides else settings
        return Flock.from_arrays(
            np.array(positions, dtype=np.float64),
            np.array(velocities, dtype=np.float64),
            s
        )
    return _make
