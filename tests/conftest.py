import numpy as np
import pytest

from fluid2d import FluidGrid


@pytest.fixture
def grid():
    """Small quiet grid: no diffusion, almost no viscosity, no gravity."""
    return FluidGrid(N=16, diffusion=0.0, viscosity=1e-7, dt=0.1)


@pytest.fixture
def no_solids():
    def make(n):
        return np.zeros((n, n), dtype=bool)
    return make
