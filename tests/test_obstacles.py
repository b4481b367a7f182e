import numpy as np
import pytest

from fluid2d.config import FIELD_VY, SolverConfig
from fluid2d.obstacles import (clear_solids, enforce_obstacles, reflect_into_solids,
                               split_blocked_flow)


def _fields(n=10):
    return (np.zeros((n, n), dtype=np.float32),
            np.zeros((n, n), dtype=np.float32),
            np.zeros((n, n), dtype=bool))


def test_falling_water_is_split_around_obstacle():
    vx, vy, solid = _fields()
    solid[6, 5] = True          # stone directly below (5, 5)
    vy[5, 5] = 2.0

    split_blocked_flow(vx, vy, solid, damping=0.3, spread=0.3)

    assert vy[5, 5] == pytest.approx(0.6)
    assert vx[5, 4] == pytest.approx(-0.3)
    assert vx[5, 6] == pytest.approx(0.3)


def test_flow_split_does_not_amplify_momentum():
    rng = np.random.default_rng(0)
    vx, vy, solid = _fields(16)
    solid[8:11, 5:12] = True
    vx[:] = rng.normal(size=vx.shape)
    vy[:] = np.abs(rng.normal(size=vy.shape))
    before = np.abs(vx).sum() + np.abs(vy).sum()

    split_blocked_flow(vx, vy, solid, damping=0.3, spread=0.3)

    after = np.abs(vx).sum() + np.abs(vy).sum()
    assert after <= before + 1e-5


def test_solid_side_neighbour_receives_nothing():
    vx, vy, solid = _fields()
    solid[6, 5] = True
    solid[5, 4] = True
    vy[5, 5] = 2.0

    split_blocked_flow(vx, vy, solid, damping=0.3, spread=0.3)

    assert vx[5, 4] == 0.0
    assert vx[5, 6] == pytest.approx(0.3)


def test_upward_flow_is_not_split():
    vx, vy, solid = _fields()
    solid[6, 5] = True
    vy[5, 5] = -2.0

    split_blocked_flow(vx, vy, solid, damping=0.3, spread=0.3)

    assert vy[5, 5] == -2.0
    assert not vx.any()


def test_reflect_vy_uses_up_and_down_fluid_neighbours():
    n = 8
    x = np.zeros((n, n), dtype=np.float32)
    solid = np.zeros((n, n), dtype=bool)
    solid[3, 3] = solid[4, 3] = True
    x[2, 3] = 1.0                # fluid above the top stone
    x[5, 3] = 4.0                # fluid below the bottom stone

    reflect_into_solids(FIELD_VY, x, solid)

    assert x[3, 3] == pytest.approx(-0.5)   # other neighbour is solid → 0
    assert x[4, 3] == pytest.approx(-2.0)


def test_clear_solids_zeroes_every_field():
    a = np.ones((6, 6), dtype=np.float32)
    b = np.full((6, 6), 3.0, dtype=np.float32)
    solid = np.zeros((6, 6), dtype=bool)
    solid[2, 2] = True

    clear_solids(solid, a, b)

    assert a[2, 2] == 0.0 and b[2, 2] == 0.0
    assert a.sum() == 35.0


def test_enforce_obstacles_clears_extra_buffers():
    n = 10
    density = np.ones((n, n), dtype=np.float32)
    vx = np.ones((n, n), dtype=np.float32)
    vy = np.ones((n, n), dtype=np.float32)
    vx_prev = np.ones((n, n), dtype=np.float32)
    solid = np.zeros((n, n), dtype=bool)
    solid[4:6, 4:6] = True

    enforce_obstacles(density, vx, vy, solid, SolverConfig(), extra=(vx_prev,))

    for field in (density, vx, vy, vx_prev):
        assert not field[solid].any()
