import numpy as np

from fluid2d.solver import compute_divergence, project


def _radial_field(n, sigma=2.5):
    """Smooth outward-pointing blob: strongly divergent, zero at the walls."""
    j, i = np.indices((n, n), dtype=np.float32)
    c = (n - 1) / 2.0
    g = np.exp(-((i - c) ** 2 + (j - c) ** 2) / (sigma ** 2))
    return ((i - c) * g).astype(np.float32), ((j - c) * g).astype(np.float32)


def test_divergence_of_linear_field_is_one(no_solids):
    n = 8
    j, i = np.indices((n, n), dtype=np.float32)
    div = compute_divergence(i, np.zeros_like(i), no_solids(n))

    assert np.allclose(div[1:-1, 1:-1], 1.0)
    assert np.all(div[0, :] == 0.0) and np.all(div[:, -1] == 0.0)


def test_divergence_is_zero_at_solid_cells():
    n = 8
    solid = np.zeros((n, n), dtype=bool)
    solid[3, 3] = True
    j, i = np.indices((n, n), dtype=np.float32)

    div = compute_divergence(i, j, solid)

    assert div[3, 3] == 0.0


def test_projection_reduces_divergence(no_solids):
    n = 16
    vx, vy = _radial_field(n)
    solid = no_solids(n)
    before = np.abs(compute_divergence(vx, vy, solid)[1:-1, 1:-1]).max()

    p = np.zeros_like(vx)
    div = np.zeros_like(vx)
    project(vx, vy, p, div, solid, iterations=40)

    after = np.abs(compute_divergence(vx, vy, solid)[1:-1, 1:-1]).max()
    assert before > 0.0
    assert after < before


def test_projection_of_zero_field_stays_zero(no_solids):
    n = 10
    vx = np.zeros((n, n), dtype=np.float32)
    vy = np.zeros((n, n), dtype=np.float32)
    p = np.zeros_like(vx)
    div = np.zeros_like(vx)

    project(vx, vy, p, div, no_solids(n))

    assert not vx.any() and not vy.any() and not p.any()


def test_projection_skips_solid_cells():
    n = 16
    vx, vy = _radial_field(n)
    solid = np.zeros((n, n), dtype=bool)
    solid[4, 4] = True
    vx[4, 4] = 3.0
    vy[4, 4] = -2.0

    project(vx, vy, np.zeros_like(vx), np.zeros_like(vx), solid, iterations=20)

    assert vx[4, 4] == 3.0
    assert vy[4, 4] == -2.0
