"""
advect.py — Semi-Lagrangian Advection
======================================
This is what makes fluid look like it's *actually flowing*.

The algorithm (per interior cell):
  1. Look at the cell centre (i, j).
  2. Trace BACKWARD along the velocity field by one timestep:
       departure = (i, j) - dt * (N-2) * v(i, j)
     → "Where did the stuff in this cell come FROM?"
  3. Clamp the departure point to [0.5, (N-2)+0.5] on both axes so we never
     sample outside the lattice.
  4. Bilinearly interpolate the previous field there (it lands between cells).
  5. That sampled value becomes the new value for this cell.

Semi-Lagrangian: fixed grid (Eulerian) but particles traced backward
(Lagrangian). Unconditionally stable.

Key reference: Jos Stam, "Stable Fluids" (SIGGRAPH 1999)
"""

from functools import lru_cache

import numpy as np

from .boundary import set_boundary
from .config import FIELD_SCALAR, check_kind


@lru_cache(maxsize=None)
def _interior_coords(n: int) -> tuple[np.ndarray, np.ndarray]:
    """(i, j) float coordinates of the interior cells, each (n-2, n-2). Cached, read-only."""
    j, i = np.meshgrid(
        np.arange(1, n - 1, dtype=np.float32),
        np.arange(1, n - 1, dtype=np.float32),
        indexing='ij'
    )
    i.flags.writeable = False
    j.flags.writeable = False
    return i, j


def bilinear_sample(field: np.ndarray, x: np.ndarray, y: np.ndarray) -> np.ndarray:
    """
    Bilinear interpolation of a 2D field at fractional positions.

    Weighted average of the 4 lattice points around each (x, y):
      (i0, j0), (i0+1, j0), (i0, j0+1), (i0+1, j0+1)

    Args:
        field : (N, N) array indexed [j, i]
        x, y  : Query positions (same shape). Must satisfy 0 <= x, y <= N-2
                so the upper corner stays inside the array.

    Returns:
        Interpolated values, same shape as x / y
    """
    i0 = np.floor(x).astype(np.intp)
    j0 = np.floor(y).astype(np.intp)
    i1 = i0 + 1
    j1 = j0 + 1

    # Fractional part (how far we are between lower and upper)
    s1 = x - i0
    s0 = 1.0 - s1
    t1 = y - j0
    t0 = 1.0 - t1

    return (s0 * (t0 * field[j0, i0] + t1 * field[j1, i0]) +
            s1 * (t0 * field[j0, i1] + t1 * field[j1, i1]))


def advect(kind: str, d: np.ndarray, d0: np.ndarray,
           vx: np.ndarray, vy: np.ndarray, dt: float, solid: np.ndarray):
    """
    Transport `d0` along (vx, vy) for one timestep and write the result to `d`.

    Args:
        kind   : Field kind (wall rule, and whether solids are zeroed)
        d      : Output field (current slot)
        d0     : Field being transported (previous slot)
        vx, vy : Velocity used for the back-trace
        dt     : Timestep
        solid  : Obstacle mask

    Solid cells are skipped. For scalars they are zeroed; velocity solids
    are left to the obstacle pass at the end of the step.

    Raises:
        ValueError if `d` shares memory with d0, vx or vy — the output must
        never overwrite what is still being read.

    Modifies: d (in-place)
    """
    check_kind(kind)
    for source in (d0, vx, vy):
        if np.shares_memory(d, source):
            raise ValueError("advect() output buffer aliases one of its inputs")

    n = d.shape[0]
    dt0 = dt * (n - 2)
    i, j = _interior_coords(n)

    # Back-trace and clamp to the valid interior
    x = np.clip(i - dt0 * vx[1:-1, 1:-1], 0.5, (n - 2) + 0.5)
    y = np.clip(j - dt0 * vy[1:-1, 1:-1], 0.5, (n - 2) + 0.5)

    sampled = bilinear_sample(d0, x, y)

    fluid = ~solid[1:-1, 1:-1]
    inner = d[1:-1, 1:-1]
    inner[fluid] = sampled[fluid]
    if kind == FIELD_SCALAR:
        inner[~fluid] = 0.0

    set_boundary(kind, d)
