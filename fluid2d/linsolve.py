"""
linsolve.py — Gauss-Seidel Relaxation with Obstacle Masking
============================================================
Both diffusion and the pressure solve boil down to the same implicit system:

  x[i,j] = (x0[i,j] + a * (x[i-1,j] + x[i+1,j] + x[i,j-1] + x[i,j+1])) / c

We relax it in place for a fixed number of sweeps. Gauss-Seidel reuses
neighbour values already updated in the same sweep, so it converges about
twice as fast as Jacobi.

A plain Gauss-Seidel sweep is a Python loop over every cell. Instead we use
red-black ordering: colour the interior like a checkerboard, update all red
cells at once (their neighbours are all black), then all black cells with
the fresh red values. Each half-sweep is one vectorised NumPy expression.

Obstacles:
  - Solid cells are never updated.
  - A solid neighbour contributes the updating cell's OWN value instead of
    its stale contents (zero-gradient), so nothing diffuses into a stone.
"""

from functools import lru_cache

import numpy as np

from .boundary import set_boundary
from .config import DEFAULT_ITERATIONS, OBSTACLE_HARD_CLEAR, OBSTACLE_REFLECTIVE
from .obstacles import reflect_into_solids


@lru_cache(maxsize=None)
def _checkerboard(n: int) -> tuple[np.ndarray, np.ndarray]:
    """Red and black masks over the (n-2, n-2) interior. Cached, read-only."""
    j, i = np.indices((n - 2, n - 2))
    red = (i + j) % 2 == 0
    black = ~red
    red.flags.writeable = False
    black.flags.writeable = False
    return red, black


def lin_solve(kind: str, x: np.ndarray, x0: np.ndarray, a: float, c: float,
              solid: np.ndarray, iterations: int = DEFAULT_ITERATIONS,
              policy: str = OBSTACLE_HARD_CLEAR):
    """
    Relax x = (x0 + a * sum_of_4_neighbours(x)) / c in place.

    Args:
        kind       : Field kind, selects the wall rule after each sweep
        x          : (N, N) field, solved in place (current contents = initial guess)
        x0         : (N, N) right-hand side
        a          : Neighbour coupling (>= 0)
        c          : Normaliser, must be non-zero (1 + k*a for diffusion, 4 for pressure)
        solid      : (N, N) obstacle mask
        iterations : Number of full sweeps
        policy     : OBSTACLE_HARD_CLEAR or OBSTACLE_REFLECTIVE

    Modifies: x (in-place)
    """
    c_recip = 1.0 / c
    rhs = x0[1:-1, 1:-1]

    fluid = ~solid[1:-1, 1:-1]
    solid_left  = solid[1:-1, :-2]
    solid_right = solid[1:-1, 2:]
    solid_up    = solid[:-2,  1:-1]
    solid_down  = solid[2:,   1:-1]
    masks = [colour & fluid for colour in _checkerboard(x.shape[0])]
    reflect = policy == OBSTACLE_REFLECTIVE and solid.any()

    centre = x[1:-1, 1:-1]
    for _ in range(iterations):
        for mask in masks:
            neighbours = (
                np.where(solid_left,  centre, x[1:-1, :-2]) +
                np.where(solid_right, centre, x[1:-1, 2:])  +
                np.where(solid_up,    centre, x[:-2,  1:-1]) +
                np.where(solid_down,  centre, x[2:,   1:-1])
            )
            update = (rhs + a * neighbours) * c_recip
            centre[mask] = update[mask]

        if reflect:
            reflect_into_solids(kind, x, solid)

        # Stale walls would feed wrong gradients into the next sweep
        set_boundary(kind, x)
