"""
solver.py — Pressure Projection
================================
The pressure projection step enforces INCOMPRESSIBILITY:
  div(v) = 0 everywhere

After diffusion or advection the velocity field is generally NOT
divergence-free (fluid "piles up" in some cells). We fix this by:
  1. Computing the divergence of the current velocity field
  2. Solving the Poisson equation for pressure: ∇²p = div(v)
  3. Subtracting the pressure gradient from velocity: v = v - ∇p

This is the Helmholtz-Hodge decomposition: any vector field splits into a
divergence-free part plus a gradient. We keep the divergence-free part.

All quantities live at cell centres and use central differences. Solid
cells get zero divergence and zero pressure, are skipped by the gradient
subtraction, and a solid neighbour is replaced by the cell's own value.
"""

import numpy as np

from .boundary import set_boundary
from .config import (DEFAULT_ITERATIONS, FIELD_SCALAR, FIELD_VX, FIELD_VY,
                     OBSTACLE_HARD_CLEAR)
from .linsolve import lin_solve


def _central_difference(f: np.ndarray, solid: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
    """
    Central differences of `f` over the interior, in grid units (not halved).

    Returns (f[i+1] - f[i-1], f[j+1] - f[j-1]), each (N-2, N-2). A solid
    neighbour is replaced by the centre value.
    """
    centre = f[1:-1, 1:-1]
    right = np.where(solid[1:-1, 2:],   centre, f[1:-1, 2:])
    left  = np.where(solid[1:-1, :-2],  centre, f[1:-1, :-2])
    down  = np.where(solid[2:,   1:-1], centre, f[2:,   1:-1])
    up    = np.where(solid[:-2,  1:-1], centre, f[:-2,  1:-1])
    return right - left, down - up


def compute_divergence(vx: np.ndarray, vy: np.ndarray, solid: np.ndarray) -> np.ndarray:
    """
    Divergence of (vx, vy) in grid units:
      div = 0.5 * ((vx[i+1] - vx[i-1]) + (vy[j+1] - vy[j-1]))

    Ring cells and solid cells are 0. High divergence = broken simulation.

    Returns: (N, N) array
    """
    d_vx, _ = _central_difference(vx, solid)
    _, d_vy = _central_difference(vy, solid)

    div = np.zeros_like(vx)
    div[1:-1, 1:-1] = np.where(solid[1:-1, 1:-1], 0.0, 0.5 * (d_vx + d_vy))
    return div


def project(vx: np.ndarray, vy: np.ndarray, p: np.ndarray, div: np.ndarray,
            solid: np.ndarray, iterations: int = DEFAULT_ITERATIONS,
            policy: str = OBSTACLE_HARD_CLEAR):
    """
    Pressure projection: make (vx, vy) approximately divergence-free.

    Args:
        vx, vy     : Candidate velocity, corrected in place
        p          : (N, N) scratch for pressure (overwritten)
        div        : (N, N) scratch for the Poisson right-hand side (overwritten)
        solid      : Obstacle mask
        iterations : Gauss-Seidel sweeps for the Poisson solve
        policy     : Obstacle policy passed to the solver

    Modifies: vx, vy, p, div (in-place)
    """
    n = vx.shape[0]

    # Step 1: right-hand side and zero initial pressure
    div[...] = -compute_divergence(vx, vy, solid) / n
    p[...] = 0.0
    set_boundary(FIELD_SCALAR, div)
    set_boundary(FIELD_SCALAR, p)

    # Step 2: ∇²p = div, 4-neighbour stencil
    lin_solve(FIELD_SCALAR, p, div, 1.0, 4.0, solid,
              iterations=iterations, policy=policy)

    # Step 3: subtract the pressure gradient at fluid cells
    dp_dx, dp_dy = _central_difference(p, solid)
    fluid = ~solid[1:-1, 1:-1]
    vx_inner = vx[1:-1, 1:-1]
    vy_inner = vy[1:-1, 1:-1]
    vx_inner[fluid] -= (0.5 * n * dp_dx)[fluid]
    vy_inner[fluid] -= (0.5 * n * dp_dy)[fluid]

    set_boundary(FIELD_VX, vx)
    set_boundary(FIELD_VY, vy)
