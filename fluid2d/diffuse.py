"""
diffuse.py — Implicit Diffusion
================================
Diffusion makes fluids spread out over time.
  - High diffusion  → density spreads fast (watercolor bleed)
  - Low diffusion   → density stays tight (ink drop)
  - High viscosity  → thick fluid (honey)
  - Low viscosity   → thin fluid (water)

The math: we solve the implicit heat equation

  (I - a·∇²) x_new = x_old,   a = dt * rate * (N-2)²

Explicit diffusion (adding the Laplacian each step) blows up for large dt.
The implicit form is unconditionally stable. It is relaxed with the same
Gauss-Seidel solver as the pressure (see linsolve.py), with

  c = 1 + k·a

where k is the stencil weight from SolverConfig (4 = exact for the
4-neighbour stencil, 6 = slightly dissipative).
"""

import numpy as np

from .boundary import set_boundary
from .config import DEFAULT_ITERATIONS, DEFAULT_STENCIL_WEIGHT, OBSTACLE_HARD_CLEAR
from .linsolve import lin_solve


def diffuse(kind: str, x: np.ndarray, x0: np.ndarray, rate: float, dt: float,
            solid: np.ndarray, iterations: int = DEFAULT_ITERATIONS,
            stencil_weight: int = DEFAULT_STENCIL_WEIGHT,
            policy: str = OBSTACLE_HARD_CLEAR):
    """
    Diffuse `x0` into `x`.

    Args:
        kind           : Field kind (wall rule)
        x              : Output, the field's `current` slot
        x0             : Input, the field's `previous` slot (pre-step values)
        rate           : Viscosity for velocity, diffusion constant for density
        dt             : Timestep
        solid          : Obstacle mask
        iterations     : Relaxation sweeps
        stencil_weight : k in c = 1 + k*a
        policy         : Obstacle policy passed to the solver

    Modifies: x (in-place)
    """
    # Start from the source values: the answer is close to x0 for small a
    np.copyto(x, x0)

    if rate == 0.0:
        set_boundary(kind, x)
        return  # Nothing to diffuse (saves time)

    n = x.shape[0]
    a = dt * rate * (n - 2) * (n - 2)
    lin_solve(kind, x, x0, a, 1.0 + stencil_weight * a, solid,
              iterations=iterations, policy=policy)
