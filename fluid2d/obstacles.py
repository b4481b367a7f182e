"""
obstacles.py — Solid Cells Inside the Fluid
============================================
Obstacles ("stones") are cells flagged in a boolean mask. They are part of
the grid itself (an immersed boundary), not a separate mesh.

Two policies:
  - hard_clear : solids are skipped by the relaxation, then zeroed once
                 the step is done.
  - reflective : additionally, after every relaxation sweep, each solid
                 cell takes the NEGATED average of the fluid next to it
                 along the velocity axis (no-slip / no-penetration wall).

Either way, the final pass of every step zeroes density and velocity in
every solid cell.

Flow splitting:
  Water falling (+y) onto the top of an obstacle would simply stop.
  Instead, part of its downward velocity is pushed sideways into the
  neighbouring fluid cells so it pours around the stone. The constants are
  tuned by eye, see FLOW_DAMPING / FLOW_SPREAD in config.py.
"""

import numpy as np

from .boundary import set_boundary
from .config import FIELD_SCALAR, FIELD_VX, FIELD_VY, SolverConfig, check_kind


def reflect_into_solids(kind: str, x: np.ndarray, solid: np.ndarray):
    """
    Reflective policy, applied after each relaxation sweep.

      scalar : x[solid] = 0
      vx     : x[solid] = -0.5 * (left_fluid_or_0 + right_fluid_or_0)
      vy     : x[solid] = -0.5 * (up_fluid_or_0   + down_fluid_or_0)

    Modifies: x (in-place, interior solid cells only)
    """
    check_kind(kind)
    inner = solid[1:-1, 1:-1]
    if not inner.any():
        return

    centre = x[1:-1, 1:-1]
    if kind == FIELD_SCALAR:
        centre[inner] = 0.0
        return

    if kind == FIELD_VX:
        a, a_solid = x[1:-1, :-2], solid[1:-1, :-2]
        b, b_solid = x[1:-1, 2:],  solid[1:-1, 2:]
    else:
        a, a_solid = x[:-2, 1:-1], solid[:-2, 1:-1]
        b, b_solid = x[2:,  1:-1], solid[2:,  1:-1]

    reflected = -0.5 * (np.where(a_solid, 0.0, a) + np.where(b_solid, 0.0, b))
    centre[inner] = reflected[inner]


def split_blocked_flow(vx: np.ndarray, vy: np.ndarray, solid: np.ndarray,
                       damping: float, spread: float):
    """
    Deflect downward flow that runs into the top of an obstacle.

    For every fluid cell whose lower neighbour (j+1) is solid and whose
    vy > 0:
        push = 0.5 * vy * spread
        vy  *= damping
        left neighbour  (if fluid): vx -= push
        right neighbour (if fluid): vx += push

    Modifies: vx, vy (in-place)
    """
    blocked = ~solid[1:-1, 1:-1] & solid[2:, 1:-1] & (vy[1:-1, 1:-1] > 0)
    if not blocked.any():
        return

    vy_inner = vy[1:-1, 1:-1]
    push = np.where(blocked, 0.5 * spread * vy_inner, 0.0).astype(vx.dtype)
    vy_inner[blocked] *= damping

    vx[1:-1, :-2] -= np.where(solid[1:-1, :-2], 0.0, push).astype(vx.dtype)
    vx[1:-1, 2:]  += np.where(solid[1:-1, 2:],  0.0, push).astype(vx.dtype)


def clear_solids(solid: np.ndarray, *fields: np.ndarray):
    """Hard clear: zero every given field at solid cells."""
    for field in fields:
        field[solid] = 0.0


def enforce_obstacles(density: np.ndarray, vx: np.ndarray, vy: np.ndarray,
                      solid: np.ndarray, config: SolverConfig, extra: tuple = ()):
    """
    Final obstacle pass of a step.

      1. Flow splitting (if enabled) on fluid cells resting on a solid
      2. Zero density / velocity (and any `extra` buffers) inside solids
      3. Rebuild the velocity walls — flow splitting may touch column 0 / N-1

    Args:
        density, vx, vy : Current fields
        solid           : Obstacle mask
        config          : SolverConfig (flow_split, flow_damping, flow_spread)
        extra           : More arrays to clear, e.g. the previous velocity slots
    """
    if not solid.any():
        return

    if config.flow_split:
        split_blocked_flow(vx, vy, solid, config.flow_damping, config.flow_spread)

    clear_solids(solid, density, vx, vy, *extra)

    set_boundary(FIELD_VX, vx)
    set_boundary(FIELD_VY, vy)
