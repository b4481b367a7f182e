"""
boundary.py — Domain Wall Conditions
=====================================
The outer ring of cells (index 0 and N-1 on each axis) is never simulated.
Its values are rebuilt from the first interior layer after every stage:

  - Scalars (density, pressure): copy the inward neighbour (Neumann, dφ/dn = 0)
  - vx: negated across the LEFT/RIGHT walls, copied across TOP/BOTTOM
  - vy: negated across the TOP/BOTTOM walls, copied across LEFT/RIGHT

A velocity component flips sign across the wall it points into, so nothing
flows through the box, but it can still slide along it.

Fields are indexed [j, i]: rows are y, columns are x.
"""

import numpy as np

from .config import FIELD_VX, FIELD_VY, check_kind

# Corner = 0.33 × (sum of two edge cells), not an exact average
CORNER_WEIGHT = 0.33


def set_boundary(kind: str, x: np.ndarray):
    """
    Fill the ring cells of `x` in place according to the field kind.

    Args:
        kind : FIELD_SCALAR, FIELD_VX or FIELD_VY
        x    : (N, N) field
    """
    check_kind(kind)

    # ── Top / bottom walls (rows 0 and N-1) ───────────────────────────────
    sign_y = -1.0 if kind == FIELD_VY else 1.0
    x[0,  1:-1] = sign_y * x[1,  1:-1]
    x[-1, 1:-1] = sign_y * x[-2, 1:-1]

    # ── Left / right walls (columns 0 and N-1) ────────────────────────────
    sign_x = -1.0 if kind == FIELD_VX else 1.0
    x[1:-1, 0]  = sign_x * x[1:-1, 1]
    x[1:-1, -1] = sign_x * x[1:-1, -2]

    # ── Corners: from the two adjacent edge cells ─────────────────────────
    x[0,  0]  = CORNER_WEIGHT * (x[0,  1]  + x[1,  0])
    x[-1, 0]  = CORNER_WEIGHT * (x[-1, 1]  + x[-2, 0])
    x[0,  -1] = CORNER_WEIGHT * (x[0,  -2] + x[1,  -1])
    x[-1, -1] = CORNER_WEIGHT * (x[-2, -1] + x[-1, -2])
