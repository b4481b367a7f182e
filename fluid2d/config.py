"""
config.py — Solver Configuration
=================================
Every tunable the solver reads lives here, so two grids with different
settings can run side by side without touching module globals.

Two variants of this solver existed in the wild and disagreed on the
constants (iteration count, obstacle handling, diffusion stencil weight).
They are all knobs now:

  iterations      : Gauss-Seidel sweeps per linear solve (K)
  obstacle_policy : "hard_clear" or "reflective"
  stencil_weight  : k in c = 1 + k*a for diffusion (4 or 6)
"""

from dataclasses import dataclass


# ── Field kinds (which boundary rule applies) ─────────────────────────────────
FIELD_SCALAR = "scalar"
FIELD_VX     = "vx"
FIELD_VY     = "vy"
FIELD_KINDS  = (FIELD_SCALAR, FIELD_VX, FIELD_VY)

# ── Obstacle policies ─────────────────────────────────────────────────────────
OBSTACLE_HARD_CLEAR = "hard_clear"
OBSTACLE_REFLECTIVE = "reflective"
OBSTACLE_POLICIES   = (OBSTACLE_HARD_CLEAR, OBSTACLE_REFLECTIVE)

# ── Defaults ──────────────────────────────────────────────────────────────────
DEFAULT_ITERATIONS     = 20
DEFAULT_STENCIL_WEIGHT = 6      # 6 leaves a stability margin over the 4-neighbour stencil
FLOW_DAMPING           = 0.3    # blocked downward velocity is multiplied by this
FLOW_SPREAD            = 0.3    # fraction of half the blocked velocity pushed sideways


def check_kind(kind: str):
    """Raise ValueError unless `kind` is one of FIELD_KINDS."""
    if kind not in FIELD_KINDS:
        raise ValueError(f"Unknown field kind: {kind!r}. Use one of {FIELD_KINDS}.")


@dataclass(frozen=True)
class SolverConfig:
    """
    Construction-time solver settings. Frozen: a FluidGrid keeps the same
    configuration for its whole lifetime.

    Args:
        iterations      : Relaxation sweeps per solve (20 = fast, 40 = smoother)
        obstacle_policy : How solid cells behave during relaxation
        stencil_weight  : Neighbour count used in the diffusion normaliser
        gravity         : Density-weighted acceleration along +y (down)
        flow_split      : Deflect water sideways when it falls onto an obstacle
        flow_damping    : Multiplier on the blocked downward velocity
        flow_spread     : Fraction of half the blocked velocity pushed sideways
    """
    iterations: int = DEFAULT_ITERATIONS
    obstacle_policy: str = OBSTACLE_HARD_CLEAR
    stencil_weight: int = DEFAULT_STENCIL_WEIGHT
    gravity: float = 0.0
    flow_split: bool = True
    flow_damping: float = FLOW_DAMPING
    flow_spread: float = FLOW_SPREAD

    def __post_init__(self):
        if self.iterations < 1:
            raise ValueError(f"iterations must be >= 1, got {self.iterations}")
        if self.obstacle_policy not in OBSTACLE_POLICIES:
            raise ValueError(
                f"Unknown obstacle policy: {self.obstacle_policy!r}. "
                f"Use one of {OBSTACLE_POLICIES}."
            )
        if self.stencil_weight not in (4, 6):
            raise ValueError(f"stencil_weight must be 4 or 6, got {self.stencil_weight}")
        if self.flow_damping < 0.0 or self.flow_spread < 0.0:
            raise ValueError("flow_damping and flow_spread must be non-negative")
