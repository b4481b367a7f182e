"""
forces.py — External Forces and Emitters
=========================================
Applies body forces and persistent injection to the fields each timestep.

Gravity acts on the WATER, not on empty space: each fluid cell holding
density is pulled down (+y, screen orientation) proportionally to how much
water it holds, capped at one unit:

  vy += g * min(density, 1)      where density > 0.001

Sources are cells that pour water every frame. The solver only stores the
mask; the emitter below is the collaborator that decides how much to pour.
"""

import numpy as np


# ── Forcing parameters ────────────────────────────────────────────────────────
GRAVITY                   = 0.15   # pull on a fully wet cell, per step
GRAVITY_DENSITY_THRESHOLD = 0.001  # drier cells feel no gravity
SOURCE_FLOW_RATE          = 150.0  # density poured per source cell per step
SOURCE_VELOCITY           = 1.5    # downward velocity added per source cell per step


def apply_gravity(vy: np.ndarray, density: np.ndarray, solid: np.ndarray, gravity: float):
    """
    Pull wet interior cells down along +y.

    Modifies: vy (in-place)
    """
    if gravity == 0.0:
        return

    d = density[1:-1, 1:-1]
    wet = ~solid[1:-1, 1:-1] & (d > GRAVITY_DENSITY_THRESHOLD)
    vy[1:-1, 1:-1] += np.where(wet, gravity * np.minimum(d, 1.0), 0.0).astype(vy.dtype)


def apply_sources(density: np.ndarray, vy: np.ndarray, source: np.ndarray,
                  solid: np.ndarray, flow_rate: float = SOURCE_FLOW_RATE,
                  velocity: float = SOURCE_VELOCITY):
    """
    Pour water from every source cell that is not covered by an obstacle.

    Modifies: density, vy (in-place)
    """
    active = source & ~solid
    density[active] += flow_rate
    vy[active] += velocity


class SourceEmitter:
    """
    Injection hook for FluidGrid: called once at the start of every step.

    Usage:
        grid.injection_hook = SourceEmitter(flow_rate=150.0, velocity=1.5)
    """

    def __init__(self, flow_rate: float = SOURCE_FLOW_RATE, velocity: float = SOURCE_VELOCITY):
        self.flow_rate = flow_rate
        self.velocity = velocity

    def __call__(self, grid):
        grid.emit_sources(self.flow_rate, self.velocity)

    def __repr__(self):
        return f"SourceEmitter(flow_rate={self.flow_rate}, velocity={self.velocity})"
