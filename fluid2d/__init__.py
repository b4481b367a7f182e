"""
fluid2d/ — 2D Stable Fluids Package
====================================
Exports the main interfaces front-ends use.

Renderers import: FluidGrid (read accessors)
Hosts import:     FluidSimulation → step(), brushes
"""

from .buffers import DoubleBuffer
from .config import (FIELD_SCALAR, FIELD_VX, FIELD_VY,
                     OBSTACLE_HARD_CLEAR, OBSTACLE_REFLECTIVE, SolverConfig)
from .forces import SourceEmitter
from .grid import FluidGrid
from .simulation import FluidSimulation

__all__ = [
    "DoubleBuffer", "FluidGrid", "FluidSimulation", "SolverConfig", "SourceEmitter",
    "FIELD_SCALAR", "FIELD_VX", "FIELD_VY",
    "OBSTACLE_HARD_CLEAR", "OBSTACLE_REFLECTIVE",
]
