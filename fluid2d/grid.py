"""
grid.py — Collocated 2D Fluid Grid
===================================
The foundation of the entire simulation.

Layout:
  - Every field is an (N, N) float32 array indexed [j, i]
    (row = y, column = x), so the flat index is i + j*N.
  - Density, vx, vy and pressure all live at CELL CENTRES.
  - The outer ring (index 0 and N-1) holds wall values only; users edit the
    interior [1, N-2] x [1, N-2].
  - y grows DOWNWARD (image rows), so gravity is +y.

Each transported field is a DoubleBuffer (current / previous). The step
pipeline swaps roles explicitly; nothing is reallocated while stepping.
"""

import numpy as np

from .advect import advect
from .buffers import DoubleBuffer
from .config import FIELD_SCALAR, FIELD_VX, FIELD_VY, SolverConfig
from .diffuse import diffuse
from .forces import apply_gravity, apply_sources
from .obstacles import enforce_obstacles
from .solver import compute_divergence, project


def _readonly(arr: np.ndarray) -> np.ndarray:
    view = arr.view()
    view.flags.writeable = False
    return view


class FluidGrid:
    """
    N×N grid storing all simulation state, plus the per-frame solver.

    Usage:
        grid = FluidGrid(N=64, diffusion=0.0, viscosity=1e-7, dt=0.1)
        grid.add_density(32, 10, 100.0)
        grid.add_velocity(32, 10, 0.0, 5.0)
        grid.step()
        image = grid.density          # read-only view, re-fetch every frame

    Not thread-safe: edits and step() must come from the same loop.
    """

    def __init__(self, N: int = 64, diffusion: float = 0.0, viscosity: float = 0.0,
                 dt: float = 0.1, config: SolverConfig = None):
        """
        Args:
            N          : Grid side, including the wall ring (N >= 3)
            diffusion  : How fast density spreads (0 = no spreading)
            viscosity  : Fluid thickness (0 = inviscid, high = honey)
            dt         : Timestep
            config     : SolverConfig (iterations, obstacle policy, stencil, gravity...)

        Raises:
            ValueError on N < 3, dt <= 0, diffusion < 0 or viscosity < 0
        """
        if N < 3:
            raise ValueError(f"Grid size must be at least 3, got {N}")
        if dt <= 0.0:
            raise ValueError(f"dt must be positive, got {dt}")
        if diffusion < 0.0 or viscosity < 0.0:
            raise ValueError("diffusion and viscosity must be non-negative")

        self.N = N
        self.dt = dt
        self.diffusion = diffusion
        self.viscosity = viscosity
        self.config = config if config is not None else SolverConfig()

        shape = (N, N)

        # ── Transported fields ─────────────────────────────────────────────
        self._density = DoubleBuffer(shape)
        self._vx = DoubleBuffer(shape)
        self._vy = DoubleBuffer(shape)

        # ── Projection scratch ─────────────────────────────────────────────
        self._pressure = np.zeros(shape, dtype=np.float32)
        self._divergence = np.zeros(shape, dtype=np.float32)

        # ── Masks ──────────────────────────────────────────────────────────
        self._obstacle = np.zeros(shape, dtype=bool)
        self._source = np.zeros(shape, dtype=bool)

        # Called as injection_hook(grid) at the start of every step
        self.injection_hook = None

    # ── Coordinates ────────────────────────────────────────────────────────

    def _in_interior(self, x: int, y: int) -> bool:
        return 1 <= x <= self.N - 2 and 1 <= y <= self.N - 2

    # ── Mutators (silently ignore anything outside the interior) ──────────

    def add_density(self, x: int, y: int, amount: float):
        """Inject density (water) at cell (x, y). Ignored on obstacles."""
        if self._in_interior(x, y) and not self._obstacle[y, x]:
            self._density.current[y, x] += amount

    def add_velocity(self, x: int, y: int, dx: float, dy: float):
        """Apply a velocity impulse at cell (x, y). Ignored on obstacles."""
        if self._in_interior(x, y) and not self._obstacle[y, x]:
            self._vx.current[y, x] += dx
            self._vy.current[y, x] += dy

    def set_obstacle(self, x: int, y: int, active: bool = True):
        """
        Set or clear the solid flag at (x, y). Field values already in the
        cell are not touched here; the next step() clears them.
        """
        if self._in_interior(x, y):
            self._obstacle[y, x] = active

    def set_source(self, x: int, y: int, active: bool = True):
        """Set or clear a persistent source. A new source removes any obstacle under it."""
        if self._in_interior(x, y):
            self._source[y, x] = active
            if active:
                self._obstacle[y, x] = False

    def emit_sources(self, flow_rate: float, velocity: float):
        """Pour from every source cell once. Normally driven by injection_hook."""
        apply_sources(self._density.current, self._vy.current, self._source,
                      self._obstacle, flow_rate, velocity)

    def clear_density(self):
        self._density.fill(0.0)

    def clear_velocity(self):
        self._vx.fill(0.0)
        self._vy.fill(0.0)

    def clear_obstacles(self):
        self._obstacle[:] = False

    def clear_sources(self):
        self._source[:] = False

    def reset(self):
        """Zero out all fields and masks. Useful for running multiple simulations."""
        self.clear_density()
        self.clear_velocity()
        self.clear_obstacles()
        self.clear_sources()
        self._pressure[:] = 0.0
        self._divergence[:] = 0.0

    # ── Solver ─────────────────────────────────────────────────────────────

    def _diffuse(self, kind: str, field: DoubleBuffer, rate: float):
        cfg = self.config
        diffuse(kind, field.current, field.previous, rate, self.dt, self._obstacle,
                iterations=cfg.iterations, stencil_weight=cfg.stencil_weight,
                policy=cfg.obstacle_policy)

    def project(self):
        """Make the current velocity field approximately divergence-free."""
        project(self._vx.current, self._vy.current, self._pressure, self._divergence,
                self._obstacle, iterations=self.config.iterations,
                policy=self.config.obstacle_policy)

    def step(self):
        """
        Advance the simulation by dt.

        Pipeline:
          inject → gravity → diffuse(vx, vy) → project → advect(vx, vy)
          → project → diffuse(density) → advect(density) → obstacles
        """
        vx, vy, dens = self._vx, self._vy, self._density
        solid = self._obstacle
        dt = self.dt

        # ── Step 1: Injection + external forces ───────────────────────────
        if self.injection_hook is not None:
            self.injection_hook(self)
        apply_gravity(vy.current, dens.current, solid, self.config.gravity)

        # ── Step 2: Diffuse velocity (viscosity) ──────────────────────────
        vx.swap()
        vy.swap()
        self._diffuse(FIELD_VX, vx, self.viscosity)
        self._diffuse(FIELD_VY, vy, self.viscosity)

        # ── Step 3: Project (advection needs a divergence-free field) ─────
        self.project()

        # ── Step 4: Self-advection, traced through the projected field ────
        vx.swap()
        vy.swap()
        advect(FIELD_VX, vx.current, vx.previous, vx.previous, vy.previous, dt, solid)
        advect(FIELD_VY, vy.current, vy.previous, vx.previous, vy.previous, dt, solid)

        # ── Step 5: Project again (clean up post-advection divergence) ────
        self.project()

        # ── Step 6: Diffuse density ───────────────────────────────────────
        dens.swap()
        self._diffuse(FIELD_SCALAR, dens, self.diffusion)

        # ── Step 7: Advect density through the final velocity ─────────────
        dens.swap()
        advect(FIELD_SCALAR, dens.current, dens.previous, vx.current, vy.current, dt, solid)

        # ── Step 8: Obstacles ─────────────────────────────────────────────
        enforce_obstacles(dens.current, vx.current, vy.current, solid, self.config,
                          extra=(vx.previous, vy.previous))

    # ── Read accessors ─────────────────────────────────────────────────────

    @property
    def size(self) -> int:
        return self.N

    @property
    def density(self) -> np.ndarray:
        return _readonly(self._density.current)

    @property
    def vx(self) -> np.ndarray:
        return _readonly(self._vx.current)

    @property
    def vy(self) -> np.ndarray:
        return _readonly(self._vy.current)

    @property
    def pressure(self) -> np.ndarray:
        """Pressure from the most recent projection."""
        return _readonly(self._pressure)

    @property
    def obstacles(self) -> np.ndarray:
        return _readonly(self._obstacle)

    @property
    def sources(self) -> np.ndarray:
        return _readonly(self._source)

    def speed(self) -> np.ndarray:
        """|v| per cell, e.g. for a brightness channel."""
        return np.sqrt(self._vx.current ** 2 + self._vy.current ** 2)

    def divergence(self) -> np.ndarray:
        """Divergence of the current velocity field. Should be ~0 after step()."""
        return compute_divergence(self._vx.current, self._vy.current, self._obstacle)

    def total_density(self) -> float:
        """Water held by the interior cells. The ring only mirrors its neighbours."""
        return float(self._density.current[1:-1, 1:-1].sum(dtype=np.float64))

    def snapshot(self) -> dict:
        """Copies of every field, safe to keep after further steps."""
        return {
            "density"   : self._density.current.copy(),
            "velocity_x": self._vx.current.copy(),
            "velocity_y": self._vy.current.copy(),
            "pressure"  : self._pressure.copy(),
            "obstacles" : self._obstacle.copy(),
            "sources"   : self._source.copy(),
        }

    def __repr__(self):
        max_div = np.abs(self.divergence()).max()
        return (
            f"FluidGrid(N={self.N}, dt={self.dt})\n"
            f"  density   : max={self._density.current.max():.4f}, sum={self.total_density():.2f}\n"
            f"  velocity  : max_magnitude={self.speed().max():.4f}\n"
            f"  divergence: max={max_div:.6f} (target: ~0)"
        )
