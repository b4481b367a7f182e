"""
simulation.py — Interactive Simulation Driver
==============================================
Wraps one FluidGrid with everything a front-end needs between frames:
brushes (water, stone, source), random obstacle layouts, the source
emitter, resolution changes, and per-frame metrics.

Usage:
    sim = FluidSimulation(N=128)
    sim.paint_source(64, 5)
    sim.scatter_obstacles(20, seed=1)
    for frame in range(100):
        metrics = sim.step()
        density = sim.grid.density     # Hand to visualizer
"""

import time

import numpy as np

from .config import SolverConfig
from .forces import GRAVITY, SOURCE_FLOW_RATE, SOURCE_VELOCITY, SourceEmitter
from .grid import FluidGrid


def draw_line(x0: int, y0: int, x1: int, y1: int) -> list[tuple[int, int]]:
    """
    Cells on the segment (x0, y0) → (x1, y1), both ends included (Bresenham).
    Fills the gaps between two pointer positions of a fast brush stroke.
    """
    cells = []
    dx = abs(x1 - x0)
    dy = abs(y1 - y0)
    sx = 1 if x0 < x1 else -1
    sy = 1 if y0 < y1 else -1
    err = dx - dy

    x, y = x0, y0
    while True:
        cells.append((x, y))
        if x == x1 and y == y1:
            break
        e2 = 2 * err
        if e2 > -dy:
            err -= dy
            x += sx
        if e2 < dx:
            err += dx
            y += sy
    return cells


class FluidSimulation:
    """
    The complete 2D water simulation with its editing tools.

    Metrics from every step() are appended to `perf_log`.
    """

    def __init__(self, N: int = 128, dt: float = 0.1,
                 diffusion: float = 0.0, viscosity: float = 1e-8,
                 config: SolverConfig = None,
                 source_rate: float = SOURCE_FLOW_RATE,
                 source_velocity: float = SOURCE_VELOCITY):
        """
        Args:
            N               : Grid resolution (128 → 128² cells)
            dt              : Timestep
            diffusion       : Water spreading rate (0 keeps edges crisp)
            viscosity       : Fluid thickness (keep tiny for water)
            config          : SolverConfig; defaults to one with gravity on
            source_rate     : Density poured per source cell per step
            source_velocity : Downward velocity added per source cell per step
        """
        self.dt = dt
        self.diffusion = diffusion
        self.viscosity = viscosity
        self.config = config if config is not None else SolverConfig(gravity=GRAVITY)
        self.emitter = SourceEmitter(source_rate, source_velocity)
        self.grid = self._build_grid(N)
        self.frame = 0
        self.perf_log = []   # stores metrics per frame

    def _build_grid(self, N: int) -> FluidGrid:
        grid = FluidGrid(N=N, diffusion=self.diffusion, viscosity=self.viscosity,
                         dt=self.dt, config=self.config)
        grid.injection_hook = self.emitter
        return grid

    def resize(self, N: int):
        """
        Change resolution. The grid is rebuilt, so all fluid, obstacles
        and sources are lost.
        """
        self.grid = self._build_grid(N)
        self.frame = 0
        print(f"[Simulation] Resolution changed to {N}x{N}")

    # ── Brushes ────────────────────────────────────────────────────────────

    def pour(self, x: int, y: int, amount: float, dx: float = 0.0, dy: float = 0.0):
        """Water brush: add `amount` of water at (x, y) moving with (dx, dy)."""
        self.grid.add_density(x, y, amount)
        self.grid.add_velocity(x, y, dx, dy)

    def paint_obstacle(self, x: int, y: int, radius: int = 1, active: bool = True):
        """Stone brush: a (2r+1)² square of solid cells centred on (x, y)."""
        for j in range(y - radius, y + radius + 1):
            for i in range(x - radius, x + radius + 1):
                self.grid.set_obstacle(i, j, active)

    def paint_obstacle_stroke(self, x0: int, y0: int, x1: int, y1: int, radius: int = 1):
        """Stone brush dragged from (x0, y0) to (x1, y1) without gaps."""
        for x, y in draw_line(x0, y0, x1, y1):
            self.paint_obstacle(x, y, radius)

    def paint_source(self, x: int, y: int, active: bool = True):
        self.grid.set_source(x, y, active)

    def scatter_obstacles(self, count: int, seed: int = None):
        """
        Replace all obstacles with `count` random 3×3 stones.
        Centres are kept at least two cells away from the walls.
        """
        rng = np.random.default_rng(seed)
        N = self.grid.N
        self.grid.clear_obstacles()
        if N < 5:
            return
        for _ in range(count):
            x = int(rng.integers(2, N - 2))
            y = int(rng.integers(2, N - 2))
            self.paint_obstacle(x, y, radius=1)

    def clear_fluid(self):
        self.grid.clear_density()
        self.grid.clear_velocity()

    def clear_obstacles(self):
        self.grid.clear_obstacles()

    def clear_sources(self):
        self.grid.clear_sources()

    # ── Stepping ───────────────────────────────────────────────────────────

    def step(self) -> dict:
        """
        Advance simulation by one timestep (dt).

        Returns a metrics dict for logging.
        """
        t0 = time.perf_counter()
        self.grid.step()
        step_ms = (time.perf_counter() - t0) * 1000

        self.frame += 1
        metrics = {
            "frame"          : self.frame,
            "step_ms"        : step_ms,
            "density_total"  : self.grid.total_density(),
            "divergence_max" : float(np.abs(self.grid.divergence()).max()),
            "speed_max"      : float(self.grid.speed().max()),
        }
        self.perf_log.append(metrics)
        return metrics

    def print_status(self):
        """Pretty-print current simulation state."""
        g = self.grid
        print(f"\n{'='*50}")
        print(f"  Frame: {self.frame}  |  N={g.N}  |  policy={g.config.obstacle_policy}")
        print(f"  Density   : max={g.density.max():.4f}, total={g.total_density():.2f}")
        print(f"  Velocity  : max_speed={g.speed().max():.4f}")
        print(f"  Divergence: max={np.abs(g.divergence()).max():.6f}")
        print(f"  Obstacles : {int(g.obstacles.sum())} cells  |  Sources: {int(g.sources.sum())} cells")
        if self.perf_log:
            last = self.perf_log[-1]
            print(f"  Perf      : {last['step_ms']:.1f}ms/step")
        print(f"{'='*50}")
