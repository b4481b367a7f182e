"""
visualizer.py — Live Water Viewer
==================================
Renders the 2D grid as an RGB image:
  - Water density → blue intensity
  - Speed |v|     → brightness of the water (fast water looks whiter)
  - Obstacles     → grey
  - Sources       → green

Uses matplotlib FuncAnimation for real-time updates. The colour mapping
(render_rgb) is separate so it can be reused or tested without a window.
"""

import numpy as np
import matplotlib.pyplot as plt
import matplotlib.animation as animation

WATER_RGB    = np.array([0.10, 0.45, 1.00], dtype=np.float32)
FOAM_RGB     = np.array([0.85, 0.95, 1.00], dtype=np.float32)
OBSTACLE_RGB = np.array([0.45, 0.45, 0.45], dtype=np.float32)
SOURCE_RGB   = np.array([0.15, 0.85, 0.35], dtype=np.float32)


def render_rgb(grid, density_scale: float = 10.0, speed_gain: float = 0.5) -> np.ndarray:
    """
    Map a FluidGrid to an (N, N, 3) float image in [0, 1].

    Args:
        grid          : FluidGrid (only its read accessors are used)
        density_scale : Density that maps to full water colour
        speed_gain    : Speed multiplier before clamping to the foam blend
    """
    intensity = np.clip(grid.density / density_scale, 0.0, 1.0)[..., None]
    foam = np.clip(grid.speed() * speed_gain, 0.0, 1.0)[..., None]

    water = WATER_RGB * (1.0 - foam) + FOAM_RGB * foam
    rgb = intensity * water

    rgb[grid.obstacles] = OBSTACLE_RGB
    rgb[grid.sources] = SOURCE_RGB
    return rgb


class FluidVisualizer:
    """
    Real-time viewer of the water simulation.

    Usage (standalone):
        from fluid2d import FluidSimulation
        from visualizer import FluidVisualizer

        sim = FluidSimulation(N=128)
        sim.paint_source(64, 4)
        viz = FluidVisualizer(sim)
        viz.run()  # Opens live window
    """

    def __init__(self, simulation, density_scale: float = 10.0):
        """
        Args:
            simulation    : FluidSimulation instance
            density_scale : Density shown as fully saturated water
        """
        self.sim = simulation
        self.density_scale = density_scale

        self._setup_figure()

    def _setup_figure(self):
        """Initialize the matplotlib figure."""
        self.fig, self.ax = plt.subplots(1, 1, figsize=(7, 7))
        self.fig.patch.set_facecolor('#0a0a0a')

        self.ax.set_facecolor('#0a0a0a')
        self.ax.set_xticks([])
        self.ax.set_yticks([])
        for spine in self.ax.spines.values():
            spine.set_edgecolor('#333333')

        # origin='upper': row 0 at the top, matching +y = down
        self.img = self.ax.imshow(
            render_rgb(self.sim.grid, self.density_scale),
            interpolation='bilinear',
            origin='upper',
            aspect='equal'
        )

        self.title_text = self.ax.set_title(
            "Water — Frame 0",
            color='#cccccc', fontsize=10, fontfamily='monospace'
        )

        plt.tight_layout()

    def update(self, frame_num):
        """Called by FuncAnimation each frame. Steps sim and updates the image."""
        metrics = self.sim.step()

        self.img.set_data(render_rgb(self.sim.grid, self.density_scale))

        self.title_text.set_text(
            f"Water — Frame {metrics['frame']} | "
            f"{metrics['step_ms']:.1f} ms/step | "
            f"div_max={metrics['divergence_max']:.5f}"
        )

        return [self.img, self.title_text]

    def run(self, fps: int = 30, frames: int = 1000):
        """
        Start the live animation window.

        Args:
            fps    : Target animation frame rate
            frames : Total frames to render
        """
        interval_ms = 1000 // fps
        self.anim = animation.FuncAnimation(
            self.fig,
            self.update,
            frames=frames,
            interval=interval_ms,
            blit=False
        )
        plt.show()
