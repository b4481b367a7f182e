import matplotlib
matplotlib.use("Agg")

import numpy as np

from fluid2d import FluidGrid
from visualizer import OBSTACLE_RGB, SOURCE_RGB, WATER_RGB, render_rgb


def test_empty_grid_is_black():
    rgb = render_rgb(FluidGrid(N=8))
    assert rgb.shape == (8, 8, 3)
    assert not rgb.any()


def test_still_water_is_blue_and_saturates():
    grid = FluidGrid(N=8)
    grid.add_density(3, 3, 1000.0)
    rgb = render_rgb(grid, density_scale=10.0)
    assert np.allclose(rgb[3, 3], WATER_RGB)


def test_obstacles_and_sources_have_fixed_colours():
    grid = FluidGrid(N=8)
    grid.set_obstacle(2, 2)
    grid.set_source(5, 5)
    rgb = render_rgb(grid)
    assert np.allclose(rgb[2, 2], OBSTACLE_RGB)
    assert np.allclose(rgb[5, 5], SOURCE_RGB)


def test_fast_water_is_brighter():
    grid = FluidGrid(N=8)
    grid.add_density(2, 2, 10.0)
    grid.add_density(5, 5, 10.0)
    grid.add_velocity(5, 5, 4.0, 0.0)
    rgb = render_rgb(grid, density_scale=10.0)
    assert rgb[5, 5].sum() > rgb[2, 2].sum()
    assert np.all((rgb >= 0.0) & (rgb <= 1.0))
