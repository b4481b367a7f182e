import numpy as np
import pytest

from fluid2d import FluidSimulation, SolverConfig, SourceEmitter
from fluid2d.forces import GRAVITY
from fluid2d.simulation import draw_line


def test_draw_line_includes_both_ends_without_gaps():
    cells = draw_line(1, 1, 6, 3)
    assert cells[0] == (1, 1)
    assert cells[-1] == (6, 3)
    for (x0, y0), (x1, y1) in zip(cells, cells[1:]):
        assert max(abs(x1 - x0), abs(y1 - y0)) == 1


def test_draw_line_single_point():
    assert draw_line(4, 4, 4, 4) == [(4, 4)]


def test_default_config_has_gravity_and_emitter():
    sim = FluidSimulation(N=12)
    assert sim.grid.config.gravity == GRAVITY
    assert isinstance(sim.grid.injection_hook, SourceEmitter)


def test_obstacle_brush_paints_square_and_respects_walls():
    sim = FluidSimulation(N=12)
    sim.paint_obstacle(5, 5, radius=1)
    assert sim.grid.obstacles.sum() == 9

    sim.paint_obstacle(1, 1, radius=1)     # half the brush falls on the ring
    assert sim.grid.obstacles.sum() == 13
    assert not sim.grid.obstacles[0, :].any() and not sim.grid.obstacles[:, 0].any()


def test_obstacle_stroke_is_connected():
    sim = FluidSimulation(N=20)
    sim.paint_obstacle_stroke(3, 3, 15, 9, radius=0)
    for x, y in draw_line(3, 3, 15, 9):
        assert sim.grid.obstacles[y, x]


def test_scatter_obstacles_is_reproducible():
    a = FluidSimulation(N=32)
    b = FluidSimulation(N=32)
    a.scatter_obstacles(10, seed=5)
    b.scatter_obstacles(10, seed=5)

    assert a.grid.obstacles.any()
    assert np.array_equal(a.grid.obstacles, b.grid.obstacles)
    ring = np.ones((32, 32), dtype=bool)
    ring[1:-1, 1:-1] = False
    assert not a.grid.obstacles[ring].any()


def test_sources_pour_every_step():
    sim = FluidSimulation(N=16, source_rate=10.0, source_velocity=1.0)
    sim.paint_source(8, 2)

    metrics = sim.step()

    assert metrics["frame"] == 1
    assert metrics["density_total"] > 0.0
    assert set(metrics) == {"frame", "step_ms", "density_total", "divergence_max", "speed_max"}
    assert len(sim.perf_log) == 1


def test_pour_and_clear_fluid():
    sim = FluidSimulation(N=16, config=SolverConfig())
    sim.pour(8, 8, 30.0, dx=1.0, dy=0.5)
    assert sim.grid.density[8, 8] == 30.0
    assert sim.grid.vx[8, 8] == 1.0

    sim.clear_fluid()
    assert not sim.grid.density.any() and not sim.grid.vx.any()


def test_resize_rebuilds_grid(capsys):
    sim = FluidSimulation(N=16)
    sim.paint_source(5, 5)
    sim.step()

    sim.resize(24)

    assert sim.grid.size == 24
    assert sim.frame == 0
    assert not sim.grid.sources.any()
    assert sim.grid.injection_hook is sim.emitter
    assert "[Simulation]" in capsys.readouterr().out


def test_print_status(capsys):
    sim = FluidSimulation(N=12)
    sim.step()
    sim.print_status()
    out = capsys.readouterr().out
    assert "Frame: 1" in out
    assert "Divergence" in out


def test_invalid_config_raises():
    with pytest.raises(ValueError):
        SolverConfig(obstacle_policy="sticky")
    with pytest.raises(ValueError):
        SolverConfig(stencil_weight=5)
    with pytest.raises(ValueError):
        SolverConfig(iterations=0)
    with pytest.raises(ValueError):
        SolverConfig(flow_damping=-0.1)
