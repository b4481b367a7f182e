"""
main.py — Entry Point
======================
Runs the 2D water simulation, with or without a window.

Usage:
    python main.py                          # Headless run, prints stats
    python main.py --mode live              # Live visualization
    python main.py --obstacles 20 --seed 3  # Random stones
    python main.py --policy reflective --stencil 4 --iterations 40
"""

import argparse

import numpy as np

from fluid2d import FluidSimulation, SolverConfig
from fluid2d.config import OBSTACLE_POLICIES, DEFAULT_ITERATIONS, DEFAULT_STENCIL_WEIGHT
from fluid2d.forces import GRAVITY


def build_simulation(args) -> FluidSimulation:
    """Simulation with a source near the top centre and optional random stones."""
    config = SolverConfig(
        iterations=args.iterations,
        obstacle_policy=args.policy,
        stencil_weight=args.stencil,
        gravity=args.gravity,
    )
    sim = FluidSimulation(N=args.N, dt=args.dt, config=config)

    N = args.N
    if args.obstacles:
        sim.scatter_obstacles(args.obstacles, seed=args.seed)
    for x in range(N // 2 - 1, N // 2 + 2):
        sim.paint_source(x, 2)
    return sim


def run_live(args):
    """Live interactive visualization."""
    from visualizer import FluidVisualizer

    print(f"Starting live simulation (N={args.N})...")
    print("Close the window to exit.\n")

    sim = build_simulation(args)
    viz = FluidVisualizer(sim)
    viz.run(frames=args.frames)


def run_headless(args):
    """Run simulation without display — prints stats every 10 frames."""
    print(f"\nHeadless simulation | N={args.N} | {args.frames} frames")
    print(f"{'─'*60}")

    sim = build_simulation(args)
    step_times = []

    for f in range(args.frames):
        metrics = sim.step()
        step_times.append(metrics["step_ms"])

        if f % 10 == 0:
            print(f"  Frame {f:03d} | {metrics['step_ms']:6.1f}ms | "
                  f"div_max={metrics['divergence_max']:.5f} | "
                  f"speed_max={metrics['speed_max']:.3f} | "
                  f"density={metrics['density_total']:.1f}")

    print(f"\n{'─'*60}")
    print(f"  Average: {np.mean(step_times):.1f}ms/step")
    print(f"  Min:     {np.min(step_times):.1f}ms")
    print(f"  Max:     {np.max(step_times):.1f}ms")
    sim.print_status()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="2D Water Simulation")
    parser.add_argument(
        "--mode", choices=["live", "headless"],
        default="headless",
        help="Run mode (default: headless)"
    )
    parser.add_argument("--N",          type=int,   default=128, help="Grid resolution (default: 128)")
    parser.add_argument("--dt",         type=float, default=0.1, help="Timestep (default: 0.1)")
    parser.add_argument("--frames",     type=int,   default=100, help="Number of frames")
    parser.add_argument("--iterations", type=int,   default=DEFAULT_ITERATIONS,
                        help="Relaxation sweeps per solve")
    parser.add_argument("--policy",     choices=OBSTACLE_POLICIES, default=OBSTACLE_POLICIES[0],
                        help="Obstacle policy")
    parser.add_argument("--stencil",    type=int,   choices=[4, 6], default=DEFAULT_STENCIL_WEIGHT,
                        help="Diffusion stencil weight")
    parser.add_argument("--gravity",    type=float, default=GRAVITY, help="Gravity on wet cells")
    parser.add_argument("--obstacles",  type=int,   default=0, help="Number of random 3x3 stones")
    parser.add_argument("--seed",       type=int,   default=None, help="Seed for stone placement")

    args = parser.parse_args()

    if args.mode == "live":
        run_live(args)
    elif args.mode == "headless":
        run_headless(args)
