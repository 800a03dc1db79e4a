#!/usr/bin/env python3
"""
Demo: Constellation Fade-In

Runs the simulation headless and snapshots a few frames, showing how
edges fade in as freshly spawned nodes age:

1. Frame 1: every node is new (age ~0), edges are nearly invisible
2. Frames 25-50: ages grow, close pairs become visible first
3. Frame 150: ages saturate, opacity depends only on distance

Output: output/demo_fade_in/frame_XXXX.png
"""

import os

import numpy as np

from constellation.config import ConstellationConfig
from constellation.core import Simulation
from constellation.viz import FrameQueue, MatplotlibCanvas


def main():
    print("=" * 60)
    print("  CONSTELLATION FADE-IN")
    print("=" * 60)

    width, height = 640, 400
    snapshots = [1, 25, 50, 150]
    output_dir = "output/demo_fade_in"
    os.makedirs(output_dir, exist_ok=True)

    config = ConstellationConfig()
    canvas = MatplotlibCanvas(width, height, background_color=config.background_color)
    queue = FrameQueue()
    simulation = Simulation(canvas, [queue], config=config, rng=np.random.default_rng(2024))

    print(f"\n1. Setup:")
    print(f"   Surface: {width}x{height}")
    simulation.start()
    print(f"   Nodes: {len(simulation.nodes)}")
    print(f"   Distance threshold: {simulation.distance_threshold:.0f} px")

    print("\n2. Running...")
    for target in snapshots:
        queue.run(target - simulation.frame)
        stats = simulation.stats()
        alphas = [edge.alpha for edge in simulation.edges]
        mean_alpha = float(np.mean(alphas)) if alphas else 0.0

        path = f"{output_dir}/frame_{target:04d}.png"
        canvas.figure.savefig(path, dpi=canvas.figure.dpi, facecolor=canvas.figure.get_facecolor())
        print(
            f"   Frame {stats['frame']:>4}: edges={stats['n_edges']:>4}, "
            f"mean age={stats['mean_age']:.2f}, mean alpha={mean_alpha:.3f} -> {path}"
        )

    print("\n" + "=" * 60)
    print("  Fade-in demonstration complete!")
    print("=" * 60)


if __name__ == "__main__":
    main()
