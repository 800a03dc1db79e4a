"""Command line entry point: show the animation or render frames to a file."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

import numpy as np
from matplotlib.figure import Figure

from constellation.config import ConstellationConfig
from constellation.core import Simulation
from constellation.viz.canvas import MatplotlibCanvas
from constellation.viz.scheduling import FrameQueue, timer_scheduler

logger = logging.getLogger(__name__)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    # matplotlib is chatty at DEBUG
    logging.getLogger("matplotlib").setLevel(logging.WARNING)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="constellation",
        description="Drifting nodes joined by fading edges.",
    )
    parser.add_argument("--width", type=int, default=800, help="Surface width in pixels")
    parser.add_argument("--height", type=int, default=600, help="Surface height in pixels")
    parser.add_argument("--fps", type=float, default=30.0, help="Target frame rate")
    parser.add_argument("--dpi", type=float, default=100.0, help="Figure resolution")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument(
        "--unordered-edges",
        action="store_true",
        help="One edge per close pair instead of one per ordered pair",
    )
    parser.add_argument(
        "--frames",
        type=int,
        default=None,
        help="Render this many frames headless instead of opening a window",
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=Path("constellation.png"),
        help="Image written after a headless run",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser


def render_frames(
    width: int,
    height: int,
    n_frames: int,
    output: Path,
    config: ConstellationConfig,
    rng: np.random.Generator,
    dpi: float = 100.0,
) -> dict:
    """Run `n_frames` ticks without a window and save the last frame."""
    canvas = MatplotlibCanvas(
        width, height, background_color=config.background_color, dpi=dpi
    )
    queue = FrameQueue()
    simulation = Simulation(canvas, [queue], config=config, rng=rng)
    simulation.start()
    queue.run(n_frames)

    output.parent.mkdir(parents=True, exist_ok=True)
    canvas.figure.savefig(
        output, dpi=canvas.figure.dpi, facecolor=canvas.figure.get_facecolor()
    )
    stats = simulation.stats()
    logger.info(
        "Rendered %d frames (%d nodes, %d edges) to %s",
        stats["frame"],
        stats["n_nodes"],
        stats["n_edges"],
        output,
    )
    return stats


def connect_events(figure: Figure, simulation: Simulation) -> None:
    """Restart the simulation when the figure is resized; log when it closes."""

    def on_resize(event):
        logger.debug("Resize to %dx%d", event.width, event.height)
        simulation.reinit(event.width, event.height)

    def on_close(event):
        logger.info("Closed after %d frames", simulation.frame)

    figure.canvas.mpl_connect("resize_event", on_resize)
    figure.canvas.mpl_connect("close_event", on_close)


def show(
    width: int,
    height: int,
    config: ConstellationConfig,
    rng: np.random.Generator,
    fps: float = 30.0,
    dpi: float = 100.0,
) -> None:
    """Open a window and animate until it is closed."""
    import matplotlib.pyplot as plt

    figure = plt.figure(figsize=(width / dpi, height / dpi), dpi=dpi)
    canvas = MatplotlibCanvas.from_figure(
        figure, background_color=config.background_color
    )
    simulation = Simulation(
        canvas, [timer_scheduler(figure, fps)], config=config, rng=rng
    )

    simulation.start()
    connect_events(figure, simulation)
    plt.show()


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    _configure_logging(args.verbose)

    try:
        config = ConstellationConfig(unordered_edges=args.unordered_edges)
        rng = np.random.default_rng(args.seed)
        if args.frames is not None:
            render_frames(
                args.width, args.height, args.frames, args.output, config, rng, dpi=args.dpi
            )
        else:
            show(args.width, args.height, config, rng, fps=args.fps, dpi=args.dpi)
    except (ValueError, RuntimeError) as exc:
        logger.error("Cannot start: %s", exc)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
