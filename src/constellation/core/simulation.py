"""
Simulation: the per-frame driver of the constellation.

Each tick:
1. Clear the surface to fully transparent
2. Update and draw every node
3. Rebuild the edge list from the current node positions
4. Draw every edge
5. Request the next tick from the frame scheduler

The simulation owns its node and edge lists. Edges are rebuilt from scratch
every tick, so no edge outlives the frame it was created in.
"""

from __future__ import annotations
import logging
import math
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Optional, Sequence

import numpy as np

from constellation.config import ConstellationConfig
from constellation.core.edge import Edge
from constellation.core.node import Node
from constellation.viz.scheduling import FrameScheduler, select_scheduler

if TYPE_CHECKING:
    from constellation.viz.canvas import Canvas

logger = logging.getLogger(__name__)

TRANSPARENT = (0.0, 0.0, 0.0, 0.0)


class SimulationState(Enum):
    UNINITIALIZED = "uninitialized"
    RUNNING = "running"
    REINITIALIZING = "reinitializing"


@dataclass
class Simulation:
    """
    Drifting nodes joined by fading edges, drawn on a canvas.

    Args:
        canvas: Drawing surface; its width/height are read on init
        schedulers: Frame schedulers in order of preference, None for
            unavailable ones; the first available one drives the loop
        config: Constants for population, distances, colors and dynamics
        rng: Random generator for node positions and velocities
    """

    canvas: Optional["Canvas"]
    schedulers: Sequence[Optional[FrameScheduler]]
    config: ConstellationConfig = field(default_factory=ConstellationConfig)
    rng: np.random.Generator = field(default_factory=np.random.default_rng)

    state: SimulationState = field(default=SimulationState.UNINITIALIZED, init=False)
    width: int = field(default=0, init=False)
    height: int = field(default=0, init=False)
    distance_threshold: float = field(default=0.0, init=False)
    nodes: list[Node] = field(default_factory=list, init=False)
    edges: list[Edge] = field(default_factory=list, init=False)
    frame: int = field(default=0, init=False)
    request_frame: Optional[FrameScheduler] = field(default=None, init=False, repr=False)

    _initialized: bool = field(default=False, init=False, repr=False)
    _started: bool = field(default=False, init=False, repr=False)

    @property
    def population(self) -> int:
        """Number of nodes the current surface size calls for."""
        return math.floor(self.width * self.height / self.config.inverse_node_density)

    def init(self) -> None:
        """
        Bind to the canvas and derive the surface-wide constants.

        Raises:
            ValueError: If there is no canvas or its size is negative
            RuntimeError: If no frame scheduler is available
        """
        if self.canvas is None:
            raise ValueError("Simulation needs a canvas to draw on")

        width, height = int(self.canvas.width), int(self.canvas.height)
        if width < 0 or height < 0:
            raise ValueError(f"Invalid surface size {width}x{height}")

        self.width = width
        self.height = height
        self.distance_threshold = min(width, height) * self.config.max_distance_ratio
        self.request_frame = select_scheduler(self.schedulers)
        self._initialized = True

        logger.info(
            "Surface %dx%d, distance threshold %.1f px",
            self.width,
            self.height,
            self.distance_threshold,
        )

    def create_nodes(self) -> None:
        """Create and spawn one node per `inverse_node_density` square pixels."""
        for _ in range(self.population):
            node = Node(self.config, self.width, self.height, rng=self.rng)
            node.spawn()
            self.nodes.append(node)
        logger.info("Created %d nodes", len(self.nodes))

    def start(self) -> None:
        """Initialize, populate, and request the first tick."""
        if self._started:
            raise RuntimeError("Simulation already started")
        self.init()
        self.create_nodes()
        self._started = True
        self.state = SimulationState.RUNNING
        self.request_frame(self.tick)

    def tick(self) -> None:
        """Advance and redraw one frame, then request the next one."""
        if not self._initialized:
            raise RuntimeError("Simulation.tick() called before init()")

        canvas = self.canvas
        canvas.clear_rect(0, 0, self.width, self.height)
        canvas.fill_style = TRANSPARENT
        canvas.fill_rect(0, 0, self.width, self.height)

        for node in self.nodes:
            node.update()
            node.draw(canvas)

        self.rebuild_edges()

        for edge in self.edges:
            edge.draw(canvas)

        self.frame += 1
        self.request_frame(self.tick)

    def rebuild_edges(self) -> None:
        """
        Replace the edge list with one edge per close pair of nodes.

        By default every ordered pair (a, b), a is not b, is considered, so a
        close pair gets two edges and its line is stroked twice. With
        `config.unordered_edges` each pair gets a single edge.
        """
        threshold = self.distance_threshold
        unordered = self.config.unordered_edges
        edges = []
        for i, start in enumerate(self.nodes):
            candidates = self.nodes[i + 1:] if unordered else self.nodes
            for end in candidates:
                if start is end:
                    continue
                if start.distance_to(end, in_pixels=True) < threshold:
                    edges.append(Edge(start, end, threshold, self.config))
        self.edges = edges

    def reinit(self, width: int | None = None, height: int | None = None) -> None:
        """
        Start over on a (possibly resized) surface.

        Clears nodes and edges, resizes the canvas when a size is given, and
        repeats init() and create_nodes(). An already scheduled tick keeps
        running on the new collections; no second loop is started.
        """
        self.state = SimulationState.REINITIALIZING
        self.edges = []
        self.nodes = []

        if self.canvas is None:
            raise ValueError("Simulation needs a canvas to draw on")

        if width is not None or height is not None:
            self.canvas.resize(
                self.canvas.width if width is None else width,
                self.canvas.height if height is None else height,
            )

        self.init()
        self.create_nodes()
        self.state = SimulationState.RUNNING if self._started else SimulationState.UNINITIALIZED

    def stats(self) -> dict:
        """Snapshot of the simulation for logging and diagnostics."""
        return {
            "frame": self.frame,
            "n_nodes": len(self.nodes),
            "n_edges": len(self.edges),
            "distance_threshold": self.distance_threshold,
            "mean_age": float(np.mean([n.age for n in self.nodes])) if self.nodes else 0.0,
        }
