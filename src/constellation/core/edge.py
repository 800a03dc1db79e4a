"""
Edge: a transient line between two nearby nodes.

Edges do not own or modify their nodes and live for a single tick; the
simulation rebuilds the whole edge list every frame.
"""

from __future__ import annotations
from typing import TYPE_CHECKING

from constellation.viz.colors import with_alpha

if TYPE_CHECKING:
    from constellation.config import ConstellationConfig
    from constellation.core.node import Node
    from constellation.viz.canvas import Canvas


class Edge:
    """
    A line from `start_node` to `end_node`.

    The caller guarantees the two nodes are distinct and closer than
    `distance_threshold` pixels when the edge is built.
    """

    def __init__(
        self,
        start_node: "Node",
        end_node: "Node",
        distance_threshold: float,
        config: "ConstellationConfig",
    ):
        self.start_node = start_node
        self.end_node = end_node
        self.distance_threshold = distance_threshold
        self.color = config.edge_color
        self.width = config.edge_width
        self.alpha: float = 0.0

    def __repr__(self) -> str:
        return f"Edge({self.start_node!r} -> {self.end_node!r}, alpha={self.alpha:.3f})"

    def calculate_alpha(self) -> float:
        """
        Opacity from proximity and combined age.

            alpha = (threshold - d) / threshold * start.age * end.age

        Not clamped: negative when d exceeds the threshold.
        """
        threshold = self.distance_threshold
        if threshold <= 0:
            self.alpha = 0.0
            return self.alpha

        distance = self.start_node.distance_to(self.end_node, in_pixels=True)
        age_factor = self.start_node.age * self.end_node.age
        self.alpha = ((threshold - distance) / threshold) * age_factor
        return self.alpha

    def draw(self, canvas: "Canvas") -> None:
        """Stroke the line between the nodes' current pixel positions."""
        x_start, y_start = self.start_node.pixel_position
        x_end, y_end = self.end_node.pixel_position

        alpha = self.calculate_alpha()

        canvas.begin_path()
        canvas.move_to(x_start, y_start)
        canvas.line_to(x_end, y_end)
        canvas.stroke_style = with_alpha(self.color, alpha)
        canvas.line_width = self.width
        canvas.stroke()
