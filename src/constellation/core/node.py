"""
Node: a drifting point of the constellation.

Position is stored as a fraction of the surface width/height, so the same
node looks the same on any resolution. Velocity is expressed in the same
normalized units but drawn from a pixel range, so visual speed does not
depend on the surface size either.

A node never leaves the unit square: when an update would take it outside
[0, 1) on either axis it respawns somewhere else and starts aging again.
"""

from __future__ import annotations
import math
from typing import TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    from constellation.config import ConstellationConfig
    from constellation.viz.canvas import Canvas


class Node:
    """
    A point with normalized position, velocity and age.

    Age ramps from 0 to 1 after each (re)spawn and is used only to fade in
    the edges touching this node.
    """

    def __init__(
        self,
        config: "ConstellationConfig",
        width: int,
        height: int,
        rng: np.random.Generator | None = None,
    ):
        self.config = config
        self.width = width
        self.height = height
        self.rng = rng if rng is not None else np.random.default_rng()

        self.x: float = 0.0
        self.y: float = 0.0
        self.speedx: float = 0.0
        self.speedy: float = 0.0
        self.age: float = 0.0

        self.color = config.node_color
        self.radius = config.node_radius

    def __repr__(self) -> str:
        return (
            f"Node(x={self.x:.4f}, y={self.y:.4f}, "
            f"speed=({self.speedx:.2e}, {self.speedy:.2e}), age={self.age:.2f})"
        )

    @property
    def pixel_position(self) -> tuple[int, int]:
        """Position on the surface, rounded to whole pixels."""
        return round(self.width * self.x), round(self.height * self.y)

    @property
    def in_bounds(self) -> bool:
        return 0.0 <= self.x < 1.0 and 0.0 <= self.y < 1.0

    def _random_speed(self, dimension: int) -> float:
        # Pixel speed scaled to the normalized coordinate of this axis
        if dimension <= 0:
            return 0.0
        max_speed = self.config.max_speed
        return float(self.rng.uniform(-max_speed, max_speed)) / dimension

    def spawn(self) -> None:
        """Move to a fresh random position and velocity, and reset age."""
        self.x = float(self.rng.random())
        self.y = float(self.rng.random())
        self.speedx = self._random_speed(self.width)
        self.speedy = self._random_speed(self.height)
        self.age = 0.0

    def distance_to(self, other: Node, in_pixels: bool = False) -> float:
        """
        Euclidean distance to another node.

        Args:
            other: The node to measure to
            in_pixels: Scale both positions by the surface size first;
                otherwise the distance is in normalized units

        Returns:
            Non-negative distance, symmetric in the two nodes
        """
        dx = self.x - other.x
        dy = self.y - other.y
        if in_pixels:
            dx *= self.width
            dy *= self.height
        return math.hypot(dx, dy)

    def update(self) -> None:
        """Age, advance one tick, and respawn if the node drifted off."""
        if self.age < 1.0:
            self.age = min(1.0, self.age + self.config.age_step)

        self.x += self.speedx
        self.y += self.speedy

        # Both axes are reset together even if only one left the square
        if not self.in_bounds:
            self.spawn()

    def draw(self, canvas: "Canvas") -> None:
        """Fill a circle of `radius` at the node's pixel position."""
        px, py = self.pixel_position
        canvas.begin_path()
        canvas.arc(px, py, self.radius, 0.0, 2 * math.pi)
        canvas.close_path()
        canvas.fill_style = self.color
        canvas.fill()
