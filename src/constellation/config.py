"""
Constellation configuration.

All tunable constants for the animation live here. The defaults reproduce
the classic look: small green dots joined by fading green lines.
"""

from dataclasses import dataclass


@dataclass
class ConstellationConfig:
    """Configuration for a constellation simulation."""

    # Population: one node per `inverse_node_density` square pixels
    inverse_node_density: float = 10000.0

    # Edges form below max_distance_ratio * min(width, height) pixels
    max_distance_ratio: float = 0.8

    # Display attributes (any matplotlib color spec)
    node_color: str = "#56e27d"  # rgb(86, 226, 125)
    edge_color: str = "#56e27d"
    background_color: str = "black"
    node_radius: float = 2.0  # Pixels
    edge_width: float = 1.0  # Pixels

    # Dynamics
    age_step: float = 0.01  # Age gained per tick until fully aged
    max_speed: float = 0.2  # Pixels per tick, before scaling by dimension

    # False: one edge per ordered pair (two strokes per close pair)
    # True: one edge per unordered pair
    unordered_edges: bool = False

    def __post_init__(self):
        if self.inverse_node_density <= 0:
            raise ValueError("inverse_node_density must be positive")
        if self.max_distance_ratio < 0:
            raise ValueError("max_distance_ratio must be non-negative")
        if self.node_radius <= 0:
            raise ValueError("node_radius must be positive")
        if self.edge_width <= 0:
            raise ValueError("edge_width must be positive")
        if not 0 < self.age_step <= 1:
            raise ValueError("age_step must be in (0, 1]")
        if self.max_speed < 0:
            raise ValueError("max_speed must be non-negative")
