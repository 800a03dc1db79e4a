"""
Core simulation primitives.

- Node: normalized position, velocity and fade-in age
- Edge: a one-frame line between two nearby nodes
- Simulation: owns the nodes, rebuilds edges each tick, issues draw calls
"""

from constellation.core.node import Node
from constellation.core.edge import Edge
from constellation.core.simulation import Simulation, SimulationState

__all__ = [
    "Node",
    "Edge",
    "Simulation",
    "SimulationState",
]
