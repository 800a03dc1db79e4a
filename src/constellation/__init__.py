"""
constellation: drifting nodes joined by fading edges.

An animated background in which:
- Nodes drift in straight lines and respawn when they leave the surface
- Nodes closer than a distance threshold are joined by an edge
- Edge opacity grows with proximity and with the age of both nodes

Rendering goes through a small immediate-mode canvas; the bundled
implementation draws with matplotlib.
"""

__version__ = "0.1.0"
