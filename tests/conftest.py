"""
Pytest configuration and shared fixtures.
"""

import matplotlib

matplotlib.use("Agg")

import numpy as np
import pytest


class RecordingCanvas:
    """Canvas stand-in that records every drawing call."""

    def __init__(self, width: int, height: int):
        self.width = width
        self.height = height
        self.fill_style = None
        self.stroke_style = None
        self.line_width = 1.0
        self.calls = []

    def names(self):
        return [call[0] for call in self.calls]

    def clear_rect(self, x, y, w, h):
        self.calls.append(("clear_rect", x, y, w, h))

    def fill_rect(self, x, y, w, h):
        self.calls.append(("fill_rect", x, y, w, h, self.fill_style))

    def begin_path(self):
        self.calls.append(("begin_path",))

    def close_path(self):
        self.calls.append(("close_path",))

    def arc(self, x, y, radius, start_angle, end_angle, anticlockwise=False):
        self.calls.append(("arc", x, y, radius, start_angle, end_angle))

    def move_to(self, x, y):
        self.calls.append(("move_to", x, y))

    def line_to(self, x, y):
        self.calls.append(("line_to", x, y))

    def stroke(self):
        self.calls.append(("stroke", self.stroke_style, self.line_width))

    def fill(self):
        self.calls.append(("fill", self.fill_style))

    def resize(self, width, height):
        self.width = width
        self.height = height


@pytest.fixture
def rng():
    """Reproducible random number generator."""
    return np.random.default_rng(seed=42)


@pytest.fixture
def config():
    """Default configuration."""
    from constellation.config import ConstellationConfig
    return ConstellationConfig()


@pytest.fixture
def unordered_config():
    """Configuration with one edge per unordered pair."""
    from constellation.config import ConstellationConfig
    return ConstellationConfig(unordered_edges=True)


@pytest.fixture
def recording_canvas():
    """A 400x300 recording canvas."""
    return RecordingCanvas(400, 300)


@pytest.fixture
def make_canvas():
    """Factory for recording canvases of any size."""
    return RecordingCanvas


@pytest.fixture
def make_node(config, rng):
    """Factory for nodes on a surface with explicit state."""
    from constellation.core.node import Node

    def _make(x=0.5, y=0.5, speedx=0.0, speedy=0.0, age=1.0, width=1000, height=1000):
        node = Node(config, width, height, rng=rng)
        node.x, node.y = x, y
        node.speedx, node.speedy = speedx, speedy
        node.age = age
        return node

    return _make
