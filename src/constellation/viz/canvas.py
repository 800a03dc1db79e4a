"""
Drawing surfaces.

The simulation talks to a small immediate-mode 2D context: set a style,
build a path, then fill or stroke it. `MatplotlibCanvas` implements that
context on top of a matplotlib Figure, mapping one surface pixel to one
axes unit with the origin in the top-left corner and y pointing down.
"""

from __future__ import annotations
import logging
import math
from typing import Protocol

import numpy as np
from matplotlib.artist import Artist
from matplotlib.figure import Figure
from matplotlib.lines import Line2D
from matplotlib.patches import Polygon, Rectangle

from constellation.viz.colors import clip_alpha, parse_color

logger = logging.getLogger(__name__)


class Canvas(Protocol):
    """The 2D context consumed by nodes, edges and the simulation."""

    width: int
    height: int
    fill_style: object
    stroke_style: object
    line_width: float

    def clear_rect(self, x: float, y: float, w: float, h: float) -> None: ...

    def fill_rect(self, x: float, y: float, w: float, h: float) -> None: ...

    def begin_path(self) -> None: ...

    def close_path(self) -> None: ...

    def arc(
        self,
        x: float,
        y: float,
        radius: float,
        start_angle: float,
        end_angle: float,
        anticlockwise: bool = False,
    ) -> None: ...

    def move_to(self, x: float, y: float) -> None: ...

    def line_to(self, x: float, y: float) -> None: ...

    def stroke(self) -> None: ...

    def fill(self) -> None: ...

    def resize(self, width: int, height: int) -> None: ...


class MatplotlibCanvas:
    """
    Immediate-mode canvas backed by matplotlib artists.

    Every fill or stroke adds one artist to a full-figure axes. Clearing a
    rectangle removes every artist whose extent overlaps it, so clearing the
    whole surface empties the frame. Resizing wipes the surface.

    Args:
        width, height: Surface size in pixels
        figure: Existing figure to draw on (a new one is created if None)
        background_color: Figure background behind the transparent frame
        dpi: Dots per inch for a newly created figure
        arc_segments: Polygon segments used for a full circle
    """

    def __init__(
        self,
        width: int,
        height: int,
        figure: Figure | None = None,
        background_color="black",
        dpi: float = 100.0,
        arc_segments: int = 32,
    ):
        if figure is None:
            figure = Figure(
                figsize=(max(width, 1) / dpi, max(height, 1) / dpi),
                dpi=dpi,
            )
        self.figure = figure
        self.figure.set_facecolor(background_color)
        self.arc_segments = arc_segments

        self.ax = figure.add_axes((0.0, 0.0, 1.0, 1.0))
        self.ax.set_axis_off()

        self.fill_style = (0.0, 0.0, 0.0, 1.0)
        self.stroke_style = (0.0, 0.0, 0.0, 1.0)
        self.line_width = 1.0

        self._subpaths: list[list[tuple[float, float]]] = []
        self._artists: list[Artist] = []

        self.width = 0
        self.height = 0
        self.resize(width, height)

    @classmethod
    def from_figure(cls, figure: Figure, **kwargs) -> MatplotlibCanvas:
        """Build a canvas sized to an existing figure's pixel extent."""
        width, height = figure.canvas.get_width_height()
        return cls(width, height, figure=figure, **kwargs)

    @property
    def n_artists(self) -> int:
        """Number of shapes currently on the surface."""
        return len(self._artists)

    @property
    def artists(self) -> list[Artist]:
        return list(self._artists)

    def resize(self, width: int, height: int) -> None:
        """Adopt a new pixel size and wipe the surface."""
        for artist in self._artists:
            artist.remove()
        self._artists = []
        self.width = int(width)
        self.height = int(height)
        # Axis limits must not be singular even for an empty surface
        self.ax.set_xlim(0, max(self.width, 1))
        self.ax.set_ylim(max(self.height, 1), 0)
        logger.debug("Canvas resized to %dx%d", self.width, self.height)

    def clear_rect(self, x: float, y: float, w: float, h: float) -> None:
        x0, x1 = sorted((x, x + w))
        y0, y1 = sorted((y, y + h))
        kept = []
        for artist in self._artists:
            points = _artist_points(artist)
            (ax0, ay0), (ax1, ay1) = points.min(axis=0), points.max(axis=0)
            overlaps = ax0 <= x1 and ax1 >= x0 and ay0 <= y1 and ay1 >= y0
            if overlaps:
                artist.remove()
            else:
                kept.append(artist)
        self._artists = kept

    def fill_rect(self, x: float, y: float, w: float, h: float) -> None:
        color = clip_alpha(parse_color(self.fill_style))
        if color[3] == 0.0:
            return
        patch = Rectangle((x, y), w, h, facecolor=color, edgecolor="none", linewidth=0)
        self._add(self.ax.add_patch(patch))

    def begin_path(self) -> None:
        self._subpaths = []

    def move_to(self, x: float, y: float) -> None:
        self._subpaths.append([(float(x), float(y))])

    def line_to(self, x: float, y: float) -> None:
        if not self._subpaths:
            self.move_to(x, y)
            return
        self._subpaths[-1].append((float(x), float(y)))

    def arc(
        self,
        x: float,
        y: float,
        radius: float,
        start_angle: float,
        end_angle: float,
        anticlockwise: bool = False,
    ) -> None:
        """Append a circular arc; angles in radians, clockwise on screen."""
        full = 2 * math.pi
        if anticlockwise:
            span = start_angle - end_angle
            sweep = -full if span >= full else -(span % full)
        else:
            span = end_angle - start_angle
            sweep = full if span >= full else span % full

        n = max(2, int(math.ceil(self.arc_segments * abs(sweep) / full)) + 1)
        angles = start_angle + np.linspace(0.0, sweep, n)
        points = [
            (x + radius * math.cos(a), y + radius * math.sin(a)) for a in angles
        ]
        if self._subpaths:
            self._subpaths[-1].extend(points)
        else:
            self._subpaths.append(points)

    def close_path(self) -> None:
        if self._subpaths and len(self._subpaths[-1]) > 1:
            first = self._subpaths[-1][0]
            self._subpaths[-1].append(first)
            self._subpaths.append([first])

    def fill(self) -> None:
        color = clip_alpha(parse_color(self.fill_style))
        for points in self._subpaths:
            if len(points) < 3:
                continue
            patch = Polygon(
                points, closed=True, facecolor=color, edgecolor="none", linewidth=0
            )
            self._add(self.ax.add_patch(patch))

    def stroke(self) -> None:
        color = clip_alpha(parse_color(self.stroke_style))
        # Line widths are in points, the canvas works in pixels
        width_pt = self.line_width * 72.0 / self.figure.dpi
        for points in self._subpaths:
            if len(points) < 2:
                continue
            xs, ys = zip(*points)
            line = Line2D(xs, ys, color=color, linewidth=width_pt, solid_capstyle="butt")
            self._add(self.ax.add_line(line))

    def _add(self, artist: Artist) -> None:
        self._artists.append(artist)


def _artist_points(artist: Artist) -> np.ndarray:
    """Vertices of an artist in data (pixel) coordinates."""
    if isinstance(artist, Line2D):
        return np.asarray(artist.get_xydata(), dtype=float)
    if isinstance(artist, Rectangle):
        x, y = artist.get_xy()
        w, h = artist.get_width(), artist.get_height()
        return np.array([[x, y], [x + w, y + h]], dtype=float)
    return np.asarray(artist.get_xy(), dtype=float)
