"""
Color helpers.

Colors can be given as any matplotlib color spec ("#56e27d", "green",
(r, g, b) floats) or as CSS-style "rgb(86, 226, 125)" strings.
"""

from __future__ import annotations
import re

import matplotlib.colors as mcolors

RGBA = tuple[float, float, float, float]

_CSS_RGB = re.compile(
    r"^\s*rgba?\(\s*(\d+)\s*,\s*(\d+)\s*,\s*(\d+)\s*(?:,\s*([-+0-9.eE]+)\s*)?\)\s*$"
)


def parse_color(color) -> RGBA:
    """Convert a color to an RGBA float tuple."""
    if isinstance(color, str):
        match = _CSS_RGB.match(color)
        if match:
            r, g, b, a = match.groups()
            return (
                int(r) / 255.0,
                int(g) / 255.0,
                int(b) / 255.0,
                float(a) if a is not None else 1.0,
            )
    elif len(color) == 4:
        # matplotlib rejects alpha outside [0, 1]; keep it unchecked here
        r, g, b, _ = mcolors.to_rgba(tuple(color[:3]))
        return r, g, b, float(color[3])
    return tuple(mcolors.to_rgba(color))


def with_alpha(color, alpha: float) -> RGBA:
    """
    Replace the alpha channel of `color`.

    `alpha` is kept as given, even outside [0, 1]; clipping is left to the
    canvas that renders it.
    """
    r, g, b, _ = parse_color(color)
    return r, g, b, float(alpha)


def clip_alpha(rgba: RGBA) -> RGBA:
    r, g, b, a = rgba
    return r, g, b, min(1.0, max(0.0, a))
