"""
Drawing surfaces and frame scheduling.

- Canvas protocol and its matplotlib implementation
- Color parsing with unclipped alpha
- Frame schedulers (interactive timers, headless queue)
"""

from constellation.viz.canvas import Canvas, MatplotlibCanvas
from constellation.viz.colors import parse_color, with_alpha, clip_alpha
from constellation.viz.scheduling import (
    FrameQueue,
    TimerScheduler,
    select_scheduler,
    timer_scheduler,
)

__all__ = [
    "Canvas",
    "MatplotlibCanvas",
    "parse_color",
    "with_alpha",
    "clip_alpha",
    "FrameQueue",
    "TimerScheduler",
    "select_scheduler",
    "timer_scheduler",
]
