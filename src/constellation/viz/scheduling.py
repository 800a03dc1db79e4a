"""
Frame scheduling.

A frame scheduler is any callable taking a no-argument callback and running
it once, before the next repaint. The simulation asks for one frame at
startup and one more at the end of every tick.

- TimerScheduler: single-shot timers of an interactive matplotlib canvas
- FrameQueue: headless scheduler driven explicitly with step()/run()
"""

from __future__ import annotations
import logging
from collections import deque
from typing import Callable, Iterable, Optional

from matplotlib.backend_bases import TimerBase
from matplotlib.figure import Figure

logger = logging.getLogger(__name__)

FrameCallback = Callable[[], None]
FrameScheduler = Callable[[FrameCallback], None]


def select_scheduler(candidates: Iterable[Optional[FrameScheduler]]) -> FrameScheduler:
    """
    Pick the first available scheduler from an ordered list of candidates.

    Unavailable candidates are given as None.

    Raises:
        RuntimeError: If no candidate is available
    """
    for candidate in candidates:
        if candidate is not None:
            logger.debug("Selected frame scheduler %r", candidate)
            return candidate
    raise RuntimeError("No frame scheduler available")


class FrameQueue:
    """
    Headless frame scheduler.

    Requested callbacks wait in a queue until `step()` runs them. Callbacks
    requested while a step runs are deferred to the next step, so one step
    is exactly one frame.
    """

    def __init__(self):
        self._pending: deque[FrameCallback] = deque()
        self.frames_run = 0
        self.stopped = False

    def __call__(self, callback: FrameCallback) -> None:
        if not self.stopped:
            self._pending.append(callback)

    def __repr__(self) -> str:
        return f"FrameQueue(pending={len(self._pending)}, frames_run={self.frames_run})"

    @property
    def pending(self) -> int:
        return len(self._pending)

    def step(self) -> int:
        """Run the callbacks pending now. Returns how many ran."""
        batch = list(self._pending)
        self._pending.clear()
        for callback in batch:
            callback()
        if batch:
            self.frames_run += 1
        return len(batch)

    def run(self, n_frames: int) -> int:
        """Run up to `n_frames` frames; stops early when nothing is pending."""
        ran = 0
        for _ in range(n_frames):
            if not self.step():
                break
            ran += 1
        return ran

    def stop(self) -> None:
        """Drop pending callbacks and ignore further requests."""
        self.stopped = True
        self._pending.clear()


class TimerScheduler:
    """
    Frame scheduler using single-shot timers of a matplotlib figure canvas.

    After the callback runs, a redraw of the figure is requested so the new
    frame becomes visible.
    """

    def __init__(self, figure: Figure, interval_ms: int = 33):
        if interval_ms <= 0:
            raise ValueError(f"interval_ms must be positive, got {interval_ms}")
        self.figure = figure
        self.interval_ms = interval_ms
        self._timer: TimerBase | None = None

    def __repr__(self) -> str:
        return f"TimerScheduler(interval_ms={self.interval_ms})"

    def __call__(self, callback: FrameCallback) -> None:
        timer = self.figure.canvas.new_timer(interval=self.interval_ms)
        timer.single_shot = True
        timer.add_callback(self._run, callback)
        timer.start()
        # Keep a reference so the pending timer is not collected
        self._timer = timer

    def _run(self, callback: FrameCallback) -> None:
        callback()
        self.figure.canvas.draw_idle()


def timer_scheduler(figure: Figure, fps: float = 30.0) -> TimerScheduler | None:
    """
    TimerScheduler for `figure`, or None if its canvas has no working timers.

    Non-interactive canvases (Agg and friends) hand out the base TimerBase,
    which never fires.

    Raises:
        ValueError: If `fps` is not positive
    """
    if fps <= 0:
        raise ValueError(f"fps must be positive, got {fps}")
    probe = figure.canvas.new_timer()
    if type(probe) is TimerBase:
        return None
    return TimerScheduler(figure, interval_ms=max(1, int(round(1000.0 / fps))))
