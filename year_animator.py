# year_animator.py
#
# Plays the years: a fixed-period tick bumps the current year, updates the
# label and re-binds the circles to that year's rows.

import itertools
import logging
from dataclasses import dataclass

import pandas as pd

from bubble_scene import Scene, SceneRenderer, YEAR_LABEL
from scrolly_config import TICK_MS
from year_frames import filter_by_year

logger = logging.getLogger(__name__)

# ────────────────────────────────────────────────────────────────────────────
# 1. INTERVAL SCHEDULER
# ────────────────────────────────────────────────────────────────────────────


class ManualScheduler:
    """
    setInterval / clearInterval on a clock that only moves when advance() is
    called. Single threaded: callbacks run one at a time inside advance(), in
    due-time order (ties in registration order).
    """

    def __init__(self):
        self.now_ms = 0
        self._ids = itertools.count(1)
        self._intervals: dict[int, list] = {}   # handle → [next_due_ms, period_ms, callback]

    def set_interval(self, callback, period_ms: int) -> int:
        if period_ms <= 0:
            raise ValueError(f"period_ms must be positive, got {period_ms}")
        handle = next(self._ids)
        self._intervals[handle] = [self.now_ms + period_ms, period_ms, callback]
        return handle

    def clear_interval(self, handle: int) -> None:
        self._intervals.pop(handle, None)

    @property
    def active(self) -> int:
        return len(self._intervals)

    def advance(self, ms: int) -> None:
        target = self.now_ms + ms
        while True:
            due = [(entry[0], h) for h, entry in self._intervals.items() if entry[0] <= target]
            if not due:
                break
            when, handle = min(due)
            entry = self._intervals[handle]
            self.now_ms = when
            entry[0] += entry[1]
            entry[2]()
        self.now_ms = target


# ────────────────────────────────────────────────────────────────────────────
# 2. ANIMATOR
# ────────────────────────────────────────────────────────────────────────────


@dataclass
class AnimationState:
    current_year: int
    timer: int | None = None    # scheduler handle while the animation is running


class YearAnimator:
    def __init__(
        self,
        state: AnimationState,
        df: pd.DataFrame,
        renderer: SceneRenderer,
        scene: Scene,
        scheduler: ManualScheduler,
        max_year: int,
        period_ms: int = TICK_MS,
    ):
        self.state = state
        self.df = df
        self.renderer = renderer
        self.scene = scene
        self.scheduler = scheduler
        self.max_year = int(max_year)
        self.period_ms = period_ms

    @property
    def running(self) -> bool:
        return self.state.timer is not None

    def start(self) -> None:
        """Start ticking. Never more than one timer: a running animation is left alone."""
        if self.running:
            return
        self.state.timer = self.scheduler.set_interval(self.tick, self.period_ms)
        logger.debug("animation started at %s", self.state.current_year)

    def stop(self) -> None:
        if not self.running:
            return
        self.scheduler.clear_interval(self.state.timer)
        self.state.timer = None
        logger.debug("animation stopped at %s", self.state.current_year)

    def tick(self) -> None:
        # at the last year the timer keeps firing, it just has nothing to do
        if self.state.current_year >= self.max_year:
            return
        self.state.current_year += 1
        year = self.state.current_year

        label = self.scene.select(YEAR_LABEL)
        if label is not None:
            label.attrs['text'] = str(year)

        frame = filter_by_year(self.df, year)
        self.renderer.render_frame(self.scene, frame, duration_ms=self.period_ms)
