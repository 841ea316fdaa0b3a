# step_dispatch.py
#
# Scroll step index → what is visible, and whether the years are playing.
#
#   index | x-axis | y-axis | year label | circles | timer
#   ------+--------+--------+------------+---------+------------------
#     0   |  hide  |  hide  |    hide    |  hide   | cancel
#     1   |  show  |  hide  |    hide    |  hide   | cancel
#     2   |  show  |  show  |    hide    |  hide   | cancel
#     3   |  show  |  show  |    hide    |  0.8    | cancel
#     4   |  show  |  show  |    0.3     |  0.8    | cancel
#     5   |  show  |  show  |    0.3     |  0.8    | start (if not running)

import logging
import numbers

from bubble_scene import X_AXIS, Y_AXIS, YEAR_LABEL, CIRCLES
from scrolly_config import CIRCLE_OPACITY, YEAR_OPACITY
from visibility import VisibilityController
from year_animator import YearAnimator

logger = logging.getLogger(__name__)

# opacity per group; 0 = hide
STEP_TABLE = [
    {X_AXIS: 0.0, Y_AXIS: 0.0, YEAR_LABEL: 0.0,          CIRCLES: 0.0},
    {X_AXIS: 1.0, Y_AXIS: 0.0, YEAR_LABEL: 0.0,          CIRCLES: 0.0},
    {X_AXIS: 1.0, Y_AXIS: 1.0, YEAR_LABEL: 0.0,          CIRCLES: 0.0},
    {X_AXIS: 1.0, Y_AXIS: 1.0, YEAR_LABEL: 0.0,          CIRCLES: CIRCLE_OPACITY},
    {X_AXIS: 1.0, Y_AXIS: 1.0, YEAR_LABEL: YEAR_OPACITY, CIRCLES: CIRCLE_OPACITY},
    {X_AXIS: 1.0, Y_AXIS: 1.0, YEAR_LABEL: YEAR_OPACITY, CIRCLES: CIRCLE_OPACITY},
]
PLAY_STEP = len(STEP_TABLE) - 1


def step_table() -> list[dict]:
    """Plain-data copy of the table for the page script: opacities + timer action."""
    return [
        {'opacity': dict(row), 'timer': 'start' if i == PLAY_STEP else 'cancel'}
        for i, row in enumerate(STEP_TABLE)
    ]


class StepDispatcher:
    """
    Receives step-enter notifications from the scroll trigger. Keeps no memory
    of the previous step: each index fully determines the scene, so jumping
    5 → 1 ends up exactly like scrolling 0 → 1.
    """

    def __init__(self, visibility: VisibilityController, animator: YearAnimator):
        self.visibility = visibility
        self.animator = animator

    def on_step_enter(self, index) -> None:
        if isinstance(index, bool) or not isinstance(index, numbers.Integral) or not 0 <= index < len(STEP_TABLE):
            logger.warning("ignoring step index %r (expected 0..%d)", index, len(STEP_TABLE) - 1)
            return

        for selector, opacity in STEP_TABLE[index].items():
            if opacity > 0:
                self.visibility.show(selector, opacity)
            else:
                self.visibility.hide(selector)

        if index == PLAY_STEP:
            self.animator.start()
        else:
            # any other step, scrolling up included, stops the years
            self.animator.stop()
