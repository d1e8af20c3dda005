"""Step navigator — a bounded index over the Step Plan with an advance gate.

States are ``0..len(plan)-1``; the last index is the only one from which a
submission is allowed.  Moving forward requires :func:`can_advance` on the
current step; moving back never validates.  Whenever the plan is rebuilt the
session calls :meth:`StepNavigator.clamp` so the index never points past the
end of a shrunken plan.

Refused transitions are no-ops that return ``False``; nothing is raised.
"""

from __future__ import annotations

import logging
from typing import Callable

from rental_questionnaire.models.session import Progress, StepGroup
from rental_questionnaire.state import ResponseState

logger = logging.getLogger(__name__)


def missing_required(group: StepGroup, responses: ResponseState) -> list[int]:
    """Return ids of required questions in ``group`` without a trimmed answer."""
    return [q.id for q in group.required_questions if not responses.is_answered(q.id)]


def can_advance(
    group: StepGroup | None,
    is_selected: Callable[[str], bool],
    responses: ResponseState,
) -> bool:
    """True if the user may move past ``group``.

    Unselected optional categories are always skippable; otherwise every
    required question needs a non-blank answer.
    """
    if group is None:
        return False
    if not is_selected(group.category):
        return True
    return not missing_required(group, responses)


class StepNavigator:
    """Current-step index with Next / Previous / clamp transitions."""

    def __init__(self) -> None:
        self._current = 0

    @property
    def current(self) -> int:
        return self._current

    def clamp(self, plan_length: int) -> int:
        """Pull the index back inside ``[0, plan_length-1]`` (``0`` if empty)."""
        upper = max(plan_length - 1, 0)
        if self._current > upper:
            logger.debug("Clamping step %d to %d", self._current, upper)
            self._current = upper
        return self._current

    def is_final(self, plan_length: int) -> bool:
        return plan_length > 0 and self._current == plan_length - 1

    def can_go_previous(self) -> bool:
        return self._current > 0

    def next(self, plan_length: int, allowed: bool) -> bool:
        """Advance one step if ``allowed`` and not already on the last step."""
        if not allowed or self._current >= plan_length - 1:
            return False
        self._current += 1
        return True

    def previous(self) -> bool:
        if not self.can_go_previous():
            return False
        self._current -= 1
        return True

    def reset(self) -> None:
        self._current = 0

    def progress(self, plan_length: int) -> Progress:
        """Return "step X of N" with a rounded percentage."""
        if plan_length == 0:
            return Progress(step=0, total=0, percent=0)
        step = self._current + 1
        # Round half up, like the portal's progress bar
        percent = int(step * 100 / plan_length + 0.5)
        return Progress(step=step, total=plan_length, percent=percent)
