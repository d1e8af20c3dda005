"""QuestionnaireSession — synchronous state machine for one questionnaire.

Owns the catalog, the selection and response stores, the current Step Plan
and the navigator.  Every mutation that can change visibility rebuilds the
plan through :func:`build_plan` and clamps the navigator in the same call,
so callers always read a consistent state.

Usage::

    session = QuestionnaireSession(questions)
    session.set_response(1, "Warszawa, plac budowy")
    session.toggle_category("Generator", True)
    if session.next():
        ...
    session.current_group.category
"""

from __future__ import annotations

import logging
from typing import Iterable

from rental_questionnaire.categories import DEFAULT_RULES, CategoryRules
from rental_questionnaire.errors import RequiredAnswersMissing
from rental_questionnaire.models.question import Question
from rental_questionnaire.models.session import (
    Progress,
    SessionView,
    StepGroup,
    StepPlan,
)
from rental_questionnaire.navigator import StepNavigator, can_advance, missing_required
from rental_questionnaire.planner import build_plan
from rental_questionnaire.state import ResponseState, SelectionState

logger = logging.getLogger(__name__)


class QuestionnaireSession:
    """Selection, responses and navigation over a derived Step Plan.

    Args:
        questions: the question catalog (may be empty until loaded)
        rules: category naming rules
        default_selected: reading of optional categories with no explicit
            choice (``False`` opt-in for clients, ``True`` opt-out for staff)
    """

    def __init__(
        self,
        questions: Iterable[Question] = (),
        *,
        rules: CategoryRules = DEFAULT_RULES,
        default_selected: bool = False,
    ) -> None:
        self._rules = rules
        self._questions: list[Question] = list(questions)
        self.selection = SelectionState(rules, default_selected=default_selected)
        self.responses = ResponseState()
        self.navigator = StepNavigator()
        self._plan: StepPlan = []
        self._replan()

    # ==================================================================
    # Catalog
    # ==================================================================

    @property
    def rules(self) -> CategoryRules:
        return self._rules

    @property
    def questions(self) -> list[Question]:
        return list(self._questions)

    def load_catalog(self, questions: Iterable[Question]) -> None:
        """Replace the catalog and rebuild the plan."""
        self._questions = list(questions)
        self._replan()
        logger.info(
            "Catalog loaded: %d questions, %d steps", len(self._questions), len(self._plan)
        )

    # ==================================================================
    # Plan
    # ==================================================================

    @property
    def plan(self) -> StepPlan:
        return self._plan

    @property
    def current_step(self) -> int:
        return self.navigator.current

    @property
    def current_group(self) -> StepGroup | None:
        if not self._plan:
            return None
        return self._plan[self.navigator.current]

    def _replan(self) -> None:
        self._plan = build_plan(self._questions, self.selection, self._rules)
        self.navigator.clamp(len(self._plan))

    # ==================================================================
    # Selection & responses
    # ==================================================================

    def is_category_mandatory(self, category: str) -> bool:
        return self._rules.is_mandatory(category)

    def is_category_selected(self, category: str) -> bool:
        return self.selection.is_selected(category)

    def toggle_category(self, category: str, selected: bool) -> list[int]:
        """Opt into or out of an optional category.

        Deselecting purges the answers of the category and of every accessory
        category bound to it.  Returns the purged question ids.
        """
        self.selection.set(category, selected)
        purged: list[int] = []
        if not self.selection.is_selected(category):
            purged = self.responses.purge(self._question_ids_bound_to(category))
            if purged:
                logger.info("Deselected %r, purged responses %s", category, purged)
        self._replan()
        return purged

    def _question_ids_bound_to(self, category: str) -> list[int]:
        known = {q.category for q in self._questions}
        targets = {category} | self._rules.accessories_of(category, known)
        return [q.id for q in self._questions if q.category in targets]

    def set_response(self, question_id: int, value: str) -> None:
        self.responses.set(question_id, value)

    # ==================================================================
    # Navigation
    # ==================================================================

    def can_advance(self, step: int | None = None) -> bool:
        """Check the advance gate for ``step`` (the current step by default)."""
        index = self.navigator.current if step is None else step
        group = self._plan[index] if 0 <= index < len(self._plan) else None
        return can_advance(group, self.selection.is_selected, self.responses)

    def missing_required(self, step: int | None = None) -> list[int]:
        index = self.navigator.current if step is None else step
        if not 0 <= index < len(self._plan):
            return []
        group = self._plan[index]
        if not self.selection.is_selected(group.category):
            return []
        return missing_required(group, self.responses)

    def check_required(self) -> None:
        """Raise for the first selected step with unanswered required questions.

        Answers can be changed after their step was passed, so submission
        checks the whole plan, not only the current step.

        Raises:
            RequiredAnswersMissing: naming the step's category and question ids.
        """
        for group in self._plan:
            if not self.selection.is_selected(group.category):
                continue
            missing = missing_required(group, self.responses)
            if missing:
                raise RequiredAnswersMissing(group.category, missing)

    def next(self) -> bool:
        """Move forward one step; a refused move is a no-op returning False."""
        moved = self.navigator.next(len(self._plan), self.can_advance())
        if not moved:
            logger.debug("Next refused at step %d", self.navigator.current)
        return moved

    def previous(self) -> bool:
        return self.navigator.previous()

    def can_go_previous(self) -> bool:
        return self.navigator.can_go_previous()

    @property
    def is_final_step(self) -> bool:
        return self.navigator.is_final(len(self._plan))

    def progress(self) -> Progress:
        return self.navigator.progress(len(self._plan))

    # ==================================================================
    # Lifecycle
    # ==================================================================

    def reset(self) -> None:
        """Discard selection, responses and position; keep the catalog."""
        self.selection.clear()
        self.responses.clear()
        self.navigator.reset()
        self._replan()

    def view(self) -> SessionView:
        group = self.current_group
        return SessionView(
            current_step=self.navigator.current,
            total_steps=len(self._plan),
            category=group.category if group else None,
            mandatory=group.mandatory if group else False,
            selected=self.selection.is_selected(group.category) if group else False,
            can_advance=self.can_advance(),
            can_go_previous=self.can_go_previous(),
            is_final_step=self.is_final_step,
            questions=group.questions if group else [],
            responses=self.responses.as_dict(),
        )
