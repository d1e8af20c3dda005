"""Selection and response stores for one questionnaire session.

Two independent key-value stores:

  - :class:`SelectionState` — which optional categories the user opted into.
    Mandatory categories are never stored and always read as selected.
  - :class:`ResponseState` — the answer per question id.

Both are plain in-memory state owned by a single session; the session
coordinates them (e.g. purging answers when a category is deselected).
"""

from __future__ import annotations

import logging
from typing import Iterable, Iterator, Mapping

from rental_questionnaire.categories import DEFAULT_RULES, CategoryRules

logger = logging.getLogger(__name__)


class SelectionState:
    """Optional-category opt-in map.

    Args:
        rules: category naming rules (for the mandatory list)
        default_selected: what an optional category without an explicit
            entry reads as.  The client portal uses ``False`` (opt-in),
            the staff page ``True`` (opt-out).
    """

    def __init__(
        self,
        rules: CategoryRules = DEFAULT_RULES,
        *,
        default_selected: bool = False,
        initial: Mapping[str, bool] | None = None,
    ) -> None:
        self._rules = rules
        self._default = default_selected
        self._selected: dict[str, bool] = {}
        for category, value in (initial or {}).items():
            self.set(category, value)

    @property
    def default_selected(self) -> bool:
        return self._default

    def is_selected(self, category: str) -> bool:
        if self._rules.is_mandatory(category):
            return True
        return self._selected.get(category, self._default)

    def set(self, category: str, selected: bool) -> None:
        """Record the user's choice for an optional category.

        Writes for mandatory categories are ignored; they stay selected.
        """
        if self._rules.is_mandatory(category):
            logger.debug("Ignoring selection write for mandatory category %r", category)
            return
        self._selected[category] = bool(selected)

    def clear(self) -> None:
        self._selected.clear()

    def as_dict(self) -> dict[str, bool]:
        return dict(self._selected)

    def __contains__(self, category: object) -> bool:
        return category in self._selected


class ResponseState:
    """Answer per question id.  No validation happens here."""

    def __init__(self) -> None:
        self._answers: dict[int, str] = {}

    def set(self, question_id: int, value: str) -> None:
        self._answers[question_id] = value

    def get(self, question_id: int, default: str | None = None) -> str | None:
        return self._answers.get(question_id, default)

    def is_answered(self, question_id: int) -> bool:
        """True if the answer is non-empty after trimming whitespace."""
        value = self._answers.get(question_id)
        return bool(value and value.strip())

    def purge(self, question_ids: Iterable[int]) -> list[int]:
        """Delete the given ids and return the ones that were present."""
        removed = []
        for qid in question_ids:
            if self._answers.pop(qid, None) is not None:
                removed.append(qid)
        return removed

    def clear(self) -> None:
        self._answers.clear()

    def as_dict(self) -> dict[int, str]:
        return dict(self._answers)

    def __contains__(self, question_id: object) -> bool:
        return question_id in self._answers

    def __iter__(self) -> Iterator[int]:
        return iter(self._answers)

    def __len__(self) -> int:
        return len(self._answers)
