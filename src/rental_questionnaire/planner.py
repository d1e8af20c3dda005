"""Category planner — derives the ordered Step Plan from catalog + selection.

The plan is a pure function of its inputs and is rebuilt from scratch after
every mutation; nothing is patched incrementally.

Algorithm:
    1. Partition questions into general (categoryType absent/"general") and
       equipment (categoryType "equipment").
    2. Collect distinct category names per partition.
    3. General: mandatory categories first in canonical order, the rest
       alphabetically.
    4. Equipment: alphabetically.
    5. Canonical order = general + equipment.
    6. Accessory categories are skipped unless their alias-resolved base
       category is selected (mandatory counts as selected).
    7. Each remaining category gets its active questions sorted by
       position; categories left without questions are dropped.
"""

from __future__ import annotations

import logging
from typing import Iterable, Mapping

from rental_questionnaire.categories import DEFAULT_RULES, CategoryRules
from rental_questionnaire.constants import CATEGORY_TYPE_EQUIPMENT, CATEGORY_TYPE_GENERAL
from rental_questionnaire.models.question import Question
from rental_questionnaire.models.session import StepGroup, StepPlan
from rental_questionnaire.state import SelectionState

logger = logging.getLogger(__name__)


def canonical_categories(
    questions: Iterable[Question], rules: CategoryRules = DEFAULT_RULES
) -> list[str]:
    """Return every category name in canonical presentation order.

    Inactive questions still contribute their category name here; empty
    groups are filtered later by :func:`build_plan`.
    """
    general: list[str] = []
    equipment: list[str] = []
    for q in questions:
        target = equipment if q.is_equipment else general
        if q.category not in target:
            target.append(q.category)
    # A category tagged both ways keeps its general position only
    equipment = [c for c in equipment if c not in general]
    return rules.order_general(general) + rules.order_equipment(equipment)


def build_plan(
    questions: Iterable[Question],
    selection: SelectionState | Mapping[str, bool],
    rules: CategoryRules = DEFAULT_RULES,
) -> StepPlan:
    """Build the Step Plan for the given catalog and selection.

    Args:
        questions: the full question catalog (active and inactive)
        selection: a :class:`SelectionState`, or a plain ``{category: bool}``
            map read with opt-in semantics
        rules: category naming rules

    Returns:
        Ordered list of :class:`StepGroup`, each with at least one question.
    """
    if not isinstance(selection, SelectionState):
        selection = SelectionState(rules, initial=selection)

    catalog = list(questions)
    by_category: dict[str, list[Question]] = {}
    types: dict[str, str] = {}
    for q in catalog:
        if not q.is_equipment:
            types[q.category] = CATEGORY_TYPE_GENERAL
        else:
            types.setdefault(q.category, CATEGORY_TYPE_EQUIPMENT)
        if q.is_active:
            by_category.setdefault(q.category, []).append(q)

    plan: StepPlan = []
    for category in canonical_categories(catalog, rules):
        accessory = rules.is_accessory(category)
        if accessory and not selection.is_selected(rules.base_category(category)):
            continue

        active = sorted(by_category.get(category, []), key=lambda q: q.position)
        if not active:
            continue

        plan.append(
            StepGroup(
                category=category,
                category_type=types[category],
                mandatory=rules.is_mandatory(category),
                accessory=accessory,
                questions=active,
            )
        )

    logger.debug("Planned %d steps: %s", len(plan), [g.category for g in plan])
    return plan
