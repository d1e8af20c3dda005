"""Step and progress models — what the planner and navigator hand to callers.

  - StepGroup: one visible category with its ordered active questions
  - StepPlan: the ordered list of groups driving the navigator
  - Progress: "step X of N" view of the navigator
  - SessionView: serialisable snapshot of a questionnaire session

These models are derived data.  They are rebuilt on every replan and never
mutated in place.
"""

from pydantic import BaseModel

from rental_questionnaire.models.question import Question


class StepGroup(BaseModel):
    """A category shown as one step of the questionnaire."""

    category: str
    category_type: str
    mandatory: bool = False
    accessory: bool = False
    questions: list[Question]

    @property
    def required_questions(self) -> list[Question]:
        """Required questions that expect an answer (header rows excluded)."""
        return [q for q in self.questions if q.is_required and not q.is_header]

    @property
    def question_ids(self) -> list[int]:
        return [q.id for q in self.questions]


# Ordered groups; index == navigator step.
StepPlan = list[StepGroup]


class Progress(BaseModel):
    """Position of the navigator within the plan."""

    step: int
    total: int
    percent: int


class SessionView(BaseModel):
    """Public snapshot of a questionnaire session for rendering."""

    current_step: int
    total_steps: int
    category: str | None
    mandatory: bool
    selected: bool
    can_advance: bool
    can_go_previous: bool
    is_final_step: bool
    questions: list[Question]
    responses: dict[int, str]
