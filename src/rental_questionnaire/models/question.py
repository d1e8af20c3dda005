"""Question model for the needs-assessment catalog.

Each question type maps to a specific UI widget and answer format:

  - text / textarea: free text
  - number: numeric text input (answer stays a string)
  - select: dropdown, answer is the option value
  - radio: yes/no radio group, answer is ``"tak"`` or ``"nie"``
  - checkbox / equipment_option: inline boolean, answer is ``"true"``/``"false"``
  - multiple_choice: section header only, carries no answer

Unknown type strings are accepted and rendered as free text.

The catalog speaks camelCase JSON (``isRequired``, ``categoryType``); the
model exposes snake_case attributes and accepts either spelling on input.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel

from rental_questionnaire.constants import (
    CATEGORY_TYPE_EQUIPMENT,
    CATEGORY_TYPE_GENERAL,
)

# Types rendered as headers only; they never receive a response.
HEADER_TYPES: set[str] = {"multiple_choice"}

# Types whose answer is the "true"/"false" token.
BOOLEAN_TYPES: set[str] = {"equipment_option", "checkbox"}


class Question(BaseModel):
    """One catalog question.  Immutable for the lifetime of a session."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )

    id: int
    category: str
    question: str
    type: str = "text"
    options: Any = None
    is_required: bool = False
    position: int = 0
    is_active: bool = True
    category_type: str = CATEGORY_TYPE_GENERAL

    @field_validator("category_type", mode="before")
    @classmethod
    def _default_category_type(cls, value: Any) -> Any:
        # The catalog may send null or omit it; both mean "general"
        return value or CATEGORY_TYPE_GENERAL

    @field_validator("is_required", "is_active", mode="before")
    @classmethod
    def _null_flags(cls, value: Any, info) -> Any:
        if value is None:
            return info.field_name == "is_active"
        return value

    @field_validator("position", mode="before")
    @classmethod
    def _null_position(cls, value: Any) -> Any:
        return 0 if value is None else value

    @property
    def is_equipment(self) -> bool:
        return self.category_type == CATEGORY_TYPE_EQUIPMENT

    @property
    def is_header(self) -> bool:
        """True for section-header rows that carry no answer."""
        return self.type in HEADER_TYPES

    @property
    def is_boolean(self) -> bool:
        return self.type in BOOLEAN_TYPES
