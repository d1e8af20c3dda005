"""NeedsAssessmentQuestion ORM model — one row per catalog question.

The SDK's :class:`rental_questionnaire.models.Question` is the wire view of
this row; :meth:`to_dict` produces the camelCase record the catalog endpoint
serves.
"""

from datetime import datetime, timezone
from typing import Any

from sqlalchemy import Boolean, Index, Integer, String, Text, text
from sqlalchemy.dialects.postgresql import JSONB, TIMESTAMP
from sqlalchemy.orm import Mapped, mapped_column

from rental_db.models.base import Base
from rental_db.models.enums import CategoryType


class NeedsAssessmentQuestion(Base):
    __tablename__ = "needs_assessment_questions"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    # Grouping key; mandatory/accessory semantics are derived from the name
    category: Mapped[str] = mapped_column(String(255), nullable=False)
    question: Mapped[str] = mapped_column(Text, nullable=False)
    type: Mapped[str] = mapped_column(
        String(50), nullable=False, default="text", server_default=text("'text'"),
    )
    # Type-dependent: select choices, radio labels, ...
    options: Mapped[Any | None] = mapped_column(JSONB, nullable=True)
    is_required: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False, server_default=text("false"),
    )
    position: Mapped[int] = mapped_column(
        Integer, nullable=False, default=0, server_default=text("0"),
    )
    is_active: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=True, server_default=text("true"),
    )
    category_type: Mapped[str] = mapped_column(
        String(50),
        nullable=False,
        default=CategoryType.GENERAL.value,
        server_default=text("'general'"),
    )

    created_at: Mapped[datetime] = mapped_column(
        TIMESTAMP(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    updated_at: Mapped[datetime] = mapped_column(
        TIMESTAMP(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    __table_args__ = (
        # Catalog endpoint reads active rows ordered by category, position
        Index(
            "ix_questions_active_order",
            "category",
            "position",
            postgresql_where=text("is_active"),
        ),
    )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "category": self.category,
            "question": self.question,
            "type": self.type,
            "options": self.options,
            "isRequired": self.is_required,
            "position": self.position,
            "isActive": self.is_active,
            "categoryType": self.category_type,
        }

    def __repr__(self) -> str:
        return (
            f"<NeedsAssessmentQuestion(id={self.id}, category={self.category!r}, "
            f"position={self.position})>"
        )
