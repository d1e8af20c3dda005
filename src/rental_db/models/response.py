"""NeedsAssessmentResponse ORM model — one submitted questionnaire.

Staff-created rows carry ``NN/MM.YYYY`` numbers and the creating user's id;
client-portal rows carry ``CLIENT-`` prefixed numbers and no user.  Answers
and attachment metadata are stored as JSONB so a row can be rendered
(print view, manager list) without joins.
"""

from datetime import datetime, timezone
from typing import Any

from sqlalchemy import Index, Integer, String, Text, text
from sqlalchemy.dialects.postgresql import JSONB, TIMESTAMP
from sqlalchemy.orm import Mapped, mapped_column

from rental_db.models.base import Base

CLIENT_NUMBER_PREFIX = "CLIENT-"


class NeedsAssessmentResponse(Base):
    __tablename__ = "needs_assessment_responses"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    response_number: Mapped[str] = mapped_column(String(50), nullable=False, unique=True)

    # --- Client identity (free text, all optional at the DB level) ---
    client_company_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    client_contact_person: Mapped[str | None] = mapped_column(String(255), nullable=True)
    client_phone: Mapped[str | None] = mapped_column(String(50), nullable=True)
    client_email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    client_address: Mapped[str | None] = mapped_column(Text, nullable=True)

    # {"<question id>": "<answer>", ...}
    responses: Mapped[dict] = mapped_column(JSONB, nullable=False)
    # [{"url": ..., "name": ..., "type": ..., "size": ...}, ...]
    attachments: Mapped[list] = mapped_column(
        JSONB, nullable=False, default=list, server_default=text("'[]'::jsonb"),
    )

    # Creating employee; null for client-portal submissions
    user_id: Mapped[str | None] = mapped_column(Text, nullable=True, index=True)

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
        Index("ix_responses_created_at", "created_at"),
    )

    @property
    def is_client(self) -> bool:
        return self.response_number.startswith(CLIENT_NUMBER_PREFIX)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "responseNumber": self.response_number,
            "clientCompanyName": self.client_company_name,
            "clientContactPerson": self.client_contact_person,
            "clientPhone": self.client_phone,
            "clientEmail": self.client_email,
            "clientAddress": self.client_address,
            "responses": self.responses,
            "attachments": self.attachments or [],
            "userId": self.user_id,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
            "updatedAt": self.updated_at.isoformat() if self.updated_at else None,
        }

    def __repr__(self) -> str:
        return (
            f"<NeedsAssessmentResponse(id={self.id}, number={self.response_number!r}, "
            f"user={self.user_id!r})>"
        )
