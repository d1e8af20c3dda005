"""Async repositories for the needs-assessment tables.

All public methods accept an ``AsyncSession`` so the caller controls
transaction boundaries; they ``flush`` but never ``commit``.

Business validation (required answers, client identity) belongs to the
SDK; the repositories only build rows and response numbers.
"""

import logging
from datetime import datetime, time, timezone
from typing import Iterable

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from rental_db.models.question import NeedsAssessmentQuestion
from rental_db.models.response import CLIENT_NUMBER_PREFIX, NeedsAssessmentResponse
from rental_db.numbering import (
    format_client_number,
    format_staff_number,
    month_token,
    next_staff_sequence,
)
from rental_questionnaire.models.question import Question
from rental_questionnaire.models.submission import SubmissionPayload

logger = logging.getLogger(__name__)


class QuestionRepository:
    """Read/replace operations on ``needs_assessment_questions``."""

    async def list_active(self, db: AsyncSession) -> list[NeedsAssessmentQuestion]:
        """Active questions ordered by category, then position."""
        stmt = (
            select(NeedsAssessmentQuestion)
            .where(NeedsAssessmentQuestion.is_active.is_(True))
            .order_by(NeedsAssessmentQuestion.category, NeedsAssessmentQuestion.position)
        )
        result = await db.execute(stmt)
        return list(result.scalars().all())

    async def replace_catalog(self, db: AsyncSession, questions: Iterable[Question]) -> int:
        """Delete every question row and insert ``questions`` with their ids.

        Returns the number of rows inserted.
        """
        await db.execute(delete(NeedsAssessmentQuestion))
        count = 0
        for q in questions:
            db.add(
                NeedsAssessmentQuestion(
                    id=q.id,
                    category=q.category,
                    question=q.question,
                    type=q.type,
                    options=q.options,
                    is_required=q.is_required,
                    position=q.position,
                    is_active=q.is_active,
                    category_type=q.category_type,
                )
            )
            count += 1
        await db.flush()
        logger.info("Catalog replaced with %d questions", count)
        return count


class ResponseRepository:
    """Create/read operations on ``needs_assessment_responses``."""

    # ------------------------------------------------------------------
    # Create
    # ------------------------------------------------------------------

    async def create_staff_response(
        self,
        db: AsyncSession,
        payload: SubmissionPayload,
        *,
        user_id: str,
        now: datetime | None = None,
    ) -> NeedsAssessmentResponse:
        """Insert a staff-created response numbered ``NN/MM.YYYY``."""
        now = now or datetime.now(timezone.utc)
        stmt = select(NeedsAssessmentResponse.response_number).where(
            NeedsAssessmentResponse.response_number.like(f"%/{month_token(now)}")
        )
        existing = (await db.execute(stmt)).scalars().all()
        number = format_staff_number(next_staff_sequence(existing), now)
        return await self._insert(db, payload, number=number, user_id=user_id)

    async def create_client_response(
        self,
        db: AsyncSession,
        payload: SubmissionPayload,
        *,
        now: datetime | None = None,
    ) -> NeedsAssessmentResponse:
        """Insert a client-portal response numbered ``CLIENT-NNssss/MM.YYYY``."""
        now = now or datetime.now(timezone.utc)
        day_start = datetime.combine(now.date(), time.min, tzinfo=now.tzinfo or timezone.utc)
        stmt = select(func.count()).select_from(NeedsAssessmentResponse).where(
            NeedsAssessmentResponse.response_number.like(f"{CLIENT_NUMBER_PREFIX}%"),
            NeedsAssessmentResponse.created_at >= day_start,
        )
        today = (await db.execute(stmt)).scalar_one()
        number = format_client_number(today + 1, now)
        return await self._insert(db, payload, number=number, user_id=None)

    async def _insert(
        self,
        db: AsyncSession,
        payload: SubmissionPayload,
        *,
        number: str,
        user_id: str | None,
    ) -> NeedsAssessmentResponse:
        row = NeedsAssessmentResponse(
            response_number=number,
            client_company_name=payload.client_company_name,
            client_contact_person=payload.client_contact_person,
            client_phone=payload.client_phone,
            client_email=payload.client_email,
            client_address=payload.client_address,
            responses=dict(payload.responses),
            attachments=[a.model_dump(mode="json") for a in payload.attachments],
            user_id=user_id,
        )
        db.add(row)
        await db.flush()  # Populate id and timestamps
        logger.info("Created needs assessment %s (id=%s)", number, row.id)
        return row

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------

    async def get_by_id(self, db: AsyncSession, response_id: int) -> NeedsAssessmentResponse | None:
        return await db.get(NeedsAssessmentResponse, response_id)

    async def list_staff(self, db: AsyncSession) -> list[NeedsAssessmentResponse]:
        """Staff-created responses, newest first."""
        stmt = (
            select(NeedsAssessmentResponse)
            .where(NeedsAssessmentResponse.response_number.not_like(f"{CLIENT_NUMBER_PREFIX}%"))
            .order_by(NeedsAssessmentResponse.created_at.desc())
        )
        result = await db.execute(stmt)
        return list(result.scalars().all())

    async def list_client(self, db: AsyncSession) -> list[NeedsAssessmentResponse]:
        """Client-portal responses, newest first."""
        stmt = (
            select(NeedsAssessmentResponse)
            .where(NeedsAssessmentResponse.response_number.like(f"{CLIENT_NUMBER_PREFIX}%"))
            .order_by(NeedsAssessmentResponse.created_at.desc())
        )
        result = await db.execute(stmt)
        return list(result.scalars().all())
