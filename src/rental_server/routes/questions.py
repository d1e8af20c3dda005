"""Question catalog endpoint — public, read-only."""

from typing import Any

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from rental_db.repository import QuestionRepository

from rental_server.dependencies import get_db, get_question_repository

router = APIRouter(tags=["questions"])


@router.get("/needs-assessment/questions")
async def list_questions(
    db: AsyncSession = Depends(get_db),
    repo: QuestionRepository = Depends(get_question_repository),
) -> list[dict[str, Any]]:
    """Active questions ordered by category, then position.

    Ordering here is storage order only; the questionnaire derives its own
    step order from category names.
    """
    rows = await repo.list_active(db)
    return [row.to_dict() for row in rows]
