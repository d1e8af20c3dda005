"""Staff needs-assessment endpoints.

Staff roles may create responses and browse client-portal responses;
listing and reading staff-created responses needs a manager role.
"""

from typing import Any

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from rental_db.repository import ResponseRepository
from rental_questionnaire.constants import STAFF_MAX_ATTACHMENTS
from rental_questionnaire.errors import AttachmentLimitExceeded
from rental_questionnaire.models.submission import SubmissionPayload

from rental_server.dependencies import (
    get_db,
    get_response_repository,
    require_manager,
    require_staff,
)


router = APIRouter(prefix="/needs-assessment", tags=["responses"])


@router.post("/responses")
async def create_staff_response(
    payload: SubmissionPayload,
    user_id: str = Depends(require_staff),
    db: AsyncSession = Depends(get_db),
    repo: ResponseRepository = Depends(get_response_repository),
) -> dict[str, Any]:
    """Store a questionnaire filled in by an employee.

    The response is numbered ``NN/MM.YYYY`` and attributed to the caller.
    """
    if len(payload.attachments) > STAFF_MAX_ATTACHMENTS:
        raise AttachmentLimitExceeded(0, len(payload.attachments), STAFF_MAX_ATTACHMENTS)
    row = await repo.create_staff_response(db, payload, user_id=user_id)
    return row.to_dict()


@router.get("/responses")
async def list_staff_responses(
    _user_id: str = Depends(require_manager),
    db: AsyncSession = Depends(get_db),
    repo: ResponseRepository = Depends(get_response_repository),
) -> list[dict[str, Any]]:
    """Staff-created responses, newest first."""
    rows = await repo.list_staff(db)
    return [row.to_dict() for row in rows]


@router.get("/client-responses")
async def list_client_responses(
    _user_id: str = Depends(require_staff),
    db: AsyncSession = Depends(get_db),
    repo: ResponseRepository = Depends(get_response_repository),
) -> list[dict[str, Any]]:
    """Client-portal responses, newest first."""
    rows = await repo.list_client(db)
    return [row.to_dict() for row in rows]


@router.get("/responses/{response_id}")
async def get_response(
    response_id: int,
    _user_id: str = Depends(require_manager),
    db: AsyncSession = Depends(get_db),
    repo: ResponseRepository = Depends(get_response_repository),
) -> dict[str, Any]:
    row = await repo.get_by_id(db, response_id)
    if row is None:
        raise HTTPException(status_code=404, detail="Response not found")
    return row.to_dict()
