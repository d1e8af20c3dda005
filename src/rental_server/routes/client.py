"""Client-portal submission endpoint — no authentication."""

from typing import Any

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from rental_db.repository import ResponseRepository
from rental_questionnaire.constants import MAX_ATTACHMENTS
from rental_questionnaire.errors import AttachmentLimitExceeded, MissingClientIdentity
from rental_questionnaire.models.submission import SubmissionPayload

from rental_server.dependencies import get_db, get_response_repository


router = APIRouter(prefix="/client", tags=["client"])


@router.post("/needs-assessment")
async def create_client_response(
    payload: SubmissionPayload,
    db: AsyncSession = Depends(get_db),
    repo: ResponseRepository = Depends(get_response_repository),
) -> dict[str, Any]:
    """Store a questionnaire submitted from the client portal.

    Re-checks what the portal already enforces, since this endpoint is
    public: at least one identity field, and the attachment cap.
    """
    if not payload.client_fields().has_identity():
        raise MissingClientIdentity("Client submission has no identifying field")
    if len(payload.attachments) > MAX_ATTACHMENTS:
        raise AttachmentLimitExceeded(0, len(payload.attachments), MAX_ATTACHMENTS)
    row = await repo.create_client_response(db, payload)
    return row.to_dict()
