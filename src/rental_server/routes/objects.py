"""Upload-target issuance — step one of the two-step attachment upload."""

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from rental_server.dependencies import get_upload_issuer
from rental_server.storage import UploadTargetIssuer

router = APIRouter(tags=["objects"])


class UploadTarget(BaseModel):
    upload_url: str = Field(serialization_alias="uploadURL")


@router.post("/objects/upload", response_model_by_alias=True)
async def issue_upload_target(
    issuer: UploadTargetIssuer = Depends(get_upload_issuer),
) -> UploadTarget:
    """Return a one-time URL the client PUTs the file bytes to."""
    return UploadTarget(upload_url=issuer.issue())
