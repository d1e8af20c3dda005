"""Attachment models — local files going up, stored references coming back."""

from typing import Literal

from pydantic import BaseModel


class Attachment(BaseModel):
    """A successfully uploaded file, as stored alongside the responses.

    ``url`` is the public reference path (``/objects/uploads/<id>``), not the
    one-time upload target.
    """

    url: str
    name: str
    type: str
    size: int


class LocalFile(BaseModel):
    """A file picked by the user, waiting to be uploaded."""

    name: str
    content_type: str = "application/octet-stream"
    content: bytes

    @property
    def size(self) -> int:
        return len(self.content)


class UploadFailure(BaseModel):
    """One file of a batch that was not added."""

    name: str
    reason: Literal["too_large", "type_rejected", "transport"]
    detail: str | None = None


class UploadReport(BaseModel):
    """Outcome of one upload batch: what was appended, what was skipped."""

    added: list[Attachment] = []
    failures: list[UploadFailure] = []
