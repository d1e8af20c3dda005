"""AttachmentManager — uploads files to object storage and keeps their metadata.

Independent of the question logic; the resulting list is submitted next to
the responses.

Upload rules:
  - The whole batch is refused if it would push the list above ``max_files``.
  - Files are processed one at a time, in input order.  Each one costs two
    sequential calls: upload-target issuance, then the transfer.
  - A file above ``max_file_bytes`` (or with a content type outside
    ``allowed_types`` when one is configured) is skipped.
  - A transport failure skips only that file; earlier successes stay.
  - No retries.

Removal is local bookkeeping only; stored objects are left in place.
"""

from __future__ import annotations

import logging
import posixpath
from typing import Sequence
from urllib.parse import urlparse

from rental_questionnaire.constants import (
    MAX_ATTACHMENT_BYTES,
    MAX_ATTACHMENTS,
    PUBLIC_UPLOAD_MOUNT,
)
from rental_questionnaire.errors import (
    AttachmentLimitExceeded,
    AttachmentTooLarge,
    AttachmentTypeRejected,
    AuthorizationError,
    TransportError,
)
from rental_questionnaire.interfaces import ObjectStore
from rental_questionnaire.models.attachment import (
    Attachment,
    LocalFile,
    UploadFailure,
    UploadReport,
)

logger = logging.getLogger(__name__)


def public_path(target: str, mount: str = PUBLIC_UPLOAD_MOUNT) -> str:
    """Derive the stable public reference for an upload target.

    Keeps only the final path segment of the target URL (query string and
    host dropped) and puts it under ``mount``::

        >>> public_path("https://storage.example.com/bucket/uploads/ab12?sig=x")
        '/objects/uploads/ab12'
    """
    segment = posixpath.basename(urlparse(target).path.rstrip("/"))
    if not segment:
        raise ValueError(f"Upload target has no path segment: {target!r}")
    return f"{mount.rstrip('/')}/{segment}"


class AttachmentManager:
    """Ordered attachment list with a count cap and a per-file size ceiling.

    Args:
        store: object storage used for the two-step upload
        max_files: cap on the number of attachments
        max_file_bytes: per-file size ceiling
        allowed_types: optional content-type allow-list; entries ending in
            ``/*`` match a whole family (``image/*``)
        public_mount: prefix of the derived public reference path
    """

    def __init__(
        self,
        store: ObjectStore,
        *,
        max_files: int = MAX_ATTACHMENTS,
        max_file_bytes: int = MAX_ATTACHMENT_BYTES,
        allowed_types: Sequence[str] | None = None,
        public_mount: str = PUBLIC_UPLOAD_MOUNT,
    ) -> None:
        self._store = store
        self.max_files = max_files
        self.max_file_bytes = max_file_bytes
        self._allowed = tuple(allowed_types) if allowed_types else None
        self._mount = public_mount
        self._items: list[Attachment] = []

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------

    @property
    def attachments(self) -> list[Attachment]:
        return list(self._items)

    @property
    def remaining(self) -> int:
        return max(self.max_files - len(self._items), 0)

    def __len__(self) -> int:
        return len(self._items)

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------

    def check_batch(self, count: int) -> None:
        """Raise if ``count`` more files would exceed the cap."""
        if len(self._items) + count > self.max_files:
            raise AttachmentLimitExceeded(len(self._items), count, self.max_files)

    def check_file(self, file: LocalFile) -> None:
        if file.size > self.max_file_bytes:
            raise AttachmentTooLarge(file.name, file.size, self.max_file_bytes)
        if self._allowed is not None and not self._type_allowed(file.content_type):
            raise AttachmentTypeRejected(file.name, file.content_type)

    def _type_allowed(self, content_type: str) -> bool:
        for pattern in self._allowed or ():
            if pattern == "*/*" or pattern == content_type:
                return True
            if pattern.endswith("/*") and content_type.startswith(pattern[:-1]):
                return True
        return False

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    async def upload(self, files: Sequence[LocalFile]) -> UploadReport:
        """Upload a batch and append every file that made it.

        Raises:
            AttachmentLimitExceeded: if the batch would exceed ``max_files``;
                nothing is uploaded in that case.
        """
        if not files:
            return UploadReport()
        self.check_batch(len(files))

        report = UploadReport()
        for file in files:
            try:
                self.check_file(file)
            except AttachmentTooLarge as exc:
                logger.info("Skipping %r: %s", file.name, exc)
                report.failures.append(
                    UploadFailure(name=file.name, reason="too_large", detail=str(exc))
                )
                continue
            except AttachmentTypeRejected as exc:
                logger.info("Skipping %r: %s", file.name, exc)
                report.failures.append(
                    UploadFailure(name=file.name, reason="type_rejected", detail=str(exc))
                )
                continue

            try:
                target = await self._store.issue_upload_target()
                await self._store.transfer(target, file)
                url = public_path(target, self._mount)
            except AuthorizationError:
                # Not a per-file problem; the caller has to re-authenticate
                raise
            except (TransportError, ValueError) as exc:
                logger.warning("Upload failed for %r: %s", file.name, exc)
                report.failures.append(
                    UploadFailure(name=file.name, reason="transport", detail=str(exc))
                )
                continue

            attachment = Attachment(
                url=url, name=file.name, type=file.content_type, size=file.size,
            )
            self._items.append(attachment)
            report.added.append(attachment)

        logger.info(
            "Upload batch done: %d added, %d failed, %d total",
            len(report.added), len(report.failures), len(self._items),
        )
        return report

    def remove(self, index: int) -> Attachment:
        """Drop the attachment at ``index``; storage is not touched.

        Raises:
            IndexError: if ``index`` is out of range.
        """
        if not 0 <= index < len(self._items):
            raise IndexError(f"No attachment at position {index}")
        return self._items.pop(index)

    def clear(self) -> None:
        self._items.clear()
