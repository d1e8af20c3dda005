"""Exception taxonomy for the questionnaire SDK.

Validation errors subclass ``ValueError`` so the server's global
``ValueError`` handler maps them to 4xx responses without extra wiring.
Transport errors wrap failed calls to external collaborators (catalog,
object storage, submission endpoint).
"""

from __future__ import annotations


class QuestionnaireError(Exception):
    """Base class for all questionnaire failures."""


class ValidationError(QuestionnaireError, ValueError):
    """Client-side validation refused an operation; state is unchanged."""


class RequiredAnswersMissing(ValidationError):
    """A step was left with unanswered required questions."""

    def __init__(self, category: str, question_ids: list[int]) -> None:
        self.category = category
        self.question_ids = question_ids
        super().__init__(
            f"Required questions unanswered in '{category}': {question_ids}"
        )


class MissingClientIdentity(ValidationError):
    """None of the client identity fields was filled in."""


class AttachmentLimitExceeded(ValidationError):
    """The batch would push the attachment list over its cap."""

    def __init__(self, current: int, incoming: int, max_files: int) -> None:
        self.current = current
        self.incoming = incoming
        self.max_files = max_files
        super().__init__(
            f"Attachment limit exceeded: {current} + {incoming} > {max_files}"
        )


class AttachmentTooLarge(ValidationError):
    """A single file is above the per-file size ceiling."""

    def __init__(self, name: str, size: int, max_bytes: int) -> None:
        self.name = name
        self.size = size
        self.max_bytes = max_bytes
        super().__init__(f"File '{name}' is {size} bytes, limit is {max_bytes}")


class AttachmentTypeRejected(ValidationError):
    """A file's content type is not in the configured allow-list."""

    def __init__(self, name: str, content_type: str) -> None:
        self.name = name
        self.content_type = content_type
        super().__init__(f"File '{name}' has disallowed type '{content_type}'")


class TransportError(QuestionnaireError):
    """A call to an external collaborator failed."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        self.status_code = status_code
        super().__init__(message)


class AuthorizationError(TransportError):
    """The collaborator refused the caller (HTTP 401/403)."""
