"""Public model re-exports for rental_questionnaire.

Consumers should import from ``rental_questionnaire.models`` rather than
reaching into sub-modules directly.
"""

# --- Questions ---
from rental_questionnaire.models.question import (
    BOOLEAN_TYPES,
    HEADER_TYPES,
    Question,
)

# --- Plan / navigation ---
from rental_questionnaire.models.session import (
    Progress,
    SessionView,
    StepGroup,
    StepPlan,
)

# --- Attachments ---
from rental_questionnaire.models.attachment import (
    Attachment,
    LocalFile,
    UploadFailure,
    UploadReport,
)

# --- Submission ---
from rental_questionnaire.models.submission import (
    ClientFields,
    SubmissionPayload,
    SubmissionReceipt,
)

__all__ = [
    # Questions
    "BOOLEAN_TYPES",
    "HEADER_TYPES",
    "Question",
    # Plan / navigation
    "Progress",
    "SessionView",
    "StepGroup",
    "StepPlan",
    # Attachments
    "Attachment",
    "LocalFile",
    "UploadFailure",
    "UploadReport",
    # Submission
    "ClientFields",
    "SubmissionPayload",
    "SubmissionReceipt",
]
