"""rental_questionnaire — Needs-assessment questionnaire SDK.

Public API:
    NeedsAssessmentFlow  — page controller: catalog load, upload, submit
    FlowVariant          — CLIENT (portal) or STAFF (employee page)
    QuestionnaireSession — selection, responses and step navigation
    CatalogStore         — loads a YAML question catalog
    RentalApiClient      — httpx client for the REST API
    CategoryRules        — mandatory / accessory / alias naming rules
    build_plan           — derives the ordered step plan from the catalog

Building blocks:
    SelectionState       — which optional categories are selected
    ResponseState        — answers keyed by question id
    StepNavigator        — current step, clamping, progress
    AttachmentManager    — two-step uploads with count and size limits
    SubmissionAssembler  — client fields + answers + attachments -> payload

Collaborator interfaces:
    CatalogSource, ObjectStore, SubmissionGateway, Notifier
"""

from rental_questionnaire.api_client import RentalApiClient
from rental_questionnaire.attachments import AttachmentManager, public_path
from rental_questionnaire.catalog import CatalogStore
from rental_questionnaire.categories import DEFAULT_RULES, CategoryRules
from rental_questionnaire.errors import (
    AttachmentLimitExceeded,
    AttachmentTooLarge,
    AttachmentTypeRejected,
    AuthorizationError,
    MissingClientIdentity,
    QuestionnaireError,
    RequiredAnswersMissing,
    TransportError,
    ValidationError,
)
from rental_questionnaire.flow import FlowConfig, FlowVariant, NeedsAssessmentFlow
from rental_questionnaire.interfaces import (
    CatalogSource,
    Notifier,
    ObjectStore,
    SubmissionGateway,
)
from rental_questionnaire.navigator import StepNavigator
from rental_questionnaire.planner import build_plan
from rental_questionnaire.session import QuestionnaireSession
from rental_questionnaire.state import ResponseState, SelectionState
from rental_questionnaire.submission import SubmissionAssembler

__all__ = [
    # Controllers
    "NeedsAssessmentFlow",
    "FlowVariant",
    "FlowConfig",
    "QuestionnaireSession",
    # Catalog & rules
    "CatalogStore",
    "CategoryRules",
    "DEFAULT_RULES",
    "build_plan",
    # Building blocks
    "SelectionState",
    "ResponseState",
    "StepNavigator",
    "AttachmentManager",
    "SubmissionAssembler",
    "public_path",
    # Transport
    "RentalApiClient",
    "CatalogSource",
    "ObjectStore",
    "SubmissionGateway",
    "Notifier",
    # Errors
    "QuestionnaireError",
    "ValidationError",
    "RequiredAnswersMissing",
    "MissingClientIdentity",
    "AttachmentLimitExceeded",
    "AttachmentTooLarge",
    "AttachmentTypeRejected",
    "TransportError",
    "AuthorizationError",
]
