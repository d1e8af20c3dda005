"""NeedsAssessmentFlow — drives one questionnaire from catalog fetch to submit.

Wraps the synchronous :class:`QuestionnaireSession` with the asynchronous
parts of the page: loading the catalog, uploading attachments and sending
the submission.  Every outcome the user should see goes through the injected
:class:`Notifier`; nothing here touches a UI directly.

Two variants host the engine:

    CLIENT — client portal: optional categories are opt-in, up to 10
             attachments, submits to /api/client/needs-assessment and
             returns to the portal.
    STAFF  — employee page: optional categories are opt-out, up to 5
             attachments, submits to /api/needs-assessment/responses and
             opens the print view of the created record.

An accessory step follows its base category's effective selection, so
on the STAFF page accessory steps are planned until the base is opted
out.  The employee page this replaces only showed them after the base
was ticked explicitly.

Failure handling:
  - validation problems are reported and the operation is refused
  - transport failures are reported; state is kept so the user can retry
  - authorization failures are reported, state is discarded and the user
    is redirected to the login page after a short delay
"""

from __future__ import annotations

import asyncio
import enum
import logging
from dataclasses import dataclass
from typing import Any, Sequence

from rental_questionnaire.api_client import CLIENT_SUBMIT_ROUTE, STAFF_SUBMIT_ROUTE
from rental_questionnaire.attachments import AttachmentManager
from rental_questionnaire.categories import DEFAULT_RULES, CategoryRules
from rental_questionnaire.constants import (
    MAX_ATTACHMENT_BYTES,
    MAX_ATTACHMENTS,
    MESSAGES,
    STAFF_MAX_ATTACHMENTS,
)
from rental_questionnaire.errors import (
    AttachmentLimitExceeded,
    AuthorizationError,
    MissingClientIdentity,
    RequiredAnswersMissing,
    TransportError,
)
from rental_questionnaire.interfaces import (
    CatalogSource,
    Notifier,
    ObjectStore,
    SubmissionGateway,
)
from rental_questionnaire.models.attachment import LocalFile, UploadReport
from rental_questionnaire.models.submission import ClientFields, SubmissionReceipt
from rental_questionnaire.session import QuestionnaireSession
from rental_questionnaire.submission import SubmissionAssembler

logger = logging.getLogger(__name__)


class FlowVariant(str, enum.Enum):
    """Which page hosts the questionnaire."""

    CLIENT = "client"
    STAFF = "staff"


@dataclass(frozen=True)
class FlowConfig:
    """Per-variant behaviour of the flow."""

    default_selected: bool
    max_files: int
    submit_route: str
    # May reference the created record as {id} / {response_number}
    success_path: str
    success_message: str
    login_path: str = "/login"
    require_identity: bool = True
    max_file_bytes: int = MAX_ATTACHMENT_BYTES


VARIANT_CONFIGS: dict[FlowVariant, FlowConfig] = {
    FlowVariant.CLIENT: FlowConfig(
        default_selected=False,
        max_files=MAX_ATTACHMENTS,
        submit_route=CLIENT_SUBMIT_ROUTE,
        success_path="/client-portal",
        success_message=MESSAGES["submit_success_client"],
    ),
    FlowVariant.STAFF: FlowConfig(
        default_selected=True,
        max_files=STAFF_MAX_ATTACHMENTS,
        submit_route=STAFF_SUBMIT_ROUTE,
        success_path="/needs-assessment/{id}/print",
        success_message=MESSAGES["submit_success_staff"],
    ),
}


class NeedsAssessmentFlow:
    """Questionnaire page controller.

    Args:
        catalog: where questions come from
        store: object storage for attachments
        gateway: submission endpoint
        notifier: toast/redirect capability
        variant: CLIENT or STAFF behaviour
        config: overrides the variant's :class:`FlowConfig`
        rules: category naming rules
        redirect_delay: seconds between the authorization notice and the
            login redirect
    """

    def __init__(
        self,
        *,
        catalog: CatalogSource,
        store: ObjectStore,
        gateway: SubmissionGateway,
        notifier: Notifier,
        variant: FlowVariant = FlowVariant.CLIENT,
        config: FlowConfig | None = None,
        rules: CategoryRules = DEFAULT_RULES,
        redirect_delay: float = 1.5,
    ) -> None:
        self.variant = variant
        self.config = config or VARIANT_CONFIGS[variant]
        self._catalog = catalog
        self._gateway = gateway
        self._notifier = notifier
        self._redirect_delay = redirect_delay

        self.session = QuestionnaireSession(
            rules=rules, default_selected=self.config.default_selected,
        )
        self.attachments = AttachmentManager(
            store,
            max_files=self.config.max_files,
            max_file_bytes=self.config.max_file_bytes,
        )
        self.assembler = SubmissionAssembler(require_identity=self.config.require_identity)
        self.client = ClientFields()

        # Busy flags: the page disables the triggering control while set
        self.is_loading = False
        self.is_uploading = False
        self.is_submitting = False

    # ==================================================================
    # Catalog
    # ==================================================================

    async def load(self) -> bool:
        """Fetch the catalog and build the first plan.  Returns success."""
        self.is_loading = True
        try:
            questions = await self._catalog.fetch_questions()
        except AuthorizationError as exc:
            await self._handle_unauthorized(exc)
            return False
        except TransportError as exc:
            logger.warning("Catalog fetch failed: %s", exc)
            self._notifier.notify(MESSAGES["catalog_failed"], variant="destructive")
            return False
        finally:
            self.is_loading = False
        self.session.load_catalog(questions)
        return True

    # ==================================================================
    # Form state
    # ==================================================================

    def set_client_fields(self, **fields: Any) -> ClientFields:
        self.client = self.client.model_copy(update=fields)
        return self.client

    def toggle_category(self, category: str, selected: bool) -> list[int]:
        return self.session.toggle_category(category, selected)

    def set_response(self, question_id: int, value: str) -> None:
        self.session.set_response(question_id, value)

    # ==================================================================
    # Navigation
    # ==================================================================

    def next(self) -> bool:
        """Advance one step; tells the user why when the gate is closed."""
        if self.session.next():
            return True
        if not self.session.can_advance():
            self._notifier.notify(MESSAGES["required_missing"], variant="destructive")
        return False

    def previous(self) -> bool:
        return self.session.previous()

    # ==================================================================
    # Attachments
    # ==================================================================

    async def upload(self, files: Sequence[LocalFile]) -> UploadReport | None:
        """Upload a batch; returns ``None`` when the batch was refused."""
        if self.is_uploading:
            logger.debug("Upload already in progress, ignoring new batch")
            return None
        self.is_uploading = True
        try:
            report = await self.attachments.upload(files)
        except AttachmentLimitExceeded as exc:
            logger.info("Upload batch refused: %s", exc)
            self._notifier.notify(
                MESSAGES["too_many_files"].format(max_files=exc.max_files),
                variant="destructive",
            )
            return None
        except AuthorizationError as exc:
            await self._handle_unauthorized(exc)
            return None
        finally:
            self.is_uploading = False

        for failure in report.failures:
            if failure.reason == "too_large":
                message = MESSAGES["file_too_large"].format(
                    name=failure.name,
                    max_mb=self.attachments.max_file_bytes // (1024 * 1024),
                )
            elif failure.reason == "type_rejected":
                message = MESSAGES["file_type_rejected"].format(name=failure.name)
            else:
                message = MESSAGES["upload_failed"].format(name=failure.name)
            self._notifier.notify(message, variant="destructive")
        if report.added:
            self._notifier.notify(MESSAGES["upload_success"].format(count=len(report.added)))
        return report

    def remove_attachment(self, index: int) -> None:
        self.attachments.remove(index)

    # ==================================================================
    # Submission
    # ==================================================================

    async def submit(self) -> SubmissionReceipt | None:
        """Send the questionnaire from the final step.

        Returns the receipt on success (state discarded, user redirected) or
        ``None`` when refused or failed (state kept).
        """
        if self.is_submitting:
            return None
        if not self.session.is_final_step:
            logger.warning(
                "Submit refused: on step %d of %d",
                self.session.current_step + 1, len(self.session.plan),
            )
            return None
        try:
            self.session.check_required()
        except RequiredAnswersMissing as exc:
            logger.info("Submit refused: %s", exc)
            self._notifier.notify(MESSAGES["required_missing"], variant="destructive")
            return None

        try:
            payload = self.assembler.assemble(
                self.client,
                self.session.responses.as_dict(),
                self.attachments.attachments,
            )
        except MissingClientIdentity:
            self._notifier.notify(MESSAGES["identity_missing"], variant="destructive")
            return None

        self.is_submitting = True
        try:
            receipt = await self._gateway.submit(payload, route=self.config.submit_route)
        except AuthorizationError as exc:
            await self._handle_unauthorized(exc)
            return None
        except TransportError as exc:
            logger.warning("Submission failed: %s", exc)
            self._notifier.notify(MESSAGES["submit_failed"], variant="destructive")
            return None
        finally:
            self.is_submitting = False

        self._notifier.notify(
            self.config.success_message.format(response_number=receipt.response_number or receipt.id)
        )
        self.discard()
        self._notifier.redirect_to(
            self.config.success_path.format(id=receipt.id, response_number=receipt.response_number)
        )
        return receipt

    # ==================================================================
    # Lifecycle
    # ==================================================================

    def discard(self) -> None:
        """Drop answers, selection, attachments and client fields."""
        self.session.reset()
        self.attachments.clear()
        self.client = ClientFields()

    async def _handle_unauthorized(self, exc: AuthorizationError) -> None:
        logger.warning("Authorization failure: %s", exc)
        self._notifier.notify(MESSAGES["unauthorized"], variant="destructive")
        self.discard()
        await asyncio.sleep(self._redirect_delay)
        self._notifier.redirect_to(self.config.login_path)
