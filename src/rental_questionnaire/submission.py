"""SubmissionAssembler — packages client fields, answers and attachments.

The assembler is pure: it validates and builds a :class:`SubmissionPayload`.
Sending it is the :class:`~rental_questionnaire.interfaces.SubmissionGateway`'s
job, and discarding session state afterwards is the flow's.
"""

from __future__ import annotations

import logging
from typing import Iterable, Mapping

from rental_questionnaire.errors import MissingClientIdentity
from rental_questionnaire.models.attachment import Attachment
from rental_questionnaire.models.submission import ClientFields, SubmissionPayload

logger = logging.getLogger(__name__)


class SubmissionAssembler:
    """Builds the one payload sent at the end of a questionnaire.

    Args:
        require_identity: refuse payloads where none of company name,
            contact person, phone or email is filled in
    """

    def __init__(self, *, require_identity: bool = True) -> None:
        self.require_identity = require_identity

    def assemble(
        self,
        client: ClientFields,
        responses: Mapping[int, str],
        attachments: Iterable[Attachment] = (),
    ) -> SubmissionPayload:
        """Validate the client fields and build the payload.

        Raises:
            MissingClientIdentity: if identity is required and missing.
        """
        if self.require_identity and not client.has_identity():
            raise MissingClientIdentity(
                "At least one of company name, contact person, phone or email is required"
            )

        payload = SubmissionPayload(
            client_company_name=client.company_name,
            client_contact_person=client.contact_person,
            client_phone=client.phone,
            client_email=client.email,
            client_address=client.address,
            responses={str(qid): value for qid, value in responses.items()},
            attachments=list(attachments),
        )
        logger.debug(
            "Assembled submission: %d responses, %d attachments",
            len(payload.responses), len(payload.attachments),
        )
        return payload
