"""Submission models — the single payload sent when a questionnaire is finished.

The wire format is the one the submission endpoints accept::

    {
      "clientCompanyName": "...", "clientContactPerson": "...",
      "clientPhone": "...", "clientEmail": "...", "clientAddress": "...",
      "responses": {"<questionId>": "<answer>", ...},
      "attachments": [{"url", "name", "type", "size"}, ...]
    }
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from rental_questionnaire.models.attachment import Attachment


class ClientFields(BaseModel):
    """Client identity typed in above the questionnaire."""

    company_name: str = ""
    contact_person: str = ""
    phone: str = ""
    email: str = ""
    address: str = ""

    def has_identity(self) -> bool:
        """True if at least one identifying field is filled in.

        The address alone does not identify a client.
        """
        return any(
            (value or "").strip()
            for value in (self.company_name, self.contact_person, self.phone, self.email)
        )


class SubmissionPayload(BaseModel):
    """Everything a submission endpoint receives."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    client_company_name: str | None = None
    client_contact_person: str | None = None
    client_phone: str | None = None
    client_email: str | None = None
    client_address: str | None = None
    # JSON object keys are strings; ids are stringified on assembly
    responses: dict[str, str]
    attachments: list[Attachment] = []

    def to_wire(self) -> dict:
        return self.model_dump(by_alias=True, mode="json")

    def client_fields(self) -> ClientFields:
        return ClientFields(
            company_name=self.client_company_name or "",
            contact_person=self.client_contact_person or "",
            phone=self.client_phone or "",
            email=self.client_email or "",
            address=self.client_address or "",
        )


class SubmissionReceipt(BaseModel):
    """What the submission endpoint returns for the created record."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: int
    response_number: str | None = None
