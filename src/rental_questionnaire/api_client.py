"""RentalApiClient — async httpx client for the needs-assessment REST API.

Implements the three network-facing interfaces of the SDK against the routes
served by ``rental_server``:

    GET  /api/needs-assessment/questions     -> CatalogSource.fetch_questions
    POST /api/objects/upload                 -> ObjectStore.issue_upload_target
    PUT  <uploadURL>                         -> ObjectStore.transfer
    POST /api/client/needs-assessment        -> SubmissionGateway.submit (client)
    POST /api/needs-assessment/responses     -> SubmissionGateway.submit (staff)

Every failure, including a 2xx whose body does not parse, is raised as
:class:`TransportError`; HTTP 401/403 become :class:`AuthorizationError`.
There are no retries.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from rental_questionnaire.catalog import parse_questions
from rental_questionnaire.errors import AuthorizationError, TransportError
from rental_questionnaire.interfaces import CatalogSource, ObjectStore, SubmissionGateway
from rental_questionnaire.models.attachment import LocalFile
from rental_questionnaire.models.question import Question
from rental_questionnaire.models.submission import SubmissionPayload, SubmissionReceipt

logger = logging.getLogger(__name__)

QUESTIONS_ROUTE = "/api/needs-assessment/questions"
UPLOAD_ROUTE = "/api/objects/upload"
CLIENT_SUBMIT_ROUTE = "/api/client/needs-assessment"
STAFF_SUBMIT_ROUTE = "/api/needs-assessment/responses"


def _raise_for_status(resp: httpx.Response, what: str) -> None:
    if resp.status_code in (401, 403):
        raise AuthorizationError(
            f"{what} refused with HTTP {resp.status_code}", status_code=resp.status_code,
        )
    if resp.is_error:
        raise TransportError(
            f"{what} failed with HTTP {resp.status_code}", status_code=resp.status_code,
        )


class RentalApiClient(CatalogSource, ObjectStore, SubmissionGateway):
    """Async HTTP client for the rental needs-assessment API.

    Args:
        base_url: server root, e.g. ``https://rental.example.com``
        user_id: optional ``X-User-ID`` for staff endpoints
        role: optional ``X-User-Role`` for staff endpoints
        timeout: per-request timeout in seconds
        transport: optional httpx transport (tests use ``httpx.MockTransport``)
    """

    def __init__(
        self,
        base_url: str,
        *,
        user_id: str | None = None,
        role: str | None = None,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._headers: dict[str, str] = {}
        if user_id:
            self._headers["X-User-ID"] = user_id
        if role:
            self._headers["X-User-Role"] = role
        self._client = httpx.AsyncClient(
            base_url=self._base_url, timeout=timeout, transport=transport,
        )

    async def __aenter__(self) -> RentalApiClient:
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    # ------------------------------------------------------------------
    # CatalogSource
    # ------------------------------------------------------------------

    async def fetch_questions(self) -> list[Question]:
        resp = await self._request("GET", QUESTIONS_ROUTE, what="Catalog fetch")
        try:
            questions = parse_questions(resp.json())
        except (TypeError, ValueError) as exc:
            # pydantic.ValidationError and JSONDecodeError are ValueErrors
            raise TransportError(f"Catalog response is malformed: {exc}") from exc
        logger.info("Fetched %d questions", len(questions))
        return questions

    # ------------------------------------------------------------------
    # ObjectStore
    # ------------------------------------------------------------------

    async def issue_upload_target(self) -> str:
        resp = await self._request("POST", UPLOAD_ROUTE, what="Upload URL request")
        try:
            return resp.json()["uploadURL"]
        except (KeyError, TypeError, ValueError) as exc:
            raise TransportError("Upload URL response has no uploadURL") from exc

    async def transfer(self, target: str, file: LocalFile) -> None:
        # Direct to storage: no API identity headers
        try:
            resp = await self._client.put(
                target,
                content=file.content,
                headers={"Content-Type": file.content_type},
            )
        except httpx.HTTPError as exc:
            raise TransportError(f"Upload of {file.name} failed: {exc}") from exc
        _raise_for_status(resp, f"Upload of {file.name}")

    # ------------------------------------------------------------------
    # SubmissionGateway
    # ------------------------------------------------------------------

    async def submit(self, payload: SubmissionPayload, *, route: str) -> SubmissionReceipt:
        resp = await self._request("POST", route, what="Submission", json=payload.to_wire())
        try:
            receipt = SubmissionReceipt.model_validate(resp.json())
        except ValueError as exc:
            raise TransportError(f"Submission response is malformed: {exc}") from exc
        logger.info("Submitted needs assessment id=%s number=%s", receipt.id, receipt.response_number)
        return receipt

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    async def _request(
        self, method: str, path: str, *, what: str, json: Any = None,
    ) -> httpx.Response:
        try:
            resp = await self._client.request(method, path, headers=self._headers, json=json)
        except httpx.HTTPError as exc:
            raise TransportError(f"{what} failed: {exc}") from exc
        _raise_for_status(resp, what)
        return resp
