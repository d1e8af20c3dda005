"""RentalApiClient tests against ``httpx.MockTransport``."""

import json

import httpx
import pytest

from rental_questionnaire.api_client import (
    CLIENT_SUBMIT_ROUTE,
    QUESTIONS_ROUTE,
    STAFF_SUBMIT_ROUTE,
    UPLOAD_ROUTE,
    RentalApiClient,
)
from rental_questionnaire.constants import MESSAGES
from rental_questionnaire.errors import AuthorizationError, TransportError
from rental_questionnaire.flow import NeedsAssessmentFlow
from rental_questionnaire.models.attachment import LocalFile
from rental_questionnaire.models.submission import SubmissionPayload

BASE = "https://rental.test"


def client_for(handler, **kwargs):
    return RentalApiClient(BASE, transport=httpx.MockTransport(handler), **kwargs)


class TestCatalog:
    @pytest.mark.asyncio
    async def test_fetch_questions(self):
        def handler(request):
            assert request.url.path == QUESTIONS_ROUTE
            return httpx.Response(200, json=[
                {"id": 1, "category": "Informacje ogólne", "question": "Gdzie?", "isRequired": True},
                {"id": 2, "category": "Generator", "question": "Moc", "categoryType": "equipment"},
            ])

        async with client_for(handler) as api:
            questions = await api.fetch_questions()
        assert [q.id for q in questions] == [1, 2]
        assert questions[0].is_required
        assert questions[1].is_equipment

    @pytest.mark.asyncio
    async def test_server_error_is_transport_error(self):
        async with client_for(lambda r: httpx.Response(500)) as api:
            with pytest.raises(TransportError) as info:
                await api.fetch_questions()
        assert info.value.status_code == 500
        assert not isinstance(info.value, AuthorizationError)

    @pytest.mark.asyncio
    async def test_network_error_is_transport_error(self):
        def handler(request):
            raise httpx.ConnectError("refused", request=request)

        async with client_for(handler) as api:
            with pytest.raises(TransportError):
                await api.fetch_questions()

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status", [401, 403])
    async def test_auth_statuses(self, status):
        async with client_for(lambda r: httpx.Response(status)) as api:
            with pytest.raises(AuthorizationError):
                await api.fetch_questions()


class TestUpload:
    @pytest.mark.asyncio
    async def test_issue_and_transfer(self):
        seen = []

        def handler(request):
            seen.append(request)
            if request.url.path == UPLOAD_ROUTE:
                return httpx.Response(200, json={"uploadURL": "https://storage.test/b/uploads/u1?sig=x"})
            return httpx.Response(200)

        async with client_for(handler, user_id="emp-1", role="employee") as api:
            target = await api.issue_upload_target()
            await api.transfer(target, LocalFile(name="a.pdf", content_type="application/pdf", content=b"abc"))

        issue, put = seen
        assert issue.method == "POST"
        assert issue.headers["X-User-ID"] == "emp-1"
        assert put.method == "PUT"
        assert put.url.host == "storage.test"
        assert put.content == b"abc"
        assert put.headers["Content-Type"] == "application/pdf"
        assert "X-User-ID" not in put.headers

    @pytest.mark.asyncio
    async def test_missing_upload_url(self):
        async with client_for(lambda r: httpx.Response(200, json={})) as api:
            with pytest.raises(TransportError):
                await api.issue_upload_target()


class TestSubmit:
    @pytest.mark.asyncio
    @pytest.mark.parametrize("route", [CLIENT_SUBMIT_ROUTE, STAFF_SUBMIT_ROUTE])
    async def test_posts_wire_payload(self, route):
        bodies = []

        def handler(request):
            assert request.url.path == route
            bodies.append(json.loads(request.content))
            return httpx.Response(200, json={"id": 7, "responseNumber": "CLIENT-011234/10.2026"})

        payload = SubmissionPayload(client_company_name="Budex", responses={"1": "a"})
        async with client_for(handler) as api:
            receipt = await api.submit(payload, route=route)

        assert receipt.id == 7
        assert receipt.response_number == "CLIENT-011234/10.2026"
        assert bodies[0]["clientCompanyName"] == "Budex"
        assert bodies[0]["responses"] == {"1": "a"}


class TestMalformedBodies:
    @pytest.mark.asyncio
    @pytest.mark.parametrize("body", [
        b'[{"id": "x"}]',
        b"<html>ok</html>",
        b'{"id": 1}',
        b'[{"id": 1, "category": "A", "question": "Q"}, {"id": 1, "category": "A", "question": "Q"}]',
    ])
    async def test_catalog_body_is_transport_error(self, body):
        async with client_for(lambda r: httpx.Response(200, content=body)) as api:
            with pytest.raises(TransportError) as info:
                await api.fetch_questions()
        assert not isinstance(info.value, AuthorizationError)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("body", [b"<html>ok</html>", b'{"responseNumber": "01/10.2026"}', b"[]"])
    async def test_submit_body_is_transport_error(self, body):
        payload = SubmissionPayload(client_company_name="Budex", responses={"1": "a"})
        async with client_for(lambda r: httpx.Response(200, content=body)) as api:
            with pytest.raises(TransportError):
                await api.submit(payload, route=CLIENT_SUBMIT_ROUTE)


class TestFlowOverHttp:
    @pytest.mark.asyncio
    async def test_malformed_catalog_is_reported(self, notifier):
        def handler(request):
            return httpx.Response(200, json=[{"id": "x"}])

        async with client_for(handler) as api:
            flow = NeedsAssessmentFlow(
                catalog=api, store=api, gateway=api, notifier=notifier, redirect_delay=0,
            )
            assert await flow.load() is False
        assert notifier.destructive == [MESSAGES["catalog_failed"]]

    @pytest.mark.asyncio
    async def test_malformed_receipt_keeps_state(self, notifier):
        def handler(request):
            if request.url.path == QUESTIONS_ROUTE:
                return httpx.Response(200, json=[
                    {"id": 1, "category": "Informacje ogólne", "question": "Gdzie?", "isRequired": True},
                ])
            return httpx.Response(200, content=b"<html>ok</html>")

        async with client_for(handler) as api:
            flow = NeedsAssessmentFlow(
                catalog=api, store=api, gateway=api, notifier=notifier, redirect_delay=0,
            )
            assert await flow.load() is True
            flow.set_client_fields(company_name="Budex")
            flow.set_response(1, "Warszawa")
            assert await flow.submit() is None

        assert notifier.destructive == [MESSAGES["submit_failed"]]
        assert notifier.redirects == []
        assert flow.session.responses.get(1) == "Warszawa"
