"""In-memory collaborators and catalog builders shared by the test modules.

The fakes implement the SDK's collaborator ABCs without any network:

  - FakeCatalog: returns a fixed question list, or raises a queued error
  - FakeObjectStore: issues sequential upload URLs and records transfers;
    individual file names can be made to fail
  - FakeGateway: records submitted payloads and returns a receipt
  - RecordingNotifier: collects notices and redirects for assertions
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from rental_questionnaire.errors import TransportError
from rental_questionnaire.interfaces import (
    CatalogSource,
    Notifier,
    ObjectStore,
    SubmissionGateway,
)
from rental_questionnaire.models.attachment import LocalFile
from rental_questionnaire.models.question import Question
from rental_questionnaire.models.submission import SubmissionPayload, SubmissionReceipt

GENERAL_INFO = "Informacje ogólne"


def make_question(
    qid: int,
    category: str,
    *,
    required: bool = False,
    position: int | None = None,
    type: str = "text",
    equipment: bool = False,
    active: bool = True,
) -> Question:
    return Question(
        id=qid,
        category=category,
        question=f"Pytanie {qid}",
        type=type,
        is_required=required,
        position=qid if position is None else position,
        is_active=active,
        category_type="equipment" if equipment else "general",
    )


def generator_catalog() -> list[Question]:
    """One mandatory step, Generator, and its accessory category.

    id=1 required text (Informacje ogólne), id=2 required (Generator),
    id=3 (Generator - wyposażenie).
    """
    return [
        make_question(1, GENERAL_INFO, required=True),
        make_question(2, "Generator", required=True, equipment=True),
        make_question(3, "Generator - wyposażenie", type="equipment_option", equipment=True),
    ]


def make_file(name: str, size: int = 10, content_type: str = "application/pdf") -> LocalFile:
    return LocalFile(name=name, content_type=content_type, content=b"x" * size)


class FakeCatalog(CatalogSource):
    def __init__(self, questions: list[Question] | None = None, error: Exception | None = None):
        self.questions = questions or []
        self.error = error
        self.calls = 0

    async def fetch_questions(self) -> list[Question]:
        self.calls += 1
        if self.error is not None:
            raise self.error
        return list(self.questions)


class FakeObjectStore(ObjectStore):
    """Issues ``https://storage.test/bucket/uploads/obj-<n>?sig=abc`` targets."""

    def __init__(self, fail_names: set[str] | None = None, error: Exception | None = None):
        self.fail_names = fail_names or set()
        self.error = error
        self.issued: list[str] = []
        self.transferred: list[tuple[str, str]] = []
        # Interleaving of calls, to check per-file ordering
        self.calls: list[str] = []

    async def issue_upload_target(self) -> str:
        target = f"https://storage.test/bucket/uploads/obj-{len(self.issued) + 1}?sig=abc"
        self.issued.append(target)
        self.calls.append("issue")
        return target

    async def transfer(self, target: str, file: LocalFile) -> None:
        self.calls.append(f"put:{file.name}")
        if self.error is not None:
            raise self.error
        if file.name in self.fail_names:
            raise TransportError(f"storage rejected {file.name}", status_code=500)
        self.transferred.append((target, file.name))


class FakeGateway(SubmissionGateway):
    def __init__(self, receipt: SubmissionReceipt | None = None, error: Exception | None = None):
        self.receipt = receipt or SubmissionReceipt(id=42, response_number="01/10.2026")
        self.error = error
        self.submitted: list[tuple[SubmissionPayload, str]] = []

    async def submit(self, payload: SubmissionPayload, *, route: str) -> SubmissionReceipt:
        if self.error is not None:
            raise self.error
        self.submitted.append((payload, route))
        return self.receipt


@dataclass
class RecordingNotifier(Notifier):
    notices: list[tuple[str, str]] = field(default_factory=list)
    redirects: list[str] = field(default_factory=list)

    def notify(self, message: str, *, variant: Any = "default") -> None:
        self.notices.append((message, variant))

    def redirect_to(self, path: str) -> None:
        self.redirects.append(path)

    @property
    def destructive(self) -> list[str]:
        return [m for m, v in self.notices if v == "destructive"]
