"""Abstract interfaces for the questionnaire's external collaborators.

The SDK never talks to the network or the UI directly.  Each side effect
goes through one of these ABCs so the core can be exercised without a
browser, a server or object storage:

  - :class:`CatalogSource` — fetches the question catalog
  - :class:`ObjectStore` — issues one-time upload targets and receives bytes
  - :class:`SubmissionGateway` — accepts the finished questionnaire
  - :class:`Notifier` — transient notices and navigation

Typical integration flow::

    backend = RentalApiClient("https://rental.example.com")
    flow = NeedsAssessmentFlow(
        catalog=backend, store=backend, gateway=backend,
        notifier=MyToastNotifier(), variant=FlowVariant.CLIENT,
    )
    await flow.load()
    # ... user answers, uploads, navigates ...
    await flow.submit()

:class:`rental_questionnaire.api_client.RentalApiClient` implements the three
network interfaces against the REST API served by ``rental_server``.
"""

from abc import ABC, abstractmethod
from typing import Literal

from rental_questionnaire.models.attachment import LocalFile
from rental_questionnaire.models.question import Question
from rental_questionnaire.models.submission import SubmissionPayload, SubmissionReceipt

NoticeVariant = Literal["default", "destructive"]


class CatalogSource(ABC):
    """Where the question catalog comes from."""

    @abstractmethod
    async def fetch_questions(self) -> list[Question]:
        """Return the catalog's questions.

        Raises
        ------
        TransportError
            If the catalog cannot be fetched.
        """
        ...


class ObjectStore(ABC):
    """Two-step upload: issue a writable target, then transfer the bytes."""

    @abstractmethod
    async def issue_upload_target(self) -> str:
        """Return a one-time writable URL for a single object."""
        ...

    @abstractmethod
    async def transfer(self, target: str, file: LocalFile) -> None:
        """Write ``file`` to ``target``.

        Raises
        ------
        TransportError
            If the storage refuses or the connection fails.
        """
        ...


class SubmissionGateway(ABC):
    """Accepts a finished questionnaire and creates a record for it."""

    @abstractmethod
    async def submit(self, payload: SubmissionPayload, *, route: str) -> SubmissionReceipt:
        """Send ``payload`` to ``route`` and return the created record's id.

        No deduplication: two calls with equal payloads create two records.
        """
        ...


class Notifier(ABC):
    """UI capabilities injected into the flow: toasts and redirects."""

    @abstractmethod
    def notify(self, message: str, *, variant: NoticeVariant = "default") -> None:
        """Show a transient notice."""
        ...

    @abstractmethod
    def redirect_to(self, path: str) -> None:
        """Navigate away from the questionnaire."""
        ...
