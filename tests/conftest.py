import pytest

from helpers.fakes import (
    FakeCatalog,
    FakeGateway,
    FakeObjectStore,
    RecordingNotifier,
    generator_catalog,
)
from rental_questionnaire.catalog import CatalogStore


@pytest.fixture
def questions():
    return generator_catalog()


@pytest.fixture(scope="session")
def catalog_store():
    """The shipped catalog/needs_assessment.yaml, loaded once."""
    store = CatalogStore()
    store.load()
    return store


@pytest.fixture
def object_store():
    return FakeObjectStore()


@pytest.fixture
def gateway():
    return FakeGateway()


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def fake_catalog(questions):
    return FakeCatalog(questions)
