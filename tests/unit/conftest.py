import pytest
from doc_factories import InMemoryDocuments


@pytest.fixture()
def documents() -> InMemoryDocuments:
    return InMemoryDocuments()
