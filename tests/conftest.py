"""Pytest configuration and fixtures for search query tests."""

import pytest
from dotenv import load_dotenv
from mock_backend import InMemoryDocumentHandle, RecordingRelationalHandle

from crossquery.engine import SearchEngine
from crossquery.schema import RelatedEntity

# Load environment variables
load_dotenv()


class FakeModel:
    """Stand-in for a relational model class; only its identity matters."""

    def __init__(self, name: str, schema: str = "public") -> None:
        self.name = name
        self.schema = schema

    def __repr__(self) -> str:
        return f"FakeModel({self.schema}.{self.name})"


def with_schema(model: FakeModel, alias: str) -> FakeModel:
    return FakeModel(model.name, schema=alias)


@pytest.fixture
def models():
    return {
        "profile": FakeModel("profiles"),
        "address": FakeModel("addresses"),
        "country": FakeModel("countries"),
        "orders": FakeModel("orders"),
    }


@pytest.fixture
def related_entities(models):
    """Relationship map for a `users` root table."""
    return {name: RelatedEntity(model, aliaser=with_schema) for name, model in models.items()}


@pytest.fixture
def relational_handle():
    rows = [{"id": i, "name": f"user{i}"} for i in range(25)]
    return RecordingRelationalHandle(rows=rows)


@pytest.fixture(scope="session")
def sample_movies():
    """Sample movie documents with embedded sub-documents."""
    return [
        {"_id": "m1", "title": "Alien", "year": "1979", "imdb": {"rating": "8.5"}, "director_id": "d1"},
        {"_id": "m2", "title": "Aliens", "year": "1986", "imdb": {"rating": "8.4"}, "director_id": "d2"},
        {"_id": "m3", "title": "Blade Runner", "year": "1982", "imdb": {"rating": "8.1"}, "director_id": "d1"},
        {"_id": "m4", "title": "Heat", "year": "1995", "imdb": {"rating": "8.3"}, "director_id": "d3"},
        {"_id": "m5", "title": "Solaris", "year": "1972", "imdb": {"rating": "8.0"}, "director_id": "d9"},
    ]


@pytest.fixture
def document_handle(sample_movies):
    directors = [
        {"_id": "d1", "name": "Ridley Scott"},
        {"_id": "d2", "name": "James Cameron"},
        {"_id": "d3", "name": "Michael Mann"},
    ]
    return InMemoryDocumentHandle(sample_movies, collections={"directors": directors})


@pytest.fixture
def engine():
    return SearchEngine()
