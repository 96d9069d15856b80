"""
Shared test fixtures for the sample data API tests.
"""
import sys
import os
import pytest
from dependency_injector import providers
from fastapi.testclient import TestClient

# Ensure project root is importable
ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, ROOT)

from config import SEED_ROWS  # noqa: E402
from src.db import create_db_engine, init_schema, seed  # noqa: E402


@pytest.fixture
def empty_engine():
    """In-memory SQLite engine with the schema but no rows."""
    engine = create_db_engine("sqlite://")
    init_schema(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def engine(empty_engine):
    """In-memory SQLite engine after a single seed run."""
    seed(empty_engine)
    return empty_engine


@pytest.fixture
def seed_rows():
    return [{"id": record_id, "name": name} for record_id, name in SEED_ROWS]


@pytest.fixture
def container(engine):
    """Registered container whose engine points at the seeded test database."""
    from api.dependencies import build_container

    container = build_container()
    container.engine.override(providers.Object(engine))
    yield container
    container.unwire()
    container.engine.reset_override()


@pytest.fixture
def app(container):
    from api.main import create_app
    return create_app(container)


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c
