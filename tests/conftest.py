"""
Test configuration and fixtures for pytest.

This module provides shared fixtures used across all tests:
- Key-value stores (in-memory dict and SQLite in-memory)
- Repository, history store and orchestrator wired to those stores
- A mocked remote generation client
- Test client (FastAPI TestClient) with dependencies overridden
"""

import pytest
from typing import Generator
from unittest.mock import AsyncMock, MagicMock

from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool

from webmaker.deps import get_history_store, get_orchestrator, get_spec_repository
from webmaker.generation import GenerationOrchestrator, RemoteGenerationResponse
from webmaker.history import HistoryStore
from webmaker.main import app
from webmaker.schemas.spec import FeatureFlags, SeoSettings, Specification
from webmaker.storage import (
    InMemoryBackend,
    KeyValueStore,
    SpecificationRepository,
    SqlAlchemyBackend,
    StorageKeys,
)


# ---------------------------------------------------------------------------
# STORAGE FIXTURES
# ---------------------------------------------------------------------------

@pytest.fixture
def backend() -> InMemoryBackend:
    return InMemoryBackend()


@pytest.fixture
def kv_store(backend: InMemoryBackend) -> KeyValueStore:
    """Fault-tolerant store over a fresh dict backend."""
    return KeyValueStore(backend)


@pytest.fixture
def sql_store() -> Generator[KeyValueStore, None, None]:
    """
    Fault-tolerant store over SQLite in-memory.

    StaticPool keeps the same connection across all operations.
    """
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    yield KeyValueStore(SqlAlchemyBackend(engine=engine))
    engine.dispose()


@pytest.fixture
def storage_keys() -> StorageKeys:
    return StorageKeys("aiwm")


@pytest.fixture
def spec_repository(kv_store: KeyValueStore, storage_keys: StorageKeys) -> SpecificationRepository:
    return SpecificationRepository(kv_store, storage_keys)


@pytest.fixture
def history_store(kv_store: KeyValueStore, storage_keys: StorageKeys) -> HistoryStore:
    return HistoryStore(kv_store, storage_keys, limit=20)


# ---------------------------------------------------------------------------
# SPEC FIXTURES
# ---------------------------------------------------------------------------

@pytest.fixture
def acme_spec() -> Specification:
    """
    Specification used by the end-to-end scenarios.

    Returns:
        "Acme" landing page with a brief and the contact form enabled
    """
    return Specification(
        project_name="Acme",
        brief="A modern bakery site",
        pages=["Home", "About"],
        include=FeatureFlags(contact_form=True),
        seo=SeoSettings(),
    )


# ---------------------------------------------------------------------------
# GENERATION FIXTURES
# ---------------------------------------------------------------------------

@pytest.fixture
def remote_client() -> MagicMock:
    """
    Mocked RemoteGenerationClient.

    Defaults to a 500 answer; tests set `remote_client.generate.return_value`
    or `side_effect` for other scenarios.
    """
    client = MagicMock()
    client.generate = AsyncMock(return_value=RemoteGenerationResponse(status_code=500))
    return client


@pytest.fixture
def orchestrator(history_store: HistoryStore, remote_client: MagicMock) -> GenerationOrchestrator:
    return GenerationOrchestrator(history=history_store, client=remote_client)


# ---------------------------------------------------------------------------
# API FIXTURES
# ---------------------------------------------------------------------------

@pytest.fixture
def client(
    spec_repository: SpecificationRepository,
    history_store: HistoryStore,
    orchestrator: GenerationOrchestrator,
) -> Generator[TestClient, None, None]:
    """
    Create a test client wired to the in-memory fixtures.

    Overrides the shared singletons so tests never touch the configured
    database or the real generation service.
    """
    app.dependency_overrides[get_spec_repository] = lambda: spec_repository
    app.dependency_overrides[get_history_store] = lambda: history_store
    app.dependency_overrides[get_orchestrator] = lambda: orchestrator

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()
