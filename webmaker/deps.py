"""
Dependencies module - shared components injected into route handlers.

All components are process-wide singletons built from settings. Tests
replace them through `app.dependency_overrides`.
"""

from webmaker.core.config import settings
from webmaker.generation import GenerationOrchestrator
from webmaker.history import HistoryStore
from webmaker.storage import SpecificationRepository, StorageKeys, build_store

# ---------------------------------------------------------------------------
# SINGLETONS
# ---------------------------------------------------------------------------
# build_store() never touches the database; the kv_entries table is
# created on first access.
store = build_store(settings.DATABASE_URL)
storage_keys = StorageKeys(settings.STORAGE_NAMESPACE)

spec_repository = SpecificationRepository(store, storage_keys)
history_store = HistoryStore(store, storage_keys, limit=settings.HISTORY_LIMIT)
orchestrator = GenerationOrchestrator(history=history_store)


def get_spec_repository() -> SpecificationRepository:
    return spec_repository


def get_history_store() -> HistoryStore:
    return history_store


def get_orchestrator() -> GenerationOrchestrator:
    return orchestrator
