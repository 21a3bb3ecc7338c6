"""
Tests for the key-value store and its backends.

The store must never raise: every backend fault is logged and turned
into the safe default.
"""

import logging

import pytest

from webmaker.core.exceptions import StorageFault
from webmaker.storage import (
    InMemoryBackend,
    KeyValueStore,
    SqlAlchemyBackend,
    StorageBackend,
    StorageKeys,
    build_store,
)


class FailingBackend(StorageBackend):
    """Backend whose every operation fails."""

    def __init__(self, error: Exception):
        self.error = error

    def get(self, key):
        raise self.error

    def set(self, key, value):
        raise self.error

    def remove(self, key):
        raise self.error


# ---------------------------------------------------------------------------
# IN-MEMORY BACKEND
# ---------------------------------------------------------------------------

class TestInMemoryStore:

    def test_get_missing_key_returns_none(self, kv_store):
        assert kv_store.get("aiwm/missing") is None

    def test_set_then_get(self, kv_store):
        kv_store.set("aiwm/theme", "dark")
        assert kv_store.get("aiwm/theme") == "dark"

    def test_set_overwrites(self, kv_store):
        kv_store.set("aiwm/theme", "dark")
        kv_store.set("aiwm/theme", "light")
        assert kv_store.get("aiwm/theme") == "light"

    def test_remove(self, kv_store, backend):
        kv_store.set("aiwm/theme", "dark")
        kv_store.remove("aiwm/theme")
        assert kv_store.get("aiwm/theme") is None
        assert len(backend) == 0

    def test_remove_missing_key_is_noop(self, kv_store):
        kv_store.remove("aiwm/never-set")


# ---------------------------------------------------------------------------
# SQLALCHEMY BACKEND
# ---------------------------------------------------------------------------

class TestSqlAlchemyStore:

    def test_get_before_any_write_returns_none(self, sql_store):
        assert sql_store.get("aiwm/spec") is None

    def test_set_get_overwrite_remove(self, sql_store):
        sql_store.set("aiwm/spec", '{"projectName": "Acme"}')
        assert sql_store.get("aiwm/spec") == '{"projectName": "Acme"}'

        sql_store.set("aiwm/spec", '{"projectName": "Globex"}')
        assert sql_store.get("aiwm/spec") == '{"projectName": "Globex"}'

        sql_store.remove("aiwm/spec")
        assert sql_store.get("aiwm/spec") is None

    def test_values_survive_a_new_store_on_same_engine(self, sql_store):
        sql_store.set("aiwm/theme", "dark")
        engine = sql_store.backend._engine

        reopened = KeyValueStore(SqlAlchemyBackend(engine=engine))
        assert reopened.get("aiwm/theme") == "dark"

    def test_backend_requires_url_or_engine(self):
        with pytest.raises(ValueError):
            SqlAlchemyBackend()

    def test_unreachable_database_raises_storage_fault(self):
        backend = SqlAlchemyBackend("sqlite:////nonexistent-webmaker-dir/sub/webmaker.db")
        with pytest.raises(StorageFault) as exc_info:
            backend.get("aiwm/spec")
        assert exc_info.value.operation == "get"
        assert exc_info.value.key == "aiwm/spec"

    def test_unreachable_database_is_absorbed_by_store(self):
        store = KeyValueStore(SqlAlchemyBackend("sqlite:////nonexistent-webmaker-dir/sub/webmaker.db"))
        assert store.get("aiwm/spec") is None
        store.set("aiwm/spec", "{}")


# ---------------------------------------------------------------------------
# FAULT TOLERANCE
# ---------------------------------------------------------------------------

class TestFaultTolerance:

    @pytest.mark.parametrize("error", [
        StorageFault("quota exceeded", operation="set"),
        OSError("disk full"),
        RuntimeError("unexpected"),
    ])
    def test_faults_become_safe_defaults(self, error):
        store = KeyValueStore(FailingBackend(error))

        assert store.get("aiwm/spec") is None
        store.set("aiwm/spec", "{}")
        store.remove("aiwm/spec")

    def test_faults_are_logged_with_key(self, caplog):
        store = KeyValueStore(FailingBackend(OSError("disk full")))

        with caplog.at_level(logging.ERROR, logger="webmaker.storage"):
            store.set("aiwm/history", "[]")

        assert "aiwm/history" in caplog.text
        assert "disk full" in caplog.text


# ---------------------------------------------------------------------------
# FACTORY AND KEYS
# ---------------------------------------------------------------------------

class TestBuildStore:

    def test_empty_url_uses_memory(self):
        store = build_store("")
        assert isinstance(store.backend, InMemoryBackend)

    def test_url_uses_sqlalchemy(self):
        store = build_store("sqlite:///:memory:")
        assert isinstance(store.backend, SqlAlchemyBackend)
        store.set("k", "v")
        assert store.get("k") == "v"


def test_storage_keys_are_namespaced():
    keys = StorageKeys("aiwm")
    assert keys.spec == "aiwm/spec"
    assert keys.history == "aiwm/history"
    assert keys.theme == "aiwm/theme"

    other = StorageKeys("staging")
    assert other.spec == "staging/spec"
