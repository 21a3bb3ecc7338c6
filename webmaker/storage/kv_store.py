"""
Key-Value Store - Fault-tolerant string storage for specs, history and theme.

Every persisted value in Webmaker is a string under a namespaced key
("aiwm/spec", "aiwm/history", "aiwm/theme"). This module provides:

- StorageBackend: the raw contract (may raise StorageFault)
- SqlAlchemyBackend: persistent backend on any SQLAlchemy database
- InMemoryBackend: dict backend (tests, storage-disabled mode)
- KeyValueStore: wrapper that never raises

Failure Policy:
===============
KeyValueStore absorbs every backend fault, logs it, and returns the safe
default (None for get, no-op for set/remove). Business logic therefore
never branches on storage exceptions; a failed write simply leaves the
previous value in place.

Usage:
======
    store = KeyValueStore(SqlAlchemyBackend("sqlite:///./webmaker.db"))
    store.set("aiwm/theme", "dark")
    store.get("aiwm/theme")        # "dark"
    store.get("aiwm/missing")      # None
"""

import logging
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Dict, Optional

from sqlalchemy import DateTime, String, Text, create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, sessionmaker
from sqlalchemy.pool import StaticPool

from webmaker.core.exceptions import StorageFault


logger = logging.getLogger("webmaker.storage")


# ---------------------------------------------------------------------------
# ORM MODEL
# ---------------------------------------------------------------------------

class Base(DeclarativeBase):
    pass


class KeyValueEntry(Base):
    """One row per persisted key."""

    __tablename__ = "kv_entries"

    key: Mapped[str] = mapped_column(String(255), primary_key=True)
    value: Mapped[str] = mapped_column(Text, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )


# ---------------------------------------------------------------------------
# BACKENDS
# ---------------------------------------------------------------------------

class StorageBackend(ABC):
    """
    Raw storage contract.

    Implementations raise StorageFault on any failure; they are not meant
    to be used directly by business code (wrap them in KeyValueStore).
    """

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        pass

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        pass

    @abstractmethod
    def remove(self, key: str) -> None:
        pass


class InMemoryBackend(StorageBackend):
    """Dict-backed storage. Lost on restart."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def remove(self, key: str) -> None:
        self._data.pop(key, None)

    def __len__(self) -> int:
        return len(self._data)


class SqlAlchemyBackend(StorageBackend):
    """
    Persistent storage on a SQLAlchemy database.

    The kv_entries table is created lazily on first use, so building the
    backend never touches the database and a broken URL only surfaces as
    a StorageFault inside an operation.
    """

    def __init__(self, database_url: Optional[str] = None, engine: Optional[Engine] = None):
        if engine is None:
            if not database_url:
                raise ValueError("Either database_url or engine must be provided")
            engine = self._create_engine(database_url)
        self._engine = engine
        self._session_factory = sessionmaker(autocommit=False, autoflush=False, bind=engine)
        self._schema_ready = False

    @staticmethod
    def _create_engine(database_url: str) -> Engine:
        if database_url.startswith("sqlite"):
            kwargs = {"connect_args": {"check_same_thread": False}}
            # In-memory SQLite lives inside a single connection
            if ":memory:" in database_url or database_url in ("sqlite://", "sqlite:///"):
                kwargs["poolclass"] = StaticPool
            return create_engine(database_url, **kwargs)
        return create_engine(database_url, pool_pre_ping=True)

    def _ensure_schema(self) -> None:
        if not self._schema_ready:
            Base.metadata.create_all(bind=self._engine)
            self._schema_ready = True

    def get(self, key: str) -> Optional[str]:
        try:
            self._ensure_schema()
            with self._session_factory() as session:
                entry = session.get(KeyValueEntry, key)
                return entry.value if entry is not None else None
        except SQLAlchemyError as e:
            raise StorageFault(str(e), operation="get", key=key) from e

    def set(self, key: str, value: str) -> None:
        try:
            self._ensure_schema()
            with self._session_factory() as session:
                entry = session.get(KeyValueEntry, key)
                if entry is None:
                    session.add(KeyValueEntry(key=key, value=value))
                else:
                    entry.value = value
                session.commit()
        except SQLAlchemyError as e:
            raise StorageFault(str(e), operation="set", key=key) from e

    def remove(self, key: str) -> None:
        try:
            self._ensure_schema()
            with self._session_factory() as session:
                entry = session.get(KeyValueEntry, key)
                if entry is not None:
                    session.delete(entry)
                    session.commit()
        except SQLAlchemyError as e:
            raise StorageFault(str(e), operation="remove", key=key) from e


# ---------------------------------------------------------------------------
# FAULT-TOLERANT STORE
# ---------------------------------------------------------------------------

class KeyValueStore:
    """
    Never-raising facade over a StorageBackend.

    Any exception from the backend (StorageFault, but also unexpected
    errors such as a full disk surfacing as OSError) is logged and
    converted to the safe default.
    """

    def __init__(self, backend: StorageBackend):
        self._backend = backend

    @property
    def backend(self) -> StorageBackend:
        return self._backend

    def get(self, key: str) -> Optional[str]:
        try:
            return self._backend.get(key)
        except Exception as e:
            logger.error(f"Storage get failed for key '{key}': {e}")
            return None

    def set(self, key: str, value: str) -> None:
        try:
            self._backend.set(key, value)
        except Exception as e:
            logger.error(f"Storage set failed for key '{key}': {e}")

    def remove(self, key: str) -> None:
        try:
            self._backend.remove(key)
        except Exception as e:
            logger.error(f"Storage remove failed for key '{key}': {e}")


def build_store(database_url: str) -> KeyValueStore:
    """Create the store for a configured URL; empty URL means in-memory."""
    if not database_url:
        logger.warning("DATABASE_URL is empty, persistence disabled (in-memory store)")
        return KeyValueStore(InMemoryBackend())
    return KeyValueStore(SqlAlchemyBackend(database_url))


class StorageKeys:
    """Namespaced keys of the three persisted values."""

    def __init__(self, namespace: str = "aiwm"):
        self.spec = f"{namespace}/spec"
        self.history = f"{namespace}/history"
        self.theme = f"{namespace}/theme"
