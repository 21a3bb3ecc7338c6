"""
Storage Module - Fault-tolerant persistence for the current spec, history and theme.
"""

from webmaker.storage.kv_store import (
    InMemoryBackend,
    KeyValueStore,
    SqlAlchemyBackend,
    StorageBackend,
    StorageKeys,
    build_store,
)
from webmaker.storage.spec_repository import SpecificationRepository

__all__ = [
    "InMemoryBackend",
    "KeyValueStore",
    "SqlAlchemyBackend",
    "StorageBackend",
    "StorageKeys",
    "build_store",
    "SpecificationRepository",
]
