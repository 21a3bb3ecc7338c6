"""
History Store - Bounded, newest-first log of completed generations.

The whole history is persisted as one JSON array under the history key
and re-read on every list() so that concurrent writers (another worker,
a manual edit of the database) are always reflected.

Capacity Policy:
================
record() prepends the new item and truncates to `limit` (default 20),
so the oldest items are evicted first.

Corruption Policy:
==================
- Missing key, invalid JSON or a non-array value -> empty history
- Individual malformed entries -> skipped with a warning

Usage:
======
    history = HistoryStore(store, keys, limit=20)
    item = history.record(html, spec)
    history.list()[0].id == item.id   # True
"""

import json
import logging
import uuid
from datetime import datetime, timezone
from typing import List, Optional

from pydantic import Field, ValidationError, field_validator, model_validator

from webmaker.core.exceptions import DeserializationFailure
from webmaker.monitoring import generation_logger
from webmaker.schemas.spec import CamelModel, Specification
from webmaker.storage.kv_store import KeyValueStore, StorageKeys


logger = logging.getLogger("webmaker.history")

DEFAULT_HISTORY_LIMIT = 20


# ---------------------------------------------------------------------------
# MODEL
# ---------------------------------------------------------------------------

class HistoryItem(CamelModel):
    """One completed generation. Never mutated after creation."""

    id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    spec: Specification
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    html: str = ""

    @model_validator(mode="before")
    @classmethod
    def _accept_html_snippet(cls, data):
        # Older clients stored the document under "htmlSnippet"
        if isinstance(data, dict) and "html" not in data and "htmlSnippet" in data:
            data = {**data, "html": data["htmlSnippet"]}
        return data

    @field_validator("created_at", mode="before")
    @classmethod
    def _accept_epoch_millis(cls, value):
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            try:
                return datetime.fromtimestamp(value / 1000, tz=timezone.utc)
            except (OverflowError, OSError, ValueError) as e:
                raise ValueError(f"createdAt out of range: {value!r}") from e
        return value


# ---------------------------------------------------------------------------
# STORE
# ---------------------------------------------------------------------------

class HistoryStore:
    """Persistence of HistoryItems through a KeyValueStore."""

    def __init__(
        self,
        store: KeyValueStore,
        keys: Optional[StorageKeys] = None,
        limit: int = DEFAULT_HISTORY_LIMIT,
    ):
        self._store = store
        self._keys = keys or StorageKeys()
        self.limit = limit

    def record(self, html: str, spec: Specification) -> HistoryItem:
        """
        Prepend a new item built from `html` and a deep copy of `spec`.

        Returns:
            The recorded HistoryItem
        """
        item = HistoryItem(spec=spec.snapshot(), html=html)
        items = [item, *self.list()][: self.limit]
        self._persist(items)
        generation_logger.log_history_recorded(item.id, len(items))
        return item

    def list(self) -> List[HistoryItem]:
        """Newest-first items currently persisted."""
        raw = self._store.get(self._keys.history)
        if not raw:
            return []

        try:
            data = self._decode(raw)
        except DeserializationFailure as e:
            logger.warning(f"Persisted history ignored: {e}")
            return []

        items = []
        for index, entry in enumerate(data):
            try:
                items.append(HistoryItem.model_validate(entry))
            except ValidationError as e:
                logger.warning(f"Skipping malformed history entry #{index}: {e.error_count()} error(s)")
        return items

    def get(self, item_id: str) -> Optional[HistoryItem]:
        for item in self.list():
            if item.id == item_id:
                return item
        return None

    def clear(self) -> None:
        self._store.remove(self._keys.history)
        logger.info("History cleared")

    @staticmethod
    def _decode(raw: str) -> list:
        """
        Raises:
            DeserializationFailure: if `raw` is not a JSON array
        """
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            raise DeserializationFailure(f"not valid JSON ({e})") from e
        if not isinstance(data, list):
            raise DeserializationFailure(f"expected a list, got {type(data).__name__}")
        return data

    def _persist(self, items: List[HistoryItem]) -> None:
        payload = [item.model_dump(mode="json", by_alias=True) for item in items]
        self._store.set(self._keys.history, json.dumps(payload))
