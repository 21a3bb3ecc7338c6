"""
SpecificationRepository - The single owner of the persisted Specification.

Every edit of the current Specification goes through this repository,
which writes the full spec back to the KeyValueStore after each change.
The theme preference lives next to it under its own key.
"""

import json
import logging
from typing import Optional

from pydantic import ValidationError
from pydantic.alias_generators import to_camel

from webmaker.core.exceptions import DeserializationFailure, UnknownFeatureFlag, UnknownTemplate
from webmaker.schemas.spec import (
    TEMPLATE_IDS,
    FeatureFlags,
    Specification,
    SpecificationUpdate,
    Theme,
)
from webmaker.storage.kv_store import KeyValueStore, StorageKeys


logger = logging.getLogger("webmaker.storage.spec")


class SpecificationRepository:
    """
    Loads, edits and persists the current Specification.

    Usage:
        repo = SpecificationRepository(store)
        spec = repo.load()
        spec = repo.update(SpecificationUpdate(brief="A bakery"))
        spec = repo.toggle_page("FAQ")
    """

    def __init__(self, store: KeyValueStore, keys: Optional[StorageKeys] = None):
        self._store = store
        self._keys = keys or StorageKeys()

    # -------------------------------------------------------------------------
    # LOAD / SAVE
    # -------------------------------------------------------------------------

    def load(self) -> Specification:
        """
        Return the persisted spec, or the default spec when absent or corrupt.

        Corrupt data is left in place; the next save overwrites it.
        """
        raw = self._store.get(self._keys.spec)
        if not raw:
            return Specification()
        try:
            return self._decode(raw)
        except DeserializationFailure as e:
            logger.warning(f"Persisted specification is corrupt, using defaults: {e}")
            return Specification()

    @staticmethod
    def _decode(raw: str) -> Specification:
        """
        Raises:
            DeserializationFailure: if `raw` is not a valid Specification
        """
        try:
            return Specification.model_validate(json.loads(raw))
        except (json.JSONDecodeError, ValidationError) as e:
            raise DeserializationFailure(str(e)) from e

    def save(self, spec: Specification) -> Specification:
        self._store.set(self._keys.spec, json.dumps(spec.to_payload()))
        return spec

    def reset(self) -> Specification:
        return self.save(Specification())

    # -------------------------------------------------------------------------
    # EDITS
    # -------------------------------------------------------------------------

    def update(self, changes: SpecificationUpdate) -> Specification:
        """
        Apply the fields present in `changes` and persist.

        Nested objects (include, seo) are merged key by key, so a change of
        one flag keeps the others.
        """
        spec = self.load()
        data = changes.model_dump(exclude_unset=True, exclude_none=True)
        if not data:
            return spec
        merged = spec.model_dump()
        for name, value in data.items():
            if isinstance(value, dict):
                merged[name].update(value)
            else:
                merged[name] = value
        return self.save(Specification.model_validate(merged))

    def toggle_page(self, page: str) -> Specification:
        """Remove every occurrence of `page` if present, else append it."""
        spec = self.load()
        if page in spec.pages:
            spec.pages = [p for p in spec.pages if p != page]
        else:
            spec.pages = [*spec.pages, page]
        return self.save(spec)

    def toggle_include(self, flag: str) -> Specification:
        """
        Flip a feature flag.

        Accepts both spellings ("contactForm" or "contact_form").

        Raises:
            UnknownFeatureFlag: if the flag does not exist
        """
        field_name = self._resolve_flag(flag)
        spec = self.load()
        current = getattr(spec.include, field_name)
        spec.include = spec.include.model_copy(update={field_name: not current})
        return self.save(spec)

    def pick_template(self, template_id: str) -> Specification:
        """
        Raises:
            UnknownTemplate: if the id is not in the catalog
        """
        if template_id not in TEMPLATE_IDS:
            raise UnknownTemplate(f"Unknown template: {template_id}")
        spec = self.load()
        spec.template_id = template_id
        return self.save(spec)

    @staticmethod
    def _resolve_flag(flag: str) -> str:
        for name in FeatureFlags.model_fields:
            if flag in (name, to_camel(name)):
                return name
        raise UnknownFeatureFlag(f"Unknown feature flag: {flag}")

    # -------------------------------------------------------------------------
    # THEME
    # -------------------------------------------------------------------------

    def load_theme(self) -> str:
        """Stored preference, else the spec's theme, else light."""
        stored = self._store.get(self._keys.theme)
        if stored:
            return stored
        return self.load().theme or Theme.LIGHT.value

    def save_theme(self, theme: str) -> str:
        self._store.set(self._keys.theme, theme)
        return theme
