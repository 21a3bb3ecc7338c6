"""
Artifact Registry - Lifecycle of downloadable generated documents.

Local artifacts (documents built or received without a download URL) are
kept in memory and served at `{ARTIFACT_URL_PREFIX}/{id}`. Exactly one
artifact is "live" at a time: installing a new one releases the previous
local one, after which its URL answers 404. Remote artifacts only wrap
the URL the generation service returned; there is nothing to release.
"""

import logging
import uuid
from typing import Dict, Optional

from webmaker.core.config import settings
from webmaker.generation.contracts import Artifact


logger = logging.getLogger("webmaker.generation.artifacts")


class ArtifactRegistry:
    """
    In-memory store of local artifacts plus the live handle.

    Usage:
        registry = ArtifactRegistry()
        artifact = registry.create_local(html, "acme-preview.html")
        registry.install(artifact)          # previous live handle released
        registry.content(artifact.id)       # html
    """

    def __init__(self, url_prefix: Optional[str] = None):
        self.url_prefix = (url_prefix if url_prefix is not None else settings.ARTIFACT_URL_PREFIX).rstrip("/")
        self._contents: Dict[str, str] = {}
        self._artifacts: Dict[str, Artifact] = {}
        self._live: Optional[Artifact] = None

    @property
    def live(self) -> Optional[Artifact]:
        return self._live

    def create_local(self, html: str, filename: str) -> Artifact:
        artifact_id = uuid.uuid4().hex
        artifact = Artifact(
            id=artifact_id,
            url=f"{self.url_prefix}/{artifact_id}",
            remote=False,
            filename=filename,
        )
        self._artifacts[artifact_id] = artifact
        self._contents[artifact_id] = html
        return artifact

    def adopt_remote(self, url: str, filename: str) -> Artifact:
        return Artifact(id=uuid.uuid4().hex, url=url, remote=True, filename=filename)

    def install(self, artifact: Artifact) -> Artifact:
        """Make `artifact` the live one, releasing the previous live handle."""
        previous = self._live
        if previous is not None and previous.id != artifact.id:
            self.release(previous)
        self._live = artifact
        logger.debug(f"Installed {artifact.describe()}")
        return artifact

    def release(self, artifact: Artifact) -> None:
        if artifact.remote:
            return
        self._artifacts.pop(artifact.id, None)
        self._contents.pop(artifact.id, None)
        if self._live is not None and self._live.id == artifact.id:
            self._live = None

    def get(self, artifact_id: str) -> Optional[Artifact]:
        return self._artifacts.get(artifact_id)

    def content(self, artifact_id: str) -> Optional[str]:
        return self._contents.get(artifact_id)

    def __len__(self) -> int:
        return len(self._artifacts)
