"""
Contracts for the generation module.

Dataclasses exchanged between the remote client, the artifact registry
and the orchestrator.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional


class GenerationOutcome(str, Enum):
    """How a generation request was answered."""
    REMOTE = "remote"
    FALLBACK = "fallback"
    REJECTED = "rejected"


class NotifyLevel(str, Enum):
    """Severity of the user-facing message."""
    INFO = "info"
    SUCCESS = "success"
    WARN = "warn"
    ERROR = "error"


@dataclass
class RemoteGenerationResponse:
    """Answer of the remote generation service, before interpretation."""

    status_code: int
    """HTTP status of the response."""

    payload: Any = None
    """Decoded JSON body (None for non-2xx responses)."""

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300

    @property
    def html(self) -> Optional[str]:
        """Truthy `html` field of a 2xx object payload, as a string."""
        if not self.ok or not isinstance(self.payload, dict):
            return None
        value = self.payload.get("html")
        return str(value) if value else None

    @property
    def download_url(self) -> Optional[str]:
        if not isinstance(self.payload, dict):
            return None
        value = self.payload.get("downloadUrl")
        return str(value) if value else None


@dataclass
class Artifact:
    """
    Downloadable copy of a generated document.

    Local artifacts are served by this application at `url`; remote ones
    point at whatever the generation service returned.
    """

    id: str
    """Registry id (local) or a fresh id for remote handles."""

    url: str
    """Where the document can be downloaded."""

    remote: bool = False
    """True when `url` belongs to the remote service."""

    filename: str = "preview.html"
    """Suggested download filename."""

    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def describe(self) -> str:
        kind = "remote" if self.remote else "local"
        return f"Artifact {self.id} ({kind}) -> {self.url}"


@dataclass
class GenerationResult:
    """
    Result of one GenerationOrchestrator.generate() call.

    A superseded result carries the html that was produced, but none of
    its effects (preview, live artifact, history) were applied because a
    newer generation was started meanwhile.
    """

    outcome: GenerationOutcome
    """REMOTE, FALLBACK or REJECTED."""

    message: str
    """User-facing notification text."""

    level: NotifyLevel = NotifyLevel.SUCCESS
    """Severity of `message`."""

    html: Optional[str] = None
    """Generated document (None when rejected)."""

    artifact: Optional[Artifact] = None
    """Download handle (None when rejected)."""

    token: int = 0
    """Generation token issued for this call (0 when rejected)."""

    superseded: bool = False
    """True when a newer generation started before this one completed."""

    history_id: Optional[str] = None
    """Id of the recorded HistoryItem, if any."""

    latency_ms: float = 0.0
    """Wall time of the call in milliseconds."""

    @property
    def download_url(self) -> Optional[str]:
        return self.artifact.url if self.artifact else None

    def describe(self) -> str:
        """Human-readable description."""
        lines = [
            f"GenerationResult: {self.outcome.value.upper()}",
            f"  Token: {self.token}",
            f"  Message: {self.message} ({self.level.value})",
            f"  Latency: {self.latency_ms:.0f}ms",
        ]
        if self.superseded:
            lines.append("  Superseded: True")
        if self.html:
            lines.append(f"  HTML length: {len(self.html)} chars")
        if self.artifact:
            lines.append(f"  {self.artifact.describe()}")
        return "\n".join(lines)
