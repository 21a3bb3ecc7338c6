"""
Generation Module - Remote generation with local fallback, artifacts and preview.

Usage:
    from webmaker.generation import GenerationOrchestrator

    orchestrator = GenerationOrchestrator(history=history_store)
    result = await orchestrator.generate(spec)
"""

from webmaker.generation.artifacts import ArtifactRegistry
from webmaker.generation.client import RemoteGenerationClient
from webmaker.generation.contracts import (
    Artifact,
    GenerationOutcome,
    GenerationResult,
    NotifyLevel,
    RemoteGenerationResponse,
)
from webmaker.generation.orchestrator import (
    BACKEND_UNAVAILABLE_MESSAGE,
    EMPTY_BRIEF_MESSAGE,
    GENERATION_FAILED_MESSAGE,
    REMOTE_SUCCESS_MESSAGE,
    GenerationOrchestrator,
)
from webmaker.generation.preview import NO_HTML_MESSAGE, PreviewSession

__all__ = [
    "ArtifactRegistry",
    "RemoteGenerationClient",
    "Artifact",
    "GenerationOutcome",
    "GenerationResult",
    "NotifyLevel",
    "RemoteGenerationResponse",
    "BACKEND_UNAVAILABLE_MESSAGE",
    "EMPTY_BRIEF_MESSAGE",
    "GENERATION_FAILED_MESSAGE",
    "REMOTE_SUCCESS_MESSAGE",
    "GenerationOrchestrator",
    "NO_HTML_MESSAGE",
    "PreviewSession",
]
