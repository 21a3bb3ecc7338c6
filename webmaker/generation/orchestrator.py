"""
GenerationOrchestrator - Remote-first generation with a local fallback.

Coordinates:
1. RemoteGenerationClient for the single remote attempt
2. DocumentSynthesizer when the remote attempt does not produce HTML
3. ArtifactRegistry for the live download handle
4. PreviewSession and HistoryStore for the effects of a completed generation

Outcomes:
=========
    REJECTED  empty brief; nothing is called or written
    REMOTE    2xx with a truthy "html" field
    FALLBACK  anything else (non-2xx, missing html, network error, bad JSON)

Concurrency:
============
Generations are not serialized. Each call takes a token from a monotonic
counter; when the remote call returns, only the holder of the latest
token applies its effects (live artifact, preview, history). Older calls
still return their result, flagged `superseded=True`. `busy` is True while
at least one call is in flight and is purely informational.
"""

import logging
import time
from typing import Optional

from webmaker.core.exceptions import RemoteServiceError, ValidationFailure
from webmaker.generation.artifacts import ArtifactRegistry
from webmaker.generation.client import RemoteGenerationClient
from webmaker.generation.contracts import (
    Artifact,
    GenerationOutcome,
    GenerationResult,
    NotifyLevel,
)
from webmaker.generation.preview import PreviewSession
from webmaker.history import HistoryStore
from webmaker.monitoring import generation_logger
from webmaker.schemas.spec import Specification
from webmaker.services.export_service import download_filename
from webmaker.synthesis import DocumentSynthesizer


logger = logging.getLogger("webmaker.generation.orchestrator")


EMPTY_BRIEF_MESSAGE = "Please add a short brief (1–2 lines)."
REMOTE_SUCCESS_MESSAGE = "Preview updated via API."
BACKEND_UNAVAILABLE_MESSAGE = "Backend unavailable. Loaded demo preview."
GENERATION_FAILED_MESSAGE = "Generation failed. Showing demo preview."


class GenerationOrchestrator:
    """
    Runs generations and applies their effects.

    Usage:
        orchestrator = GenerationOrchestrator(history=HistoryStore(store))
        result = await orchestrator.generate(spec)

        if result.outcome == GenerationOutcome.REMOTE:
            print("served by the API")
        print(result.describe())
    """

    def __init__(
        self,
        history: HistoryStore,
        client: Optional[RemoteGenerationClient] = None,
        synthesizer: Optional[DocumentSynthesizer] = None,
        artifacts: Optional[ArtifactRegistry] = None,
        preview: Optional[PreviewSession] = None,
    ):
        """
        Initialize the orchestrator.

        Args:
            history: Where completed generations are recorded
            client: Remote client (created from settings if not provided)
            synthesizer: Local renderer (created if not provided)
            artifacts: Artifact registry (created if not provided)
            preview: Preview session (created if not provided)
        """
        self.history = history
        self._client = client
        self._synthesizer = synthesizer
        self.artifacts = artifacts if artifacts is not None else ArtifactRegistry()
        self.preview = preview if preview is not None else PreviewSession()

        self._latest_token = 0
        self._in_flight = 0

    # -------------------------------------------------------------------------
    # COMPONENTS
    # -------------------------------------------------------------------------

    def _get_client(self) -> RemoteGenerationClient:
        if self._client is None:
            self._client = RemoteGenerationClient()
        return self._client

    def _get_synthesizer(self) -> DocumentSynthesizer:
        if self._synthesizer is None:
            self._synthesizer = DocumentSynthesizer()
        return self._synthesizer

    # -------------------------------------------------------------------------
    # STATE
    # -------------------------------------------------------------------------

    @property
    def busy(self) -> bool:
        return self._in_flight > 0

    @property
    def latest_token(self) -> int:
        return self._latest_token

    @property
    def live_artifact(self) -> Optional[Artifact]:
        return self.artifacts.live

    # -------------------------------------------------------------------------
    # GENERATION
    # -------------------------------------------------------------------------

    async def generate(self, spec: Specification) -> GenerationResult:
        """
        Generate a document for `spec`.

        Args:
            spec: Current specification; a deep copy is taken immediately so
                  later edits do not leak into the result or history

        Returns:
            GenerationResult (never raises for remote or synthesis failures)
        """
        try:
            self._check_brief(spec)
        except ValidationFailure as e:
            logger.info(f"Generation rejected: {e}")
            return GenerationResult(
                outcome=GenerationOutcome.REJECTED,
                message=str(e),
                level=NotifyLevel.WARN,
            )

        snapshot = spec.snapshot()
        self._latest_token += 1
        token = self._latest_token
        self._in_flight += 1
        start_time = time.time()

        generation_logger.log_request(
            token=token,
            project_name=snapshot.project_name,
            provider=snapshot.provider,
            template_id=snapshot.template_id,
        )

        download_url = None
        try:
            response = await self._get_client().generate(snapshot)
            html = response.html
            if html:
                outcome = GenerationOutcome.REMOTE
                message, level = REMOTE_SUCCESS_MESSAGE, NotifyLevel.SUCCESS
                download_url = response.download_url
            else:
                logger.warning(f"Remote generation unusable (status {response.status_code}), falling back")
                outcome = GenerationOutcome.FALLBACK
                message, level = BACKEND_UNAVAILABLE_MESSAGE, NotifyLevel.WARN
        except RemoteServiceError as e:
            logger.warning(f"Remote generation failed, falling back: {e}")
            html = None
            outcome = GenerationOutcome.FALLBACK
            message, level = GENERATION_FAILED_MESSAGE, NotifyLevel.WARN
        except Exception as e:
            logger.exception(f"Unexpected error during remote generation, falling back: {e}")
            html = None
            outcome = GenerationOutcome.FALLBACK
            message, level = GENERATION_FAILED_MESSAGE, NotifyLevel.WARN
        finally:
            self._in_flight -= 1

        if outcome == GenerationOutcome.FALLBACK:
            html = self._get_synthesizer().synthesize(snapshot)

        result = GenerationResult(
            outcome=outcome,
            message=message,
            level=level,
            html=html,
            token=token,
            latency_ms=(time.time() - start_time) * 1000,
        )

        if token != self._latest_token:
            result.superseded = True
            logger.info(f"Generation {token} superseded by {self._latest_token}, discarding effects")
        else:
            result.artifact = self._install_artifact(html, snapshot, download_url)
            self.preview.load_into_preview(html)
            result.history_id = self.history.record(html, snapshot).id

        generation_logger.log_result(
            token=token,
            outcome=outcome.value,
            html_length=len(html),
            latency_ms=result.latency_ms,
            level=level.value,
            superseded=result.superseded,
            metadata={"download_url": result.download_url} if result.download_url else None,
        )
        return result

    @staticmethod
    def _check_brief(spec: Specification) -> None:
        """
        Raises:
            ValidationFailure: if the brief is empty or blank
        """
        if not spec.brief.strip():
            raise ValidationFailure(EMPTY_BRIEF_MESSAGE)

    def _install_artifact(
        self,
        html: str,
        spec: Specification,
        download_url: Optional[str],
    ) -> Artifact:
        filename = download_filename(spec.project_name, "preview.html")
        if download_url:
            artifact = self.artifacts.adopt_remote(download_url, filename)
        else:
            artifact = self.artifacts.create_local(html, filename)
        return self.artifacts.install(artifact)
