"""
Generation router - Generate, preview and download documents.

Endpoints:
- POST /generate          Generate from the persisted spec
- GET  /preview           Current preview HTML
- GET  /preview/export    Download the preview as <slug>-preview.html
- GET  /artifacts/{id}    Serve a local artifact (?download=true to attach)

Generation never answers 5xx: remote failures come back as a FALLBACK
outcome with a warning message.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from fastapi.responses import HTMLResponse

from webmaker.core.exceptions import NothingToExport
from webmaker.deps import get_orchestrator, get_spec_repository
from webmaker.generation import GenerationOrchestrator, GenerationOutcome
from webmaker.schemas.api import GenerateResponse
from webmaker.services.export_service import export_service
from webmaker.storage import SpecificationRepository


logger = logging.getLogger("webmaker.routers.generation")

router = APIRouter(tags=["generation"])


@router.post("/generate", response_model=GenerateResponse, response_model_by_alias=True)
async def generate(
    repo: SpecificationRepository = Depends(get_spec_repository),
    orchestrator: GenerationOrchestrator = Depends(get_orchestrator),
):
    """
    Generate a website for the current spec.

    Returns:
        422: empty brief (REJECTED)
        200: REMOTE or FALLBACK result, message and level for the toast
    """
    result = await orchestrator.generate(repo.load())

    if result.outcome == GenerationOutcome.REJECTED:
        logger.info(f"POST /generate rejected: {result.message}")
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=result.message)

    return GenerateResponse(
        outcome=result.outcome.value,
        html=result.html,
        download_url=result.download_url,
        message=result.message,
        level=result.level.value,
        token=result.token,
        superseded=result.superseded,
        history_id=result.history_id,
    )


@router.get("/preview", response_class=HTMLResponse)
def get_preview(orchestrator: GenerationOrchestrator = Depends(get_orchestrator)):
    if orchestrator.preview.is_empty:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="No preview yet")
    return HTMLResponse(content=orchestrator.preview.html)


@router.get("/preview/export")
def export_preview(
    repo: SpecificationRepository = Depends(get_spec_repository),
    orchestrator: GenerationOrchestrator = Depends(get_orchestrator),
):
    try:
        export = export_service.export_html(orchestrator.preview.html, repo.load())
    except NothingToExport as e:
        logger.info("Preview export requested before any generation")
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    return Response(
        content=export.content,
        media_type=export.media_type,
        headers={"Content-Disposition": f'attachment; filename="{export.filename}"'},
    )


@router.get("/artifacts/{artifact_id}", response_class=HTMLResponse)
def get_artifact(
    artifact_id: str,
    download: bool = Query(False),
    orchestrator: GenerationOrchestrator = Depends(get_orchestrator),
):
    artifact = orchestrator.artifacts.get(artifact_id)
    content = orchestrator.artifacts.content(artifact_id)
    if artifact is None or content is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Artifact not found")

    headers = {}
    if download:
        headers["Content-Disposition"] = f'attachment; filename="{artifact.filename}"'
    return HTMLResponse(content=content, headers=headers)
