"""
Spec router - Editing and exporting the current Specification.

Endpoints:
- GET   /spec                         Current spec (defaults when none saved)
- PUT   /spec                         Replace the whole spec
- PATCH /spec                         Update some fields
- POST  /spec/reset                   Back to defaults
- POST  /spec/pages/toggle            Add or remove a page
- POST  /spec/include/{flag}/toggle   Flip a feature flag
- POST  /spec/template                Pick a catalog template
- GET   /spec/export                  Download as <slug>-spec.json
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Response, status

from webmaker.core.exceptions import UnknownFeatureFlag, UnknownTemplate
from webmaker.deps import get_spec_repository
from webmaker.schemas.spec import PageToggle, Specification, SpecificationUpdate, TemplatePick
from webmaker.services.export_service import export_service
from webmaker.storage import SpecificationRepository


logger = logging.getLogger("webmaker.routers.spec")

router = APIRouter(prefix="/spec", tags=["spec"])


@router.get("", response_model=Specification, response_model_by_alias=True)
def get_spec(repo: SpecificationRepository = Depends(get_spec_repository)):
    return repo.load()


@router.put("", response_model=Specification, response_model_by_alias=True)
def replace_spec(
    spec: Specification,
    repo: SpecificationRepository = Depends(get_spec_repository),
):
    return repo.save(spec)


@router.patch("", response_model=Specification, response_model_by_alias=True)
def update_spec(
    changes: SpecificationUpdate,
    repo: SpecificationRepository = Depends(get_spec_repository),
):
    return repo.update(changes)


@router.post("/reset", response_model=Specification, response_model_by_alias=True)
def reset_spec(repo: SpecificationRepository = Depends(get_spec_repository)):
    logger.info("Specification reset to defaults")
    return repo.reset()


@router.post("/pages/toggle", response_model=Specification, response_model_by_alias=True)
def toggle_page(
    request: PageToggle,
    repo: SpecificationRepository = Depends(get_spec_repository),
):
    return repo.toggle_page(request.page)


@router.post("/include/{flag}/toggle", response_model=Specification, response_model_by_alias=True)
def toggle_include(
    flag: str,
    repo: SpecificationRepository = Depends(get_spec_repository),
):
    try:
        return repo.toggle_include(flag)
    except UnknownFeatureFlag as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e))


@router.post("/template", response_model=Specification, response_model_by_alias=True)
def pick_template(
    request: TemplatePick,
    repo: SpecificationRepository = Depends(get_spec_repository),
):
    try:
        return repo.pick_template(request.template_id)
    except UnknownTemplate as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e))


@router.get("/export")
def export_spec(repo: SpecificationRepository = Depends(get_spec_repository)):
    export = export_service.export_spec(repo.load())
    return Response(
        content=export.content,
        media_type=export.media_type,
        headers={"Content-Disposition": f'attachment; filename="{export.filename}"'},
    )
