"""
Preferences router - Template catalog and UI theme.

Endpoints:
- GET /templates   Fixed template catalog
- GET /theme       Stored theme, else the spec's theme, else "light"
- PUT /theme       Store a theme
"""

from typing import List

from fastapi import APIRouter, Depends

from webmaker.deps import get_spec_repository
from webmaker.schemas.api import ThemeResponse
from webmaker.schemas.spec import TEMPLATES, Template, ThemePreference
from webmaker.storage import SpecificationRepository


router = APIRouter(tags=["preferences"])


@router.get("/templates", response_model=List[Template])
def list_templates():
    return TEMPLATES


@router.get("/theme", response_model=ThemeResponse)
def get_theme(repo: SpecificationRepository = Depends(get_spec_repository)):
    return ThemeResponse(theme=repo.load_theme())


@router.put("/theme", response_model=ThemeResponse)
def set_theme(
    request: ThemePreference,
    repo: SpecificationRepository = Depends(get_spec_repository),
):
    return ThemeResponse(theme=repo.save_theme(request.theme))
