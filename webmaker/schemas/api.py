"""
API response schemas - Shapes returned by the HTTP routers.
"""

from typing import Optional

from pydantic import BaseModel

from webmaker.schemas.spec import CamelModel


class Notice(BaseModel):
    """User-facing notification (toast) text."""
    message: str
    level: str = "info"


class GenerateResponse(CamelModel):
    """Result of POST /generate. Serialized with camelCase keys (downloadUrl)."""
    outcome: str
    html: Optional[str] = None
    download_url: Optional[str] = None
    message: str
    level: str
    token: int
    superseded: bool = False
    history_id: Optional[str] = None


class ThemeResponse(BaseModel):
    theme: str
