"""
Export Service - Download payloads for the spec and the current preview.

Filenames derive from the project name:
    "Acme Bakery" -> "acme-bakery-spec.json" / "acme-bakery-preview.html"
A name that slugifies to nothing becomes "untitled".

Usage:
    from webmaker.services.export_service import export_service

    export = export_service.export_spec(spec)
    export.filename   # "acme-spec.json"
"""

import json
from dataclasses import dataclass
from typing import Optional

from webmaker.core.exceptions import NothingToExport
from webmaker.schemas.spec import Specification
from webmaker.synthesis import slugify


NOTHING_TO_EXPORT_MESSAGE = "Nothing to export yet — click Generate first."

UNTITLED_SLUG = "untitled"


def download_filename(project_name: str, suffix: str) -> str:
    """`<slug>-<suffix>`, e.g. download_filename("Acme", "preview.html")."""
    return f"{slugify(project_name) or UNTITLED_SLUG}-{suffix}"


@dataclass
class ExportFile:
    filename: str
    content: str
    media_type: str


class ExportService:
    """Builds spec and preview downloads."""

    def export_spec(self, spec: Specification) -> ExportFile:
        return ExportFile(
            filename=download_filename(spec.project_name, "spec.json"),
            content=json.dumps(spec.to_payload(), indent=2),
            media_type="application/json",
        )

    def export_html(self, html: Optional[str], spec: Specification) -> ExportFile:
        """
        Raises:
            NothingToExport: if no preview has been generated yet
        """
        if not html:
            raise NothingToExport(NOTHING_TO_EXPORT_MESSAGE)
        return ExportFile(
            filename=download_filename(spec.project_name, "preview.html"),
            content=html,
            media_type="text/html",
        )


# ---------------------------------------------------------------------------
# SINGLETON INSTANCE
# ---------------------------------------------------------------------------

export_service = ExportService()
