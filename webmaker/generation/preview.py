"""
Preview Session - The document currently shown to the user.

Fed by the orchestrator after each completed generation and by loading
an item from history.
"""

import logging
from typing import Optional


logger = logging.getLogger("webmaker.generation.preview")

NO_HTML_MESSAGE = "No HTML found for this item."


class PreviewSession:
    """Holds the current preview HTML (None until something is loaded)."""

    def __init__(self):
        self._html: Optional[str] = None

    @property
    def html(self) -> Optional[str]:
        return self._html

    @property
    def is_empty(self) -> bool:
        return not self._html

    def load_into_preview(self, html: Optional[str]) -> bool:
        """
        Replace the preview with `html`.

        Empty or blank input leaves the preview unchanged and returns False.
        """
        if not html or not html.strip():
            logger.warning(NO_HTML_MESSAGE)
            return False
        self._html = html
        return True

    def clear(self) -> None:
        self._html = None
