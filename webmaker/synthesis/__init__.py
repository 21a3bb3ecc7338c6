"""
Synthesis Module - Offline HTML rendering of a Specification.
"""

from webmaker.synthesis.synthesizer import (
    STYLE_PROFILES,
    DocumentSynthesizer,
    StyleProfile,
    adjust_color,
    document_synthesizer,
    escape_html,
    slugify,
    synthesize,
)

__all__ = [
    "STYLE_PROFILES",
    "DocumentSynthesizer",
    "StyleProfile",
    "adjust_color",
    "document_synthesizer",
    "escape_html",
    "slugify",
    "synthesize",
]
