"""
Specification schemas - Pydantic models describing the website to build.

A Specification is always fully populated: every field has a default that
pydantic applies at creation time, so a partial or older payload
(e.g. a persisted spec missing a feature flag) is completed on load and
downstream code never checks for missing fields.

JSON field names are camelCase ("projectName", "contactForm") so that the
persisted format and the remote generation service payload stay stable;
Python attributes are snake_case.
"""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


# ---------------------------------------------------------------------------
# KNOWN VALUES
# ---------------------------------------------------------------------------
# Fields below are typed as plain strings; these enums list the values the
# editor offers. Unknown values are tolerated (the synthesizer falls back to
# its defaults) rather than rejected.

class Provider(str, Enum):
    """Backend the user prefers. Display only."""
    CHATGPT = "chatgpt"
    GEMINI = "gemini"


class Layout(str, Enum):
    LANDING = "landing"
    MULTIPAGE = "multipage"
    ONEPAGE = "onepage"


class Style(str, Enum):
    MINIMAL = "minimal"
    CORPORATE = "corporate"
    PLAYFUL = "playful"


class Theme(str, Enum):
    LIGHT = "light"
    DARK = "dark"


class Tone(str, Enum):
    NEUTRAL = "neutral"
    FRIENDLY = "friendly"
    FORMAL = "formal"
    BOLD = "bold"


DEFAULT_PAGES: List[str] = ["Home", "About", "Services", "Blog", "Contact", "FAQ", "Pricing"]


# ---------------------------------------------------------------------------
# TEMPLATE CATALOG
# ---------------------------------------------------------------------------

class Template(BaseModel):
    """Entry of the fixed template catalog."""
    id: str
    name: str
    tagline: str


TEMPLATES: List[Template] = [
    Template(id="clean-landing", name="Clean Landing", tagline="Minimal hero + feature grid"),
    Template(id="corporate-site", name="Corporate Site", tagline="Multi-page, classic"),
    Template(id="portfolio", name="Portfolio", tagline="Cases and gallery"),
    Template(id="saas", name="SaaS", tagline="Pricing tiers + CTA"),
]

TEMPLATE_IDS = frozenset(t.id for t in TEMPLATES)


# ---------------------------------------------------------------------------
# SPECIFICATION
# ---------------------------------------------------------------------------

class CamelModel(BaseModel):
    """Base model serializing to camelCase while accepting both spellings."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class FeatureFlags(CamelModel):
    """Optional features the generated site should advertise."""
    cms: bool = False
    auth: bool = False
    contact_form: bool = True
    newsletter: bool = True
    analytics: bool = True
    image_gen: bool = False


class SeoSettings(CamelModel):
    """Search-engine metadata. Empty strings fall back to project name / brief."""
    title: str = ""
    description: str = ""
    keywords: str = ""


class Specification(CamelModel):
    """
    Structured description of the desired website.

    Example:
        spec = Specification(project_name="Acme", brief="A modern bakery site")
        spec.model_dump(by_alias=True)["projectName"]  # "Acme"
    """
    # project_name: Used in the title, header, footer and download filenames
    project_name: str = "Untitled Project"

    # brief: Free-text description; generation refuses an empty brief
    brief: str = ""

    provider: str = Provider.CHATGPT.value
    template_id: str = TEMPLATES[0].id
    layout: str = Layout.LANDING.value
    style: str = Style.MINIMAL.value
    theme: str = Theme.LIGHT.value

    # primary_color: "#rrggbb"; not validated, the synthesizer tolerates garbage
    primary_color: str = "#2f6feb"

    # pages: Navigation order; duplicates are allowed
    pages: List[str] = Field(default_factory=lambda: list(DEFAULT_PAGES))

    include: FeatureFlags = Field(default_factory=FeatureFlags)
    seo: SeoSettings = Field(default_factory=SeoSettings)
    tone: str = Tone.NEUTRAL.value

    def snapshot(self) -> "Specification":
        """Deep copy, detached from later edits of this instance."""
        return self.model_copy(deep=True)

    def to_payload(self) -> dict:
        """camelCase JSON-compatible dict (persistence and remote payload)."""
        return self.model_dump(mode="json", by_alias=True)


# ---------------------------------------------------------------------------
# REQUEST SCHEMAS (spec editing endpoints)
# ---------------------------------------------------------------------------

class FeatureFlagsUpdate(CamelModel):
    """Partial FeatureFlags; unset flags keep their current value."""
    cms: Optional[bool] = None
    auth: Optional[bool] = None
    contact_form: Optional[bool] = None
    newsletter: Optional[bool] = None
    analytics: Optional[bool] = None
    image_gen: Optional[bool] = None


class SeoSettingsUpdate(CamelModel):
    """Partial SeoSettings; unset fields keep their current value."""
    title: Optional[str] = None
    description: Optional[str] = None
    keywords: Optional[str] = None


class SpecificationUpdate(CamelModel):
    """
    Partial update of a Specification.

    Only provided fields are applied. `include` and `seo` are merged into
    the current nested objects field by field.
    """
    project_name: Optional[str] = None
    brief: Optional[str] = None
    provider: Optional[str] = None
    template_id: Optional[str] = None
    layout: Optional[str] = None
    style: Optional[str] = None
    theme: Optional[str] = None
    primary_color: Optional[str] = None
    pages: Optional[List[str]] = None
    include: Optional[FeatureFlagsUpdate] = None
    seo: Optional[SeoSettingsUpdate] = None
    tone: Optional[str] = None


class PageToggle(BaseModel):
    page: str = Field(..., min_length=1, max_length=60)


class TemplatePick(CamelModel):
    template_id: str


class ThemePreference(BaseModel):
    theme: str = Field(..., min_length=1)
