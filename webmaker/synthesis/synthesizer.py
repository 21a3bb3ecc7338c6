"""
Document Synthesizer - Deterministic Specification to HTML rendering.

This module turns a Specification into a complete, self-contained HTML
document (inline CSS, no external assets). It is the local fallback used
whenever the remote generation service is unavailable, and it is pure:
two calls with the same Specification in the same year return the same
string. The only time-dependent value is the footer year, which callers
can pin with the `year` argument.

Rendering Steps:
================
1. Resolve the style profile (minimal, corporate, playful; unknown -> minimal)
2. Derive darker shades of the accent and background colors
3. Escape every user-supplied string
4. Derive anchor slugs from page names
5. Emit head, header, sticky nav, feature grid, optional contact form, footer

Usage:
======
    from webmaker.synthesis import synthesize

    html = synthesize(spec)
    html = synthesize(spec, year=2025)  # reproducible output
"""

import html as html_escape
import re
from dataclasses import dataclass
from datetime import datetime
from typing import Dict, Optional, Tuple

from webmaker.core.exceptions import SynthesisFault
from webmaker.schemas.spec import Specification, Style


# Maximum number of pages rendered as feature cards
MAX_FEATURE_CARDS = 6

DEFAULT_TAGLINE = "AI Generated Website"

_HEX_COLOR = re.compile(r"^#?([0-9a-fA-F]{6})$")
_NON_SLUG = re.compile(r"[^a-z0-9]+")


# ---------------------------------------------------------------------------
# STYLE PROFILES
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class StyleProfile:
    """Visual parameters of one style."""
    font: str
    background: str
    text: str
    accent: str


STYLE_PROFILES: Dict[str, StyleProfile] = {
    Style.MINIMAL.value: StyleProfile(
        font="'Inter', sans-serif", background="#ffffff", text="#1a202c", accent="#6366f1"
    ),
    Style.CORPORATE.value: StyleProfile(
        font="'Georgia', serif", background="#f8f9fa", text="#2d3748", accent="#2563eb"
    ),
    Style.PLAYFUL.value: StyleProfile(
        font="'Comic Sans MS', cursive", background="#fff5f7", text="#1a1a1a", accent="#ec4899"
    ),
}


def resolve_style(style: str) -> StyleProfile:
    return STYLE_PROFILES.get(style, STYLE_PROFILES[Style.MINIMAL.value])


# ---------------------------------------------------------------------------
# TEXT AND COLOR HELPERS
# ---------------------------------------------------------------------------

def escape_html(value: object) -> str:
    """
    Escape text for HTML bodies and attribute values.

    & < > " ' become &amp; &lt; &gt; &quot; &#39; (ampersand first, so
    nothing is escaped twice).
    """
    return html_escape.escape(str(value), quote=True).replace("&#x27;", "&#39;")


def slugify(value: str) -> str:
    """
    Anchor-safe slug: lowercase, non [a-z0-9] runs collapsed to "-", no
    leading or trailing "-". slugify(slugify(x)) == slugify(x).
    """
    return _NON_SLUG.sub("-", (value or "").lower()).strip("-")


def _parse_hex(color: str) -> Tuple[int, int, int]:
    match = _HEX_COLOR.match(color or "")
    if not match:
        raise SynthesisFault(f"Not a 6-digit hex color: {color!r}")
    num = int(match.group(1), 16)
    return (num >> 16) & 0xFF, (num >> 8) & 0xFF, num & 0xFF


def adjust_color(color: str, amount: int) -> str:
    """
    Shift every RGB channel of `color` by `amount`, clamped to [0, 255].

    Returns lowercase "#rrggbb". An unparsable color, or amount 0, returns
    `color` untouched.
    """
    if amount == 0:
        return color
    try:
        r, g, b = _parse_hex(color)
    except SynthesisFault:
        return color

    def clamp(channel: int) -> int:
        return min(max(channel + amount, 0), 255)

    return "#{:02x}{:02x}{:02x}".format(clamp(r), clamp(g), clamp(b))


# ---------------------------------------------------------------------------
# SYNTHESIZER
# ---------------------------------------------------------------------------

class DocumentSynthesizer:
    """
    Renders a Specification as a standalone HTML page.

    Attributes:
        year: Footer year; None means the current year at render time
    """

    def __init__(self, year: Optional[int] = None):
        self.year = year

    def synthesize(self, spec: Specification, year: Optional[int] = None) -> str:
        """
        Render the full document.

        Args:
            spec: Fully populated Specification
            year: Overrides the footer year for this call

        Returns:
            HTML document string; never raises on odd input
        """
        profile = resolve_style(spec.style)
        accent = escape_html(spec.primary_color or profile.accent)
        footer_year = year or self.year or datetime.now().year

        seo = spec.seo
        title = escape_html(seo.title or spec.project_name)
        description = escape_html(seo.description or spec.brief)
        keywords_meta = (
            f'<meta name="keywords" content="{escape_html(seo.keywords)}"/>'
            if seo.keywords else ""
        )

        return f"""<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8"/>
  <meta name="viewport" content="width=device-width, initial-scale=1"/>
  <title>{title}</title>
  <meta name="description" content="{description}"/>
  {keywords_meta}
  <style>{self._css(profile, accent)}
  </style>
</head>
<body>
  <header>
    <h1>{escape_html(spec.project_name)}</h1>
    <p class="tagline">{escape_html(spec.brief or DEFAULT_TAGLINE)}</p>
    <div style="margin-top:18px">
      <a href="#features" class="cta">Explore Features</a>
      <a href="#contact" class="cta" style="background:#fff;color:{accent}">Get in Touch</a>
    </div>
  </header>
  {self._render_nav(spec)}
  <div class="container">
    <section id="features">
      <div class="grid">{self._render_cards(spec)}
      </div>
    </section>{self._render_contact(spec)}
  </div>
  {self._render_footer(spec, footer_year)}
</body>
</html>"""

    def _css(self, profile: StyleProfile, accent: str) -> str:
        """Inline stylesheet for a profile and accent color."""
        return f"""
    *{{box-sizing:border-box}} body{{margin:0;font-family:{profile.font};background:{profile.background};color:{profile.text};line-height:1.6}}
    .container{{max-width:1200px;margin:0 auto;padding:20px}}
    header{{background:linear-gradient(135deg, {accent}, {adjust_color(accent, -20)});color:#fff;padding:60px 20px;text-align:center}}
    h1{{font-size:3em;margin:0 0 10px}}
    .tagline{{font-size:1.2em;opacity:.95}}
    nav{{position:sticky;top:0;background:{adjust_color(profile.background, -10)};padding:12px 0;box-shadow:0 2px 10px rgba(0,0,0,0.08);z-index:10}}
    nav ul{{list-style:none;display:flex;gap:24px;justify-content:center;margin:0;padding:0;flex-wrap:wrap}}
    nav a{{text-decoration:none;color:{profile.text};font-weight:600}}
    nav a:hover{{color:{accent}}}
    .grid{{display:grid;grid-template-columns:repeat(auto-fit,minmax(260px,1fr));gap:24px;margin:40px 0}}
    .card{{background:#fff;border-radius:14px;padding:20px;border-top:4px solid {accent};box-shadow:0 6px 16px rgba(0,0,0,.08)}}
    .card h3{{margin:0 0 8px;color:{accent}}}
    .cta{{background:{accent};color:#fff;border:none;border-radius:999px;padding:12px 24px;font-weight:700;cursor:pointer;text-decoration:none;display:inline-block;margin:10px}}
    .cta:hover{{background:{adjust_color(accent, -20)}}}
    #contact{{background:#fff;padding:30px;border-radius:16px;border-top:4px solid {accent};box-shadow:0 6px 16px rgba(0,0,0,.08)}}
    #contact h3{{margin-top:0;color:{accent}}}
    #contact input,#contact textarea{{width:100%;padding:12px;border-radius:10px;border:1px solid #ddd;margin:8px 0}}
    .cms-badge{{font-size:.85em;opacity:.8}}
    footer{{background:{adjust_color(profile.background, -12)};padding:30px 20px;text-align:center;margin-top:40px;border-top:3px solid {accent}}}
    @media (max-width:768px){{h1{{font-size:2em}}}}"""

    def _render_nav(self, spec: Specification) -> str:
        items = "".join(
            f'<li><a href="#{slugify(page)}">{escape_html(page)}</a></li>'
            for page in spec.pages
        )
        return f"<nav><ul>{items}</ul></nav>"

    def _render_cards(self, spec: Specification) -> str:
        badge = '\n          <span class="cms-badge">CMS ready</span>' if spec.include.cms else ""
        cards = []
        for page in spec.pages[:MAX_FEATURE_CARDS]:
            name = escape_html(page)
            cards.append(f"""
        <div class="card">
          <h3>{name}</h3>
          <p>Autogenerated content for the {name} section.</p>{badge}
        </div>""")
        return "".join(cards)

    def _render_contact(self, spec: Specification) -> str:
        if not spec.include.contact_form:
            return ""
        return """
    <section id="contact">
      <h3>Contact Us</h3>
      <form onsubmit="event.preventDefault(); alert('Thanks!');">
        <input placeholder="Your name"/>
        <input type="email" placeholder="Email"/>
        <textarea placeholder="Message" rows="4"></textarea>
        <button class="cta" type="submit">Send</button>
      </form>
    </section>"""

    def _render_footer(self, spec: Specification, year: int) -> str:
        meta = " &bull; ".join(
            escape_html(part)
            for part in (spec.provider.upper(), spec.layout, spec.style, spec.tone)
        )
        return f"""<footer>
    <div>&copy; {year} {escape_html(spec.project_name)}</div>
    <div style="opacity:.7;margin-top:8px">{meta}</div>
  </footer>"""


# ---------------------------------------------------------------------------
# MODULE-LEVEL ENTRY POINT
# ---------------------------------------------------------------------------

document_synthesizer = DocumentSynthesizer()


def synthesize(spec: Specification, year: Optional[int] = None) -> str:
    """Render `spec` with the shared synthesizer."""
    return document_synthesizer.synthesize(spec, year=year)
