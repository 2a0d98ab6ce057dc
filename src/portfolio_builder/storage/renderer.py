"""Portfolio page renderer backed by Jinja2 templates."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Any
from urllib.parse import quote_plus

from jinja2 import Environment, FileSystemLoader, select_autoescape

from portfolio_builder.models.document import FIELD_DEFAULTS, Project

if TYPE_CHECKING:
    from collections.abc import Mapping

PORTFOLIO_TEMPLATES = Path(__file__).resolve().parent.parent / "templates" / "portfolio"

PLACEHOLDER_IMAGE = "https://via.placeholder.com/150"
DEFAULT_FONT = "Poppins"

THEMES: dict[str, dict[str, str]] = {
    "adventure": {"primary": "#667eea", "secondary": "#764ba2", "text": "#333", "surface": "#fff"},
    "modern": {"primary": "#0f172a", "secondary": "#38bdf8", "text": "#1e293b", "surface": "#fff"},
    "professional": {
        "primary": "#1f3a5f",
        "secondary": "#4a6fa5",
        "text": "#222",
        "surface": "#fff",
    },
    "creative": {"primary": "#ff6b6b", "secondary": "#feca57", "text": "#2d3436", "surface": "#fff"},
    "dark": {"primary": "#bb86fc", "secondary": "#03dac6", "text": "#e0e0e0", "surface": "#1e1e1e"},
}
LAYOUTS = ("centered", "sidebar", "minimal")
FONTS = ("Poppins", "Arial", "Georgia", "Montserrat", "Roboto")


def _text(document: Mapping[str, Any], name: str) -> str:
    value = document.get(name)
    return value.strip() if isinstance(value, str) else ""


def _skills(document: Mapping[str, Any]) -> list[str]:
    skills = document.get("skills")
    if not isinstance(skills, (list, tuple)):
        return []
    return [skill for skill in skills if isinstance(skill, str)]


def _projects(document: Mapping[str, Any]) -> list[dict[str, str]]:
    projects = []
    items = document.get("projects")
    if not isinstance(items, (list, tuple)):
        return projects
    for item in items:
        if isinstance(item, Project):
            projects.append({"title": item.title, "link": item.link})
        elif isinstance(item, dict):
            projects.append({"title": str(item.get("title", "")), "link": str(item.get("link", ""))})
    return projects


class PortfolioRenderer:
    """Render a portfolio document to a standalone HTML page.

    Rendering is a pure function of the document: missing or malformed
    optional fields fall back to placeholder text instead of failing.
    """

    def __init__(self, templates_dir: Path = PORTFOLIO_TEMPLATES) -> None:
        self._env = Environment(
            loader=FileSystemLoader(str(templates_dir)),
            autoescape=select_autoescape(["html", "xml"]),
            trim_blocks=True,
            lstrip_blocks=True,
        )

    def context(self, document: Mapping[str, Any]) -> dict[str, Any]:
        """Build the template context for ``document`` with defaults applied."""
        theme_name = _text(document, "theme") or FIELD_DEFAULTS["theme"]
        layout = _text(document, "layout") or FIELD_DEFAULTS["layout"]
        font = _text(document, "font") or DEFAULT_FONT
        name = _text(document, "name")
        return {
            "title": name or "My Portfolio",
            "name": name or "Your Name",
            "image_alt": name,
            "role": _text(document, "role") or "Your Role",
            "about": _text(document, "about") or "Tell us about yourself...",
            "image": _text(document, "image") or PLACEHOLDER_IMAGE,
            "github": _text(document, "github"),
            "linkedin": _text(document, "linkedin"),
            "skills": _skills(document),
            "projects": _projects(document),
            "font": font,
            "font_query": quote_plus(font),
            "theme": THEMES.get(theme_name, THEMES["adventure"]),
            "theme_name": theme_name if theme_name in THEMES else "adventure",
            "layout": layout if layout in LAYOUTS else "centered",
        }

    def render(self, document: Mapping[str, Any]) -> str:
        return self._env.get_template("portfolio.html").render(**self.context(document))

    def render_placeholder(self) -> str:
        """Render the holding page deployed when no site index exists yet."""
        return self._env.get_template("placeholder.html").render()
