"""Tests for the portfolio page renderer."""

import pytest

from portfolio_builder.models.document import Project
from portfolio_builder.storage.renderer import PLACEHOLDER_IMAGE, PORTFOLIO_TEMPLATES, PortfolioRenderer


@pytest.fixture
def page_renderer():
    return PortfolioRenderer()


def test_portfolio_templates_dir_exists():
    assert PORTFOLIO_TEMPLATES.exists()
    assert (PORTFOLIO_TEMPLATES / "portfolio.html").exists()
    assert (PORTFOLIO_TEMPLATES / "placeholder.html").exists()


def test_render_produces_html(page_renderer):
    html = page_renderer.render(
        {
            "name": "Ada Lovelace",
            "role": "Engineer",
            "about": "Writes programs.",
            "skills": ["Rust", "Go"],
            "projects": [Project(title="Engine", link="https://engine.dev")],
            "github": "https://github.com/ada",
            "theme": "dark",
            "layout": "sidebar",
            "font": "Roboto",
        }
    )
    assert "<!DOCTYPE html>" in html
    assert "<title>Ada Lovelace</title>" in html
    assert "Engineer" in html
    assert "Rust" in html and "Go" in html
    assert 'href="https://engine.dev"' in html
    assert "https://github.com/ada" in html
    assert "theme-dark" in html
    assert "layout-sidebar" in html
    assert "family=Roboto" in html


def test_render_empty_document_uses_placeholders(page_renderer):
    html = page_renderer.render({})
    assert "Your Name" in html
    assert "Your Role" in html
    assert "Tell us about yourself..." in html
    assert PLACEHOLDER_IMAGE in html
    assert "<title>My Portfolio</title>" in html
    assert "theme-adventure" in html
    assert "layout-centered" in html


def test_render_unknown_theme_falls_back(page_renderer):
    html = page_renderer.render({"theme": "neon", "layout": "diagonal"})
    assert "theme-adventure" in html
    assert "layout-centered" in html


def test_render_escapes_user_text(page_renderer):
    html = page_renderer.render({"name": "<script>alert(1)</script>"})
    assert "<script>alert(1)</script>" not in html
    assert "&lt;script&gt;" in html


def test_render_accepts_project_dicts(page_renderer):
    html = page_renderer.render({"projects": [{"title": "Engine", "link": "https://engine.dev"}]})
    assert "Engine" in html


def test_context_skips_social_links_when_empty(page_renderer):
    context = page_renderer.context({"github": "  ", "linkedin": ""})
    assert context["github"] == ""
    assert context["linkedin"] == ""


def test_render_placeholder(page_renderer):
    html = page_renderer.render_placeholder()
    assert "Your portfolio will be deployed here shortly..." in html
