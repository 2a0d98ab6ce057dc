"""Editor page route."""

from __future__ import annotations

from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse

from portfolio_builder.routes.session import CurrentSession, set_session_cookie
from portfolio_builder.storage.renderer import FONTS, LAYOUTS, THEMES

router = APIRouter(tags=["pages"])


@router.get("/", response_class=HTMLResponse)
async def editor(request: Request, session: CurrentSession):
    """Render the portfolio editor, starting the browser's session if needed."""
    templates = request.app.state.templates
    response = templates.TemplateResponse(
        request,
        "editor.html",
        {
            "themes": list(THEMES),
            "layouts": LAYOUTS,
            "fonts": FONTS,
        },
    )
    set_session_cookie(response, session.session_id)
    return response
