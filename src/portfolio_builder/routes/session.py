"""Browser session lookup shared by the editor routes."""

from __future__ import annotations

from typing import TYPE_CHECKING, Annotated, Any

from fastapi import Depends, Request, Response

from portfolio_builder.editor.registry import is_valid_session_id, new_session_id
from portfolio_builder.editor.session import EditorSession
from portfolio_builder.models.document import to_jsonable

if TYPE_CHECKING:
    from portfolio_builder.editor.registry import SessionRegistry

SESSION_COOKIE = "portfolio_session"
_COOKIE_MAX_AGE = 60 * 60 * 24 * 365


async def get_editor_session(request: Request, response: Response) -> EditorSession:
    """Return the editor session for the request's cookie, starting one if needed."""
    session_id = request.cookies.get(SESSION_COOKIE)
    if not is_valid_session_id(session_id):
        session_id = new_session_id()
    registry: SessionRegistry = request.app.state.sessions
    session = await registry.get_or_create(session_id)
    set_session_cookie(response, session_id)
    return session


def set_session_cookie(response: Response, session_id: str) -> None:
    """Attach the session cookie; needed again on responses returned directly."""
    response.set_cookie(
        SESSION_COOKIE,
        session_id,
        max_age=_COOKIE_MAX_AGE,
        httponly=True,
        samesite="lax",
    )


CurrentSession = Annotated[EditorSession, Depends(get_editor_session)]


def session_state(session: EditorSession, **extra: Any) -> dict[str, Any]:
    """Serialize what the browser needs after every call: document, history, toasts."""
    return {
        "document": to_jsonable(session.document),
        "history": session.history_state().model_dump(),
        "preview_version": session.history.preview_version,
        "notifications": [n.model_dump(mode="json") for n in session.notifications.drain()],
        **extra,
    }
