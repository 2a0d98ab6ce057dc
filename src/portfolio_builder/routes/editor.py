"""Editor API: field edits, skills, projects, undo/redo, save and preview."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, HTTPException, status
from fastapi.responses import HTMLResponse, Response
from pydantic import BaseModel

from portfolio_builder.errors import OutOfRangeError
from portfolio_builder.routes.session import CurrentSession, session_state, set_session_cookie

router = APIRouter(prefix="/api", tags=["editor"])
logger = logging.getLogger(__name__)


class FieldUpdate(BaseModel):
    value: Any = ""


class SkillCreate(BaseModel):
    value: str


class ProjectCreate(BaseModel):
    title: str
    link: str


@router.get("/document")
async def get_document(session: CurrentSession) -> dict[str, Any]:
    """Return the current document and history state."""
    return session_state(session)


@router.put("/document/fields/{name}")
async def set_field(name: str, update: FieldUpdate, session: CurrentSession) -> dict[str, Any]:
    """Replace a single field value."""
    changed = session.set_field(name, update.value)
    return session_state(session, changed=changed)


@router.post("/skills")
async def add_skill(skill: SkillCreate, session: CurrentSession) -> dict[str, Any]:
    """Append a skill; blank and duplicate skills are ignored."""
    changed = session.add_skill(skill.value)
    return session_state(session, changed=changed)


@router.delete("/skills/{index}")
async def remove_skill(index: int, session: CurrentSession) -> dict[str, Any]:
    try:
        session.remove_skill_at(index)
    except OutOfRangeError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    return session_state(session, changed=True)


@router.post("/projects")
async def add_project(project: ProjectCreate, session: CurrentSession) -> dict[str, Any]:
    """Append a project; entries without both a title and a link are ignored."""
    changed = session.add_project(project.title, project.link)
    return session_state(session, changed=changed)


@router.delete("/projects/{index}")
async def remove_project(index: int, session: CurrentSession) -> dict[str, Any]:
    try:
        session.remove_project_at(index)
    except OutOfRangeError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    return session_state(session, changed=True)


@router.post("/undo")
async def undo(session: CurrentSession) -> dict[str, Any]:
    changed = session.undo()
    return session_state(session, changed=changed, message=None if changed else "Nothing to undo")


@router.post("/redo")
async def redo(session: CurrentSession) -> dict[str, Any]:
    changed = session.redo()
    return session_state(session, changed=changed, message=None if changed else "Nothing to redo")


@router.post("/save")
async def save(session: CurrentSession) -> dict[str, Any]:
    """Save immediately instead of waiting for the auto-save timer."""
    saved = await session.save()
    return session_state(session, saved=saved)


@router.get("/preview", response_class=HTMLResponse)
async def preview(session: CurrentSession) -> HTMLResponse:
    """Return the most recent debounced preview render."""
    html = await session.preview()
    response = HTMLResponse(
        html,
        headers={"X-Preview-Version": str(session.history.preview_version)},
    )
    set_session_cookie(response, session.session_id)
    return response


@router.get("/download")
async def download(session: CurrentSession) -> Response:
    """Return the rendered portfolio as a downloadable file."""
    html = session.render()
    logger.info("Portfolio downloaded - session=%s", session.session_id)
    response = Response(
        html,
        media_type="text/html",
        headers={"Content-Disposition": 'attachment; filename="portfolio.html"'},
    )
    set_session_cookie(response, session.session_id)
    return response
