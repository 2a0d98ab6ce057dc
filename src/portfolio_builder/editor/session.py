"""Editor session: one document, its history and the adapters it reports to."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from portfolio_builder.editor.history import (
    DEFAULT_AUTOSAVE_DELAY,
    DEFAULT_PREVIEW_DELAY,
    HistoryManager,
)
from portfolio_builder.editor.store import DocumentStore
from portfolio_builder.errors import PersistenceError
from portfolio_builder.notifications import NotificationChannel, Severity

if TYPE_CHECKING:
    from collections.abc import Callable

    from portfolio_builder.models.document import Document, Project
    from portfolio_builder.models.session import HistoryState
    from portfolio_builder.storage import DocumentRenderer, SessionPersistence

logger = logging.getLogger(__name__)


class EditorSession:
    """The edit operations a browser session performs on its portfolio.

    Every edit takes a baseline snapshot if the history is still empty, applies
    the change, and only when something actually changed records a snapshot
    and restarts the auto-save and preview timers.
    """

    def __init__(
        self,
        session_id: str,
        persistence: SessionPersistence,
        renderer: DocumentRenderer,
        *,
        notifications: NotificationChannel | None = None,
        autosave_delay: float = DEFAULT_AUTOSAVE_DELAY,
        preview_delay: float = DEFAULT_PREVIEW_DELAY,
    ) -> None:
        self.session_id = session_id
        self.notifications = notifications or NotificationChannel()
        self.store = DocumentStore()
        self.history = HistoryManager(
            self.store,
            persistence,
            renderer,
            self.notifications,
            autosave_delay=autosave_delay,
            preview_delay=preview_delay,
        )
        self._persistence = persistence
        self._renderer = renderer

    @property
    def document(self) -> Document:
        return self.store.document

    def history_state(self) -> HistoryState:
        return self.history.state()

    async def load(self) -> bool:
        """Restore the last saved state for this session, if any."""
        try:
            saved = await self._persistence.load()
        except PersistenceError as exc:
            logger.warning("Session load failed - session=%s error=%s", self.session_id, exc)
            self.notifications.notify(f"Could not load previous work: {exc}", Severity.ERROR)
            return False
        if saved is None:
            return False
        self.history.restore(saved)
        self.notifications.notify("Previous work loaded successfully!", Severity.SUCCESS)
        return True

    def set_field(self, name: str, value: Any) -> bool:
        return self._edit(lambda: self.store.set_field(name, value))

    def add_skill(self, value: str) -> bool:
        return self._edit(lambda: self.store.add_skill(value))

    def remove_skill_at(self, index: int) -> str:
        self.history.ensure_baseline()
        skill = self.store.remove_skill_at(index)
        self._commit()
        return skill

    def add_project(self, title: str, link: str) -> bool:
        return self._edit(lambda: self.store.add_project(title, link))

    def remove_project_at(self, index: int) -> Project:
        self.history.ensure_baseline()
        project = self.store.remove_project_at(index)
        self._commit()
        return project

    def undo(self) -> bool:
        if not self.history.undo():
            return False
        self.notifications.notify("Undo successful", Severity.SUCCESS)
        return True

    def redo(self) -> bool:
        if not self.history.redo():
            return False
        self.notifications.notify("Redo successful", Severity.SUCCESS)
        return True

    async def save(self) -> bool:
        return await self.history.save_now()

    async def preview(self) -> str:
        return await self.history.preview()

    def render(self) -> str:
        """Render the current document right now, bypassing the preview timer."""
        return self._renderer.render(self.store.document)

    async def close(self) -> None:
        await self.history.close()

    def _edit(self, apply: Callable[[], bool]) -> bool:
        self.history.ensure_baseline()
        if not apply():
            return False
        self._commit()
        return True

    def _commit(self) -> None:
        self.history.record()
        self.history.touch()
