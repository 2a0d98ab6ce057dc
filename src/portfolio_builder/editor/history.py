"""Snapshot-based undo/redo history with debounced auto-save and preview refresh."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from portfolio_builder.editor.debounce import Debouncer
from portfolio_builder.errors import PersistenceError
from portfolio_builder.models.document import Snapshot, normalize_document
from portfolio_builder.models.session import HistoryState
from portfolio_builder.notifications import Severity

if TYPE_CHECKING:
    from portfolio_builder.editor.store import DocumentStore
    from portfolio_builder.models.session import SavedSession
    from portfolio_builder.notifications import Notifier
    from portfolio_builder.storage import DocumentRenderer, SessionPersistence

logger = logging.getLogger(__name__)

DEFAULT_AUTOSAVE_DELAY = 1.0
DEFAULT_PREVIEW_DELAY = 0.5


class HistoryManager:
    """Linear undo/redo over a :class:`DocumentStore`.

    The history is a list of immutable snapshots and a cursor pointing at the
    one that matches the live document. Recording while the cursor is not at
    the end drops the redo branch.

    Two independent debouncers run off the same edits: one hands the current
    document to the persistence adapter, the other re-renders the preview.
    Their failures are reported through the notifier and never touch the
    history.
    """

    def __init__(
        self,
        store: DocumentStore,
        persistence: SessionPersistence,
        renderer: DocumentRenderer,
        notifier: Notifier,
        *,
        autosave_delay: float = DEFAULT_AUTOSAVE_DELAY,
        preview_delay: float = DEFAULT_PREVIEW_DELAY,
    ) -> None:
        self._store = store
        self._persistence = persistence
        self._renderer = renderer
        self._notifier = notifier
        self._history: list[Snapshot] = []
        self._index = -1
        self._autosave = Debouncer("autosave", autosave_delay, self._persist)
        self._preview = Debouncer("preview", preview_delay, self._refresh_preview)
        self._preview_html: str | None = None
        self._preview_version = 0

    @property
    def history(self) -> tuple[Snapshot, ...]:
        return tuple(self._history)

    @property
    def history_index(self) -> int:
        return self._index

    @property
    def can_undo(self) -> bool:
        return self._index > 0

    @property
    def can_redo(self) -> bool:
        return self._index < len(self._history) - 1

    def state(self) -> HistoryState:
        return HistoryState(
            history_index=self._index,
            history_length=len(self._history),
            can_undo=self.can_undo,
            can_redo=self.can_redo,
        )

    def record(self) -> None:
        """Append a snapshot of the live document, dropping any redo branch."""
        del self._history[self._index + 1 :]
        self._history.append(self._store.snapshot())
        self._index = len(self._history) - 1
        logger.debug("Snapshot recorded - index=%d length=%d", self._index, len(self._history))

    def ensure_baseline(self) -> None:
        """Record the untouched document as snapshot #0 before the first edit."""
        if not self._history:
            self.record()

    def undo(self) -> bool:
        if not self.can_undo:
            return False
        self._index -= 1
        self._restore_current()
        return True

    def redo(self) -> bool:
        if not self.can_redo:
            return False
        self._index += 1
        self._restore_current()
        return True

    def restore(self, saved: SavedSession) -> None:
        """Install a loaded session as the live document and history."""
        self._store.replace_all(saved.document)
        self._store.mark_clean()
        self._history = [Snapshot(normalize_document(entry)) for entry in saved.history]
        self._index = saved.history_index
        logger.info(
            "History restored - index=%d length=%d", self._index, len(self._history)
        )

    def touch(self) -> None:
        """Restart both the auto-save and the preview timers."""
        self._autosave.trigger()
        self._preview.trigger()

    @property
    def autosave_pending(self) -> bool:
        return self._autosave.pending

    @property
    def preview_pending(self) -> bool:
        return self._preview.pending

    @property
    def preview_version(self) -> int:
        """Incremented each time a new preview has been rendered."""
        return self._preview_version

    async def preview(self) -> str:
        """Return the latest rendered preview, rendering now if there is none."""
        if self._preview_html is None:
            await self._refresh_preview()
        return self._preview_html or ""

    async def save_now(self) -> bool:
        """Cancel the pending auto-save and persist immediately."""
        self._autosave.cancel()
        return await self._persist()

    async def flush(self) -> None:
        """Run both pending timers now."""
        await self._autosave.flush()
        await self._preview.flush()

    async def close(self) -> None:
        """Flush a pending save and drop a pending preview before the session ends."""
        self._preview.cancel()
        await self._autosave.flush()
        await self._autosave.wait_idle()
        await self._preview.wait_idle()

    def _restore_current(self) -> None:
        self._store.replace_all(self._history[self._index].to_document())
        self.touch()

    async def _persist(self) -> bool:
        revision = self._store.revision
        try:
            await self._persistence.save(self._store.document, self.history, self._index)
        except PersistenceError as exc:
            logger.warning("Auto-save failed - %s", exc)
            self._notifier.notify(f"Auto-save failed: {exc}", Severity.ERROR)
            return False
        # Edits made while the save was in flight stay dirty.
        self._store.mark_clean(revision)
        self._notifier.notify("Auto-saved successfully!", Severity.SUCCESS)
        return True

    async def _refresh_preview(self) -> None:
        try:
            html = self._renderer.render(self._store.document)
        except Exception:  # noqa: BLE001
            logger.warning("Preview render failed", exc_info=True)
            self._notifier.notify("Preview update failed", Severity.ERROR)
            return
        self._preview_html = html
        self._preview_version += 1
