"""Registry of live editor sessions keyed by browser session id."""

from __future__ import annotations

import asyncio
import logging
import re
import secrets
import time
from typing import TYPE_CHECKING

from portfolio_builder.editor.history import DEFAULT_AUTOSAVE_DELAY, DEFAULT_PREVIEW_DELAY
from portfolio_builder.editor.session import EditorSession

if TYPE_CHECKING:
    from collections.abc import Callable

    from portfolio_builder.storage import DocumentRenderer, SessionPersistence

logger = logging.getLogger(__name__)

_SESSION_ID_PATTERN = re.compile(r"^[A-Za-z0-9_-]{16,64}$")
DEFAULT_IDLE_TIMEOUT = 30 * 60


def new_session_id() -> str:
    return secrets.token_urlsafe(24)


def is_valid_session_id(session_id: str | None) -> bool:
    """Session ids name files on disk, so only a safe alphabet is accepted."""
    return bool(session_id) and _SESSION_ID_PATTERN.match(session_id or "") is not None


class SessionRegistry:
    """Create, cache and close :class:`EditorSession` instances.

    A session is published only once its saved work has loaded, and callers
    that arrive while it loads wait on the same load. Sessions idle for longer
    than ``idle_timeout`` seconds are closed, which flushes any pending save,
    and dropped the next time a new session is opened.
    """

    def __init__(
        self,
        persistence_factory: Callable[[str], SessionPersistence],
        renderer: DocumentRenderer,
        *,
        autosave_delay: float = DEFAULT_AUTOSAVE_DELAY,
        preview_delay: float = DEFAULT_PREVIEW_DELAY,
        idle_timeout: float = DEFAULT_IDLE_TIMEOUT,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._persistence_factory = persistence_factory
        self._renderer = renderer
        self._autosave_delay = autosave_delay
        self._preview_delay = preview_delay
        self._idle_timeout = idle_timeout
        self._clock = clock
        self._sessions: dict[str, EditorSession] = {}
        self._last_seen: dict[str, float] = {}
        self._loading: dict[str, asyncio.Task[EditorSession]] = {}
        self._closing: dict[str, asyncio.Task[None]] = {}

    def __len__(self) -> int:
        return len(self._sessions)

    def __contains__(self, session_id: object) -> bool:
        return session_id in self._sessions

    async def get_or_create(self, session_id: str) -> EditorSession:
        """Return the session for ``session_id``, loading saved work on first use."""
        if not is_valid_session_id(session_id):
            raise ValueError(f"Invalid session id: {session_id!r}")
        session = self._sessions.get(session_id)
        if session is not None:
            self._last_seen[session_id] = self._clock()
            return session

        task = self._loading.get(session_id)
        if task is None:
            self.evict_idle()
            task = asyncio.create_task(self._open(session_id))
            self._loading[session_id] = task
            task.add_done_callback(lambda _: self._loading.pop(session_id, None))
        # One cancelled request must not abort the load for the others.
        return await asyncio.shield(task)

    def evict_idle(self) -> int:
        """Start closing every session idle past the timeout; return how many."""
        cutoff = self._clock() - self._idle_timeout
        idle = [sid for sid, seen in self._last_seen.items() if seen <= cutoff]
        for session_id in idle:
            session = self._sessions.pop(session_id)
            del self._last_seen[session_id]
            task = asyncio.create_task(self._close_session(session))
            self._closing[session_id] = task
            task.add_done_callback(lambda _, sid=session_id: self._closing.pop(sid, None))
        if idle:
            logger.info("Idle editor sessions evicted - count=%d", len(idle))
        return len(idle)

    async def close(self) -> None:
        """Flush and close every session."""
        if self._loading:
            await asyncio.gather(*self._loading.values(), return_exceptions=True)
        sessions = list(self._sessions.values())
        self._sessions.clear()
        self._last_seen.clear()
        for session in sessions:
            await self._close_session(session)
        if self._closing:
            await asyncio.gather(*self._closing.values())
        logger.info("Editor sessions closed - count=%d", len(sessions))

    async def _open(self, session_id: str) -> EditorSession:
        closing = self._closing.get(session_id)
        if closing is not None:
            # Let an evicted copy finish its last save before reading it back.
            await closing
        session = EditorSession(
            session_id,
            self._persistence_factory(session_id),
            self._renderer,
            autosave_delay=self._autosave_delay,
            preview_delay=self._preview_delay,
        )
        loaded = await session.load()
        self._sessions[session_id] = session
        self._last_seen[session_id] = self._clock()
        logger.info("Editor session opened - session=%s restored=%s", session_id, loaded)
        return session

    async def _close_session(self, session: EditorSession) -> None:
        try:
            await session.close()
        except Exception:  # noqa: BLE001
            logger.warning("Failed to close editor session %s", session.session_id, exc_info=True)
