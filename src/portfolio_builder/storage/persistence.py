"""JSON file persistence for editor sessions (one file per session slot)."""

from __future__ import annotations

import asyncio
import contextlib
import json
import logging
import os
import tempfile
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError

from portfolio_builder.errors import PersistenceError
from portfolio_builder.models.document import to_jsonable
from portfolio_builder.models.session import SavedSession

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence
    from pathlib import Path

    from portfolio_builder.models.document import Snapshot

logger = logging.getLogger(__name__)


class JsonFilePersistence:
    """Store a :class:`SavedSession` as a JSON file.

    Each write goes to its own sibling temp file that then replaces the
    target, so a crash mid-write leaves the previous save intact. Saves on
    one slot run one at a time, so the last save requested is the one kept.
    """

    def __init__(self, path: Path) -> None:
        self._path = path
        self._write_lock = asyncio.Lock()

    @property
    def path(self) -> Path:
        return self._path

    async def save(
        self,
        document: Mapping[str, Any],
        history: Sequence[Snapshot],
        history_index: int,
    ) -> None:
        payload = {
            "document": to_jsonable(document),
            "history": [snapshot.to_json() for snapshot in history],
            "history_index": history_index,
        }
        text = json.dumps(payload, indent=2, ensure_ascii=False)
        async with self._write_lock:
            await asyncio.to_thread(self._write, text)
        logger.debug(
            "Session saved - path=%s history=%d index=%d",
            self._path,
            len(history),
            history_index,
        )

    async def load(self) -> SavedSession | None:
        if not self._path.exists():
            return None
        try:
            text = await asyncio.to_thread(self._path.read_text, encoding="utf-8")
        except OSError as exc:
            raise PersistenceError(f"Could not read {self._path}: {exc}") from exc
        try:
            return SavedSession.model_validate_json(text)
        except ValidationError as exc:
            raise PersistenceError(f"Saved session {self._path} is invalid") from exc

    async def clear(self) -> None:
        try:
            await asyncio.to_thread(self._path.unlink, missing_ok=True)
        except OSError as exc:
            raise PersistenceError(f"Could not remove {self._path}: {exc}") from exc

    def _write(self, text: str) -> None:
        tmp_name: str | None = None
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                "w",
                encoding="utf-8",
                dir=self._path.parent,
                prefix=f".{self._path.name}.",
                suffix=".tmp",
                delete=False,
            ) as tmp:
                tmp_name = tmp.name
                tmp.write(text)
            os.replace(tmp_name, self._path)
        except OSError as exc:
            if tmp_name is not None:
                with contextlib.suppress(OSError):
                    os.unlink(tmp_name)
            raise PersistenceError(f"Could not write {self._path}: {exc}") from exc
