"""Persisted editor session and history state contracts."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, model_validator


class SavedSession(BaseModel):
    """The durable record of an editor session: document, history and cursor."""

    document: dict[str, Any] = Field(default_factory=dict)
    history: list[dict[str, Any]] = Field(default_factory=list)
    history_index: int = -1

    @model_validator(mode="after")
    def _clamp_history_index(self) -> SavedSession:
        if not self.history:
            self.history_index = -1
        else:
            self.history_index = min(max(self.history_index, 0), len(self.history) - 1)
        return self


class HistoryState(BaseModel):
    """What the editor needs to enable or disable its undo/redo buttons."""

    history_index: int
    history_length: int
    can_undo: bool
    can_redo: bool
