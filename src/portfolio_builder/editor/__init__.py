"""Editing core: document store, snapshot history and per-browser sessions."""

from portfolio_builder.editor.debounce import Debouncer
from portfolio_builder.editor.history import HistoryManager
from portfolio_builder.editor.registry import SessionRegistry, new_session_id
from portfolio_builder.editor.session import EditorSession
from portfolio_builder.editor.store import DocumentStore

__all__ = [
    "Debouncer",
    "DocumentStore",
    "EditorSession",
    "HistoryManager",
    "SessionRegistry",
    "new_session_id",
]
