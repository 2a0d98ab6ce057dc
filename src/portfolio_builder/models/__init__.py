"""Data models for the portfolio document and persisted sessions."""

from portfolio_builder.models.document import (
    FIELD_DEFAULTS,
    FIELD_NAMES,
    Document,
    Project,
    Snapshot,
    default_document,
    normalize_document,
)
from portfolio_builder.models.session import HistoryState, SavedSession

__all__ = [
    "FIELD_DEFAULTS",
    "FIELD_NAMES",
    "Document",
    "HistoryState",
    "Project",
    "SavedSession",
    "Snapshot",
    "default_document",
    "normalize_document",
]
