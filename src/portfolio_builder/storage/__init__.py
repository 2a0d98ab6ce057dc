"""Adapters for rendering, persisting, uploading and writing portfolio output."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

from portfolio_builder.storage.output import GeneratedOutput, OutputWriter
from portfolio_builder.storage.persistence import JsonFilePersistence
from portfolio_builder.storage.renderer import PortfolioRenderer
from portfolio_builder.storage.uploads import ImageUploader

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

    from portfolio_builder.models.document import Snapshot
    from portfolio_builder.models.session import SavedSession


@runtime_checkable
class SessionPersistence(Protocol):
    """Protocol for the durable slot holding one editor session."""

    async def save(
        self,
        document: Mapping[str, Any],
        history: Sequence[Snapshot],
        history_index: int,
    ) -> None:
        """Persist the document, its history and the history cursor."""
        ...

    async def load(self) -> SavedSession | None:
        """Return the saved session, or None when nothing was saved yet."""
        ...


@runtime_checkable
class DocumentRenderer(Protocol):
    """Protocol for turning a document into a standalone HTML page."""

    def render(self, document: Mapping[str, Any]) -> str:
        """Render ``document``; must not fail on missing optional fields."""
        ...


__all__ = [
    "DocumentRenderer",
    "GeneratedOutput",
    "ImageUploader",
    "JsonFilePersistence",
    "OutputWriter",
    "PortfolioRenderer",
    "SessionPersistence",
]
