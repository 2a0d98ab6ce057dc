"""Shared fixtures: in-memory adapters and tmp_path-backed settings."""

from __future__ import annotations

import asyncio
from typing import Any

import pytest

from portfolio_builder.config import (
    AppConfig,
    EditorConfig,
    NetlifyConfig,
    Settings,
    StorageConfig,
)
from portfolio_builder.errors import PersistenceError
from portfolio_builder.models.document import to_jsonable
from portfolio_builder.models.session import SavedSession


class MemoryPersistence:
    """Session persistence that keeps saves in a list."""

    def __init__(self, saved: SavedSession | None = None) -> None:
        self.saved = saved
        self.saves: list[dict[str, Any]] = []
        self.fail_with: str | None = None
        self.delay = 0.0

    async def save(self, document, history, history_index) -> None:
        payload = {
            "document": to_jsonable(document),
            "history": [snapshot.to_json() for snapshot in history],
            "history_index": history_index,
        }
        await asyncio.sleep(self.delay)
        if self.fail_with:
            raise PersistenceError(self.fail_with)
        self.saves.append(payload)

    async def load(self) -> SavedSession | None:
        await asyncio.sleep(self.delay)
        if self.fail_with:
            raise PersistenceError(self.fail_with)
        return self.saved


class EchoRenderer:
    """Renders the document's name so tests can see which version was rendered."""

    def __init__(self) -> None:
        self.calls = 0
        self.fail = False

    def render(self, document) -> str:
        self.calls += 1
        if self.fail:
            raise RuntimeError("template exploded")
        return f"<h1>{document.get('name', '')}</h1>"


@pytest.fixture
def persistence() -> MemoryPersistence:
    return MemoryPersistence()


@pytest.fixture
def renderer() -> EchoRenderer:
    return EchoRenderer()


@pytest.fixture
def settings(tmp_path) -> Settings:
    """Settings rooted in ``tmp_path`` with near-zero editor delays."""
    return Settings(
        app=AppConfig(env="development", log_level="WARNING", host="127.0.0.1", port=3000),
        storage=StorageConfig(
            public_dir=tmp_path / "public",
            dist_dir=tmp_path / "dist",
            data_file=tmp_path / "portfolio-data.json",
            sessions_dir=tmp_path / "sessions",
            upload_dir=tmp_path / "public" / "uploads",
            max_upload_bytes=1024,
        ),
        netlify=NetlifyConfig(
            token="test-token",
            site_name="test-portfolio",
            deploy_mode="api",
            api_url="https://netlify.test/api/v1",
            cli="netlify",
        ),
        editor=EditorConfig(autosave_delay_ms=10, preview_delay_ms=5),
    )
