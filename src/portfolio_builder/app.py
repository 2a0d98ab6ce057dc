"""Web entry point: FastAPI app factory for the portfolio editor."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import TYPE_CHECKING

import uvicorn
from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates

from portfolio_builder.config import load_settings
from portfolio_builder.deploy import create_deployer
from portfolio_builder.editor import SessionRegistry
from portfolio_builder.logging import configure_logging
from portfolio_builder.routes import ROUTERS
from portfolio_builder.storage import (
    ImageUploader,
    JsonFilePersistence,
    OutputWriter,
    PortfolioRenderer,
)

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    from portfolio_builder.config import Settings

logger = logging.getLogger(__name__)

_PACKAGE_DIR = Path(__file__).resolve().parent
TEMPLATES_DIR = _PACKAGE_DIR / "templates"
STATIC_DIR = _PACKAGE_DIR / "static"


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the FastAPI application.

    Adapters are created in the lifespan and hung off ``app.state`` so route
    handlers and tests reach them the same way.
    """
    settings = settings or load_settings()
    configure_logging(settings.app.log_level)

    storage = settings.storage
    for directory in (storage.public_dir, storage.dist_dir, storage.sessions_dir, storage.upload_dir):
        directory.mkdir(parents=True, exist_ok=True)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        renderer = PortfolioRenderer()
        app.state.settings = settings
        app.state.renderer = renderer
        app.state.uploader = ImageUploader(
            storage.upload_dir,
            max_bytes=storage.max_upload_bytes,
        )
        app.state.output = OutputWriter(storage.public_dir, storage.dist_dir, storage.data_file)
        app.state.deployer = create_deployer(settings.netlify)
        app.state.sessions = SessionRegistry(
            lambda session_id: JsonFilePersistence(storage.sessions_dir / f"{session_id}.json"),
            renderer,
            autosave_delay=settings.editor.autosave_delay,
            preview_delay=settings.editor.preview_delay,
            idle_timeout=settings.editor.session_idle_seconds,
        )

        logger.info(
            "Portfolio builder starting - env=%s deploy_mode=%s netlify_token=%s",
            settings.app.env,
            settings.netlify.deploy_mode,
            "present" if settings.netlify.is_configured else "missing",
        )
        if not settings.netlify.is_configured:
            logger.warning("NETLIFY_TOKEN is not set; deployments will fail until it is")
        try:
            yield
        finally:
            logger.info("Portfolio builder shutting down")
            await app.state.sessions.close()

    app = FastAPI(title="Portfolio Builder", lifespan=lifespan)
    app.state.templates = Jinja2Templates(directory=str(TEMPLATES_DIR))

    for router in ROUTERS:
        app.include_router(router)

    app.mount("/static", StaticFiles(directory=str(STATIC_DIR)), name="static")
    app.mount("/uploads", StaticFiles(directory=str(storage.upload_dir)), name="uploads")
    # Last, so generated files never shadow the API.
    app.mount(
        "/",
        StaticFiles(directory=str(storage.public_dir), check_dir=False),
        name="public",
    )
    return app


def main() -> None:
    """Run the editor with uvicorn."""
    settings = load_settings()
    uvicorn.run(create_app(settings), host=settings.app.host, port=settings.app.port)


if __name__ == "__main__":
    main()
