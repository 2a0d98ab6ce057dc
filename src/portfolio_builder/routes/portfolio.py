"""Generate and deploy routes."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Body, Request, status
from fastapi.responses import JSONResponse

from portfolio_builder.errors import DeployError
from portfolio_builder.models.document import normalize_document
from portfolio_builder.routes.session import CurrentSession
from portfolio_builder.services.portfolio import deploy_portfolio, generate_portfolio

router = APIRouter(tags=["portfolio"])
logger = logging.getLogger(__name__)


@router.post("/generate-portfolio", response_model=None)
async def generate(
    request: Request,
    session: CurrentSession,
    data: dict[str, Any] | None = Body(default=None),
) -> dict[str, Any] | JSONResponse:
    """Render the portfolio to disk.

    Uses the posted document when there is one, otherwise the session's.
    """
    try:
        document = normalize_document(data) if data else session.document
        await generate_portfolio(
            document,
            request.app.state.renderer,
            request.app.state.output,
        )
    except Exception as exc:  # noqa: BLE001
        logger.exception("Portfolio generation failed - session=%s", session.session_id)
        return JSONResponse(
            {"success": False, "message": f"Error generating portfolio: {exc}"},
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )
    return {
        "success": True,
        "message": "Portfolio generated successfully!",
        "portfolioUrl": f"{request.base_url}portfolio.html",
    }


@router.post("/deploy-to-netlify", response_model=None)
async def deploy(request: Request) -> dict[str, Any] | JSONResponse:
    """Push the generated site to Netlify."""
    settings = request.app.state.settings
    try:
        result = await deploy_portfolio(
            request.app.state.renderer,
            request.app.state.output,
            request.app.state.deployer,
        )
    except DeployError as exc:
        logger.error("Deployment failed - kind=%s error=%s", exc.kind, exc)  # noqa: TRY400
        body: dict[str, Any] = {
            "success": False,
            "message": f"Deployment failed: {exc}",
            "kind": str(exc.kind),
        }
        if settings.app.is_development:
            body["debug"] = repr(exc.__cause__ or exc)
        return JSONResponse(body, status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)

    logger.info("Deployment succeeded - url=%s deploy_id=%s", result.url, result.deploy_id)
    return {
        "success": True,
        "message": "Portfolio deployed to Netlify successfully!",
        "url": result.url,
        "deploymentId": result.deploy_id,
    }
