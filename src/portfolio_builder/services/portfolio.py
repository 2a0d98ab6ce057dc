"""Portfolio business logic: generate the output files and deploy them."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from portfolio_builder.errors import DeployError, DeployErrorKind

if TYPE_CHECKING:
    from collections.abc import Mapping

    from portfolio_builder.deploy import Deployer, DeployResult
    from portfolio_builder.storage import GeneratedOutput, OutputWriter, PortfolioRenderer

logger = logging.getLogger(__name__)


async def generate_portfolio(
    document: Mapping[str, Any],
    renderer: PortfolioRenderer,
    writer: OutputWriter,
) -> GeneratedOutput:
    """Render ``document`` and write the page and its data to disk."""
    html = renderer.render(document)
    return await writer.write(html, document)


async def deploy_portfolio(
    renderer: PortfolioRenderer,
    writer: OutputWriter,
    deployer: Deployer,
) -> DeployResult:
    """Deploy the generated site directory.

    Fails with a ``not_found`` error when nothing has been generated yet. A
    holding ``index.html`` is added first if the directory has none.
    """
    logger.info("Starting Netlify deployment process")
    if not writer.has_output():
        raise DeployError(
            "Deployment files not found. Please generate a portfolio first.",
            DeployErrorKind.NOT_FOUND,
        )
    try:
        await writer.ensure_index(renderer.render_placeholder())
    except OSError as exc:
        raise DeployError(
            f"Could not prepare deployment files: {exc}", DeployErrorKind.TRANSIENT
        ) from exc
    return await deployer.deploy(writer.dist_dir)
