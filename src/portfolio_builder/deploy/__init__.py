"""Deployment adapters for shipping the generated site to Netlify."""

from __future__ import annotations

from typing import TYPE_CHECKING

from portfolio_builder.deploy.base import Deployer, DeployResult
from portfolio_builder.deploy.netlify_api import NetlifyApiDeployer
from portfolio_builder.deploy.netlify_cli import NetlifyCliDeployer

if TYPE_CHECKING:
    from portfolio_builder.config import NetlifyConfig


def create_deployer(config: NetlifyConfig) -> Deployer:
    """Pick the deployer named by ``NETLIFY_DEPLOY_MODE`` (``api`` or ``cli``)."""
    mode = config.deploy_mode.lower()
    if mode == "cli":
        return NetlifyCliDeployer(config)
    if mode == "api":
        return NetlifyApiDeployer(config)
    raise ValueError(f"Unknown NETLIFY_DEPLOY_MODE {config.deploy_mode!r}; use 'api' or 'cli'")


__all__ = [
    "DeployResult",
    "Deployer",
    "NetlifyApiDeployer",
    "NetlifyCliDeployer",
    "create_deployer",
]
