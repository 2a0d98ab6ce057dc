"""Deployment contracts shared by the Netlify deployers."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

from pydantic import BaseModel

from portfolio_builder.errors import DeployError, DeployErrorKind

if TYPE_CHECKING:
    from pathlib import Path

DEPLOY_MESSAGE = "Automated deployment from Adventure Portfolio Builder"

MISSING_TOKEN_MESSAGE = (
    "Netlify token not found. Please set NETLIFY_TOKEN environment variable.\n\n"
    "To get your Netlify token:\n"
    "1. Go to https://app.netlify.com/user/applications\n"
    '2. Click "New access token"\n'
    "3. Give it a name and generate\n"
    "4. Set it as environment variable: NETLIFY_TOKEN=your_token_here\n\n"
    "For local development, create a .env file with: NETLIFY_TOKEN=your_actual_token"
)
AUTH_FAILED_MESSAGE = "Netlify authentication failed. Please check your access token."


class DeployResult(BaseModel):
    """Where a deployed site can be reached."""

    url: str
    deploy_id: str | None = None
    site_id: str | None = None


@runtime_checkable
class Deployer(Protocol):
    """Protocol for shipping a directory of static files to a hosting target."""

    async def deploy(self, site_dir: Path) -> DeployResult:
        """Deploy ``site_dir`` and return its public URL.

        Raises ``DeployError`` on failure.
        """
        ...


def require_token(token: str) -> str:
    if not token:
        raise DeployError(MISSING_TOKEN_MESSAGE, DeployErrorKind.CONFIGURATION)
    return token


def require_site_dir(site_dir: Path) -> Path:
    if not site_dir.is_dir() or not any(site_dir.iterdir()):
        raise DeployError(
            "Deployment files not found. Please generate a portfolio first.",
            DeployErrorKind.NOT_FOUND,
        )
    return site_dir
