"""Deploy a site directory by shelling out to the Netlify CLI."""

from __future__ import annotations

import asyncio
import json
import logging
import os
from typing import TYPE_CHECKING

from portfolio_builder.deploy.base import (
    AUTH_FAILED_MESSAGE,
    DEPLOY_MESSAGE,
    DeployResult,
    require_site_dir,
    require_token,
)
from portfolio_builder.errors import DeployError, DeployErrorKind

if TYPE_CHECKING:
    from pathlib import Path

    from portfolio_builder.config import NetlifyConfig

logger = logging.getLogger(__name__)

_TIMEOUT_SECONDS = 300.0
_AUTH_MARKERS = ("unauthorized", "access denied", "401", "not logged in")


class NetlifyCliDeployer:
    """Run ``netlify deploy --prod --json`` against the site directory."""

    def __init__(self, config: NetlifyConfig, *, timeout: float = _TIMEOUT_SECONDS) -> None:
        self._config = config
        self._timeout = timeout

    def command(self, site_dir: Path) -> list[str]:
        return [
            self._config.cli,
            "deploy",
            "--prod",
            "--json",
            "--dir",
            str(site_dir),
            "--site",
            self._config.site_name,
            "--message",
            DEPLOY_MESSAGE,
        ]

    async def deploy(self, site_dir: Path) -> DeployResult:
        token = require_token(self._config.token)
        require_site_dir(site_dir)
        command = self.command(site_dir)
        logger.info("Running Netlify CLI - dir=%s site=%s", site_dir, self._config.site_name)

        try:
            process = await asyncio.create_subprocess_exec(
                *command,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
                env={**os.environ, "NETLIFY_AUTH_TOKEN": token},
            )
        except FileNotFoundError as exc:
            raise DeployError(
                f"Netlify CLI not found ({self._config.cli!r}). "
                "Install it with: npm install -g netlify-cli",
                DeployErrorKind.CONFIGURATION,
            ) from exc

        try:
            stdout, stderr = await asyncio.wait_for(process.communicate(), self._timeout)
        except TimeoutError as exc:
            process.kill()
            await process.wait()
            raise DeployError(
                f"Netlify CLI timed out after {self._timeout:.0f}s", DeployErrorKind.TRANSIENT
            ) from exc

        out = stdout.decode("utf-8", errors="replace")
        err = stderr.decode("utf-8", errors="replace")
        if process.returncode != 0:
            raise self._failure(process.returncode, out, err)
        return self._parse(out)

    def _failure(self, returncode: int | None, out: str, err: str) -> DeployError:
        detail = (err or out).strip()
        logger.warning("Netlify CLI failed - code=%s output=%s", returncode, detail)
        if any(marker in detail.lower() for marker in _AUTH_MARKERS):
            return DeployError(AUTH_FAILED_MESSAGE, DeployErrorKind.AUTHENTICATION)
        last_line = detail.splitlines()[-1] if detail else f"exit code {returncode}"
        return DeployError(f"Netlify CLI failed: {last_line}", DeployErrorKind.TRANSIENT)

    @staticmethod
    def _parse(out: str) -> DeployResult:
        try:
            payload = json.loads(out)
        except json.JSONDecodeError as exc:
            raise DeployError(
                "Netlify CLI returned unexpected output", DeployErrorKind.TRANSIENT
            ) from exc
        url = payload.get("url") or payload.get("deploy_url") or ""
        logger.info("Deployment successful - url=%s deploy=%s", url, payload.get("deploy_id"))
        return DeployResult(
            url=url,
            deploy_id=payload.get("deploy_id"),
            site_id=payload.get("site_id"),
        )
