"""Deploy a site directory through the Netlify HTTP API."""

from __future__ import annotations

import asyncio
import io
import logging
import zipfile
from typing import TYPE_CHECKING, Any

import httpx

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

_TIMEOUT_SECONDS = 60.0
_HTTP_UNAUTHORIZED = 401
_HTTP_FORBIDDEN = 403
_HTTP_NOT_FOUND = 404
_HTTP_UNPROCESSABLE = 422


def zip_directory(site_dir: Path) -> bytes:
    """Zip every file below ``site_dir`` with paths relative to it."""
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w", zipfile.ZIP_DEFLATED) as archive:
        for path in sorted(site_dir.rglob("*")):
            if path.is_file():
                archive.write(path, path.relative_to(site_dir).as_posix())
    return buffer.getvalue()


def _site_url(site: dict[str, Any]) -> str:
    return site.get("ssl_url") or site.get("url") or ""


class NetlifyApiDeployer:
    """Find or create the configured Netlify site and upload a zip deploy to it."""

    def __init__(
        self,
        config: NetlifyConfig,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._config = config
        self._transport = transport

    async def deploy(self, site_dir: Path) -> DeployResult:
        token = require_token(self._config.token)
        require_site_dir(site_dir)
        archive = await asyncio.to_thread(zip_directory, site_dir)

        async with httpx.AsyncClient(
            base_url=self._config.api_url.rstrip("/"),
            headers={"Authorization": f"Bearer {token}"},
            timeout=_TIMEOUT_SECONDS,
            transport=self._transport,
        ) as client:
            try:
                site = await self._find_or_create_site(client)
                logger.info("Deploying files - site=%s bytes=%d", site.get("id"), len(archive))
                response = await client.post(
                    f"/sites/{site['id']}/deploys",
                    params={"title": DEPLOY_MESSAGE},
                    content=archive,
                    headers={"Content-Type": "application/zip"},
                )
                response.raise_for_status()
                deployment = response.json()
            except httpx.HTTPStatusError as exc:
                raise self._status_error(exc) from exc
            except httpx.TransportError as exc:
                raise DeployError(
                    f"Could not reach Netlify: {exc}", DeployErrorKind.TRANSIENT
                ) from exc
            except ValueError as exc:
                logger.warning("Netlify returned a non-JSON response", exc_info=True)
                raise DeployError(
                    "Netlify returned an unreadable response", DeployErrorKind.TRANSIENT
                ) from exc

        url = _site_url(site) or deployment.get("ssl_url") or deployment.get("url") or ""
        logger.info("Deployment successful - url=%s deploy=%s", url, deployment.get("id"))
        return DeployResult(url=url, deploy_id=deployment.get("id"), site_id=site.get("id"))

    async def _find_or_create_site(self, client: httpx.AsyncClient) -> dict[str, Any]:
        name = self._config.site_name
        logger.info("Looking for existing site - name=%s", name)
        response = await client.get("/sites", params={"name": name, "filter": "all"})
        response.raise_for_status()
        for site in response.json():
            if site.get("name") == name:
                logger.info("Found existing site - url=%s", _site_url(site))
                return site

        logger.info("Creating new site - name=%s", name)
        response = await client.post("/sites", json={"name": name, "custom_domain": None})
        response.raise_for_status()
        site = response.json()
        logger.info("New site created - url=%s", _site_url(site))
        return site

    def _status_error(self, exc: httpx.HTTPStatusError) -> DeployError:
        status = exc.response.status_code
        logger.warning(
            "Netlify API error - status=%d url=%s", status, exc.request.url, exc_info=True
        )
        if status in (_HTTP_UNAUTHORIZED, _HTTP_FORBIDDEN):
            return DeployError(AUTH_FAILED_MESSAGE, DeployErrorKind.AUTHENTICATION)
        if status == _HTTP_UNPROCESSABLE:
            return DeployError(
                f"Netlify rejected the site name {self._config.site_name!r}. "
                "Set NETLIFY_SITE_NAME to a name you own.",
                DeployErrorKind.CONFIGURATION,
            )
        if status == _HTTP_NOT_FOUND:
            return DeployError(
                "Netlify site not found. Check NETLIFY_SITE_NAME.", DeployErrorKind.NOT_FOUND
            )
        return DeployError(f"Netlify API returned HTTP {status}", DeployErrorKind.TRANSIENT)
