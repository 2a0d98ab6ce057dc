"""Tests for the Netlify API deployer."""

from __future__ import annotations

import io
import json
import zipfile
from dataclasses import replace

import httpx
import pytest

from portfolio_builder.deploy.base import AUTH_FAILED_MESSAGE, DEPLOY_MESSAGE
from portfolio_builder.deploy.netlify_api import NetlifyApiDeployer, zip_directory
from portfolio_builder.errors import DeployError, DeployErrorKind


@pytest.fixture
def site_dir(tmp_path):
    directory = tmp_path / "dist"
    directory.mkdir()
    (directory / "portfolio.html").write_text("<h1>Ada</h1>", encoding="utf-8")
    (directory / "index.html").write_text("<p>soon</p>", encoding="utf-8")
    return directory


class NetlifyStub:
    """Minimal in-memory stand-in for the Netlify REST API."""

    def __init__(self, sites=None, *, status=200):
        self.sites = sites or []
        self.status = status
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.status != 200:
            return httpx.Response(self.status, json={"message": "nope"})
        path = request.url.path
        if request.method == "GET" and path.endswith("/sites"):
            return httpx.Response(200, json=self.sites)
        if request.method == "POST" and path.endswith("/sites"):
            site = {"id": "new-site", "name": json.loads(request.content)["name"],
                    "ssl_url": "https://new.netlify.app"}
            self.sites.append(site)
            return httpx.Response(201, json=site)
        if request.method == "POST" and path.endswith("/deploys"):
            return httpx.Response(200, json={"id": "deploy-1", "ssl_url": "https://deploy-1.netlify.app"})
        return httpx.Response(404)


def _deployer(settings, stub):
    return NetlifyApiDeployer(settings.netlify, transport=httpx.MockTransport(stub))


def test_zip_directory_uses_relative_paths(site_dir):
    archive = zipfile.ZipFile(io.BytesIO(zip_directory(site_dir)))
    assert sorted(archive.namelist()) == ["index.html", "portfolio.html"]
    assert archive.read("portfolio.html") == b"<h1>Ada</h1>"


async def test_deploys_to_existing_site(settings, site_dir):
    stub = NetlifyStub(
        [
            {"id": "other", "name": "test-portfolio-old", "ssl_url": "https://old.netlify.app"},
            {"id": "site-1", "name": "test-portfolio", "ssl_url": "https://test.netlify.app"},
        ]
    )

    result = await _deployer(settings, stub).deploy(site_dir)

    assert result.url == "https://test.netlify.app"
    assert result.deploy_id == "deploy-1"
    assert result.site_id == "site-1"
    lookup, upload = stub.requests
    assert lookup.url.params["name"] == "test-portfolio"
    assert lookup.headers["Authorization"] == "Bearer test-token"
    assert upload.url.path.endswith("/sites/site-1/deploys")
    assert upload.url.params["title"] == DEPLOY_MESSAGE
    assert upload.headers["Content-Type"] == "application/zip"


async def test_creates_site_when_missing(settings, site_dir):
    stub = NetlifyStub([])

    result = await _deployer(settings, stub).deploy(site_dir)

    assert [r.method for r in stub.requests] == ["GET", "POST", "POST"]
    assert json.loads(stub.requests[1].content) == {"name": "test-portfolio", "custom_domain": None}
    assert result.site_id == "new-site"
    assert result.url == "https://new.netlify.app"


async def test_missing_token_is_configuration_error(settings, site_dir):
    deployer = NetlifyApiDeployer(replace(settings.netlify, token=""))
    with pytest.raises(DeployError) as exc_info:
        await deployer.deploy(site_dir)
    assert exc_info.value.kind is DeployErrorKind.CONFIGURATION
    assert "NETLIFY_TOKEN" in str(exc_info.value)


async def test_missing_site_dir_is_not_found(settings, tmp_path):
    with pytest.raises(DeployError) as exc_info:
        await _deployer(settings, NetlifyStub()).deploy(tmp_path / "nothing")
    assert exc_info.value.kind is DeployErrorKind.NOT_FOUND


@pytest.mark.parametrize(
    ("status", "kind"),
    [
        (401, DeployErrorKind.AUTHENTICATION),
        (403, DeployErrorKind.AUTHENTICATION),
        (404, DeployErrorKind.NOT_FOUND),
        (422, DeployErrorKind.CONFIGURATION),
        (502, DeployErrorKind.TRANSIENT),
    ],
)
async def test_http_errors_map_to_kinds(settings, site_dir, status, kind):
    with pytest.raises(DeployError) as exc_info:
        await _deployer(settings, NetlifyStub(status=status)).deploy(site_dir)
    assert exc_info.value.kind is kind


async def test_auth_error_message(settings, site_dir):
    with pytest.raises(DeployError, match=AUTH_FAILED_MESSAGE):
        await _deployer(settings, NetlifyStub(status=401)).deploy(site_dir)


async def test_network_error_is_transient(settings, site_dir):
    def unreachable(request):
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(DeployError, match="Could not reach Netlify") as exc_info:
        await _deployer(settings, unreachable).deploy(site_dir)
    assert exc_info.value.kind is DeployErrorKind.TRANSIENT


async def test_unreadable_deploy_response_is_transient(settings, site_dir):
    site = {"id": "site-1", "name": "test-portfolio", "ssl_url": "https://test.netlify.app"}

    def gateway_page(request):
        if request.method == "GET":
            return httpx.Response(200, json=[site])
        return httpx.Response(200, text="<html>Bad gateway</html>")

    with pytest.raises(DeployError, match="unreadable response") as exc_info:
        await _deployer(settings, gateway_page).deploy(site_dir)
    assert exc_info.value.kind is DeployErrorKind.TRANSIENT
