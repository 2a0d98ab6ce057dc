"""Tests for the generate and deploy services."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from portfolio_builder.deploy import DeployResult
from portfolio_builder.errors import DeployError, DeployErrorKind
from portfolio_builder.services.portfolio import deploy_portfolio, generate_portfolio
from portfolio_builder.storage import OutputWriter, PortfolioRenderer


@pytest.fixture
def writer(tmp_path):
    return OutputWriter(tmp_path / "public", tmp_path / "dist", tmp_path / "data.json")


@pytest.mark.unit
async def test_generate_writes_rendered_page(writer):
    output = await generate_portfolio({"name": "Ada"}, PortfolioRenderer(), writer)
    assert "Ada" in output.public_path.read_text(encoding="utf-8")
    assert output.dist_path.exists()


@pytest.mark.unit
async def test_deploy_requires_generated_output(writer):
    deployer = MagicMock()
    deployer.deploy = AsyncMock()

    with pytest.raises(DeployError) as exc_info:
        await deploy_portfolio(PortfolioRenderer(), writer, deployer)

    assert exc_info.value.kind is DeployErrorKind.NOT_FOUND
    assert "Please generate a portfolio first" in str(exc_info.value)
    deployer.deploy.assert_not_awaited()


@pytest.mark.unit
async def test_deploy_adds_index_and_calls_deployer(writer):
    renderer = PortfolioRenderer()
    await generate_portfolio({"name": "Ada"}, renderer, writer)
    deployer = MagicMock()
    deployer.deploy = AsyncMock(return_value=DeployResult(url="https://ada.netlify.app"))

    result = await deploy_portfolio(renderer, writer, deployer)

    assert result.url == "https://ada.netlify.app"
    assert (writer.dist_dir / "index.html").exists()
    deployer.deploy.assert_awaited_once_with(writer.dist_dir)


@pytest.mark.unit
async def test_deploy_propagates_deployer_errors(writer):
    renderer = PortfolioRenderer()
    await generate_portfolio({}, renderer, writer)
    deployer = MagicMock()
    deployer.deploy = AsyncMock(
        side_effect=DeployError("bad token", DeployErrorKind.AUTHENTICATION)
    )

    with pytest.raises(DeployError, match="bad token"):
        await deploy_portfolio(renderer, writer, deployer)
