"""HTTP routes for the editor page and its JSON API."""

from portfolio_builder.routes import editor, pages, portfolio, uploads

ROUTERS = (pages.router, editor.router, uploads.router, portfolio.router)

__all__ = ["ROUTERS"]
