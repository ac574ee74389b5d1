"""Route registration for the portfolio web UI."""

from __future__ import annotations

from fastapi import FastAPI


def register_routes(app: FastAPI):
    """Include all route modules."""
    from portfoliocms.web.routes import api, browse, pages

    app.include_router(api.router, prefix="/api")
    app.include_router(pages.router)
    app.include_router(browse.router)
