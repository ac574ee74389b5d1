"""FastAPI application factory for the portfolio site."""

from __future__ import annotations

from pathlib import Path

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates

from portfoliocms.config import DOWNLOAD_FILE_TYPES, SiteConfig, load_site_config
from portfoliocms.render.content import format_date

WEB_DIR = Path(__file__).parent
TEMPLATES_DIR = WEB_DIR / "templates"
STATIC_DIR = WEB_DIR / "static"

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))
templates.env.filters["display_date"] = format_date
templates.env.globals["download_labels"] = DOWNLOAD_FILE_TYPES


def create_app(site: SiteConfig | None = None, image_uploader=None) -> FastAPI:
    """Create and configure the FastAPI application.

    ``image_uploader`` is the storage hook used by the editor's image tool;
    without one, uploads report failure.
    """
    app = FastAPI(title="Portfolio CMS", docs_url=None, redoc_url=None)

    # Mount static files
    app.mount("/static", StaticFiles(directory=str(STATIC_DIR)), name="static")

    app.state.site = site or load_site_config()
    app.state.image_uploader = image_uploader

    # Make the site config available to all templates
    @app.middleware("http")
    async def add_template_context(request, call_next):
        request.state.site = app.state.site
        return await call_next(request)

    # Register all routes
    from portfoliocms.web.routes import register_routes

    register_routes(app)

    return app
