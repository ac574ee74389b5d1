"""Collections, resume, profile and downloads pages."""

from __future__ import annotations

import html as html_mod

from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse

from portfoliocms.config import DOWNLOAD_FILE_TYPES
from portfoliocms.render.profile import render_profile_card, render_profile_details
from portfoliocms.render.resume import render_timeline
from portfoliocms.web.app import templates
from portfoliocms.web.deps import get_db, get_repo, get_site

router = APIRouter()


@router.get("/collections")
async def collections_page(request: Request):
    """All collections with their item counts."""
    site = get_site(request)
    with get_db(site) as db:
        store = get_repo(db)
        collections = [
            {"collection": c, "count": len(store.list_collection_content(c.id))}
            for c in store.list_collections()
        ]

    return templates.TemplateResponse("pages/collections.html", {
        "request": request,
        "site": site,
        "active_page": "collections",
        "collections": collections,
    })


@router.get("/collections/{slug}")
async def collection_page(request: Request, slug: str):
    """One collection's content, in collection order."""
    site = get_site(request)
    with get_db(site) as db:
        store = get_repo(db)
        collection = store.get_collection_by_slug(slug)
        items = store.list_collection_content(collection.id) if collection else []

    if collection is None:
        return HTMLResponse(
            '<p class="page-empty">Collection not found.</p>', status_code=404
        )

    return templates.TemplateResponse("pages/collection.html", {
        "request": request,
        "site": site,
        "active_page": "collections",
        "collection": collection,
        "items": items,
    })


@router.get("/resume")
async def resume_page(request: Request):
    """Resume timeline."""
    site = get_site(request)
    with get_db(site) as db:
        store = get_repo(db)
        timeline_html = render_timeline(store.list_resume_entries(), store.list_entry_types())
        downloads = store.list_downloads()

    return templates.TemplateResponse("pages/resume.html", {
        "request": request,
        "site": site,
        "active_page": "resume",
        "timeline_html": timeline_html,
        "downloads": downloads,
    })


@router.get("/profile")
async def profile_page(request: Request):
    """Business card and long-form profile."""
    site = get_site(request)
    with get_db(site) as db:
        profile = get_repo(db).get_profile()

    return templates.TemplateResponse("pages/profile.html", {
        "request": request,
        "site": site,
        "active_page": "profile",
        "card_html": render_profile_card(profile),
        "details_html": render_profile_details(profile),
    })


@router.get("/downloads")
async def downloads_fragment(request: Request):
    """Return the downloadable files as an HTML fragment (htmx)."""
    with get_db(get_site(request)) as db:
        downloads = get_repo(db).list_downloads()

    if not downloads:
        return HTMLResponse('<p class="downloads-empty">No downloads available.</p>')

    rows = "".join(
        f'<li><a href="{html_mod.escape(d.file_url)}" target="_blank" rel="noopener" download>'
        f'<span class="download-label">{html_mod.escape(DOWNLOAD_FILE_TYPES.get(d.file_type, d.file_type))}</span>'
        f'<span class="download-name">{html_mod.escape(d.file_name)}</span></a></li>'
        for d in downloads
    )
    return HTMLResponse(f'<ul class="downloads">{rows}</ul>')
