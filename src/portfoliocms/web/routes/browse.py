"""Sidebar browser routes: the home page, its htmx fragment and the content pane."""

from __future__ import annotations

from fastapi import APIRouter, Query, Request
from fastapi.responses import HTMLResponse

from portfoliocms.browse.browser import SidebarBrowser
from portfoliocms.browse.view import HtmlSidebarView
from portfoliocms.render.content import render_content_item, render_empty_pane
from portfoliocms.storage.repository import ContentStore
from portfoliocms.web.app import templates
from portfoliocms.web.deps import get_db, get_repo, get_site

router = APIRouter()


async def _browse(
    store: ContentStore, category: str, subcategory: str, document: str
) -> HtmlSidebarView:
    """Run the selection cascade for a (possibly partial) deep link."""
    view = HtmlSidebarView()
    browser = SidebarBrowser(store, view)
    await browser.navigate_to(category or None, subcategory or None, document or None)
    return view


@router.get("/")
async def home(
    request: Request,
    category: str = Query(""),
    subcategory: str = Query(""),
    document: str = Query(""),
):
    """Public home page with the three-column browser."""
    site = get_site(request)
    with get_db(site) as db:
        store = get_repo(db)
        view = await _browse(store, category, subcategory, document)
        profile = store.get_profile()

    return templates.TemplateResponse("pages/browse.html", {
        "request": request,
        "site": site,
        "active_page": "browse",
        "browser_html": view.html(),
        "profile": profile,
    })


@router.get("/browse")
async def browse_fragment(
    request: Request,
    category: str = Query(""),
    subcategory: str = Query(""),
    document: str = Query(""),
):
    """Return the browser as an HTML fragment (htmx)."""
    with get_db(get_site(request)) as db:
        view = await _browse(get_repo(db), category, subcategory, document)
    return HTMLResponse(view.html())


@router.get("/content/{content_id}")
async def content_pane(request: Request, content_id: str):
    """Return one content item's pane as an HTML fragment."""
    with get_db(get_site(request)) as db:
        item = get_repo(db).get_content(content_id)

    if item is None:
        return HTMLResponse(render_empty_pane("Content not found."), status_code=404)
    return HTMLResponse(render_content_item(item))
