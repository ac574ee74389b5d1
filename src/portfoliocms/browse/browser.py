"""Selection state machine for the category → subcategory → document browser.

Each ``select_*`` call updates the state, re-renders only the columns whose
contents changed and cascades into the first child. The store may be sync
(``ContentStore``) or async; awaitable results are awaited. A fetch that
finishes after a newer selection was made is dropped.
"""

from __future__ import annotations

import inspect
import logging
from typing import Optional

from portfoliocms.browse.state import Column, SelectionState

log = logging.getLogger(__name__)

NO_CATEGORIES = "No categories yet."
NO_SUBCATEGORIES = "No subcategories in this category."
NO_DOCUMENTS = "No documents in this subcategory."


def _by_order(items: list) -> list:
    # sorted() is stable, so equal order_index keeps store order
    return sorted(items, key=lambda i: i.order_index)


class SidebarBrowser:
    """Drives a SidebarView from a content store."""

    def __init__(self, store, view, state: SelectionState | None = None):
        self.store = store
        self.view = view
        self.state = state or SelectionState()
        self._generation = 0
        self._loaded = False

    async def _fetch(self, method, *args, default):
        """Call a store read, awaiting if needed. Failures become ``default``."""
        try:
            result = method(*args)
            if inspect.isawaitable(result):
                result = await result
        except Exception:
            log.exception("Store read %s failed", getattr(method, "__name__", method))
            return default
        return default if result is None else result

    def _bump(self) -> int:
        self._generation += 1
        return self._generation

    # ── Operations ─────────────────────────────────────────────────

    async def load(self):
        """Fetch categories (with nested subcategories) and draw column one."""
        categories = await self._fetch(self.store.list_categories, default=[])
        self.state.categories = _by_order(categories)
        self._loaded = True
        self.view.render_column(Column.CATEGORY, self.state)

    async def select_category(self, category_id: str):
        state = self.state
        if category_id == state.selected_category:
            return
        category = state.find_category(category_id)
        if category is None:
            log.warning("Ignoring unknown category %s", category_id)
            return

        self._bump()
        state.selected_category = category_id
        state.selected_subcategory = None
        state.selected_document = None
        state.documents = []
        self.view.render_column(Column.CATEGORY, state)

        state.subcategories = _by_order(category.subcategories)
        self.view.render_column(Column.SUBCATEGORY, state)

        if state.subcategories:
            await self.select_subcategory(state.subcategories[0].id)
        else:
            self.view.render_column(Column.DOCUMENT, state)
            self.view.render_empty_pane(state, NO_SUBCATEGORIES)

    async def select_subcategory(self, subcategory_id: str):
        state = self.state
        if subcategory_id == state.selected_subcategory:
            return
        if state.find_subcategory(subcategory_id) is None:
            log.warning("Ignoring unknown subcategory %s", subcategory_id)
            return

        generation = self._bump()
        state.selected_subcategory = subcategory_id
        state.selected_document = None
        state.documents = []
        self.view.render_column(Column.SUBCATEGORY, state)

        documents = await self._fetch(
            self.store.list_content_by_subcategory, subcategory_id, default=[]
        )
        if generation != self._generation:
            log.debug("Dropping stale documents for subcategory %s", subcategory_id)
            return

        state.documents = list(documents)
        self.view.render_column(Column.DOCUMENT, state)

        if state.documents:
            await self.select_document(state.documents[0].id)
        else:
            self.view.render_empty_pane(state, NO_DOCUMENTS)

    async def select_document(self, document_id: str):
        state = self.state
        if document_id == state.selected_document:
            return
        item = state.find_document(document_id)
        if item is None:
            log.warning("Ignoring unknown document %s", document_id)
            return

        self._bump()
        state.selected_document = document_id
        self.view.render_column(Column.DOCUMENT, state)
        self.view.render_content(state, item)

    async def auto_select_first_content(self):
        """Select the first category and let the cascade pick the rest."""
        if not self._loaded:
            await self.load()
        if not self.state.categories:
            self.view.render_empty_pane(self.state, NO_CATEGORIES)
            return
        await self.select_category(self.state.categories[0].id)

    async def navigate_to(
        self,
        category_id: Optional[str] = None,
        subcategory_id: Optional[str] = None,
        document_id: Optional[str] = None,
    ):
        """Restore a deep-linked selection.

        Missing parents are looked up from their children, so a bare
        document id is enough. Unknown ids fall back to the default cascade.
        """
        if not self._loaded:
            await self.load()

        if document_id and not subcategory_id:
            item = await self._fetch(self.store.get_content, document_id, default=None)
            if item is not None:
                subcategory_id = item.subcategory_id

        if subcategory_id and not category_id:
            category_id = next(
                (
                    c.id
                    for c in self.state.categories
                    if any(s.id == subcategory_id for s in c.subcategories)
                ),
                None,
            )

        if category_id and self.state.find_category(category_id):
            await self.select_category(category_id)
        else:
            await self.auto_select_first_content()

        if subcategory_id:
            await self.select_subcategory(subcategory_id)
        if document_id:
            await self.select_document(document_id)
