"""HTML rendering of the sidebar browser columns and content pane."""

from __future__ import annotations

import html as html_mod
from typing import Protocol
from urllib.parse import urlencode

from portfoliocms.browse.state import Column, ColumnStatus, SelectionState
from portfoliocms.browse.wheel import wheel_slots
from portfoliocms.render.content import format_date, render_content_item, render_empty_pane
from portfoliocms.storage.models import ContentItem

EMPTY_MESSAGES = {
    Column.CATEGORY: "No categories yet.",
    Column.SUBCATEGORY: "No subcategories in this category.",
    Column.DOCUMENT: "No documents in this subcategory.",
}

# Shown when the parent column has nothing selected yet
PROMPTS = {
    Column.SUBCATEGORY: "Select a category.",
    Column.DOCUMENT: "Select a subcategory.",
}


class SidebarView(Protocol):
    def render_column(self, column: Column, state: SelectionState) -> None: ...

    def render_content(self, state: SelectionState, item: ContentItem) -> None: ...

    def render_empty_pane(self, state: SelectionState, message: str) -> None: ...


def browse_query(
    category: str | None = None,
    subcategory: str | None = None,
    document: str | None = None,
) -> str:
    params = {
        k: v
        for k, v in (("category", category), ("subcategory", subcategory), ("document", document))
        if v
    }
    return urlencode(params)


class HtmlSidebarView:
    """Keeps the latest HTML for each column and the content pane.

    The web layer renders these into the page; htmx requests swap the
    whole browser fragment.
    """

    def __init__(self, target: str = "#sidebar-browser"):
        self.target = target
        self.columns: dict[Column, str] = {c: "" for c in Column}
        self.pane = ""

    def _link(self, label_html: str, query: str) -> str:
        return (
            f'<a href="/?{query}" hx-get="/browse?{query}" hx-target="{self.target}" '
            f'hx-swap="outerHTML" hx-push-url="/?{query}">{label_html}</a>'
        )

    def _item_label(self, column: Column, item) -> str:
        if column is Column.DOCUMENT:
            subtitle = (
                f'<span class="wheel-subtitle">{html_mod.escape(item.nav_subtitle)}</span>'
                if item.nav_subtitle else ""
            )
            return (
                f'<span class="wheel-title">{html_mod.escape(item.nav_title)}</span>'
                f"{subtitle}"
                f'<span class="wheel-meta">{item.type.label} &middot; '
                f"{html_mod.escape(format_date(item.created_at))}</span>"
            )
        return f'<span class="wheel-title">{html_mod.escape(item.name)}</span>'

    def _item_query(self, column: Column, item, state: SelectionState) -> str:
        if column is Column.CATEGORY:
            return browse_query(item.id)
        if column is Column.SUBCATEGORY:
            return browse_query(state.selected_category, item.id)
        return browse_query(state.selected_category, state.selected_subcategory, item.id)

    def render_column(self, column: Column, state: SelectionState) -> None:
        status = state.status(column)
        attrs = (
            f'class="wheel-column wheel-{column.value}" id="{column.value}-column" '
            f'data-status="{status.value}"'
        )

        if status is ColumnStatus.EMPTY:
            parent_selected = column is Column.CATEGORY or (
                state.selected_category if column is Column.SUBCATEGORY
                else state.selected_subcategory
            )
            message = EMPTY_MESSAGES[column] if parent_selected else PROMPTS[column]
            self.columns[column] = (
                f'<div {attrs}><p class="wheel-empty">{html_mod.escape(message)}</p></div>'
            )
            return

        rows = []
        for slot in wheel_slots(state.items(column), state.selected(column)):
            classes = f"wheel-item wheel-{slot.proximity.value}"
            if slot.is_selected:
                classes += " is-selected"
            query = self._item_query(column, slot.item, state)
            rows.append(
                f'<li class="{classes}" data-id="{html_mod.escape(slot.item.id)}">'
                f"{self._link(self._item_label(column, slot.item), query)}</li>"
            )
        self.columns[column] = f'<div {attrs}><ul>{"".join(rows)}</ul></div>'

    def render_content(self, state: SelectionState, item: ContentItem) -> None:
        self.pane = render_content_item(item)

    def render_empty_pane(self, state: SelectionState, message: str) -> None:
        self.pane = render_empty_pane(message)

    def html(self) -> str:
        """The full browser fragment: three columns and the content pane."""
        columns = "".join(self.columns[c] for c in Column)
        return (
            f'<div id="{self.target.lstrip("#")}" class="sidebar-browser">'
            f'<nav class="wheel-columns">{columns}</nav>'
            f'<main class="content-pane">{self.pane}</main>'
            f"</div>"
        )
