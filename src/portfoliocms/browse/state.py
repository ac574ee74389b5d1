"""Selection state for the three-column sidebar browser."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from portfoliocms.storage.models import Category, ContentItem, Subcategory


class Column(str, Enum):
    CATEGORY = "category"
    SUBCATEGORY = "subcategory"
    DOCUMENT = "document"


class ColumnStatus(str, Enum):
    EMPTY = "empty"
    LOADED = "loaded"
    SELECTED = "selected"


@dataclass
class SelectionState:
    """What is selected in each column, plus the items each column shows."""

    selected_category: Optional[str] = None
    selected_subcategory: Optional[str] = None
    selected_document: Optional[str] = None
    categories: list[Category] = field(default_factory=list)
    subcategories: list[Subcategory] = field(default_factory=list)
    documents: list[ContentItem] = field(default_factory=list)

    def items(self, column: Column) -> list:
        return {
            Column.CATEGORY: self.categories,
            Column.SUBCATEGORY: self.subcategories,
            Column.DOCUMENT: self.documents,
        }[column]

    def selected(self, column: Column) -> Optional[str]:
        return {
            Column.CATEGORY: self.selected_category,
            Column.SUBCATEGORY: self.selected_subcategory,
            Column.DOCUMENT: self.selected_document,
        }[column]

    def status(self, column: Column) -> ColumnStatus:
        if not self.items(column):
            return ColumnStatus.EMPTY
        if self.selected(column) is None:
            return ColumnStatus.LOADED
        return ColumnStatus.SELECTED

    def find_category(self, category_id: str) -> Optional[Category]:
        return next((c for c in self.categories if c.id == category_id), None)

    def find_subcategory(self, subcategory_id: str) -> Optional[Subcategory]:
        return next((s for s in self.subcategories if s.id == subcategory_id), None)

    def find_document(self, document_id: str) -> Optional[ContentItem]:
        return next((d for d in self.documents if d.id == document_id), None)

    @property
    def current_document(self) -> Optional[ContentItem]:
        if self.selected_document is None:
            return None
        return self.find_document(self.selected_document)
