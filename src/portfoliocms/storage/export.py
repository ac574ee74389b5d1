"""JSON export of the portfolio content store."""

from __future__ import annotations

import json
from dataclasses import asdict
from pathlib import Path

from portfoliocms.storage.repository import ContentStore
from portfoliocms.storage.slugs import generate_slug


def export_all(store: ContentStore, output_dir: Path):
    """Export all content as organized JSON files."""
    output_dir.mkdir(parents=True, exist_ok=True)

    categories = store.list_categories()
    subcategory_paths = {}
    for cat in categories:
        for sub in cat.subcategories:
            subcategory_paths[sub.id] = (cat, sub)

    profile = store.get_profile()

    # Full export
    items = [_content_record(item, subcategory_paths) for item in store.list_content()]
    _write_json(output_dir / "full_export.json", {
        "categories": [asdict(c) for c in categories],
        "content": items,
        "collections": [asdict(c) for c in store.list_collections()],
        "resume": {
            "entry_types": [asdict(t) for t in store.list_entry_types()],
            "entries": [asdict(e) for e in store.list_resume_entries()],
        },
        "profile": asdict(profile) if profile else None,
        "downloads": [asdict(d) for d in store.list_downloads()],
    })

    # By category
    by_cat_dir = output_dir / "by_category"
    by_cat_dir.mkdir(exist_ok=True)
    by_category = {}
    for cat in categories:
        cat_items = [i for i in items if i["category_id"] == cat.id]
        # Category names are not unique; a repeated slug gets the id appended
        stem = generate_slug(cat.name) or cat.id
        if stem in by_category:
            stem = f"{stem}-{cat.id}"
        _write_json(by_cat_dir / f"{stem}.json", {
            "id": cat.id,
            "name": cat.name,
            "subcategories": [
                {
                    "id": sub.id,
                    "name": sub.name,
                    "content": [i for i in cat_items if i["subcategory_id"] == sub.id],
                }
                for sub in cat.subcategories
            ],
        })
        by_category[stem] = len(cat_items)

    # By collection
    collections_dir = output_dir / "collections"
    collections_dir.mkdir(exist_ok=True)
    by_collection = {}
    for col in store.list_collections():
        col_items = [
            _content_record(item, subcategory_paths)
            for item in store.list_collection_content(col.id)
        ]
        _write_json(collections_dir / f"{col.slug}.json", {
            **asdict(col),
            "content": col_items,
        })
        by_collection[col.slug] = len(col_items)

    return {
        "total": len(items),
        "by_category": by_category,
        "by_collection": by_collection,
    }


def _content_record(item, subcategory_paths: dict) -> dict:
    record = asdict(item)
    record["type"] = item.type.value
    cat, sub = subcategory_paths.get(item.subcategory_id, (None, None))
    record["category_id"] = cat.id if cat else None
    record["category"] = cat.name if cat else None
    record["subcategory"] = sub.name if sub else None
    return record


def _write_json(path: Path, data):
    """Write data as formatted JSON."""
    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2, ensure_ascii=False)
