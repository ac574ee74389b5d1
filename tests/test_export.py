"""Tests for portfoliocms.storage.export."""

from __future__ import annotations

import json

from portfoliocms.storage.export import export_all


class TestExportAll:
    def test_creates_output_directory(self, populated, tmp_path):
        store, _ = populated
        output_dir = tmp_path / "exports"
        export_all(store, output_dir)
        assert output_dir.is_dir()

    def test_full_export_file(self, populated, tmp_path):
        store, ids = populated
        output_dir = tmp_path / "exports"
        export_all(store, output_dir)
        data = json.loads((output_dir / "full_export.json").read_text())
        assert len(data["content"]) == 3
        assert [c["name"] for c in data["categories"]] == ["Writing", "Media", "Empty"]
        newer = next(c for c in data["content"] if c["id"] == ids["newer"])
        assert newer["type"] == "article"
        assert newer["category"] == "Writing"
        assert newer["subcategory"] == "Essays"
        assert data["profile"] is None
        assert data["downloads"] == []

    def test_by_category_files(self, populated, tmp_path):
        store, _ = populated
        output_dir = tmp_path / "exports"
        export_all(store, output_dir)
        cat_dir = output_dir / "by_category"
        assert (cat_dir / "writing.json").exists()
        assert (cat_dir / "media.json").exists()
        writing = json.loads((cat_dir / "writing.json").read_text())
        essays = writing["subcategories"][0]
        assert essays["name"] == "Essays"
        assert [c["title"] for c in essays["content"]] == ["On Cities", "Older Essay"]

    def test_collection_files(self, populated, tmp_path):
        store, ids = populated
        collection = store.create_collection("Best Work")
        store.add_content_to_collection(ids["photo"], collection.id)
        output_dir = tmp_path / "exports"
        export_all(store, output_dir)
        data = json.loads((output_dir / "collections" / "best-work.json").read_text())
        assert data["name"] == "Best Work"
        assert [c["id"] for c in data["content"]] == [ids["photo"]]

    def test_returns_summary(self, populated, tmp_path):
        store, ids = populated
        collection = store.create_collection("Best Work")
        store.add_content_to_collection(ids["photo"], collection.id)
        summary = export_all(store, tmp_path / "exports")
        assert summary["total"] == 3
        assert summary["by_category"] == {"writing": 2, "media": 1, "empty": 0}
        assert summary["by_collection"] == {"best-work": 1}

    def test_profile_and_resume_included(self, store, tmp_path):
        store.save_profile({"full_name": "Jane Doe", "skills": ["Writing"]})
        jobs = store.create_entry_type("Jobs")
        store.create_resume_entry(jobs.id, "Reporter", "2020-01-01")
        export_all(store, tmp_path / "exports")
        data = json.loads((tmp_path / "exports" / "full_export.json").read_text())
        assert data["profile"]["full_name"] == "Jane Doe"
        assert data["profile"]["skills"] == ["Writing"]
        assert data["resume"]["entries"][0]["title"] == "Reporter"
        assert data["content"] == []

    def test_repeated_category_slug_gets_own_file(self, store, tmp_path):
        first = store.create_category("Writing", 0)
        second = store.create_category("writing", 1)
        for cat in (first, second):
            sub = store.create_subcategory(cat.id, "Notes")
            store.create_content(
                subcategory_id=sub.id,
                type="image",
                title=f"Item in {cat.name}",
                content="https://images.example.com/a.jpg",
            )

        summary = export_all(store, tmp_path / "exports")
        cat_dir = tmp_path / "exports" / "by_category"
        assert sorted(p.name for p in cat_dir.iterdir()) == sorted(
            ["writing.json", f"writing-{second.id}.json"]
        )
        assert summary["by_category"] == {"writing": 1, f"writing-{second.id}": 1}

        repeated = json.loads((cat_dir / f"writing-{second.id}.json").read_text())
        assert repeated["name"] == "writing"
        assert repeated["subcategories"][0]["content"][0]["title"] == "Item in writing"
