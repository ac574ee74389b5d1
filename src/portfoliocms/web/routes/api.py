"""Admin JSON API: CRUD over the content store."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import asdict
from typing import Optional

from fastapi import APIRouter, File, HTTPException, Query, Request, UploadFile

from portfoliocms.editor.payload import editor_data, serialize_blocks
from portfoliocms.editor.uploads import upload_image
from portfoliocms.storage.models import ContentType
from portfoliocms.storage.repository import NotFoundError, StoreError
from portfoliocms.web.deps import get_db, get_repo, get_site
from portfoliocms.web.schemas import (
    CategoryIn,
    CategoryUpdate,
    CollectionAssignment,
    CollectionIn,
    CollectionUpdate,
    ContentIn,
    ContentUpdate,
    DownloadIn,
    EntryTypeIn,
    EntryTypeUpdate,
    ProfileIn,
    ResumeEntryIn,
    ResumeEntryUpdate,
    SubcategoryIn,
    SubcategoryUpdate,
)

log = logging.getLogger(__name__)

router = APIRouter()


@contextmanager
def _store(request: Request):
    """Open the store and map its errors to HTTP status codes."""
    with get_db(get_site(request)) as db:
        try:
            yield get_repo(db)
        except NotFoundError as e:
            raise HTTPException(status_code=404, detail=str(e)) from e
        except StoreError as e:
            log.exception("Store write failed")
            raise HTTPException(status_code=400, detail=str(e)) from e
        except ValueError as e:
            raise HTTPException(status_code=422, detail=str(e)) from e


def _found(value, what: str):
    if value is None:
        raise HTTPException(status_code=404, detail=f"{what} not found")
    return value


def _deleted(deleted: bool, what: str) -> dict:
    if not deleted:
        raise HTTPException(status_code=404, detail=f"{what} not found")
    return {"deleted": True}


def _content_json(item) -> dict:
    data = asdict(item)
    data["type"] = item.type.value
    return data


def _article_body(content):
    """Article bodies arrive as editor output; store only the blocks."""
    if content is None or isinstance(content, str):
        return content
    serialized = serialize_blocks(content)
    if serialized is None:
        raise ValueError("Please add content to the article editor")
    return serialized


# ── Categories ─────────────────────────────────────────────────────


@router.get("/categories")
async def list_categories(request: Request):
    with _store(request) as store:
        return [asdict(c) for c in store.list_categories()]


@router.post("/categories", status_code=201)
async def create_category(request: Request, body: CategoryIn):
    with _store(request) as store:
        return asdict(store.create_category(body.name, body.order_index))


@router.get("/categories/{category_id}")
async def get_category(request: Request, category_id: str):
    with _store(request) as store:
        return asdict(_found(store.get_category(category_id), "Category"))


@router.patch("/categories/{category_id}")
async def update_category(request: Request, category_id: str, body: CategoryUpdate):
    with _store(request) as store:
        return asdict(store.update_category(category_id, **body.model_dump(exclude_unset=True)))


@router.delete("/categories/{category_id}")
async def delete_category(request: Request, category_id: str):
    with _store(request) as store:
        return _deleted(store.delete_category(category_id), "Category")


# ── Subcategories ──────────────────────────────────────────────────


@router.get("/categories/{category_id}/subcategories")
async def list_subcategories(request: Request, category_id: str):
    with _store(request) as store:
        return [asdict(s) for s in store.list_subcategories(category_id)]


@router.post("/subcategories", status_code=201)
async def create_subcategory(request: Request, body: SubcategoryIn):
    with _store(request) as store:
        return asdict(store.create_subcategory(body.category_id, body.name, body.order_index))


@router.patch("/subcategories/{subcategory_id}")
async def update_subcategory(request: Request, subcategory_id: str, body: SubcategoryUpdate):
    with _store(request) as store:
        return asdict(
            store.update_subcategory(subcategory_id, **body.model_dump(exclude_unset=True))
        )


@router.delete("/subcategories/{subcategory_id}")
async def delete_subcategory(request: Request, subcategory_id: str):
    with _store(request) as store:
        return _deleted(store.delete_subcategory(subcategory_id), "Subcategory")


# ── Content ────────────────────────────────────────────────────────


@router.get("/content")
async def list_content(request: Request, subcategory_id: str = Query("")):
    with _store(request) as store:
        if subcategory_id:
            items = store.list_content_by_subcategory(subcategory_id)
        else:
            items = store.list_content()
        return [_content_json(i) for i in items]


@router.post("/content", status_code=201)
async def create_content(request: Request, body: ContentIn):
    fields = body.model_dump()
    with _store(request) as store:
        if fields["type"] == ContentType.ARTICLE.value:
            fields["content"] = _article_body(fields["content"])
        elif not isinstance(fields["content"], (str, type(None))):
            raise ValueError("Content must be a URL for this content type")
        return _content_json(store.create_content(**fields))


@router.get("/content/{content_id}")
async def get_content(request: Request, content_id: str):
    with _store(request) as store:
        return _content_json(_found(store.get_content(content_id), "Content"))


@router.get("/content/{content_id}/editor")
async def get_content_editor_data(request: Request, content_id: str):
    """Editor load payload for an article."""
    with _store(request) as store:
        item = _found(store.get_content(content_id), "Content")
    return editor_data(item.content)


@router.patch("/content/{content_id}")
async def update_content(request: Request, content_id: str, body: ContentUpdate):
    fields = body.model_dump(exclude_unset=True)
    with _store(request) as store:
        if "content" in fields:
            current = _found(store.get_content(content_id), "Content")
            new_type = fields.get("type", current.type.value)
            if new_type == ContentType.ARTICLE.value:
                fields["content"] = _article_body(fields["content"])
            elif not isinstance(fields["content"], (str, type(None))):
                raise ValueError("Content must be a URL for this content type")
        return _content_json(store.update_content(content_id, **fields))


@router.delete("/content/{content_id}")
async def delete_content(request: Request, content_id: str):
    with _store(request) as store:
        return _deleted(store.delete_content(content_id), "Content")


@router.get("/content/{content_id}/collections")
async def list_content_collections(request: Request, content_id: str):
    with _store(request) as store:
        return [asdict(c) for c in store.list_content_collections(content_id)]


@router.get("/download-stats")
async def download_stats(request: Request):
    with _store(request) as store:
        return store.download_stats()


# ── Collections ────────────────────────────────────────────────────


@router.get("/collections")
async def list_collections(request: Request):
    with _store(request) as store:
        return [asdict(c) for c in store.list_collections()]


@router.post("/collections", status_code=201)
async def create_collection(request: Request, body: CollectionIn):
    with _store(request) as store:
        return asdict(store.create_collection(**body.model_dump()))


@router.get("/collections/{collection_id}")
async def get_collection(request: Request, collection_id: str):
    with _store(request) as store:
        return asdict(_found(store.get_collection(collection_id), "Collection"))


@router.patch("/collections/{collection_id}")
async def update_collection(request: Request, collection_id: str, body: CollectionUpdate):
    with _store(request) as store:
        return asdict(
            store.update_collection(collection_id, **body.model_dump(exclude_unset=True))
        )


@router.delete("/collections/{collection_id}")
async def delete_collection(request: Request, collection_id: str):
    with _store(request) as store:
        return _deleted(store.delete_collection(collection_id), "Collection")


@router.get("/collections/{collection_id}/content")
async def list_collection_content(request: Request, collection_id: str):
    with _store(request) as store:
        return [_content_json(i) for i in store.list_collection_content(collection_id)]


@router.put("/collections/{collection_id}/content/{content_id}")
async def assign_content(
    request: Request,
    collection_id: str,
    content_id: str,
    body: Optional[CollectionAssignment] = None,
):
    order_index = body.order_index if body else 0
    with _store(request) as store:
        store.add_content_to_collection(content_id, collection_id, order_index)
        return {"assigned": True}


@router.delete("/collections/{collection_id}/content/{content_id}")
async def unassign_content(request: Request, collection_id: str, content_id: str):
    with _store(request) as store:
        return _deleted(
            store.remove_content_from_collection(content_id, collection_id), "Assignment"
        )


# ── Resume ─────────────────────────────────────────────────────────


@router.get("/resume/types")
async def list_entry_types(request: Request):
    with _store(request) as store:
        return [asdict(t) for t in store.list_entry_types()]


@router.post("/resume/types", status_code=201)
async def create_entry_type(request: Request, body: EntryTypeIn):
    with _store(request) as store:
        return asdict(store.create_entry_type(**body.model_dump()))


@router.patch("/resume/types/{entry_type_id}")
async def update_entry_type(request: Request, entry_type_id: str, body: EntryTypeUpdate):
    with _store(request) as store:
        return asdict(
            store.update_entry_type(entry_type_id, **body.model_dump(exclude_unset=True))
        )


@router.delete("/resume/types/{entry_type_id}")
async def delete_entry_type(request: Request, entry_type_id: str):
    with _store(request) as store:
        return _deleted(store.delete_entry_type(entry_type_id), "Entry type")


@router.get("/resume/entries")
async def list_resume_entries(
    request: Request, entry_type_id: str = Query(""), featured: bool = Query(False)
):
    with _store(request) as store:
        if featured:
            entries = store.list_featured_entries()
        elif entry_type_id:
            entries = store.list_entries_by_type(entry_type_id)
        else:
            entries = store.list_resume_entries()
        return [asdict(e) for e in entries]


@router.post("/resume/entries", status_code=201)
async def create_resume_entry(request: Request, body: ResumeEntryIn):
    with _store(request) as store:
        return asdict(store.create_resume_entry(**body.model_dump()))


@router.patch("/resume/entries/{entry_id}")
async def update_resume_entry(request: Request, entry_id: str, body: ResumeEntryUpdate):
    with _store(request) as store:
        return asdict(store.update_resume_entry(entry_id, **body.model_dump(exclude_unset=True)))


@router.delete("/resume/entries/{entry_id}")
async def delete_resume_entry(request: Request, entry_id: str):
    with _store(request) as store:
        return _deleted(store.delete_resume_entry(entry_id), "Resume entry")


# ── Profile ────────────────────────────────────────────────────────


@router.get("/profile")
async def get_profile(request: Request):
    with _store(request) as store:
        return asdict(store.get_or_create_profile())


@router.put("/profile")
async def save_profile(request: Request, body: ProfileIn):
    with _store(request) as store:
        return asdict(store.save_profile(body.model_dump()))


# ── Downloads ──────────────────────────────────────────────────────


@router.get("/downloads")
async def list_downloads(request: Request):
    with _store(request) as store:
        return [asdict(d) for d in store.list_downloads()]


@router.put("/downloads/{file_type}")
async def save_download(request: Request, file_type: str, body: DownloadIn):
    with _store(request) as store:
        return asdict(store.save_download(file_type, body.url, body.filename))


@router.delete("/downloads/{file_type}")
async def delete_download(request: Request, file_type: str):
    with _store(request) as store:
        return _deleted(store.delete_download(file_type), "Download")


# ── Editor ─────────────────────────────────────────────────────────


@router.post("/editor/upload-image")
async def editor_upload_image(request: Request, image: UploadFile = File(...)):
    """Image tool endpoint; always answers with the editor's success shape."""
    data = await image.read()
    return await upload_image(
        request.app.state.image_uploader, image.filename or "image", data, image.content_type
    )
