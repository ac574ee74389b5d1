"""Image upload hook for the block editor's image tool.

The actual storage backend is pluggable: an uploader is any callable
``(filename, data, content_type) -> url`` (sync or async). The response
shape is what the editor's image tool expects.
"""

from __future__ import annotations

import inspect
import logging

log = logging.getLogger(__name__)

FAILURE = {"success": 0}


async def upload_image(uploader, filename: str, data: bytes, content_type: str | None) -> dict:
    """Run the uploader and wrap the resulting URL for the editor."""
    if uploader is None:
        log.warning("Image upload attempted but no uploader is configured")
        return dict(FAILURE)
    if not data:
        log.warning("Refusing empty upload %s", filename)
        return dict(FAILURE)
    if content_type and not content_type.startswith("image/"):
        log.warning("Refusing non-image upload %s (%s)", filename, content_type)
        return dict(FAILURE)

    try:
        url = uploader(filename, data, content_type)
        if inspect.isawaitable(url):
            url = await url
    except Exception:
        log.exception("Error uploading %s", filename)
        return dict(FAILURE)

    if not url:
        log.error("Uploader returned no URL for %s", filename)
        return dict(FAILURE)

    log.info("Image uploaded: %s", url)
    return {"success": 1, "file": {"url": url}}
