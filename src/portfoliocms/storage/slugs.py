"""URL slug generation for collections."""

from __future__ import annotations

import re


def generate_slug(name: str) -> str:
    """Derive a URL-safe slug from a display name.

    "My Great Post!" -> "my-great-post"
    """
    slug = name.lower().strip()
    slug = re.sub(r"[^\w\s-]", "", slug)
    slug = re.sub(r"\s+", "-", slug)
    slug = re.sub(r"-+", "-", slug)
    return slug
