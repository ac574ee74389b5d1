"""Block-list document decoding and URL checks shared by the renderers."""

from __future__ import annotations

import json
from collections.abc import Mapping
from enum import Enum
from urllib.parse import urlparse


class BlockType(str, Enum):
    PARAGRAPH = "paragraph"
    HEADER = "header"
    LIST = "list"
    QUOTE = "quote"
    DELIMITER = "delimiter"
    CODE = "code"
    EMBED = "embed"
    IMAGE = "image"


class MalformedDocument(ValueError):
    """The value is not a block-list document."""


def extract_blocks(value) -> list:
    """Return the raw block list from a parsed document.

    Accepts either the list itself or the editor's ``{"blocks": [...]}``
    wrapper. Anything else raises MalformedDocument.
    """
    if isinstance(value, list):
        return value
    if isinstance(value, Mapping) and isinstance(value.get("blocks"), list):
        return value["blocks"]
    raise MalformedDocument(f"Expected a block list, got {type(value).__name__}")


def decode_document(value) -> list:
    """Parse a stored document (JSON string, list or dict) into blocks.

    Raises json.JSONDecodeError when a string is not JSON at all, and
    MalformedDocument when the shape is wrong.
    """
    if isinstance(value, (bytes, bytearray)):
        value = value.decode("utf-8", errors="replace")
    if isinstance(value, str):
        if not value.strip():
            raise MalformedDocument("Empty document")
        value = json.loads(value)
    return extract_blocks(value)


def block_data(block: Mapping) -> Mapping:
    data = block.get("data")
    return data if isinstance(data, Mapping) else {}


def is_safe_url(url) -> bool:
    """True for http(s) and protocol-relative URLs."""
    if not isinstance(url, str):
        return False
    url = url.strip()
    if not url:
        return False
    if url.startswith("//"):
        return len(url) > 2 and not url.startswith("///")
    try:
        parsed = urlparse(url)
    except ValueError:
        return False
    return parsed.scheme.lower() in ("http", "https") and bool(parsed.netloc)
