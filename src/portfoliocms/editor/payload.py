"""Block editor payloads: what the admin editor saves and loads.

Only the blocks list is stored; the editor's ``time``/``version`` envelope
is rebuilt when an article is opened for editing.
"""

from __future__ import annotations

import html as html_mod
import json
import logging
import time
from collections.abc import Mapping

from portfoliocms.render.blocks import BlockType, MalformedDocument, decode_document, extract_blocks

log = logging.getLogger(__name__)

EDITOR_VERSION = "2.28.2"


def has_content(blocks: list) -> bool:
    """False when every block is a paragraph with blank text."""
    for block in blocks:
        if not isinstance(block, Mapping):
            continue
        if block.get("type") != BlockType.PARAGRAPH.value:
            return True
        data = block.get("data")
        text = data.get("text") if isinstance(data, Mapping) else None
        if text and str(text).strip():
            return True
    return False


def serialize_blocks(data) -> str | None:
    """Serialize editor output for storage.

    ``data`` is the editor's save() result or a bare blocks list. Returns
    None when there is nothing worth saving.
    """
    try:
        blocks = extract_blocks(data)
    except MalformedDocument:
        log.warning("Editor payload has no blocks list")
        return None
    if not blocks or not has_content(blocks):
        return None
    return json.dumps(blocks, ensure_ascii=False)


def editor_data(stored) -> dict:
    """Build the editor's load payload from a stored document."""
    blocks: list = []
    if stored:
        try:
            blocks = decode_document(stored)
        except json.JSONDecodeError:
            # Plain text from before the editor: one paragraph per line
            blocks = [
                {"type": "paragraph", "data": {"text": html_mod.escape(line.strip())}}
                for line in str(stored).splitlines()
                if line.strip()
            ]
        except MalformedDocument:
            log.warning("Stored document is not a block list; opening empty editor")
            blocks = []
        except RecursionError:
            log.warning("Stored document is nested too deeply; opening empty editor")
            blocks = []
    return {
        "time": int(time.time() * 1000),
        "blocks": blocks,
        "version": EDITOR_VERSION,
    }
