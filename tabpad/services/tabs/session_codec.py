from __future__ import annotations

import re
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import PurePath

from tabpad.domain.models import Document
from tabpad.utils.constants import MODIFIED_SUFFIX, TAB_ID_PREFIX, UNTITLED_TITLE

SESSION_FORMAT_VERSION = 1

_TAB_ID_RE = re.compile(rf"^{re.escape(TAB_ID_PREFIX)}(\d+)$")


def title_for(source_location: str | None, untitled: str = UNTITLED_TITLE) -> str:
    if not source_location:
        return untitled
    # Windows-style separators may come from a session written on another host.
    name = PurePath(source_location.replace("\\", "/")).name
    return name or untitled


class SessionFormatError(ValueError):
    """Persisted session data cannot be turned back into documents."""


@dataclass(frozen=True)
class DecodedSession:
    documents: list[Document]
    active_document_id: str | None
    max_counter: int


def format_tab_id(n: int) -> str:
    return f"{TAB_ID_PREFIX}{n}"


def parse_tab_id(doc_id: str) -> int | None:
    m = _TAB_ID_RE.match(doc_id)
    return int(m.group(1)) if m else None


def encode_session(documents: Sequence[Document], active_document_id: str | None) -> dict:
    return {
        "version": SESSION_FORMAT_VERSION,
        "documents": [
            {
                "id": d.id,
                "title": d.title,
                "sourceLocation": d.source_location,
                "content": d.content,
                "cursorOffset": d.cursor_offset,
                "isModified": d.is_modified,
            }
            for d in documents
        ],
        "activeDocumentId": active_document_id,
    }


def decode_session(blob: object) -> DecodedSession:
    """
    Validate and rebuild documents from a session record.

    Raises SessionFormatError for anything that is not a non-empty list of
    well-formed documents with distinct ids.
    """
    if not isinstance(blob, dict):
        raise SessionFormatError("session record must be an object")
    raw_docs = blob.get("documents")
    if not isinstance(raw_docs, list) or not raw_docs:
        raise SessionFormatError("session has no documents")

    docs: list[Document] = []
    seen: set[str] = set()
    max_counter = 0
    for item in raw_docs:
        doc = _decode_document(item)
        if doc.id in seen:
            raise SessionFormatError(f"duplicate document id: {doc.id}")
        seen.add(doc.id)
        n = parse_tab_id(doc.id)
        if n is not None:
            max_counter = max(max_counter, n)
        docs.append(doc)

    active = blob.get("activeDocumentId")
    if not isinstance(active, str) or active not in seen:
        active = None

    return DecodedSession(documents=docs, active_document_id=active, max_counter=max_counter)


def _decode_document(item: object) -> Document:
    if not isinstance(item, dict):
        raise SessionFormatError("document entry must be an object")

    doc_id = item.get("id")
    if not isinstance(doc_id, str) or not doc_id:
        raise SessionFormatError("document id missing")

    content = item.get("content", "")
    if not isinstance(content, str):
        raise SessionFormatError(f"content of {doc_id} is not text")

    location = item.get("sourceLocation")
    if location is not None and not isinstance(location, str):
        raise SessionFormatError(f"sourceLocation of {doc_id} is not text")

    title = item.get("title")
    if not isinstance(title, str) or not title.strip():
        raise SessionFormatError(f"title of {doc_id} missing")

    cursor = item.get("cursorOffset", 0)
    if isinstance(cursor, bool) or not isinstance(cursor, int):
        cursor = 0
    cursor = max(0, min(cursor, len(content)))

    modified = bool(item.get("isModified", False))
    # Keep the marker consistent with the flag even if the record was hand-edited.
    # A file whose own name ends like the marker keeps it.
    if modified and not title.endswith(MODIFIED_SUFFIX):
        title = f"{title}{MODIFIED_SUFFIX}"
    elif not modified and title.endswith(MODIFIED_SUFFIX) and title != title_for(location):
        title = title[: -len(MODIFIED_SUFFIX)]

    return Document(
        id=doc_id,
        title=title,
        source_location=location,
        content=content,
        cursor_offset=cursor,
        is_modified=modified,
    )
