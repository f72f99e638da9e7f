from __future__ import annotations

import json
import logging

from tabpad.domain.interfaces import ISessionStore

logger = logging.getLogger(__name__)


def load_blob(store: ISessionStore) -> dict | None:
    """Read and parse the stored session; missing or corrupt data yields None."""
    try:
        raw = store.load()
    except Exception as e:
        logger.warning("Session store read failed: %s", e)
        return None
    if raw is None:
        return None
    try:
        data = json.loads(raw)
    except ValueError as e:
        logger.warning("Discarding corrupt session data: %s", e)
        return None
    return data if isinstance(data, dict) else None


def save_blob(store: ISessionStore, blob: dict) -> None:
    store.save(json.dumps(blob, ensure_ascii=False))
