from __future__ import annotations

import logging

from tabpad.domain.interfaces import ISessionStore, ISettingsService
from tabpad.utils.constants import SETTINGS_SESSION

logger = logging.getLogger(__name__)


class SettingsSessionStore(ISessionStore):
    """Session JSON kept under one well-known key of the settings key-value store."""

    def __init__(self, settings: ISettingsService, *, key: str = SETTINGS_SESSION) -> None:
        self._settings = settings
        self._key = key

    @property
    def key(self) -> str:
        return self._key

    def load(self) -> str | None:
        raw = self._settings.get_raw(self._key, None)
        if raw is None or raw == "":
            return None
        if not isinstance(raw, str):
            logger.warning("Ignoring non-text session value under %s", self._key)
            return None
        return raw

    def save(self, raw: str) -> None:
        self._settings.set_raw(self._key, raw)
