from __future__ import annotations

from typing import Any, Iterable

from PyQt6.QtCore import QByteArray, QSettings

from tabpad.domain.interfaces import ISettingsService
from tabpad.utils.constants import (
    SETTINGS_FONT_SIZE,
    SETTINGS_GEOMETRY,
    SETTINGS_RECENTS,
    SETTINGS_SPLITTER,
)


class SettingsService(ISettingsService):
    """Persist small UI bits (geometry, splitter, recents, zoom) plus raw key-value data."""

    def __init__(self, qsettings: QSettings) -> None:
        self._s = qsettings

    def get_geometry(self) -> bytes | None:
        v = self._s.value(SETTINGS_GEOMETRY)
        return bytes(v) if isinstance(v, QByteArray) else None

    def set_geometry(self, blob: bytes) -> None:
        self._s.setValue(SETTINGS_GEOMETRY, QByteArray(blob))

    def get_splitter(self) -> bytes | None:
        v = self._s.value(SETTINGS_SPLITTER)
        return bytes(v) if isinstance(v, QByteArray) else None

    def set_splitter(self, blob: bytes) -> None:
        self._s.setValue(SETTINGS_SPLITTER, QByteArray(blob))

    def get_recent(self) -> list[str]:
        v = self._s.value(SETTINGS_RECENTS, [])
        # INI backends hand back a bare string for one-element lists
        if isinstance(v, str):
            return [v] if v else []
        return [str(x) for x in v] if isinstance(v, list) else []

    def set_recent(self, recent: Iterable[str]) -> None:
        self._s.setValue(SETTINGS_RECENTS, list(recent))

    def get_font_size(self) -> int | None:
        v = self._s.value(SETTINGS_FONT_SIZE)
        try:
            return int(v) if v is not None else None
        except (TypeError, ValueError):
            return None

    def set_font_size(self, size: int) -> None:
        self._s.setValue(SETTINGS_FONT_SIZE, int(size))

    def get_raw(self, key: str, default: Any = None) -> Any:
        return self._s.value(key, default)

    def set_raw(self, key: str, value: Any) -> None:
        self._s.setValue(key, value)
        self._s.sync()
