from __future__ import annotations

from tabpad.domain.interfaces import ISettingsService
from tabpad.utils.constants import DEFAULT_FONT_SIZE, MIN_FONT_SIZE, ZOOM_STEP


class ZoomController:
    """Font size shared by the editor and the preview; persisted in settings."""

    def __init__(self, settings: ISettingsService, *, default_size: int = DEFAULT_FONT_SIZE) -> None:
        self._settings = settings
        self._default = max(MIN_FONT_SIZE, int(default_size))
        stored = settings.get_font_size()
        self._size = max(MIN_FONT_SIZE, stored) if stored else self._default

    @property
    def size(self) -> int:
        return self._size

    def zoom_in(self) -> int:
        return self._apply(self._size + ZOOM_STEP)

    def zoom_out(self) -> int:
        return self._apply(max(MIN_FONT_SIZE, self._size - ZOOM_STEP))

    def reset(self) -> int:
        return self._apply(self._default)

    def _apply(self, size: int) -> int:
        self._size = size
        self._settings.set_font_size(size)
        return size
