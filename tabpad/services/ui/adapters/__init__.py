from __future__ import annotations

from .qt_dialogs import QtFileDialogService
from .qt_editing_surface import QtEditingSurface
from .qt_messages import QtMessageService

__all__ = [
    "QtEditingSurface",
    "QtFileDialogService",
    "QtMessageService",
]
