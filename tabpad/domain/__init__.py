"""Domain layer: interfaces and simple models (dataclasses)."""

from .interfaces import (
    IEditingSurface,
    IFileService,
    IPersistenceAdapter,
    IPreviewRenderer,
    ISessionStore,
    ISettingsService,
    ITabView,
)
from .models import Document, FindResult, SaveResult, TextStats

__all__ = [
    "IEditingSurface",
    "IFileService",
    "IPersistenceAdapter",
    "IPreviewRenderer",
    "ISessionStore",
    "ISettingsService",
    "ITabView",
    "Document",
    "FindResult",
    "SaveResult",
    "TextStats",
]
