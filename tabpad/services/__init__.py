"""Concrete service implementations."""

from .file_service import FileService
from .preview_renderer import HyperlinkRenderer
from .session_store import SettingsSessionStore
from .settings_service import SettingsService

__all__ = ["FileService", "HyperlinkRenderer", "SettingsService", "SettingsSessionStore"]
