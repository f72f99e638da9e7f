"""Host-specific persistence adapters sharing one core."""

from .browser import BrowserPersistence
from .desktop import DesktopPersistence

__all__ = ["BrowserPersistence", "DesktopPersistence"]
