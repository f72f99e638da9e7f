from __future__ import annotations

from pathlib import Path
from typing import Any, Iterable, Protocol, runtime_checkable

from .models import Document, SaveResult


class IEditingSurface(Protocol):
    """The single shared text widget. Offsets are Python string indices."""

    def get_text(self) -> str: ...
    def set_text(self, text: str) -> None: ...
    def cursor_offset(self) -> int: ...
    def set_cursor_offset(self, offset: int) -> None: ...
    def selection(self) -> tuple[int, int]: ...
    def select(self, start: int, end: int) -> None: ...
    def replace_range(self, start: int, end: int, text: str) -> None: ...


@runtime_checkable
class ITabView(Protocol):
    """Render hooks the session manager calls; implemented by the main window."""

    def tab_added(self, doc: Document) -> None: ...
    def tab_removed(self, doc_id: str) -> None: ...
    def tab_title_changed(self, doc_id: str, title: str) -> None: ...
    def tab_activated(self, doc_id: str) -> None: ...
    def content_changed(self) -> None: ...


class IPreviewRenderer(Protocol):
    """Convert plain text to safe HTML."""

    def to_html(self, text: str) -> str: ...
    def to_document(self, text: str, *, font_size: int | None = None) -> str: ...


class IFileService(Protocol):
    """Read/write text files. Writes should be atomic when possible."""

    def read_text(self, path: Path) -> str: ...
    def write_text_atomic(self, path: Path, text: str) -> None: ...


class ISettingsService(Protocol):
    """Persist and retrieve lightweight UI state."""

    def get_geometry(self) -> bytes | None: ...
    def set_geometry(self, blob: bytes) -> None: ...
    def get_splitter(self) -> bytes | None: ...
    def set_splitter(self, blob: bytes) -> None: ...
    def get_recent(self) -> list[str]: ...
    def set_recent(self, recent: Iterable[str]) -> None: ...
    def get_font_size(self) -> int | None: ...
    def set_font_size(self, size: int) -> None: ...
    def get_raw(self, key: str, default: Any = None) -> Any: ...
    def set_raw(self, key: str, value: Any) -> None: ...


class ISessionStore(Protocol):
    """Key-value slot holding the serialized session."""

    def load(self) -> str | None: ...
    def save(self, raw: str) -> None: ...


class IPersistenceAdapter(Protocol):
    """Everything the core needs from its host to load, save and confirm."""

    def load_session(self) -> dict | None: ...
    def save_session(self, blob: dict) -> None: ...
    def read_file(self, location: str) -> str: ...
    def write_file(self, location: str, text: str) -> SaveResult: ...
    def request_save_confirmation(self, document_title: str) -> bool: ...
    def choose_open_location(self) -> str | None: ...
    def choose_save_location(self, doc: Document, *, save_as: bool = False) -> str | None: ...
    def set_parent(self, parent: Any) -> None: ...


class IConfigService(Protocol):
    def get(self, section: str, key: str, default: str | None = None) -> str | None: ...
    def get_int(self, section: str, key: str, default: int | None = None) -> int | None: ...
    def get_bool(self, section: str, key: str, default: bool | None = None) -> bool | None: ...
    def app_version(self) -> str: ...


class IAppConfig(Protocol):
    def get_version(self) -> str: ...
    def variant(self) -> str: ...
    def autosave_interval_ms(self) -> int: ...
    def persist_on_edit(self, variant: str | None = None) -> bool: ...
    def font_size(self) -> int: ...
    def log_level(self) -> int: ...
