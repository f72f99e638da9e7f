from __future__ import annotations

import copy
import os
from pathlib import Path

import pytest

# Qt widgets need a platform plugin; CI machines have no display.
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from PyQt6.QtCore import QSettings  # noqa: E402
from PyQt6.QtWidgets import QApplication  # noqa: E402

from tabpad.domain.models import Document, SaveResult  # noqa: E402
from tabpad.services.config.app_config import AppConfig  # noqa: E402
from tabpad.services.config.ini_config_service import IniConfigService  # noqa: E402
from tabpad.services.file_service import FileService  # noqa: E402
from tabpad.services.preview_renderer import HyperlinkRenderer  # noqa: E402
from tabpad.services.search.find_replace_engine import FindReplaceEngine  # noqa: E402
from tabpad.services.settings_service import SettingsService  # noqa: E402
from tabpad.services.tabs.session_manager import SessionPolicy, TabSessionManager  # noqa: E402


# --- Fallback QApplication fixture (works with or without pytest-qt) ---
@pytest.fixture(scope="session")
def qapp():
    """Provide a QApplication for tests that need Qt.
    Creates one if not present; reuses existing otherwise.
    """
    app = QApplication.instance()
    created = False
    if app is None:
        app = QApplication([])
        created = True
    try:
        yield app
    finally:
        # Don't forcibly quit a shared app; only close if we created it here.
        if created:
            app.quit()


# --- In-memory fakes for the core ---


class FakeSurface:
    """Stands in for the shared editor widget; `on_change` mimics textChanged."""

    def __init__(self, text: str = "") -> None:
        self.text = text
        self.cursor = 0
        self.sel = (0, 0)
        self.on_change = None

    def get_text(self) -> str:
        return self.text

    def set_text(self, text: str) -> None:
        self.text = text
        self.cursor = 0
        self.sel = (0, 0)
        self._changed()

    def cursor_offset(self) -> int:
        return self.cursor

    def set_cursor_offset(self, offset: int) -> None:
        self.cursor = max(0, min(offset, len(self.text)))
        self.sel = (self.cursor, self.cursor)

    def selection(self) -> tuple[int, int]:
        return self.sel

    def select(self, start: int, end: int) -> None:
        self.sel = (start, end)
        self.cursor = end

    def replace_range(self, start: int, end: int, text: str) -> None:
        self.text = self.text[:start] + text + self.text[end:]
        self.cursor = start + len(text)
        self.sel = (self.cursor, self.cursor)
        self._changed()

    # test helper: the user types at the caret
    def type(self, text: str) -> None:
        self.replace_range(self.cursor, self.cursor, text)

    def _changed(self) -> None:
        if self.on_change is not None:
            self.on_change()


class FakePersistence:
    def __init__(self) -> None:
        self.blob: dict | None = None
        self.saved_blobs: list[dict] = []
        self.files: dict[str, str] = {}
        self.confirm = False
        self.confirm_calls: list[str] = []
        self.open_location: str | None = None
        self.save_location: str | None = None
        self.fail_write = False
        self.fail_session = False

    def load_session(self) -> dict | None:
        return copy.deepcopy(self.blob)

    def save_session(self, blob: dict) -> None:
        if self.fail_session:
            raise OSError("store unavailable")
        self.blob = copy.deepcopy(blob)
        self.saved_blobs.append(copy.deepcopy(blob))

    def read_file(self, location: str) -> str:
        if location not in self.files:
            raise FileNotFoundError(location)
        return self.files[location]

    def write_file(self, location: str, text: str) -> SaveResult:
        if self.fail_write:
            return SaveResult(success=False, location=location, message="disk full")
        self.files[location] = text
        return SaveResult(success=True, location=location, message=f"Saved: {location}")

    def request_save_confirmation(self, document_title: str) -> bool:
        self.confirm_calls.append(document_title)
        return self.confirm

    def choose_open_location(self) -> str | None:
        return self.open_location

    def choose_save_location(self, doc: Document, *, save_as: bool = False) -> str | None:
        if doc.source_location and not save_as:
            return doc.source_location
        return self.save_location

    def set_parent(self, parent) -> None:
        pass


class FakeMessages:
    def __init__(self, answer: bool = False) -> None:
        self.answer = answer
        self.infos: list[tuple[str, str]] = []
        self.warnings: list[tuple[str, str]] = []
        self.errors: list[tuple[str, str]] = []
        self.questions: list[tuple[str, str]] = []

    def info(self, parent, title: str, text: str) -> None:
        self.infos.append((title, text))

    def warning(self, parent, title: str, text: str) -> None:
        self.warnings.append((title, text))

    def error(self, parent, title: str, text: str) -> None:
        self.errors.append((title, text))

    def ask(self, parent, title: str, text: str) -> bool:
        self.questions.append((title, text))
        return self.answer


class FakeView:
    def __init__(self) -> None:
        self.events: list[tuple[str, str]] = []
        self.content_changes = 0

    def tab_added(self, doc: Document) -> None:
        self.events.append(("added", doc.id))

    def tab_removed(self, doc_id: str) -> None:
        self.events.append(("removed", doc_id))

    def tab_title_changed(self, doc_id: str, title: str) -> None:
        self.events.append(("title", f"{doc_id}:{title}"))

    def tab_activated(self, doc_id: str) -> None:
        self.events.append(("activated", doc_id))

    def content_changed(self) -> None:
        self.content_changes += 1


class FakeDialogs:
    def __init__(self, open_path: Path | None = None, save_path: Path | None = None) -> None:
        self.open_path = open_path
        self.save_path = save_path
        self.calls: list[tuple[str, str | None]] = []

    def get_open_file(self, parent, caption, start_dir, filter_str):
        self.calls.append(("open", start_dir))
        return self.open_path

    def get_save_file(self, parent, caption, start_path, filter_str):
        self.calls.append(("save", start_path))
        return self.save_path


class MemoryStore:
    def __init__(self, raw: str | None = None) -> None:
        self.raw = raw

    def load(self) -> str | None:
        return self.raw

    def save(self, raw: str) -> None:
        self.raw = raw


@pytest.fixture()
def surface() -> FakeSurface:
    return FakeSurface()


@pytest.fixture()
def persistence() -> FakePersistence:
    return FakePersistence()


@pytest.fixture()
def messages() -> FakeMessages:
    return FakeMessages()


@pytest.fixture()
def view() -> FakeView:
    return FakeView()


@pytest.fixture()
def dialogs() -> FakeDialogs:
    return FakeDialogs()


@pytest.fixture()
def memory_store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture()
def manager(surface, persistence, view, messages) -> TabSessionManager:
    m = TabSessionManager(surface, persistence, view=view, messages=messages)
    surface.on_change = m.on_surface_edited
    return m


@pytest.fixture()
def editing_manager(surface, persistence, messages) -> TabSessionManager:
    """Manager with one blank document and persist-on-edit enabled."""
    m = TabSessionManager(
        surface, persistence, messages=messages, policy=SessionPolicy(persist_on_edit=True)
    )
    surface.on_change = m.on_surface_edited
    m.create_document()
    return m


@pytest.fixture()
def engine(surface, editing_manager, messages) -> FindReplaceEngine:
    return FindReplaceEngine(surface, editing_manager, messages)


# --- Qt-backed services ---


@pytest.fixture()
def tmp_settings_path(tmp_path: Path) -> Path:
    return tmp_path / "settings.ini"


@pytest.fixture()
def qsettings(tmp_settings_path: Path) -> QSettings:
    # Use an INI file so we don't touch system registry / platform stores
    s = QSettings(str(tmp_settings_path), QSettings.Format.IniFormat)
    s.clear()
    return s


@pytest.fixture()
def settings_service(qsettings: QSettings) -> SettingsService:
    return SettingsService(qsettings)


@pytest.fixture()
def file_service() -> FileService:
    return FileService()


@pytest.fixture()
def renderer() -> HyperlinkRenderer:
    return HyperlinkRenderer()


@pytest.fixture()
def app_config(tmp_path: Path, monkeypatch) -> AppConfig:
    """Config isolated from the developer's real user config directory."""
    monkeypatch.setattr(
        "tabpad.services.config.ini_config_service.user_config_dir",
        lambda appname: str(tmp_path / "usercfg"),
        raising=True,
    )
    ini_path = tmp_path / "config.ini"
    ini_path.write_text(
        "[app]\nversion = 0.1.0\n[session]\nautosave_interval_sec = 60\n", encoding="utf-8"
    )
    root = tmp_path / "root"
    root.mkdir()
    return AppConfig(ini=IniConfigService(explicit_path=ini_path, project_root=root), project_root=root)
