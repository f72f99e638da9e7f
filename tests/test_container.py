from __future__ import annotations

from pathlib import Path

import pytest

from tabpad.di.container import Container
from tabpad.services.persistence import BrowserPersistence, DesktopPersistence


@pytest.fixture()
def make(qapp, app_config, qsettings, messages, dialogs, tmp_path):
    built: list[Container] = []

    def _make(**kw) -> Container:
        c = Container(
            config=app_config,
            qsettings=qsettings,
            messages=messages,
            dialogs=dialogs,
            download_dir=tmp_path / "Downloads",
            **kw,
        )
        built.append(c)
        return c

    yield _make
    for c in built:
        if c.autosave is not None:
            c.autosave.stop()


def test_container_wires_desktop_by_default(make):
    c = make()
    assert c.variant == "desktop"
    assert isinstance(c.persistence, DesktopPersistence)
    assert c.session_store.key == "session/state"
    assert c.policy.persist_on_edit is False
    assert c.renderer is not None and c.file_service is not None


def test_container_wires_web_variant(make, tmp_path):
    c = make(variant="web")
    assert isinstance(c.persistence, BrowserPersistence)
    assert c.persistence.download_dir == tmp_path / "Downloads"
    assert c.session_store.key == "web/session/state"
    assert c.policy.persist_on_edit is True


def test_build_core_is_built_once(make):
    c = make()
    first = c.build_core()
    second = c.build_core()
    assert all(a is b for a, b in zip(first, second))
    assert c.autosave is not None


def test_build_core_returns_the_wired_parts(make):
    c = make()
    session, surface, engine = c.build_core()
    assert (session, surface, engine) == (c.session, c.surface, c.engine)
    assert None not in (session, surface, engine)


def test_window_shows_config_version_in_about(make):
    w = make().build_main_window()
    assert w.version == "0.1.0"
    assert w.about_dialog.version_label.text() == "Version 0.1.0"


def test_window_shares_one_core(make):
    c = make()
    w = c.build_main_window()
    assert w.session is c.session
    assert w.editor is c.surface.widget
    assert w.find_dialog.engine is c.engine
    assert c.autosave.is_running is True


def test_start_path_opens_extra_tab(make, tmp_path: Path):
    p = tmp_path / "start.txt"
    p.write_text("boot", encoding="utf-8")
    w = make().build_main_window(start_path=p)
    assert w.tabs.count() == 2
    assert w.editor.toPlainText() == "boot"


def test_restore_false_ignores_stored_session(make):
    first = make()
    first.build_core()
    first.session.restore_session(None)
    first.session.create_document()
    first.session.persist_session()

    w = make().build_main_window(restore=False)
    assert w.tabs.count() == 1


def test_desktop_and_web_sessions_are_independent(make):
    desktop = make()
    desktop.build_core()
    desktop.session.restore_session(None)
    desktop.session.create_document()

    web = make(variant="web")
    assert web.persistence.load_session() is None
    assert len(desktop.persistence.load_session()["documents"]) == 2
