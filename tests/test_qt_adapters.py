from __future__ import annotations

from pathlib import Path

from PyQt6.QtWidgets import QFileDialog, QMessageBox

from tabpad.services.ui.adapters import QtFileDialogService, QtMessageService
from tabpad.services.ui.ports import IFileDialogService, IMessageService


def test_adapters_satisfy_ports():
    assert isinstance(QtMessageService(), IMessageService)
    assert isinstance(QtFileDialogService(), IFileDialogService)


def test_ask_yes_and_no(qapp, monkeypatch):
    answers = iter([QMessageBox.StandardButton.Yes, QMessageBox.StandardButton.No])
    seen = []

    def fake_question(parent, title, text, buttons, default):
        seen.append((title, text, default))
        return next(answers)

    monkeypatch.setattr(QMessageBox, "question", fake_question)
    svc = QtMessageService()
    assert svc.ask(None, "Unsaved changes", "Save?") is True
    assert svc.ask(None, "Unsaved changes", "Save?") is False
    assert seen[0] == ("Unsaved changes", "Save?", QMessageBox.StandardButton.Yes)


def test_notices_route_to_message_boxes(qapp, monkeypatch):
    calls = []
    monkeypatch.setattr(QMessageBox, "information", lambda *a: calls.append(("info", a[1])))
    monkeypatch.setattr(QMessageBox, "warning", lambda *a: calls.append(("warning", a[1])))
    monkeypatch.setattr(QMessageBox, "critical", lambda *a: calls.append(("error", a[1])))

    svc = QtMessageService()
    svc.info(None, "Find", "No results found.")
    svc.warning(None, "W", "w")
    svc.error(None, "Save Error", "x")
    assert calls == [("info", "Find"), ("warning", "W"), ("error", "Save Error")]


def test_file_dialogs_return_paths_or_none(qapp, monkeypatch, tmp_path):
    monkeypatch.setattr(QFileDialog, "getOpenFileName", lambda *a: (str(tmp_path / "a.txt"), ""))
    monkeypatch.setattr(QFileDialog, "getSaveFileName", lambda *a: ("", ""))

    svc = QtFileDialogService()
    assert svc.get_open_file(None, "Open", None, "*") == Path(tmp_path / "a.txt")
    assert svc.get_save_file(None, "Save As", "/x/y.txt", "*") is None
