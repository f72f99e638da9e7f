import pytest
from PyQt6.QtWidgets import QPlainTextEdit

from tabpad.services.ui.adapters.qt_editing_surface import QtEditingSurface


@pytest.fixture()
def qsurface(qapp) -> QtEditingSurface:
    return QtEditingSurface(QPlainTextEdit())


def test_text_roundtrip(qsurface):
    qsurface.set_text("line one\nline two")
    assert qsurface.get_text() == "line one\nline two"


def test_cursor_roundtrip_and_clamp(qsurface):
    qsurface.set_text("abcdef")
    qsurface.set_cursor_offset(3)
    assert qsurface.cursor_offset() == 3
    qsurface.set_cursor_offset(99)
    assert qsurface.cursor_offset() == 6
    qsurface.set_cursor_offset(-4)
    assert qsurface.cursor_offset() == 0


def test_select_reports_selection(qsurface):
    qsurface.set_text("hello world")
    qsurface.select(6, 11)
    assert qsurface.selection() == (6, 11)
    assert qsurface.widget.textCursor().selectedText() == "world"


def test_replace_range(qsurface):
    qsurface.set_text("foo bar")
    qsurface.replace_range(0, 3, "baz")
    assert qsurface.get_text() == "baz bar"
    assert qsurface.cursor_offset() == 3


def test_replace_range_emits_text_changed(qsurface):
    hits = []
    qsurface.widget.textChanged.connect(lambda: hits.append(1))
    qsurface.set_text("abc")
    hits.clear()
    qsurface.replace_range(1, 2, "X")
    assert hits


def test_offsets_are_string_indices_after_astral_characters(qsurface):
    qsurface.set_text("🙂 hi there")
    qsurface.select(2, 4)
    assert qsurface.widget.textCursor().selectedText() == "hi"
    assert qsurface.selection() == (2, 4)

    qsurface.replace_range(5, 10, "you")
    assert qsurface.get_text() == "🙂 hi you"
    assert qsurface.cursor_offset() == 8
