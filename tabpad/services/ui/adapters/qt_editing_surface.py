from __future__ import annotations

from PyQt6.QtGui import QTextCursor
from PyQt6.QtWidgets import QPlainTextEdit

from tabpad.domain.interfaces import IEditingSurface


class QtEditingSurface(IEditingSurface):
    """
    Narrow adapter over the shared QPlainTextEdit.

    Offsets on this side are Python string indices. Qt positions count UTF-16
    code units, so the two differ after any character outside the BMP.
    """

    def __init__(self, edit: QPlainTextEdit):
        self._e = edit

    @property
    def widget(self) -> QPlainTextEdit:
        return self._e

    def get_text(self) -> str:
        return self._e.toPlainText()

    def set_text(self, text: str) -> None:
        self._e.setPlainText(text)

    def cursor_offset(self) -> int:
        return self._from_qt(self._e.textCursor().position())

    def set_cursor_offset(self, offset: int) -> None:
        c = self._e.textCursor()
        c.setPosition(self._to_qt(offset))
        self._e.setTextCursor(c)

    def selection(self) -> tuple[int, int]:
        c = self._e.textCursor()
        return self._from_qt(c.selectionStart()), self._from_qt(c.selectionEnd())

    def select(self, start: int, end: int) -> None:
        c = self._e.textCursor()
        c.setPosition(self._to_qt(start))
        c.setPosition(self._to_qt(end), QTextCursor.MoveMode.KeepAnchor)
        self._e.setTextCursor(c)

    def replace_range(self, start: int, end: int, text: str) -> None:
        c = self._e.textCursor()
        c.beginEditBlock()
        try:
            c.setPosition(self._to_qt(start))
            c.setPosition(self._to_qt(end), QTextCursor.MoveMode.KeepAnchor)
            c.insertText(text)
        finally:
            c.endEditBlock()
        self._e.setTextCursor(c)

    # ---------- offset mapping ----------

    def _to_qt(self, offset: int) -> int:
        text = self.get_text()
        offset = max(0, min(int(offset), len(text)))
        return len(text[:offset].encode("utf-16-le")) // 2

    def _from_qt(self, position: int) -> int:
        units = self.get_text().encode("utf-16-le")[: max(0, position) * 2]
        return len(units.decode("utf-16-le", errors="ignore"))
