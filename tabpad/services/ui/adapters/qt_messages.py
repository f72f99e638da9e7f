from __future__ import annotations

from typing import Any

from PyQt6.QtWidgets import QMessageBox

from tabpad.services.ui.ports.messages import IMessageService


class QtMessageService(IMessageService):
    """QMessageBox-backed notices; `ask` defaults to Yes so Enter saves."""

    def info(self, parent: Any | None, title: str, text: str) -> None:
        QMessageBox.information(parent, title, text)

    def warning(self, parent: Any | None, title: str, text: str) -> None:
        QMessageBox.warning(parent, title, text)

    def error(self, parent: Any | None, title: str, text: str) -> None:
        QMessageBox.critical(parent, title, text)

    def ask(self, parent: Any | None, title: str, text: str) -> bool:
        buttons = QMessageBox.StandardButton.Yes | QMessageBox.StandardButton.No
        resp = QMessageBox.question(
            parent, title, text, buttons, QMessageBox.StandardButton.Yes
        )
        return resp == QMessageBox.StandardButton.Yes
