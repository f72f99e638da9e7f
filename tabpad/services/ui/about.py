from __future__ import annotations

from PyQt6.QtWidgets import (
    QDialog,
    QHBoxLayout,
    QLabel,
    QPushButton,
    QVBoxLayout,
)


class AboutDialog(QDialog):
    """Non-modal name and version box."""

    def __init__(self, app_title: str, version: str, parent=None):
        super().__init__(parent)
        self.setWindowTitle(f"About {app_title}")
        self.setModal(False)

        self.name_label = QLabel(app_title)
        self.version_label = QLabel(f"Version {version}")
        self.close_btn = QPushButton("OK")

        buttons = QHBoxLayout()
        buttons.addStretch(1)
        buttons.addWidget(self.close_btn)

        root = QVBoxLayout(self)
        root.addWidget(self.name_label)
        root.addWidget(self.version_label)
        root.addLayout(buttons)

        self.close_btn.clicked.connect(self.close)
