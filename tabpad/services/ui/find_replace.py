from __future__ import annotations

from PyQt6.QtWidgets import (
    QCheckBox,
    QDialog,
    QGridLayout,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QPushButton,
    QVBoxLayout,
)

from tabpad.domain.models import FindResult
from tabpad.services.search.find_replace_engine import FindReplaceEngine


class FindReplaceDialog(QDialog):
    """Non-modal find/replace dialog backed by FindReplaceEngine."""

    def __init__(self, engine: FindReplaceEngine, parent=None):
        super().__init__(parent)
        self.setWindowTitle("Find / Replace")
        self.setModal(False)

        self._engine = engine

        # Widgets
        self.find_edit = QLineEdit()
        self.replace_edit = QLineEdit()
        self.case_cb = QCheckBox("Match case")

        self.find_next_btn = QPushButton("Find Next")
        self.replace_btn = QPushButton("Replace")
        self.replace_all_btn = QPushButton("Replace All")
        self.close_btn = QPushButton("Close")

        self.replace_label = QLabel("Replace:")

        # Layout
        form = QGridLayout()
        form.addWidget(QLabel("Find:"), 0, 0)
        form.addWidget(self.find_edit, 0, 1, 1, 3)
        form.addWidget(self.replace_label, 1, 0)
        form.addWidget(self.replace_edit, 1, 1, 1, 3)

        opts = QHBoxLayout()
        opts.addWidget(self.case_cb)
        opts.addStretch(1)

        buttons = QHBoxLayout()
        buttons.addWidget(self.find_next_btn)
        buttons.addWidget(self.replace_btn)
        buttons.addWidget(self.replace_all_btn)
        buttons.addStretch(1)
        buttons.addWidget(self.close_btn)

        root = QVBoxLayout(self)
        root.addLayout(form)
        root.addLayout(opts)
        root.addLayout(buttons)

        # Signals
        self.find_next_btn.clicked.connect(self.find_next)
        self.replace_btn.clicked.connect(self.replace_one)
        self.replace_all_btn.clicked.connect(self.replace_all)
        self.close_btn.clicked.connect(self.close)

        # Enter-to-find/replace (predictable UX; no live keystroke scanning)
        self.find_edit.returnPressed.connect(self.find_next)
        self.replace_edit.returnPressed.connect(self.replace_one)

        self.find_edit.setPlaceholderText("Find text…")
        self.replace_edit.setPlaceholderText("Replace with…")

    # Public API used by MainWindow wiring
    def show_find(self) -> None:
        self._set_replace_visible(False)
        self._present()
        self.find_edit.setFocus()
        self.find_edit.selectAll()

    def show_replace(self) -> None:
        self._set_replace_visible(True)
        self._present()
        self.replace_edit.setFocus()
        self.replace_edit.selectAll()

    @property
    def engine(self) -> FindReplaceEngine:
        return self._engine

    # Actions
    def find_next(self) -> FindResult:
        return self._engine.find_next(self.find_edit.text(), self.case_cb.isChecked())

    def replace_one(self) -> bool:
        return self._engine.replace_current_selection(
            self.find_edit.text(), self.replace_edit.text(), self.case_cb.isChecked()
        )

    def replace_all(self) -> int:
        count = self._engine.replace_all(
            self.find_edit.text(), self.replace_edit.text(), self.case_cb.isChecked()
        )
        self.setWindowTitle(f"Find / Replace — {count} replaced")
        return count

    def reject(self) -> None:
        # Escape lands here without a closeEvent
        self._end_search()
        super().reject()

    def closeEvent(self, event):
        self._end_search()
        super().closeEvent(event)

    # Internal helpers
    def _end_search(self) -> None:
        self._engine.reset()
        self.setWindowTitle("Find / Replace")

    def _present(self) -> None:
        self.show()
        self.raise_()
        self.activateWindow()

    def _set_replace_visible(self, on: bool) -> None:
        for w in (self.replace_label, self.replace_edit, self.replace_btn, self.replace_all_btn):
            w.setVisible(on)
