from __future__ import annotations

import logging

from PyQt6.QtCore import QObject, QTimer, pyqtSignal

from tabpad.services.tabs.session_manager import TabSessionManager

logger = logging.getLogger(__name__)


class AutosaveService(QObject):
    """Periodically persist the session while the active document has unsaved edits."""

    saved = pyqtSignal()
    save_failed = pyqtSignal(str)

    def __init__(
        self,
        *,
        session: TabSessionManager,
        interval_ms: int,
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)
        self._session = session
        self._timer = QTimer(self)
        self._timer.setInterval(max(1000, int(interval_ms)))
        self._timer.timeout.connect(self.safe_autosave)

    @property
    def interval_ms(self) -> int:
        return self._timer.interval()

    @property
    def is_running(self) -> bool:
        return self._timer.isActive()

    def start(self) -> None:
        self._timer.start()

    def stop(self) -> None:
        self._timer.stop()

    def safe_autosave(self) -> bool:
        """Runs between UI events, so it never sees a half-finished switch or close."""
        doc = self._session.current_document()
        if doc is None or not doc.is_modified:
            return False
        try:
            ok = self._session.persist_session()
        except Exception as exc:
            ok = False
            logger.warning("Autosave raised: %s", exc)
        if not ok:
            self.save_failed.emit(f"Failed to auto-save session ({doc.title})")
            return False
        self.saved.emit()
        return True
