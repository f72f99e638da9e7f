from __future__ import annotations

import logging
from pathlib import Path

from tabpad.domain.interfaces import IFileService, IPersistenceAdapter, ISessionStore
from tabpad.domain.models import Document, SaveResult
from tabpad.services.persistence.session_blob import load_blob, save_blob
from tabpad.services.ui.ports.dialogs import IFileDialogService
from tabpad.services.ui.ports.messages import IMessageService
from tabpad.utils.constants import FILE_FILTER

logger = logging.getLogger(__name__)


class DesktopPersistence(IPersistenceAdapter):
    """Native dialogs + atomic filesystem writes; session in the settings store."""

    def __init__(
        self,
        *,
        store: ISessionStore,
        files: IFileService,
        dialogs: IFileDialogService,
        messages: IMessageService,
        parent=None,
    ) -> None:
        self._store = store
        self._files = files
        self._dialogs = dialogs
        self._messages = messages
        self._parent = parent

    def set_parent(self, parent) -> None:
        """Dialogs are parented to the main window once it exists."""
        self._parent = parent

    # ---------- session ----------

    def load_session(self) -> dict | None:
        return load_blob(self._store)

    def save_session(self, blob: dict) -> None:
        save_blob(self._store, blob)

    # ---------- files ----------

    def read_file(self, location: str) -> str:
        return self._files.read_text(Path(location))

    def write_file(self, location: str, text: str) -> SaveResult:
        try:
            self._files.write_text_atomic(Path(location), text)
        except OSError as e:
            logger.warning("Write to %s failed: %s", location, e)
            return SaveResult(success=False, location=location, message=str(e))
        return SaveResult(success=True, location=location, message=f"Saved: {location}")

    def choose_open_location(self) -> str | None:
        path = self._dialogs.get_open_file(self._parent, "Open", None, FILE_FILTER)
        return str(path) if path else None

    def choose_save_location(self, doc: Document, *, save_as: bool = False) -> str | None:
        if doc.source_location and not save_as:
            return doc.source_location
        path = self._dialogs.get_save_file(
            self._parent, "Save As", doc.source_location, FILE_FILTER
        )
        return str(path) if path else None

    # ---------- confirmation ----------

    def request_save_confirmation(self, document_title: str) -> bool:
        return self._messages.ask(
            self._parent,
            "Unsaved changes",
            f"Save changes to {document_title}?",
        )
