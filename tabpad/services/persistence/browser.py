from __future__ import annotations

import logging
import re
from pathlib import Path

from platformdirs import user_downloads_dir

from tabpad.domain.interfaces import IFileService, IPersistenceAdapter, ISessionStore
from tabpad.domain.models import Document, SaveResult
from tabpad.services.persistence.session_blob import load_blob, save_blob
from tabpad.services.ui.ports.dialogs import IFileDialogService
from tabpad.services.ui.ports.messages import IMessageService
from tabpad.utils.constants import FILE_FILTER, MODIFIED_SUFFIX, UNTITLED_TITLE

logger = logging.getLogger(__name__)

_UNSAFE_NAME_RE = re.compile(r'[\\/:*?"<>|\x00-\x1f]+')


def download_name(title: str) -> str:
    """File name a document is downloaded under: its title, made filesystem-safe."""
    base = title[: -len(MODIFIED_SUFFIX)] if title.endswith(MODIFIED_SUFFIX) else title
    base = _UNSAFE_NAME_RE.sub("_", base).strip(" .") or UNTITLED_TITLE
    return base if Path(base).suffix else f"{base}.txt"


def free_download_path(directory: Path, name: str) -> Path:
    """`name` in `directory`, numbered like a browser does (`a (1).txt`) when taken."""
    target = directory / name
    stem, suffix = target.stem, target.suffix
    n = 1
    while target.exists():
        target = directory / f"{stem} ({n}){suffix}"
        n += 1
    return target


class BrowserPersistence(IPersistenceAdapter):
    """
    Browser-style host: the session lives in a key-value store, opening reads an
    uploaded file and saving is a download into the downloads directory.
    """

    def __init__(
        self,
        *,
        store: ISessionStore,
        files: IFileService,
        dialogs: IFileDialogService,
        messages: IMessageService,
        download_dir: Path | None = None,
        parent=None,
    ) -> None:
        self._store = store
        self._files = files
        self._dialogs = dialogs
        self._messages = messages
        self._download_dir = download_dir or Path(user_downloads_dir())
        self._parent = parent

    @property
    def download_dir(self) -> Path:
        return self._download_dir

    def set_parent(self, parent) -> None:
        self._parent = parent

    def load_session(self) -> dict | None:
        return load_blob(self._store)

    def save_session(self, blob: dict) -> None:
        save_blob(self._store, blob)

    def read_file(self, location: str) -> str:
        return self._files.read_text(Path(location))

    def write_file(self, location: str, text: str) -> SaveResult:
        target = Path(location)
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            self._files.write_text_atomic(target, text)
        except OSError as e:
            logger.warning("Download of %s failed: %s", location, e)
            return SaveResult(success=False, location=location, message=str(e))
        return SaveResult(success=True, location=location, message=f"Downloaded: {target.name}")

    def choose_open_location(self) -> str | None:
        path = self._dialogs.get_open_file(self._parent, "Upload", None, FILE_FILTER)
        return str(path) if path else None

    def choose_save_location(self, doc: Document, *, save_as: bool = False) -> str | None:
        # Downloads never prompt and never overwrite. Only this document's own
        # previous download is reused; an uploaded file is never written back.
        if doc.source_location and not save_as:
            remembered = Path(doc.source_location)
            if remembered.parent == self._download_dir:
                return doc.source_location
        return str(free_download_path(self._download_dir, download_name(doc.title)))

    def request_save_confirmation(self, document_title: str) -> bool:
        return self._messages.ask(
            self._parent,
            "Unsaved changes",
            f"Download changes to {document_title} before closing?",
        )
