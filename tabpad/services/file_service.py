from __future__ import annotations

from pathlib import Path

from PyQt6.QtCore import QIODevice, QSaveFile

from tabpad.domain.interfaces import IFileService


class FileService(IFileService):
    """UTF-8 text files. Writes go through QSaveFile; a failed write leaves the target untouched."""

    def read_text(self, path: Path) -> str:
        # utf-8-sig drops the BOM some Windows editors prepend
        return path.read_text(encoding="utf-8-sig")

    def write_text_atomic(self, path: Path, text: str) -> None:
        data = text.encode("utf-8")
        sf = QSaveFile(str(path))
        if not sf.open(QIODevice.OpenModeFlag.WriteOnly):
            raise OSError(f"Cannot open {path} for writing: {sf.errorString()}")
        if sf.write(data) != len(data):
            sf.cancelWriting()
            raise OSError(f"Short write to {path}: {sf.errorString()}")
        if not sf.commit():
            raise OSError(f"Could not replace {path}: {sf.errorString()}")
