from __future__ import annotations

from dataclasses import dataclass


@dataclass
class Document:
    """One logical text buffer shown as a tab.

    `content` and `cursor_offset` are a snapshot as of the last flush; while the
    document is active the editing surface holds the live values.
    """

    id: str
    title: str
    source_location: str | None = None
    content: str = ""
    cursor_offset: int = 0
    is_modified: bool = False


@dataclass(frozen=True)
class SaveResult:
    success: bool
    location: str | None = None
    message: str = ""


@dataclass(frozen=True)
class FindResult:
    found: bool
    start: int = -1
    end: int = -1
    wrapped: bool = False


@dataclass(frozen=True)
class TextStats:
    line: int
    column: int
    chars: int
    words: int

    def label(self) -> str:
        return f"Ln {self.line}, Col {self.column}  |  {self.chars} chars  |  {self.words} words"
