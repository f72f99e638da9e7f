from __future__ import annotations

from tabpad.domain.models import TextStats


def compute_stats(text: str, cursor_offset: int) -> TextStats:
    """Caret line/column (1-based), character count and word count."""
    offset = max(0, min(cursor_offset, len(text)))
    before = text[:offset]
    line = before.count("\n") + 1
    column = offset - (before.rfind("\n") + 1) + 1
    return TextStats(line=line, column=column, chars=len(text), words=len(text.split()))
