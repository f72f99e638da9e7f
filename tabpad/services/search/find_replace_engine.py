from __future__ import annotations

import logging
import re
from dataclasses import dataclass

from tabpad.domain.interfaces import IEditingSurface
from tabpad.domain.models import FindResult
from tabpad.services.tabs.session_manager import TabSessionManager
from tabpad.services.ui.ports.messages import IMessageService

logger = logging.getLogger(__name__)

NOT_FOUND_TITLE = "Find"
NOT_FOUND_TEXT = "No results found."


def _literal(term: str, case_sensitive: bool) -> re.Pattern[str]:
    """`term` as literal text; offsets stay those of the original string."""
    return re.compile(re.escape(term), 0 if case_sensitive else re.IGNORECASE)


@dataclass
class SearchState:
    last_search_term: str = ""
    last_search_index: int = 0


class FindReplaceEngine:
    """
    Incremental search/replace over the live text of the active document.

    Pure search policy: works on the editing surface port, reports "not found"
    through the message service and marks edits through the session manager.
    """

    def __init__(
        self,
        surface: IEditingSurface,
        session: TabSessionManager,
        messages: IMessageService | None = None,
    ) -> None:
        self._surface = surface
        self._session = session
        self._messages = messages
        self.state = SearchState()

    @property
    def last_search_term(self) -> str:
        return self.state.last_search_term

    @property
    def last_search_index(self) -> int:
        return self.state.last_search_index

    def reset(self) -> None:
        self.state = SearchState()

    # -------------------- find --------------------

    def find_next(self, term: str, case_sensitive: bool = False) -> FindResult:
        if not term:
            return FindResult(found=False)

        if term != self.state.last_search_term:
            self.state.last_search_index = 0
            self.state.last_search_term = term

        text = self._surface.get_text()
        pattern = _literal(term, case_sensitive)

        wrapped = False
        match = pattern.search(text, min(self.state.last_search_index, len(text)))
        if match is None:
            wrapped = True
            match = pattern.search(text, 0)
        if match is None:
            self.state.last_search_index = 0
            self._report(NOT_FOUND_TITLE, NOT_FOUND_TEXT)
            return FindResult(found=False)

        start, end = match.span()
        self._surface.select(start, end)
        self.state.last_search_index = start + 1
        return FindResult(found=True, start=start, end=end, wrapped=wrapped)

    # -------------------- replace --------------------

    def replace_current_selection(
        self, term: str, replacement: str, case_sensitive: bool = False
    ) -> bool:
        """
        Replace the selection only when it is exactly `term`, then move on to the
        next match. Any other selection is left alone and this acts as find_next.
        """
        if not term:
            return False

        start, end = self._surface.selection()
        selected = self._surface.get_text()[start:end]
        if start == end or selected != term:
            self.find_next(term, case_sensitive)
            return False

        self._surface.replace_range(start, end, replacement)
        self._surface.select(start, start + len(replacement))
        self._session.on_surface_edited()
        self.find_next(term, case_sensitive)
        return True

    def replace_all(self, term: str, replacement: str, case_sensitive: bool = False) -> int:
        if not term:
            return 0

        pattern = _literal(term, case_sensitive)
        text = self._surface.get_text()
        # Callable replacement keeps backslashes in `replacement` literal.
        new_text, count = pattern.subn(lambda _m: replacement, text)

        if count == 0:
            self._report(NOT_FOUND_TITLE, NOT_FOUND_TEXT)
            return 0

        self._surface.replace_range(0, len(text), new_text)
        self._session.on_surface_edited()
        self.state.last_search_index = 0
        logger.debug("Replaced %d occurrence(s) of %r", count, term)
        self._report("Replace All", f"Replaced {count} occurrence(s).")
        return count

    def _report(self, title: str, text: str) -> None:
        if self._messages is not None:
            self._messages.info(None, title, text)
