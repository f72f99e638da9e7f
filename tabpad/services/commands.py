from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from dataclasses import dataclass

from tabpad.services.tabs.session_manager import TabSessionManager
from tabpad.services.zoom import ZoomController

logger = logging.getLogger(__name__)

# Named actions understood by the shell (menu, shortcuts, toolbar).
NEW = "new"
NEW_TAB = "new-tab"
OPEN = "open"
SAVE = "save"
SAVE_AS = "save-as"
FIND = "find"
REPLACE = "replace"
ZOOM_IN = "zoom-in"
ZOOM_OUT = "zoom-out"
ZOOM_RESET = "zoom-reset"
CLOSE_TAB = "close-tab"
CLEAR = "clear"


class CommandDispatcher:
    """Maps action names to handlers; toolkit independent."""

    def __init__(self) -> None:
        self._handlers: dict[str, Callable[[], object]] = {}

    def register(self, name: str, handler: Callable[[], object]) -> None:
        self._handlers[name] = handler

    def dispatch(self, name: str) -> bool:
        handler = self._handlers.get(name)
        if handler is None:
            logger.warning("Unknown command: %s", name)
            return False
        handler()
        return True

    def names(self) -> list[str]:
        return list(self._handlers)

    def __contains__(self, name: object) -> bool:
        return name in self._handlers

    def __iter__(self) -> Iterator[str]:
        return iter(self._handlers)


@dataclass(frozen=True)
class UiHooks:
    """Shell callbacks the core cannot perform itself."""

    show_find: Callable[[], object]
    show_replace: Callable[[], object]
    apply_zoom: Callable[[int], object]
    remember_location: Callable[[str], object] = lambda _location: None


def build_command_table(
    session: TabSessionManager,
    zoom: ZoomController,
    hooks: UiHooks,
) -> CommandDispatcher:
    d = CommandDispatcher()
    d.register(NEW, lambda: session.create_document())
    d.register(NEW_TAB, lambda: session.create_document())
    d.register(OPEN, lambda: _open(session, hooks))
    d.register(SAVE, lambda: _save(session, hooks, save_as=False))
    d.register(SAVE_AS, lambda: _save(session, hooks, save_as=True))
    d.register(FIND, hooks.show_find)
    d.register(REPLACE, hooks.show_replace)
    d.register(ZOOM_IN, lambda: hooks.apply_zoom(zoom.zoom_in()))
    d.register(ZOOM_OUT, lambda: hooks.apply_zoom(zoom.zoom_out()))
    d.register(ZOOM_RESET, lambda: hooks.apply_zoom(zoom.reset()))
    d.register(CLOSE_TAB, lambda: _close_active(session))
    d.register(CLEAR, lambda: session.clear_document())
    return d


def _open(session: TabSessionManager, hooks: UiHooks) -> None:
    doc = session.open_file()
    if doc is not None and doc.source_location:
        hooks.remember_location(doc.source_location)


def _save(session: TabSessionManager, hooks: UiHooks, *, save_as: bool) -> None:
    if session.save_document(save_as=save_as):
        doc = session.current_document()
        if doc is not None and doc.source_location:
            hooks.remember_location(doc.source_location)


def _close_active(session: TabSessionManager) -> None:
    doc = session.current_document()
    if doc is not None:
        session.close(doc.id)
