from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class IMessageService(Protocol):
    """
    One-shot notices and the yes/no question asked before closing a modified tab.

    Core services pass parent=None; adapters parent to the main window when set.
    """

    def info(self, parent: Any | None, title: str, text: str) -> None: ...
    def warning(self, parent: Any | None, title: str, text: str) -> None: ...
    def error(self, parent: Any | None, title: str, text: str) -> None: ...

    def ask(self, parent: Any | None, title: str, text: str) -> bool:
        """True for Yes, False for No or a dismissed dialog."""
        ...
