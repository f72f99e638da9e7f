from __future__ import annotations

import logging
from dataclasses import dataclass

from tabpad.domain.interfaces import IEditingSurface, IPersistenceAdapter, ITabView
from tabpad.domain.models import Document
from tabpad.services.tabs.session_codec import (
    SessionFormatError,
    decode_session,
    encode_session,
    format_tab_id,
    title_for,
)
from tabpad.services.ui.ports.messages import IMessageService
from tabpad.utils.constants import MODIFIED_SUFFIX, UNTITLED_TITLE

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionPolicy:
    persist_on_edit: bool = False


class TabSessionManager:
    """
    Owns the open documents, which one is active, and the single editing surface.

    Ordering rule for every switch: flush the outgoing document from the surface,
    change the active id, then load the incoming document into the surface.
    All operations on unknown ids are no-ops.
    """

    def __init__(
        self,
        surface: IEditingSurface,
        persistence: IPersistenceAdapter,
        *,
        view: ITabView | None = None,
        messages: IMessageService | None = None,
        policy: SessionPolicy | None = None,
        untitled_title: str = UNTITLED_TITLE,
    ) -> None:
        self._surface = surface
        self._persistence = persistence
        self._view = view
        self._messages = messages
        self._policy = policy or SessionPolicy()
        self._untitled = untitled_title

        self._docs: list[Document] = []
        self._active_id: str | None = None
        self._counter = 0
        self._loading = False

    # ----------------------------- wiring -----------------------------

    def attach_view(self, view: ITabView | None) -> None:
        self._view = view

    @property
    def policy(self) -> SessionPolicy:
        return self._policy

    # ----------------------------- queries -----------------------------

    @property
    def documents(self) -> tuple[Document, ...]:
        return tuple(self._docs)

    @property
    def active_document_id(self) -> str | None:
        return self._active_id

    @property
    def is_loading(self) -> bool:
        """True while the manager itself is writing into the surface."""
        return self._loading

    def get(self, doc_id: str) -> Document | None:
        for d in self._docs:
            if d.id == doc_id:
                return d
        return None

    def current_document(self) -> Document | None:
        return self.get(self._active_id) if self._active_id else None

    def peek_next_id(self) -> str:
        return format_tab_id(self._counter + 1)

    # ----------------------------- lifecycle -----------------------------

    def create_document(self, source_location: str | None = None, content: str = "") -> Document:
        self._counter += 1
        doc = Document(
            id=format_tab_id(self._counter),
            title=title_for(source_location, self._untitled),
            source_location=source_location,
            content=content,
            cursor_offset=0,
            is_modified=False,
        )
        self._docs.append(doc)
        logger.debug("Created %s (%s)", doc.id, doc.title)
        if self._view is not None:
            self._view.tab_added(doc)
        # activate() persists; persist again only if activation was a no-op.
        if not self.activate(doc.id):
            self.persist_session()
        return doc

    def activate(self, doc_id: str) -> bool:
        """Switch the surface to `doc_id`. Returns False when nothing changed."""
        if doc_id == self._active_id:
            return False
        target = self.get(doc_id)
        if target is None:
            return False

        self._flush()
        self._active_id = target.id
        self._load(target)

        if self._view is not None:
            self._view.tab_activated(target.id)
            self._view.content_changed()
        self.persist_session()
        return True

    def close(self, doc_id: str) -> bool:
        """
        Close a tab. Returns True when it was removed.

        A modified document prompts for saving first: accepting saves it and the
        close only proceeds if that save succeeds; declining discards the changes.
        """
        doc = self.get(doc_id)
        if doc is None:
            return False

        if doc.is_modified and self._persistence.request_save_confirmation(doc.title):
            if not self.save_document(doc.id):
                logger.info("Close of %s abandoned: save did not complete", doc.id)
                return False

        index = self._docs.index(doc)
        was_active = doc.id == self._active_id
        del self._docs[index]
        if was_active:
            # The surface still shows the removed document; never flush it elsewhere.
            self._active_id = None
        if self._view is not None:
            self._view.tab_removed(doc.id)
        logger.debug("Closed %s", doc.id)

        if not self._docs:
            self.create_document()
            return True

        successor = self._docs[max(0, index - 1)]
        if not self.activate(successor.id):
            self.persist_session()
        return True

    def rename(self, doc_id: str, title: str) -> None:
        doc = self.get(doc_id)
        if doc is None:
            return
        doc.title = title
        if self._view is not None:
            self._view.tab_title_changed(doc.id, doc.title)

    def set_modified(self, doc_id: str, flag: bool) -> None:
        doc = self.get(doc_id)
        if doc is None:
            return
        was_modified, doc.is_modified = doc.is_modified, bool(flag)
        # Only the marker this flag put there comes off; a file name may end in " *".
        base = doc.title
        if was_modified and base.endswith(MODIFIED_SUFFIX):
            base = base[: -len(MODIFIED_SUFFIX)]
        title = f"{base}{MODIFIED_SUFFIX}" if flag else base
        if title != doc.title:
            self.rename(doc.id, title)

    # ----------------------------- surface edits -----------------------------

    def on_surface_edited(self) -> None:
        """The user changed the live text of the active document."""
        if self._loading or self._active_id is None:
            return
        self.set_modified(self._active_id, True)
        if self._view is not None:
            self._view.content_changed()
        if self._policy.persist_on_edit:
            self.persist_session()

    def clear_document(self) -> bool:
        """Empty the active document once the user agrees; the result is modified and persisted."""
        doc = self.current_document()
        if doc is None:
            return False
        if self._messages is not None and not self._messages.ask(
            None, "Clear", f"Delete all text in {doc.title}?"
        ):
            return False
        # An edit rather than set_text so the surface can undo it.
        self._surface.replace_range(0, len(self._surface.get_text()), "")
        self.set_modified(doc.id, True)
        if self._view is not None:
            self._view.content_changed()
        self.persist_session()
        logger.debug("Cleared %s", doc.id)
        return True

    # ----------------------------- persistence -----------------------------

    def restore_session(self, blob: dict | None) -> None:
        """Rebuild documents from persisted data, or start with one blank tab."""
        decoded = None
        if blob is not None:
            try:
                decoded = decode_session(blob)
            except SessionFormatError as e:
                logger.warning("Session could not be restored, starting fresh: %s", e)

        if decoded is None:
            self.create_document()
            return

        self._docs = list(decoded.documents)
        self._active_id = None
        self._counter = max(self._counter, decoded.max_counter)
        if self._view is not None:
            for doc in self._docs:
                self._view.tab_added(doc)

        target = decoded.active_document_id or self._docs[0].id
        self.activate(target)
        logger.info("Restored %d document(s)", len(self._docs))

    def persist_session(self) -> bool:
        """Flush the surface and write the whole session. Failures are logged, not raised."""
        self._flush()
        blob = encode_session(self._docs, self._active_id)
        try:
            self._persistence.save_session(blob)
        except Exception as e:
            logger.warning("Session persist failed: %s", e)
            return False
        return True

    # ----------------------------- files -----------------------------

    def open_file(self, location: str | None = None) -> Document | None:
        location = location or self._persistence.choose_open_location()
        if not location:
            return None
        try:
            text = self._persistence.read_file(location)
        except (OSError, UnicodeDecodeError) as e:
            logger.warning("Open of %s failed: %s", location, e)
            self._report_error("Open Error", f"Failed to open file:\n{e}")
            return None
        return self.create_document(location, text)

    def save_document(self, doc_id: str | None = None, *, save_as: bool = False) -> bool:
        doc = self.get(doc_id) if doc_id else self.current_document()
        if doc is None:
            return False
        if doc.id == self._active_id:
            self._flush()

        location = self._persistence.choose_save_location(doc, save_as=save_as)
        if not location:
            return False

        result = self._persistence.write_file(location, doc.content)
        if not result.success:
            self._report_error("Save Error", f"Failed to save file:\n{result.message}")
            return False

        doc.source_location = result.location or location
        doc.is_modified = False
        self.rename(doc.id, title_for(doc.source_location, self._untitled))
        self.persist_session()
        logger.info("%s", result.message or f"Saved {doc.id}")
        return True

    # ----------------------------- internals -----------------------------

    def _flush(self) -> None:
        current = self.current_document()
        if current is None:
            return
        current.content = self._surface.get_text()
        current.cursor_offset = self._surface.cursor_offset()

    def _load(self, doc: Document) -> None:
        self._loading = True
        try:
            self._surface.set_text(doc.content)
            self._surface.set_cursor_offset(min(doc.cursor_offset, len(doc.content)))
        finally:
            self._loading = False

    def _report_error(self, title: str, text: str) -> None:
        if self._messages is not None:
            self._messages.error(None, title, text)
