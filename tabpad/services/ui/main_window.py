from __future__ import annotations

import logging
from pathlib import Path

from PyQt6.QtCore import QByteArray, Qt
from PyQt6.QtGui import QAction, QFont, QKeySequence
from PyQt6.QtWidgets import (
    QLabel,
    QMainWindow,
    QMenu,
    QSplitter,
    QStatusBar,
    QTabBar,
    QTextBrowser,
    QToolBar,
    QVBoxLayout,
    QWidget,
)

from tabpad.domain.interfaces import IPreviewRenderer, ISettingsService
from tabpad.domain.models import Document
from tabpad.services import commands as cmd
from tabpad.services.commands import CommandDispatcher, UiHooks, build_command_table
from tabpad.services.search.find_replace_engine import FindReplaceEngine
from tabpad.services.tabs.autosave import AutosaveService
from tabpad.services.tabs.session_manager import TabSessionManager
from tabpad.services.text_stats import compute_stats
from tabpad.services.ui.about import AboutDialog
from tabpad.services.ui.adapters.qt_editing_surface import QtEditingSurface
from tabpad.services.ui.find_replace import FindReplaceDialog
from tabpad.services.zoom import ZoomController
from tabpad.utils.constants import MAX_RECENTS

logger = logging.getLogger(__name__)


class MainWindow(QMainWindow):
    """
    Thin PyQt shell: a tab bar over one shared editor, a link preview and a
    status bar. All document state lives in the injected TabSessionManager;
    this class only renders what the manager reports.
    """

    def __init__(
        self,
        *,
        session: TabSessionManager,
        surface: QtEditingSurface,
        engine: FindReplaceEngine,
        renderer: IPreviewRenderer,
        settings: ISettingsService,
        zoom: ZoomController,
        autosave: AutosaveService | None = None,
        app_title: str = "TabPad",
        version: str = "0.0.0",
    ) -> None:
        super().__init__()
        self._app_title = app_title
        self.version = version
        self.setWindowTitle(app_title)
        self.resize(1200, 800)

        self.session = session
        self.surface = surface
        self.renderer = renderer
        self.settings = settings
        self.zoom = zoom
        self.autosave = autosave

        self.recents: list[str] = self.settings.get_recent()
        self._syncing_tabs = False

        # Widgets
        self.tabs = QTabBar(self)
        self.tabs.setTabsClosable(True)
        self.tabs.setExpanding(False)
        self.tabs.setDocumentMode(True)

        self.editor = surface.widget
        self.preview = QTextBrowser(self)
        self.preview.setOpenExternalLinks(True)

        self.splitter = QSplitter(self)
        self.splitter.setOrientation(Qt.Orientation.Horizontal)
        self.splitter.addWidget(self.editor)
        self.splitter.addWidget(self.preview)
        self.splitter.setStretchFactor(0, 1)
        self.splitter.setStretchFactor(1, 1)

        central = QWidget(self)
        layout = QVBoxLayout(central)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(0)
        layout.addWidget(self.tabs)
        layout.addWidget(self.splitter)
        self.setCentralWidget(central)

        self.find_dialog = FindReplaceDialog(engine, self)
        self.about_dialog = AboutDialog(app_title, version, self)

        self.stats_label = QLabel(self)
        self.setStatusBar(QStatusBar(self))
        self.statusBar().addPermanentWidget(self.stats_label)

        # Commands
        self.commands: CommandDispatcher = build_command_table(
            session,
            zoom,
            UiHooks(
                show_find=self._show_find,
                show_replace=self._show_replace,
                apply_zoom=self._apply_zoom,
                remember_location=self._add_recent,
            ),
        )

        # Signals
        self.editor.textChanged.connect(self.session.on_surface_edited)
        self.editor.cursorPositionChanged.connect(self._update_status)
        self.tabs.currentChanged.connect(self._on_tab_changed)
        self.tabs.tabCloseRequested.connect(self._on_tab_close_requested)
        if self.autosave is not None:
            self.autosave.save_failed.connect(lambda msg: self.statusBar().showMessage(msg, 5000))
            self.autosave.saved.connect(lambda: self.statusBar().showMessage("Session saved", 1500))

        # UI
        self._build_actions()
        self._build_toolbar()
        self._build_menu()
        self._apply_zoom(self.zoom.size)

        # Restore UI state
        geo = self.settings.get_geometry()
        if isinstance(geo, (bytes, bytearray)):
            self.restoreGeometry(QByteArray(geo))
        split = self.settings.get_splitter()
        if isinstance(split, (bytes, bytearray)):
            self.splitter.restoreState(QByteArray(split))

        self.session.attach_view(self)

        # DnD
        self.setAcceptDrops(True)

    # ---------- UI creation ----------
    def _action(self, text: str, name: str, shortcut=None) -> QAction:
        act = QAction(text, self)
        if shortcut is not None:
            act.setShortcut(shortcut)
        act.triggered.connect(lambda _checked=False, n=name: self.commands.dispatch(n))
        return act

    def _build_actions(self):
        self.exit_action = QAction("&Exit", self)
        self.exit_action.setShortcut("Ctrl+Q")
        self.exit_action.setStatusTip("Exit application")
        self.exit_action.triggered.connect(self.close)

        self.act_new = self._action("New", cmd.NEW, QKeySequence.StandardKey.New)
        self.act_new_tab = self._action("New Tab", cmd.NEW_TAB, "Ctrl+T")
        self.act_open = self._action("Open…", cmd.OPEN, QKeySequence.StandardKey.Open)
        self.act_save = self._action("Save", cmd.SAVE, QKeySequence.StandardKey.Save)
        self.act_save_as = self._action("Save As…", cmd.SAVE_AS, QKeySequence.StandardKey.SaveAs)
        self.act_close_tab = self._action("Close Tab", cmd.CLOSE_TAB, QKeySequence.StandardKey.Close)

        self.act_find = self._action("Find", cmd.FIND, QKeySequence.StandardKey.Find)
        self.act_replace = self._action("Replace", cmd.REPLACE, "Ctrl+H")
        self.act_clear = self._action("Clear", cmd.CLEAR)
        self.act_find_next = QAction("Find Next", self)
        self.act_find_next.setShortcut(QKeySequence.StandardKey.FindNext)
        self.act_find_next.triggered.connect(self.find_dialog.find_next)

        self.act_zoom_in = self._action("Zoom In", cmd.ZOOM_IN, QKeySequence.StandardKey.ZoomIn)
        self.act_zoom_out = self._action("Zoom Out", cmd.ZOOM_OUT, QKeySequence.StandardKey.ZoomOut)
        self.act_zoom_reset = self._action("Actual Size", cmd.ZOOM_RESET, "Ctrl+0")

        self.act_about = QAction(f"About {self._app_title}", self)
        self.act_about.triggered.connect(self._show_about)

        self.recent_menu = QMenu("Open Recent", self)

    def _build_toolbar(self):
        tb = QToolBar("Main", self)
        tb.setMovable(False)
        for a in (self.act_new, self.act_open, self.act_save, self.act_save_as):
            tb.addAction(a)
        tb.addSeparator()
        for a in (self.act_find, self.act_replace):
            tb.addAction(a)
        self.addToolBar(tb)

    def _build_menu(self):
        m = self.menuBar()
        filem = m.addMenu("&File")
        for a in (self.act_new, self.act_new_tab, self.act_open):
            filem.addAction(a)
        filem.addMenu(self.recent_menu)
        filem.addSeparator()
        for a in (self.act_save, self.act_save_as, self.act_close_tab):
            filem.addAction(a)
        filem.addSeparator()
        filem.addAction(self.exit_action)
        self._refresh_recent_menu()

        editm = m.addMenu("&Edit")
        for a in (self.act_find, self.act_find_next, self.act_replace):
            editm.addAction(a)
        editm.addSeparator()
        editm.addAction(self.act_clear)

        viewm = m.addMenu("&View")
        for a in (self.act_zoom_in, self.act_zoom_out, self.act_zoom_reset):
            viewm.addAction(a)

        helpm = m.addMenu("&Help")
        helpm.addAction(self.act_about)

    def _refresh_recent_menu(self):
        self.recent_menu.clear()
        if not self.recents:
            na = QAction("(empty)", self)
            na.setEnabled(False)
            self.recent_menu.addAction(na)
            return
        for p in self.recents[:MAX_RECENTS]:
            act = QAction(p, self)
            act.triggered.connect(lambda _checked=False, x=p: self._open_path(Path(x)))
            self.recent_menu.addAction(act)

    # ---------- ITabView ----------
    def tab_added(self, doc: Document) -> None:
        self._syncing_tabs = True
        try:
            index = self.tabs.addTab(doc.title)
            self.tabs.setTabData(index, doc.id)
            self.tabs.setTabToolTip(index, doc.source_location or doc.title)
        finally:
            self._syncing_tabs = False

    def tab_removed(self, doc_id: str) -> None:
        index = self._index_of(doc_id)
        if index < 0:
            return
        self._syncing_tabs = True
        try:
            self.tabs.removeTab(index)
        finally:
            self._syncing_tabs = False

    def tab_title_changed(self, doc_id: str, title: str) -> None:
        index = self._index_of(doc_id)
        if index >= 0:
            self.tabs.setTabText(index, title)
            doc = self.session.get(doc_id)
            self.tabs.setTabToolTip(index, (doc.source_location if doc else None) or title)
        if doc_id == self.session.active_document_id:
            self._update_title()

    def tab_activated(self, doc_id: str) -> None:
        index = self._index_of(doc_id)
        if index >= 0 and index != self.tabs.currentIndex():
            self._syncing_tabs = True
            try:
                self.tabs.setCurrentIndex(index)
            finally:
                self._syncing_tabs = False
        self.find_dialog.engine.reset()
        self._update_title()
        self.editor.setFocus()

    def content_changed(self) -> None:
        self._render_preview()
        self._update_status()

    # ---------- Actions ----------
    def _show_find(self):
        self.find_dialog.show_find()

    def _show_replace(self):
        self.find_dialog.show_replace()

    def _show_about(self):
        self.about_dialog.show()
        self.about_dialog.raise_()

    def _open_path(self, path: Path) -> Document | None:
        doc = self.session.open_file(str(path))
        if doc is not None:
            self._add_recent(str(path))
        return doc

    def _apply_zoom(self, size: int) -> None:
        font = QFont(self.editor.font())
        font.setPointSize(int(size))
        self.editor.setFont(font)
        self._render_preview()

    def _on_tab_changed(self, index: int) -> None:
        if self._syncing_tabs or index < 0:
            return
        doc_id = self.tabs.tabData(index)
        if isinstance(doc_id, str):
            self.session.activate(doc_id)

    def _on_tab_close_requested(self, index: int) -> None:
        doc_id = self.tabs.tabData(index)
        if isinstance(doc_id, str):
            self.session.close(doc_id)

    # ---------- Helpers ----------
    def _index_of(self, doc_id: str) -> int:
        for i in range(self.tabs.count()):
            if self.tabs.tabData(i) == doc_id:
                return i
        return -1

    def _render_preview(self):
        html = self.renderer.to_document(self.surface.get_text(), font_size=self.zoom.size)
        self.preview.setHtml(html)

    def _update_status(self):
        stats = compute_stats(self.surface.get_text(), self.surface.cursor_offset())
        self.stats_label.setText(stats.label())

    def _update_title(self):
        doc = self.session.current_document()
        name = doc.title if doc else ""
        self.setWindowTitle(f"{name} — {self._app_title}" if name else self._app_title)

    def _add_recent(self, location: str):
        if location in self.recents:
            self.recents.remove(location)
        self.recents.insert(0, location)
        self.recents = self.recents[:MAX_RECENTS]
        self.settings.set_recent(self.recents)
        self._refresh_recent_menu()

    # ---------- DnD ----------
    def dragEnterEvent(self, e):
        if e.mimeData().hasUrls():
            e.acceptProposedAction()

    def dropEvent(self, e):
        urls = e.mimeData().urls()
        if not urls:
            return
        local = urls[0].toLocalFile()
        if local:
            self._open_path(Path(local))

    # ---------- Close ----------
    def closeEvent(self, event):
        if self.autosave is not None:
            self.autosave.stop()
        self.session.persist_session()
        self.settings.set_geometry(bytes(self.saveGeometry()))
        self.settings.set_splitter(bytes(self.splitter.saveState()))
        logger.debug("Main window closed; session persisted")
        super().closeEvent(event)
