from __future__ import annotations

import logging
from pathlib import Path

from PyQt6.QtCore import QSettings
from PyQt6.QtWidgets import QPlainTextEdit

from tabpad.domain.interfaces import (
    IFileService,
    IPersistenceAdapter,
    IPreviewRenderer,
    ISettingsService,
)
from tabpad.services.config.app_config import AppConfig, build_app_config
from tabpad.services.file_service import FileService
from tabpad.services.persistence import BrowserPersistence, DesktopPersistence
from tabpad.services.preview_renderer import HyperlinkRenderer
from tabpad.services.search.find_replace_engine import FindReplaceEngine
from tabpad.services.session_store import SettingsSessionStore
from tabpad.services.settings_service import SettingsService
from tabpad.services.tabs.autosave import AutosaveService
from tabpad.services.tabs.session_manager import SessionPolicy, TabSessionManager
from tabpad.services.ui.adapters import QtEditingSurface, QtFileDialogService, QtMessageService
from tabpad.services.ui.main_window import MainWindow
from tabpad.services.ui.ports.dialogs import IFileDialogService
from tabpad.services.ui.ports.messages import IMessageService
from tabpad.services.zoom import ZoomController
from tabpad.utils.constants import (
    APP_NAME,
    APP_ORG,
    SETTINGS_SESSION,
    SETTINGS_WEB_SESSION,
    VARIANT_WEB,
)

logger = logging.getLogger(__name__)


class Container:
    """
    Lightweight DI container:
      - Wires default services if not provided
      - Picks the persistence adapter for the configured host variant
      - Builds the single editing surface, session manager and search engine
        once and hands the same instances to everything that needs them
    """

    def __init__(
        self,
        *,
        config: AppConfig | None = None,
        variant: str | None = None,
        renderer: IPreviewRenderer | None = None,
        files: IFileService | None = None,
        settings: ISettingsService | None = None,
        qsettings: QSettings | None = None,
        dialogs: IFileDialogService | None = None,
        messages: IMessageService | None = None,
        download_dir: Path | None = None,
    ) -> None:
        self.config: AppConfig = config or build_app_config()
        self.variant = variant or self.config.variant()

        # Core services (defaults if not supplied)
        self.renderer: IPreviewRenderer = renderer or HyperlinkRenderer()
        self.file_service: IFileService = files or FileService()
        self.settings_service: ISettingsService = settings or SettingsService(
            qsettings or QSettings()
        )
        self.dialogs: IFileDialogService = dialogs or QtFileDialogService()
        self.messages: IMessageService = messages or QtMessageService()

        key = SETTINGS_WEB_SESSION if self.variant == VARIANT_WEB else SETTINGS_SESSION
        self.session_store = SettingsSessionStore(self.settings_service, key=key)
        self.persistence: IPersistenceAdapter = self._build_persistence(download_dir)
        self.zoom = ZoomController(self.settings_service, default_size=self.config.font_size())
        self.policy = SessionPolicy(persist_on_edit=self.config.persist_on_edit(self.variant))

        # Built together with the window (the surface needs a live QApplication).
        self.surface: QtEditingSurface | None = None
        self.session: TabSessionManager | None = None
        self.engine: FindReplaceEngine | None = None
        self.autosave: AutosaveService | None = None

    # ---------- Class helpers ----------

    @staticmethod
    def default(
        qsettings: QSettings | None = None,
        *,
        organization: str = APP_ORG,
        application: str = APP_NAME,
        variant: str | None = None,
    ) -> Container:
        if qsettings is None:
            qsettings = QSettings(organization, application)
        return Container(qsettings=qsettings, variant=variant)

    # ---------- Internals ----------

    def _build_persistence(self, download_dir: Path | None) -> IPersistenceAdapter:
        if self.variant == VARIANT_WEB:
            return BrowserPersistence(
                store=self.session_store,
                files=self.file_service,
                dialogs=self.dialogs,
                messages=self.messages,
                download_dir=download_dir,
            )
        return DesktopPersistence(
            store=self.session_store,
            files=self.file_service,
            dialogs=self.dialogs,
            messages=self.messages,
        )

    def build_core(self) -> tuple[TabSessionManager, QtEditingSurface, FindReplaceEngine]:
        """Create surface, session manager, search engine and autosave (once)."""
        if self.session is not None and self.surface is not None and self.engine is not None:
            return self.session, self.surface, self.engine
        self.surface = QtEditingSurface(QPlainTextEdit())
        self.session = TabSessionManager(
            self.surface,
            self.persistence,
            messages=self.messages,
            policy=self.policy,
        )
        self.engine = FindReplaceEngine(self.surface, self.session, self.messages)
        self.autosave = AutosaveService(
            session=self.session, interval_ms=self.config.autosave_interval_ms()
        )
        return self.session, self.surface, self.engine

    # ---------- UI factories ----------

    def build_main_window(
        self,
        *,
        start_path: Path | None = None,
        app_title: str = APP_NAME,
        restore: bool = True,
    ) -> MainWindow:
        """
        Create the Qt MainWindow over the shared core, restore the previous
        session, then open `start_path` (if any) in a new tab.
        """
        session, surface, engine = self.build_core()

        window = MainWindow(
            session=session,
            surface=surface,
            engine=engine,
            renderer=self.renderer,
            settings=self.settings_service,
            zoom=self.zoom,
            autosave=self.autosave,
            app_title=app_title,
            version=self.config.get_version(),
        )
        self.persistence.set_parent(window)

        session.restore_session(self.persistence.load_session() if restore else None)
        if start_path is not None:
            window._open_path(start_path)

        if self.autosave is not None:
            self.autosave.start()
        logger.info("Main window ready (%s variant, %d tab(s))", self.variant, len(session.documents))
        return window


# --- Convenience top-level function ------------------


def build_main_window(
    qsettings: QSettings | None = None,
    *,
    start_path=None,
    app_title: str = APP_NAME,
    organization: str = APP_ORG,
    application: str = APP_NAME,
) -> MainWindow:
    """
    One-call convenience for a ready-to-use window.
    """
    container = Container.default(
        qsettings=qsettings,
        organization=organization,
        application=application,
    )
    return container.build_main_window(start_path=start_path, app_title=app_title)
