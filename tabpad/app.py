from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path

from PyQt6.QtWidgets import QApplication

from tabpad.di.container import Container
from tabpad.services.config.app_config import build_app_config
from tabpad.utils.constants import APP_NAME, APP_ORG, VARIANT_WEB

logger = logging.getLogger(__name__)


def parse_args(argv: Sequence[str]) -> tuple[Path | None, str | None]:
    """`tabpad [--web] [path]` -> (start path, variant override)."""
    variant = None
    start_path = None
    for arg in list(argv)[1:]:
        if arg == "--web":
            variant = VARIANT_WEB
        elif not arg.startswith("-") and start_path is None:
            start_path = Path(arg)
    return start_path, variant


def run_app(argv: Sequence[str]) -> int:
    """
    Bootstraps Qt, composes the application via the DI container,
    and launches the main window.
    """
    config = build_app_config()
    logging.basicConfig(level=config.log_level(), format="%(asctime)s %(levelname)s %(message)s")
    logger.info("TabPad %s, config from %s", config.get_version(), config.loaded_from or "defaults")

    QApplication.setOrganizationName(APP_ORG)
    QApplication.setApplicationName(APP_NAME)
    app = QApplication(list(argv))

    start_path, variant = parse_args(argv)
    container = Container(config=config, variant=variant)

    win = container.build_main_window(start_path=start_path, app_title=APP_NAME)
    win.show()

    return app.exec()
