from __future__ import annotations

import configparser
import logging
from collections.abc import Iterator
from pathlib import Path

from platformdirs import user_config_dir

from tabpad.domain.interfaces import IConfigService

logger = logging.getLogger(__name__)


class IniConfigService(IConfigService):
    r"""
    Reads the first usable `config.ini` from, in order:

      1. an explicit path (``--config`` style overrides and tests)
      2. the per-user config dir (``~/.config/TabPad`` or ``%APPDATA%\TabPad``)
      3. ``<project_root>/config/config.ini``

    A file that is missing, unreadable or not INI is skipped. With no usable
    file every getter answers its default.
    """

    DEFAULT_APP_DIR = "TabPad"
    DEFAULT_FILE = "config.ini"

    def __init__(self, explicit_path: Path | None = None, project_root: Path | None = None):
        self._parser = configparser.ConfigParser()
        self._loaded_from: Path | None = None

        for path in self._candidates(explicit_path, project_root):
            parser = self._read(path)
            if parser is not None:
                self._parser, self._loaded_from = parser, path
                break

    @classmethod
    def _candidates(cls, explicit_path: Path | None, project_root: Path | None) -> Iterator[Path]:
        if explicit_path:
            yield explicit_path
        yield Path(user_config_dir(cls.DEFAULT_APP_DIR)) / cls.DEFAULT_FILE
        if project_root:
            yield project_root / "config" / cls.DEFAULT_FILE

    @staticmethod
    def _read(path: Path) -> configparser.ConfigParser | None:
        parser = configparser.ConfigParser()
        try:
            if not path.is_file():
                return None
            with path.open("r", encoding="utf-8") as fh:
                parser.read_file(fh)
        except (OSError, UnicodeDecodeError, configparser.Error) as e:
            logger.warning("Skipping unreadable config %s: %s", path, e)
            return None
        return parser

    # ----- IConfigService -----

    def get(self, section: str, key: str, default: str | None = None) -> str | None:
        return self._parser.get(section, key, raw=True, fallback=default)

    def get_int(self, section: str, key: str, default: int | None = None) -> int | None:
        raw = self.get(section, key)
        if raw is None:
            return default
        try:
            return int(raw)
        except ValueError:
            logger.warning("[%s] %s: expected an integer, got %r", section, key, raw)
            return default

    def get_bool(self, section: str, key: str, default: bool | None = None) -> bool | None:
        raw = self.get(section, key)
        if raw is None:
            return default
        # 1/0, yes/no, true/false, on/off
        return self._parser.BOOLEAN_STATES.get(raw.strip().lower(), default)

    def app_version(self) -> str:
        return (self.get("app", "version") or "").strip() or "0.0.0"

    @property
    def loaded_from(self) -> Path | None:
        return self._loaded_from
