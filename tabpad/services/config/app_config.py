from __future__ import annotations

import logging
import re
import sys
from dataclasses import dataclass
from pathlib import Path

from tabpad.domain.interfaces import IAppConfig
from tabpad.services.config.ini_config_service import IniConfigService
from tabpad.utils.constants import (
    DEFAULT_AUTOSAVE_SEC,
    DEFAULT_FONT_SIZE,
    VARIANT_DESKTOP,
    VARIANT_WEB,
)

_VERSION_RE = re.compile(r"^v?(\d+\.\d+\.\d+)(?:[-+].*)?$", re.IGNORECASE)


def _project_root_fallback() -> Path:
    """
    Best-effort project root resolution that also works in PyInstaller:
      - PyInstaller onefile/onedir uses sys._MEIPASS as bundle root
      - dev mode uses this file location to walk upward
    """
    meipass = getattr(sys, "_MEIPASS", None)  # type: ignore[attr-defined]
    if meipass:
        return Path(meipass)

    # tabpad/services/config/app_config.py -> parents[3] = repository root
    return Path(__file__).resolve().parents[3]


def _read_version_file(version_path: Path) -> str | None:
    try:
        raw = version_path.read_text(encoding="utf-8").strip()
    except OSError:
        return None

    m = _VERSION_RE.match(raw)
    if not m:
        return None
    return m.group(1)


@dataclass(frozen=True)
class AppConfig(IAppConfig):
    """
    Adapter over IniConfigService: version lookup plus typed accessors for the
    settings the editor reads at startup.

    Precedence for version:
      1) <project_root>/version file (semantic e.g. v1.0.5)
      2) ini_config_service.app_version() (fallback)
      3) "0.0.0"
    """

    ini: IniConfigService
    project_root: Path

    def get_version(self) -> str:
        v = _read_version_file(self.project_root / "version")
        if v:
            return v

        v2 = (self.ini.app_version() or "").strip()
        if v2:
            m = _VERSION_RE.match(v2)
            return m.group(1) if m else v2

        return "0.0.0"

    # ---- typed settings ----

    def variant(self) -> str:
        v = (self.ini.get("app", "variant", VARIANT_DESKTOP) or "").strip().lower()
        return v if v in (VARIANT_DESKTOP, VARIANT_WEB) else VARIANT_DESKTOP

    def autosave_interval_ms(self) -> int:
        sec = self.ini.get_int("session", "autosave_interval_sec", DEFAULT_AUTOSAVE_SEC)
        return max(1, sec or DEFAULT_AUTOSAVE_SEC) * 1000

    def persist_on_edit(self, variant: str | None = None) -> bool:
        default = (variant or self.variant()) == VARIANT_WEB
        v = self.ini.get_bool("session", "persist_on_edit", default)
        return default if v is None else v

    def font_size(self) -> int:
        return self.ini.get_int("editor", "font_size", DEFAULT_FONT_SIZE) or DEFAULT_FONT_SIZE

    def log_level(self) -> int:
        name = (self.ini.get("logging", "level", "WARNING") or "WARNING").strip().upper()
        level = logging.getLevelName(name)
        return level if isinstance(level, int) else logging.WARNING

    @property
    def loaded_from(self) -> Path | None:
        return self.ini.loaded_from


def build_app_config(
    *, explicit_ini: Path | None = None, project_root: Path | None = None
) -> AppConfig:
    root = project_root or _project_root_fallback()
    ini = IniConfigService(explicit_path=explicit_ini, project_root=root)
    return AppConfig(ini=ini, project_root=root)
