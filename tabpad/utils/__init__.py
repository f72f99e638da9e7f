"""App constants and utilities."""

from .constants import (
    APP_NAME,
    APP_ORG,
    CSS_PREVIEW,
    HTML_TEMPLATE,
    MAX_RECENTS,
    MODIFIED_SUFFIX,
    SETTINGS_GEOMETRY,
    SETTINGS_RECENTS,
    SETTINGS_SESSION,
    SETTINGS_SPLITTER,
    UNTITLED_TITLE,
)

__all__ = [
    "APP_ORG",
    "APP_NAME",
    "CSS_PREVIEW",
    "HTML_TEMPLATE",
    "MODIFIED_SUFFIX",
    "UNTITLED_TITLE",
    "SETTINGS_GEOMETRY",
    "SETTINGS_SPLITTER",
    "SETTINGS_RECENTS",
    "SETTINGS_SESSION",
    "MAX_RECENTS",
]
