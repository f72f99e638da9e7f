# tabpad/services/preview_renderer.py
from __future__ import annotations

import html
import re

from tabpad.domain.interfaces import IPreviewRenderer
from tabpad.utils.constants import CSS_PREVIEW, HTML_TEMPLATE

# Runs on already-escaped text, so "<" can never be part of a match.
URL_RE = re.compile(r"(?:[a-z][a-z0-9+.\-]*://|www\.)\S+", re.IGNORECASE)


class HyperlinkRenderer(IPreviewRenderer):
    """
    Plain text -> safe HTML with URLs turned into anchors.

    Escaping happens first and link detection is a single substitution pass, so
    inserted markup is never re-scanned and nothing is escaped twice.
    """

    def to_html(self, text: str) -> str:
        escaped = html.escape(text, quote=True)
        return URL_RE.sub(self._anchor, escaped)

    def to_document(self, text: str, *, font_size: int | None = None) -> str:
        css = CSS_PREVIEW
        if font_size:
            css += f"body {{ font-size: {int(font_size)}px; }}\n"
        return HTML_TEMPLATE.format(css=css, body=self.to_html(text))

    # -------------------- helpers --------------------

    @staticmethod
    def _anchor(match: re.Match[str]) -> str:
        shown = match.group(0)
        href = f"http://{shown}" if shown.lower().startswith("www.") else shown
        return f'<a href="{href}" target="_blank" rel="noopener noreferrer">{shown}</a>'
