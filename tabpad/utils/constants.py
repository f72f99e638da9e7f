APP_ORG = "QuickTools"
APP_NAME = "TabPad"

UNTITLED_TITLE = "Untitled"
MODIFIED_SUFFIX = " *"
TAB_ID_PREFIX = "tab-"

VARIANT_DESKTOP = "desktop"
VARIANT_WEB = "web"

DEFAULT_FONT_SIZE = 14
ZOOM_STEP = 2
MIN_FONT_SIZE = 8
DEFAULT_AUTOSAVE_SEC = 5

CSS_PREVIEW = """
:root { --bg:#ffffff; --fg:#111; --link:#0b6bfd; }
@media (prefers-color-scheme: dark) {
  :root { --bg:#0f1115; --fg:#e7e9ee; --link:#7aa2ff; }
}
html,body { background:var(--bg); color:var(--fg); }
body { font-family: Consolas, Menlo, monospace; margin: 1rem; line-height: 1.5;
       white-space: pre-wrap; word-wrap: break-word; }
a { color:var(--link); text-decoration:none; } a:hover { text-decoration:underline; }
"""

HTML_TEMPLATE = """<!doctype html>
<html>
<head>
<meta charset="utf-8" />
<meta name="viewport" content="width=device-width, initial-scale=1.0"/>
<style>{css}</style>
</head>
<body>{body}</body>
</html>
"""

SETTINGS_GEOMETRY = "window/geometry"
SETTINGS_SPLITTER = "window/splitter"
SETTINGS_RECENTS = "file/recent"
SETTINGS_FONT_SIZE = "editor/font_size"
SETTINGS_SESSION = "session/state"
SETTINGS_WEB_SESSION = "web/session/state"
MAX_RECENTS = 8

FILE_FILTER = "Text (*.txt *.md *.js *.json *.html *.css);;All files (*)"
