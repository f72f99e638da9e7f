from .autosave import AutosaveService
from .session_codec import SessionFormatError, decode_session, encode_session, title_for
from .session_manager import SessionPolicy, TabSessionManager

__all__ = [
    "AutosaveService",
    "SessionFormatError",
    "SessionPolicy",
    "TabSessionManager",
    "decode_session",
    "encode_session",
    "title_for",
]
