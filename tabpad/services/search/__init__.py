from .find_replace_engine import FindReplaceEngine, SearchState

__all__ = ["FindReplaceEngine", "SearchState"]
