"""History discovery and watching utilities."""

from .history import (
    CLAUDE_DIR,
    HISTORY_PATH,
    format_relative_time,
    group_into_sessions,
    history_exists,
    load_sessions,
    parse_history_file,
)
from .watcher import HistoryWatcher

__all__ = [
    "CLAUDE_DIR",
    "HISTORY_PATH",
    "HistoryWatcher",
    "format_relative_time",
    "group_into_sessions",
    "history_exists",
    "load_sessions",
    "parse_history_file",
]
