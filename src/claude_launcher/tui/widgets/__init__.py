"""TUI widgets for Claude Launcher."""

from .session_list import SessionList
from .status_bar import StatusBar

__all__ = ["SessionList", "StatusBar"]
