"""TUI screens for Claude Launcher."""

from .bookmark_screen import BookmarkScreen
from .message_screen import MessageScreen

__all__ = ["BookmarkScreen", "MessageScreen"]
