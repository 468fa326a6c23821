"""Data models shared across the launcher."""

from .models import (
    Bookmark,
    HistoryEntry,
    LaunchOutcome,
    LaunchRequest,
    LaunchResult,
    Session,
    TerminalConfig,
    TmuxSession,
)

__all__ = [
    "Bookmark",
    "HistoryEntry",
    "LaunchOutcome",
    "LaunchRequest",
    "LaunchResult",
    "Session",
    "TerminalConfig",
    "TmuxSession",
]
