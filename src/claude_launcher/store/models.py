"""Data models for Claude Launcher."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Optional


@dataclass(frozen=True)
class TerminalConfig:
    """A terminal emulator and the arguments that make it run a command."""
    name: str
    launch_flag: tuple[str, ...] = ()


@dataclass
class TmuxSession:
    """A tmux session as reported by ``tmux list-sessions``."""
    name: str
    windows: int
    attached: bool
    created: datetime


@dataclass(frozen=True)
class LaunchRequest:
    """A single request to run a command for a project."""
    project_path: str
    command: str
    session_id: Optional[str] = None


class LaunchOutcome(Enum):
    """How a launch ended up being run."""
    DIRECT = "direct"
    NEW_SESSION = "new_session"
    SPLIT_PANE = "split_pane"


@dataclass(frozen=True)
class LaunchResult:
    """Result of a successful launch."""
    outcome: LaunchOutcome
    terminal: TerminalConfig
    session_name: Optional[str] = None
    degraded: bool = False

    @property
    def description(self) -> str:
        """Get a short human-readable description of the launch."""
        if self.outcome == LaunchOutcome.NEW_SESSION:
            return f"Started tmux session {self.session_name} in {self.terminal.name}"
        if self.outcome == LaunchOutcome.SPLIT_PANE:
            return f"Added pane to tmux session {self.session_name}"
        if self.degraded:
            return f"tmux unavailable for {self.session_name}, opened {self.terminal.name} directly"
        return f"Opened {self.terminal.name} directly"


@dataclass
class HistoryEntry:
    """One prompt from ``~/.claude/history.jsonl``."""
    display: str
    project: str
    session_id: str
    timestamp: int  # epoch milliseconds
    pasted_contents: dict[str, Any] = field(default_factory=dict)


@dataclass
class Session:
    """A past Claude Code conversation."""
    id: str
    project: str
    project_name: str
    last_message: str
    message_count: int
    last_active: datetime
    messages: list[HistoryEntry] = field(default_factory=list)

    @property
    def first_message(self) -> str:
        """Get the message that opened the conversation."""
        return self.messages[0].display if self.messages else ""


@dataclass
class Bookmark:
    """A user-named pointer to a session."""
    name: str
    session_id: str
    project: str
    project_name: str
    created_at: str

    def to_dict(self) -> dict[str, str]:
        return {
            "name": self.name,
            "sessionId": self.session_id,
            "project": self.project,
            "projectName": self.project_name,
            "createdAt": self.created_at,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Bookmark:
        return cls(
            name=str(data["name"]),
            session_id=str(data["sessionId"]),
            project=str(data.get("project", "")),
            project_name=str(data.get("projectName", "")),
            created_at=str(data.get("createdAt", "")),
        )
