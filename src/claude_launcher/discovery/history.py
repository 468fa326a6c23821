"""Parser for Claude Code's prompt history.

Claude Code appends every prompt to ~/.claude/history.jsonl, one JSON object
per line:

    {"display": "fix the tests", "project": "/home/u/app",
     "sessionId": "<uuid>", "timestamp": 1718000000000, "pastedContents": {}}

Prompts are grouped by sessionId into Session objects.
"""

from __future__ import annotations

import json
from datetime import datetime
from pathlib import Path, PurePosixPath

from ..logging import get_logger
from ..store.models import HistoryEntry, Session

log = get_logger("history")

CLAUDE_DIR = Path.home() / ".claude"
HISTORY_PATH = CLAUDE_DIR / "history.jsonl"


def history_exists(history_path: Path | None = None) -> bool:
    """Check whether Claude Code has written any history yet."""
    return (history_path or HISTORY_PATH).exists()


def _parse_entry(data: object) -> HistoryEntry | None:
    """Build a HistoryEntry from one decoded line, or None if unusable."""
    if not isinstance(data, dict):
        return None
    session_id = data.get("sessionId")
    display = data.get("display")
    if not session_id or not display:
        return None

    try:
        timestamp = int(data.get("timestamp") or 0)
    except (TypeError, ValueError, OverflowError):
        timestamp = 0
    try:
        datetime.fromtimestamp(timestamp / 1000)
    except (OverflowError, OSError, ValueError):
        return None

    pasted = data.get("pastedContents")
    return HistoryEntry(
        display=str(display),
        project=str(data.get("project") or ""),
        session_id=str(session_id),
        timestamp=timestamp,
        pasted_contents=pasted if isinstance(pasted, dict) else {},
    )


def parse_history_file(history_path: Path | None = None) -> list[HistoryEntry]:
    """Read every usable entry from the history file.

    Blank lines, corrupt JSON, entries without a session ID or display text,
    and entries whose timestamp is out of range are skipped.
    """
    path = history_path or HISTORY_PATH
    if not path.exists():
        return []

    entries = []
    skipped = 0
    try:
        with open(path, "r", encoding="utf-8") as f:
            for line in f:
                line = line.strip()
                if not line:
                    continue
                try:
                    entry = _parse_entry(json.loads(line))
                except json.JSONDecodeError:
                    skipped += 1
                    continue
                if entry is None:
                    skipped += 1
                    continue
                entries.append(entry)
    except OSError as e:
        log.error(f"Failed to read history file {path}: {e}")
        return []

    if skipped:
        log.debug(f"Skipped {skipped} unusable history lines")
    return entries


def group_into_sessions(entries: list[HistoryEntry]) -> list[Session]:
    """Group history entries into sessions, most recently active first."""
    by_session: dict[str, list[HistoryEntry]] = {}
    for entry in entries:
        by_session.setdefault(entry.session_id, []).append(entry)

    sessions = []
    for session_id, messages in by_session.items():
        messages.sort(key=lambda m: m.timestamp)
        last = messages[-1]
        sessions.append(
            Session(
                id=session_id,
                project=last.project,
                project_name=PurePosixPath(last.project).name,
                last_message=last.display,
                message_count=len(messages),
                last_active=datetime.fromtimestamp(last.timestamp / 1000),
                messages=messages,
            )
        )

    sessions.sort(key=lambda s: s.last_active, reverse=True)
    return sessions


def load_sessions(history_path: Path | None = None) -> list[Session]:
    """Parse the history file and group it into sessions."""
    sessions = group_into_sessions(parse_history_file(history_path))
    log.info(f"Loaded {len(sessions)} sessions")
    return sessions


def format_relative_time(dt: datetime, now: datetime | None = None) -> str:
    """Format a past time as ``3d ago``, ``5h ago``, ``2m ago`` or ``just now``."""
    seconds = int(((now or datetime.now()) - dt).total_seconds())
    minutes = seconds // 60
    hours = minutes // 60
    days = hours // 24

    if days > 0:
        return f"{days}d ago"
    if hours > 0:
        return f"{hours}h ago"
    if minutes > 0:
        return f"{minutes}m ago"
    return "just now"
