"""Bookmark persistence.

Bookmarks are kept as a JSON list in ~/.claude-launcher/bookmarks.json,
newest first. The file format uses the same camelCase keys as Claude's own
history so it stays readable next to it.
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path

from .logging import get_logger
from .store.models import Bookmark

log = get_logger("bookmarks")

BOOKMARKS_DIR = Path.home() / ".claude-launcher"
BOOKMARKS_FILE = BOOKMARKS_DIR / "bookmarks.json"


class BookmarkStore:
    """Load and save bookmarks. Every call re-reads the file."""

    def __init__(self, path: Path | None = None) -> None:
        self.path = path or BOOKMARKS_FILE

    def load(self) -> list[Bookmark]:
        """Load all bookmarks. A missing or corrupt file yields an empty list."""
        if not self.path.exists():
            return []
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
            return [Bookmark.from_dict(item) for item in data]
        except (OSError, ValueError, TypeError, KeyError) as e:
            log.error(f"Error loading bookmarks from {self.path}: {e}")
            return []

    def save(self, bookmarks: list[Bookmark]) -> None:
        """Write all bookmarks, replacing the file."""
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            payload = json.dumps([b.to_dict() for b in bookmarks], indent=2)
            self.path.write_text(payload, encoding="utf-8")
        except OSError as e:
            log.error(f"Error saving bookmarks to {self.path}: {e}")

    def add(
        self,
        name: str,
        session_id: str,
        project: str,
        project_name: str,
    ) -> Bookmark:
        """Bookmark a session, or rename its existing bookmark."""
        bookmarks = self.load()

        for bookmark in bookmarks:
            if bookmark.session_id == session_id:
                bookmark.name = name
                self.save(bookmarks)
                return bookmark

        bookmark = Bookmark(
            name=name,
            session_id=session_id,
            project=project,
            project_name=project_name,
            created_at=datetime.now(timezone.utc).isoformat(),
        )
        bookmarks.insert(0, bookmark)
        self.save(bookmarks)
        log.info(f"Bookmarked {session_id} as {name!r}")
        return bookmark

    def remove(self, session_id: str) -> None:
        """Remove the bookmark for a session, if any."""
        bookmarks = self.load()
        remaining = [b for b in bookmarks if b.session_id != session_id]
        if len(remaining) != len(bookmarks):
            self.save(remaining)
            log.info(f"Removed bookmark for {session_id}")

    def is_bookmarked(self, session_id: str) -> bool:
        return self.get(session_id) is not None

    def get(self, session_id: str) -> Bookmark | None:
        return next((b for b in self.load() if b.session_id == session_id), None)
