"""In-memory state store for Claude Launcher.

Holds the sessions parsed from Claude's history, the user's bookmarks, the
current search query and its results, and the set of live tmux sessions.
Observers are notified whenever any of these change.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable

from .bookmarks import BookmarkStore
from .discovery import history_exists, load_sessions
from .logging import get_logger
from .search import search_sessions
from .spawner.tmux import derive_session_name
from .store.models import Bookmark, Session, TmuxSession

log = get_logger("state")

NO_HISTORY_MESSAGE = "No Claude history found. Run Claude Code first."


@dataclass
class AppState:
    """Application state container."""

    history_path: Path | None = None
    bookmark_store: BookmarkStore = field(default_factory=BookmarkStore)
    sessions: list[Session] = field(default_factory=list)
    bookmarks: list[Bookmark] = field(default_factory=list)
    query: str = ""
    results: list[Session] = field(default_factory=list)
    active_tmux: dict[str, TmuxSession] = field(default_factory=dict)
    error: str | None = None
    _observers: list[Callable[[], None]] = field(default_factory=list, repr=False)

    def add_observer(self, callback: Callable[[], None]) -> None:
        """Add an observer that will be called when state changes."""
        self._observers.append(callback)

    def remove_observer(self, callback: Callable[[], None]) -> None:
        """Remove an observer."""
        if callback in self._observers:
            self._observers.remove(callback)

    def _notify_observers(self) -> None:
        for callback in self._observers:
            try:
                callback()
            except Exception as e:
                log.error(f"State observer failed: {e}")

    # --- Loading ---

    def reload(self) -> int:
        """Reload sessions from the history file and bookmarks from disk.

        Returns:
            Number of sessions loaded
        """
        if not history_exists(self.history_path):
            self.error = NO_HISTORY_MESSAGE
            self.sessions = []
        else:
            try:
                self.sessions = load_sessions(self.history_path)
                self.error = None
            except Exception as e:
                log.error(f"Failed to load history: {e}")
                self.error = f"Failed to load history: {e}"

        self.bookmarks = self.bookmark_store.load()
        self._refresh_results()
        return len(self.sessions)

    def set_sessions(self, sessions: list[Session]) -> None:
        """Replace the session list directly."""
        self.sessions = sessions
        self._refresh_results()

    # --- Search ---

    def set_query(self, query: str) -> None:
        """Update the search query and recompute the results."""
        if query == self.query:
            return
        self.query = query
        self._refresh_results()

    def _refresh_results(self) -> None:
        try:
            self.results = search_sessions(self.sessions, self.query, self.bookmarks)
        except Exception as e:
            log.error(f"Search failed for {self.query!r}: {e}")
            self.results = list(self.sessions)
        self._notify_observers()

    # --- Bookmarks ---

    def bookmark_for(self, session_id: str) -> Bookmark | None:
        """Get the bookmark for a session, if any."""
        return next((b for b in self.bookmarks if b.session_id == session_id), None)

    def default_bookmark_name(self, session: Session) -> str:
        """Get the existing bookmark name, or a name built from the session."""
        existing = self.bookmark_for(session.id)
        if existing:
            return existing.name
        snippet = " ".join(session.last_message.split())[:30]
        return f"{session.project_name}: {snippet}"

    def add_bookmark(self, session: Session, name: str) -> None:
        """Bookmark a session under ``name``."""
        self.bookmark_store.add(
            name=name,
            session_id=session.id,
            project=session.project,
            project_name=session.project_name,
        )
        self.bookmarks = self.bookmark_store.load()
        self._refresh_results()

    def remove_bookmark(self, session_id: str) -> None:
        """Remove a session's bookmark."""
        self.bookmark_store.remove(session_id)
        self.bookmarks = self.bookmark_store.load()
        self._refresh_results()

    # --- tmux ---

    def set_active_tmux(self, sessions: list[TmuxSession]) -> None:
        """Record the live tmux sessions."""
        active = {s.name: s for s in sessions}
        changed = active.keys() != self.active_tmux.keys() or any(
            active[name].attached != self.active_tmux[name].attached for name in active
        )
        self.active_tmux = active
        if changed:
            self._notify_observers()

    def tmux_session_for(self, session: Session) -> TmuxSession | None:
        """Get the live tmux session for a session's project, if any."""
        if not session.project:
            return None
        return self.active_tmux.get(derive_session_name(session.project))

    # --- Queries ---

    @property
    def total_sessions(self) -> int:
        return len(self.sessions)

    @property
    def filtered_count(self) -> int:
        return len(self.results)

    @property
    def has_query(self) -> bool:
        return bool(self.query)
