"""Session list widget for Claude Launcher.

One line per session: bookmark marker, live tmux marker, project name,
relative time, and the bookmark name or last prompt.
"""

from __future__ import annotations

from rich.text import Text
from textual.widgets import OptionList
from textual.widgets.option_list import Option

from ...discovery import format_relative_time
from ...state import AppState
from ...store.models import Bookmark, Session, TmuxSession


class SessionList(OptionList):
    """Selectable list of past sessions."""

    DEFAULT_CSS = """
    SessionList {
        height: 1fr;
        border: solid $surface-lighten-2;
        background: $surface;
    }

    SessionList:focus {
        border: solid $primary;
    }
    """

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._sessions: list[Session] = []

    @property
    def selected_session(self) -> Session | None:
        """Get the highlighted session, if any."""
        index = self.highlighted
        if index is None or not 0 <= index < len(self._sessions):
            return None
        return self._sessions[index]

    def update_from_state(self, state: AppState) -> None:
        """Rebuild the list from application state, keeping the selection."""
        previous = self.selected_session
        self._sessions = list(state.results)

        self.clear_options()
        self.add_options(
            Option(
                self._format_label(
                    session,
                    state.bookmark_for(session.id),
                    state.tmux_session_for(session),
                ),
                id=session.id,
            )
            for session in self._sessions
        )

        if not self._sessions:
            return
        index = 0
        if previous is not None:
            index = next(
                (i for i, s in enumerate(self._sessions) if s.id == previous.id), 0
            )
        self.highlighted = index

    def move(self, delta: int) -> None:
        """Move the highlight up or down, clamped to the list."""
        if not self._sessions:
            return
        current = self.highlighted or 0
        self.highlighted = max(0, min(len(self._sessions) - 1, current + delta))

    def _format_label(
        self,
        session: Session,
        bookmark: Bookmark | None,
        tmux: TmuxSession | None,
    ) -> Text:
        """Format a session line."""
        if tmux is None:
            tmux_marker = (" ", "")
        elif tmux.attached:
            tmux_marker = ("●", "green")
        else:
            tmux_marker = ("○", "green dim")

        name = session.project_name or session.project or "?"
        if len(name) > 20:
            name = name[:17] + "..."

        if bookmark:
            summary = (bookmark.name, "yellow")
        else:
            summary = (" ".join(session.last_message.split())[:60], "")

        return Text.assemble(
            ("★ " if bookmark else "  ", "yellow"),
            tmux_marker,
            " ",
            (f"{name:<20}", "bold cyan"),
            " ",
            (f"{format_relative_time(session.last_active):>9}", "dim"),
            "  ",
            summary,
        )
