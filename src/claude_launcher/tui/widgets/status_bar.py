"""Status bar widget for Claude Launcher.

Shows session counts and the keys that apply to the current mode.
"""

from textual.app import ComposeResult
from textual.containers import Vertical
from textual.reactive import reactive
from textual.widget import Widget
from textual.widgets import Static

from ...state import AppState


class StatusBar(Widget):
    """Status bar showing how many sessions match and what keys do."""

    DEFAULT_CSS = """
    StatusBar {
        dock: bottom;
        height: 2;
        background: $surface;
        padding: 0 1;
    }

    StatusBar .stats {
        color: $text-muted;
    }

    StatusBar .keys {
        color: $text-muted;
    }
    """

    total_sessions: reactive[int] = reactive(0)
    filtered_count: reactive[int] = reactive(0)
    has_query: reactive[bool] = reactive(False)

    def compose(self) -> ComposeResult:
        with Vertical():
            yield Static(id="count-stat", classes="stats")
            yield Static(id="key-hints", classes="keys")

    def on_mount(self) -> None:
        self._update_display()

    def watch_total_sessions(self, count: int) -> None:
        self._update_display()

    def watch_filtered_count(self, count: int) -> None:
        self._update_display()

    def watch_has_query(self, value: bool) -> None:
        self._update_display()

    def _update_display(self) -> None:
        """Update the display with current values."""
        if not self.is_mounted:
            return

        if self.has_query:
            counts = f"{self.filtered_count} of {self.total_sessions} sessions"
        else:
            counts = f"{self.total_sessions} sessions"
        self.query_one("#count-stat", Static).update(counts)

        hints = [
            "[b]⏎[/b] open",
            "[b]^F[/b] fork",
            "[b]^G[/b] direct",
            "[b]^N[/b] new",
            "[b]^B[/b] bookmark",
            "[b]^X[/b] unbookmark",
            f"[b]esc[/b] {'clear' if self.has_query else 'quit'}",
        ]
        self.query_one("#key-hints", Static).update("  ".join(hints))

    def update_from_state(self, state: AppState) -> None:
        """Update stats from application state."""
        self.total_sessions = state.total_sessions
        self.filtered_count = state.filtered_count
        self.has_query = state.has_query
