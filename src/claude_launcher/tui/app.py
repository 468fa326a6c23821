"""Main Textual application for Claude Launcher.

Type to filter past sessions, then press Enter to resume the highlighted one
in its project's tmux session.
"""

from __future__ import annotations

from typing import Callable

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal
from textual.timer import Timer
from textual.widgets import Footer, Input, Static

from ..discovery import HistoryWatcher
from ..errors import LauncherError
from ..fork import extract_context
from ..logging import get_logger
from ..spawner import LaunchOrchestrator
from ..state import AppState
from ..store.models import LaunchResult, Session
from .screens import BookmarkScreen, MessageScreen
from .widgets import SessionList, StatusBar

log = get_logger("app")

# Seconds between polls of the live tmux session list
TMUX_POLL_INTERVAL = 3.0

# Seconds to wait after the last keystroke before searching
SEARCH_DEBOUNCE = 0.2


class LauncherApp(App[LaunchResult | None]):
    """Claude Launcher TUI application.

    Exits with the LaunchResult of a successful launch, or None on quit.
    """

    TITLE = "Claude Sessions"

    CSS = """
    Screen {
        background: $surface;
        padding: 0 1;
    }

    #title-bar {
        height: 1;
        margin-top: 1;
    }

    #search-row {
        height: 3;
    }

    #search-label {
        width: auto;
        padding: 1 1 0 0;
    }

    #search {
        width: 1fr;
    }

    #launch-error {
        color: $error;
        height: auto;
    }
    """

    BINDINGS = [
        Binding("up", "cursor(-1)", "Up", show=False, priority=True),
        Binding("down", "cursor(1)", "Down", show=False, priority=True),
        Binding("ctrl+f", "fork", "Fork", priority=True),
        Binding("ctrl+g", "open_direct", "Direct", priority=True),
        Binding("ctrl+n", "fresh", "New", priority=True),
        Binding("ctrl+b", "bookmark", "Bookmark", priority=True),
        Binding("ctrl+x", "unbookmark", "Unbookmark", priority=True),
        Binding("escape", "back", "Clear/Quit", priority=True),
        Binding("ctrl+q", "quit", "Quit", priority=True),
    ]

    _LIST_ACTIONS = frozenset(
        {"cursor", "fork", "open_direct", "fresh", "bookmark", "unbookmark", "back"}
    )

    def __init__(
        self,
        state: AppState | None = None,
        orchestrator: LaunchOrchestrator | None = None,
        watch_history: bool = True,
        **kwargs,
    ) -> None:
        super().__init__(**kwargs)
        self.state = state or AppState()
        self.orchestrator = orchestrator or LaunchOrchestrator()
        self._watch_history = watch_history
        self._watcher: HistoryWatcher | None = None
        self._search_timer: Timer | None = None
        self._has_tmux = False
        self._error: str | None = None

    def compose(self) -> ComposeResult:
        yield Static(id="title-bar")
        with Horizontal(id="search-row"):
            yield Static("Search:", id="search-label")
            yield Input(placeholder="type to filter...", id="search")
        yield SessionList(id="session-list")
        yield Static("", id="launch-error")
        yield StatusBar()
        yield Footer()

    def on_mount(self) -> None:
        """Load sessions and start background refreshes."""
        terminal = self.orchestrator.detector.detect()
        if terminal is None:
            names = ", ".join(t.name for t in self.orchestrator.detector.candidates)
            self.push_screen(
                MessageScreen("No supported terminal found", f"Install one of: {names}")
            )
            return

        self._has_tmux = self.orchestrator.tmux.exists()
        log.info(f"App mounted (terminal={terminal.name}, tmux={self._has_tmux})")

        title = f"[b cyan]Claude Sessions[/] [dim]({terminal.name}[/]"
        if self._has_tmux:
            title += "[green] + tmux[/]"
        title += "[dim])[/]"
        self.query_one("#title-bar", Static).update(title)

        self.state.add_observer(self._update_from_state)
        count = self.state.reload()
        log.info(f"Loaded {count} sessions")

        if self._has_tmux:
            self._poll_tmux()
            self.set_interval(TMUX_POLL_INTERVAL, self._poll_tmux)
        if self._watch_history:
            self.run_worker(self._start_history_watcher(), exclusive=True)

        self.query_one("#search", Input).focus()

    async def _start_history_watcher(self) -> None:
        """Start watching the history file for new prompts."""
        try:
            watcher = HistoryWatcher(
                on_change=self._on_history_change,
                history_path=self.state.history_path,
            )
            await watcher.start()
            self._watcher = watcher
        except Exception as e:
            log.error(f"Failed to start history watcher: {e}")

    def _on_history_change(self) -> None:
        self.state.reload()

    def _poll_tmux(self) -> None:
        self.state.set_active_tmux(self.orchestrator.tmux.list_sessions())

    def _update_from_state(self) -> None:
        """Update all widgets from current state."""
        self.query_one(SessionList).update_from_state(self.state)
        self.query_one(StatusBar).update_from_state(self.state)
        if self.state.error:
            self._show_error(self.state.error)

    # --- Search ---

    def on_input_changed(self, event: Input.Changed) -> None:
        if event.input.id != "search":
            return
        if self._search_timer is not None:
            self._search_timer.stop()
        value = event.value
        self._search_timer = self.set_timer(
            SEARCH_DEBOUNCE, lambda: self.state.set_query(value)
        )

    def on_input_submitted(self, event: Input.Submitted) -> None:
        if event.input.id == "search":
            self.action_resume()

    def on_option_list_option_selected(self, event: SessionList.OptionSelected) -> None:
        self.action_resume()

    # --- Helpers ---

    @property
    def selected_session(self) -> Session | None:
        return self.query_one(SessionList).selected_session

    def _show_error(self, message: str) -> None:
        self._error = message
        self.query_one("#launch-error", Static).update(f"Error: {message}")

    def _clear_error(self) -> bool:
        if self._error is None:
            return False
        self._error = None
        self.query_one("#launch-error", Static).update("")
        return True

    def check_action(self, action: str, parameters: tuple[object, ...]) -> bool | None:
        """Leave keys to modal screens while one is open."""
        if action in self._LIST_ACTIONS and len(self.screen_stack) > 1:
            return False
        return True

    def _launch(self, launch: Callable[[Session], LaunchResult]) -> None:
        """Run a launch for the selected session and exit on success."""
        session = self.selected_session
        if session is None:
            return
        try:
            result = launch(session)
        except LauncherError as e:
            log.error(f"Launch failed for {session.id}: {e.message}")
            self._show_error(e.message)
            return

        log.info(f"Launched {session.id}: {result.description}")
        if result.degraded:
            self.notify(result.description, severity="warning")
        self.exit(result)

    # --- Actions ---

    def action_cursor(self, delta: int) -> None:
        self.query_one(SessionList).move(delta)

    def action_resume(self) -> None:
        """Resume the selected session."""
        self._launch(lambda s: self.orchestrator.launch_resume(s.id, s.project))

    def action_fork(self) -> None:
        """Start a new session primed with the selected session's context."""
        self._launch(
            lambda s: self.orchestrator.launch_with_context(s.project, extract_context(s))
        )

    def action_open_direct(self) -> None:
        """Resume the selected session in a plain terminal window."""
        self._launch(lambda s: self.orchestrator.launch_resume_direct(s.id, s.project))

    def action_fresh(self) -> None:
        """Start a fresh session in the selected session's project."""
        self._launch(lambda s: self.orchestrator.launch_fresh(s.project))

    def action_bookmark(self) -> None:
        """Bookmark the selected session under a user-given name."""
        session = self.selected_session
        if session is None:
            return

        def save(name: str | None) -> None:
            if name:
                self.state.add_bookmark(session, name)
            self.query_one("#search", Input).focus()

        self.push_screen(BookmarkScreen(self.state.default_bookmark_name(session)), save)

    def action_unbookmark(self) -> None:
        """Remove the selected session's bookmark."""
        session = self.selected_session
        if session is None or self.state.bookmark_for(session.id) is None:
            return
        self.state.remove_bookmark(session.id)

    async def action_back(self) -> None:
        """Clear the error, then the search, then quit."""
        if self._clear_error():
            return
        search = self.query_one("#search", Input)
        if search.value or self.state.query:
            search.value = ""
            if self._search_timer is not None:
                self._search_timer.stop()
            self.state.set_query("")
            return
        await self.action_quit()

    async def action_quit(self) -> None:
        """Quit the app and clean up."""
        if self._watcher:
            await self._watcher.stop()
        self.exit(None)


def run_app(
    state: AppState | None = None,
    orchestrator: LaunchOrchestrator | None = None,
) -> LaunchResult | None:
    """Run the launcher and return what it launched, if anything."""
    app = LauncherApp(state=state, orchestrator=orchestrator)
    return app.run()
