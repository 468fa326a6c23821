"""Full-screen fatal error message."""

from __future__ import annotations

from textual import events
from textual.app import ComposeResult
from textual.containers import Container
from textual.screen import Screen
from textual.widgets import Static


class MessageScreen(Screen):
    """Shows an error and exits the app on any key."""

    DEFAULT_CSS = """
    MessageScreen {
        padding: 1;
    }

    MessageScreen #message-title {
        color: $error;
        text-style: bold;
    }

    MessageScreen .detail {
        color: $text-muted;
    }

    MessageScreen #exit-hint {
        color: $text-muted;
        padding-top: 1;
    }
    """

    def __init__(self, title: str, detail: str = "", **kwargs) -> None:
        super().__init__(**kwargs)
        self._title = title
        self._detail = detail

    def compose(self) -> ComposeResult:
        with Container():
            yield Static(f"Error: {self._title}", id="message-title")
            if self._detail:
                yield Static(self._detail, classes="detail")
            yield Static("Press any key to exit", id="exit-hint")

    def on_key(self, event: events.Key) -> None:
        event.stop()
        self.app.exit()
