"""Screen for naming a bookmark."""

from __future__ import annotations

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Container
from textual.screen import ModalScreen
from textual.widgets import Input, Static


class BookmarkScreen(ModalScreen[str | None]):
    """Modal screen asking for a bookmark name. Dismisses with the name or None."""

    DEFAULT_CSS = """
    BookmarkScreen {
        align: center middle;
    }

    BookmarkScreen > Container {
        width: 70;
        height: auto;
        border: thick $primary;
        background: $surface;
        padding: 1 2;
    }

    BookmarkScreen #title {
        text-align: center;
        text-style: bold;
        padding-bottom: 1;
        color: $warning;
    }

    BookmarkScreen #error-message {
        color: $error;
        height: 1;
    }
    """

    BINDINGS = [
        Binding("escape", "cancel", "Cancel"),
    ]

    def __init__(self, default_name: str = "", **kwargs) -> None:
        super().__init__(**kwargs)
        self._default_name = default_name

    def compose(self) -> ComposeResult:
        with Container():
            yield Static("Bookmark name", id="title")
            yield Input(
                value=self._default_name,
                placeholder="enter name...",
                id="name-input",
            )
            yield Static("", id="error-message")

    def on_mount(self) -> None:
        self.query_one("#name-input", Input).focus()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        event.stop()
        name = event.value.strip()
        if not name:
            self.query_one("#error-message", Static).update("Please enter a name")
            return
        self.dismiss(name)

    def action_cancel(self) -> None:
        self.dismiss(None)
