"""Error types raised while launching sessions.

Only ``InvalidInput``, ``NoTerminal``, ``CreateFailed`` and ``SpawnFailed``
ever reach callers of the orchestrator. ``DuplicateSession`` and
``SplitFailed`` signal tmux races and are absorbed internally.
"""

from __future__ import annotations


class LauncherError(Exception):
    """Base class for launcher failures. The message is shown to the user."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InvalidInput(LauncherError):
    """A project path or session ID is not safe to put on a command line."""


class NoTerminal(LauncherError):
    """No supported terminal emulator is installed."""

    def __init__(self, message: str = "No supported terminal found") -> None:
        super().__init__(message)


class SpawnFailed(LauncherError):
    """The terminal emulator process could not be started."""


class TmuxError(LauncherError):
    """A tmux command exited with an error."""

    def __init__(self, message: str, stderr: str = "") -> None:
        super().__init__(message)
        self.stderr = stderr


class CreateFailed(TmuxError):
    """tmux refused to create a session for a reason other than a name clash."""


class DuplicateSession(TmuxError):
    """A session with the requested name already exists."""


class SplitFailed(TmuxError):
    """tmux could not split a pane in an existing session."""
