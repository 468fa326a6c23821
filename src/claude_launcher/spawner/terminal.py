"""Terminal detection and launching.

Supports Ghostty, WezTerm, kitty and Alacritty, in that order of preference.
"""

from __future__ import annotations

import os
import subprocess
from collections.abc import Sequence
from typing import Callable

from ..errors import SpawnFailed
from ..logging import get_logger
from ..store.models import TerminalConfig
from .validation import quote_args, shell_escape

log = get_logger("spawner")

TERMINALS: tuple[TerminalConfig, ...] = (
    TerminalConfig("ghostty", ("-e",)),
    TerminalConfig("wezterm", ("start", "--")),
    TerminalConfig("kitty", ("-e",)),
    TerminalConfig("alacritty", ("-e",)),
)

# Sentinel for "not detected yet"; None is a valid cached result
_UNSET = object()


def find_executable(name: str, search_path: str | None = None) -> bool:
    """Check whether an executable exists in any PATH directory.

    Only existence is checked, not the exec bit.
    """
    if search_path is None:
        search_path = os.environ.get("PATH", "")
    for directory in search_path.split(os.pathsep):
        if directory and os.path.exists(os.path.join(directory, name)):
            return True
    return False


class TerminalDetector:
    """Finds the preferred installed terminal and remembers the answer."""

    def __init__(
        self,
        candidates: Sequence[TerminalConfig] = TERMINALS,
        search_path: str | None = None,
    ) -> None:
        self.candidates = tuple(candidates)
        self.search_path = search_path
        self._cached: object = _UNSET

    def detect(self) -> TerminalConfig | None:
        """Get the first available terminal, or None if none is installed."""
        if self._cached is not _UNSET:
            return self._cached  # type: ignore[return-value]

        found = None
        for terminal in self.candidates:
            if find_executable(terminal.name, self.search_path):
                found = terminal
                break

        log.debug(f"Detected terminal: {found.name if found else None}")
        self._cached = found
        return found

    def reset(self) -> None:
        """Forget the cached result so the next detect() scans again."""
        self._cached = _UNSET

    @property
    def is_cached(self) -> bool:
        return self._cached is not _UNSET


def build_terminal_argv(terminal: TerminalConfig, command_args: Sequence[str]) -> list[str]:
    """Build the argv that makes a terminal run ``command_args`` via sh."""
    if not terminal.launch_flag:
        raise SpawnFailed(f"Terminal {terminal.name} not properly configured")
    return [terminal.name, *terminal.launch_flag, "sh", "-c", quote_args(command_args)]


def direct_command(project_path: str, command: str) -> str:
    """Wrap a command so it runs from inside the project directory."""
    return f"cd '{shell_escape(project_path)}' && {command}"


def popen_detached(argv: list[str]) -> None:
    """Start a process in its own session and do not wait for it."""
    subprocess.Popen(
        argv,
        stdin=subprocess.DEVNULL,
        stdout=subprocess.DEVNULL,
        stderr=subprocess.DEVNULL,
        start_new_session=True,
    )


class TerminalSpawner:
    """Opens terminal windows running a given command."""

    def __init__(self, popen: Callable[[list[str]], None] = popen_detached) -> None:
        self._popen = popen

    def spawn(self, terminal: TerminalConfig, command_args: Sequence[str]) -> None:
        """Open ``terminal`` running ``command_args``.

        Raises:
            SpawnFailed: If the terminal process could not be started
        """
        argv = build_terminal_argv(terminal, command_args)
        log.info(f"Spawning {terminal.name}: {argv}")
        try:
            self._popen(argv)
        except OSError as e:
            raise SpawnFailed(f"Failed to start {terminal.name}: {e}") from e

    def spawn_attach(self, terminal: TerminalConfig, session_name: str) -> None:
        """Open a terminal attached to a tmux session."""
        self.spawn(terminal, ["tmux", "attach", "-t", session_name])

    def spawn_direct(self, terminal: TerminalConfig, project_path: str, command: str) -> None:
        """Open a terminal running ``command`` in the project, without tmux."""
        self.spawn(terminal, ["sh", "-c", direct_command(project_path, command)])
