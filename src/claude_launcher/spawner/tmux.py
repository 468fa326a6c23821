"""tmux session management.

Every operation is a blocking call to the tmux binary. tmux has no structured
error reporting, so the only way to tell a name clash from a real failure is
the text it prints; that check lives in ``is_duplicate_session_error``.
"""

from __future__ import annotations

import hashlib
import re
import shutil
import subprocess
from datetime import datetime
from pathlib import PurePosixPath
from typing import Callable

from ..errors import CreateFailed, DuplicateSession, SplitFailed
from ..logging import get_logger
from ..store.models import TmuxSession

log = get_logger("tmux")

LIST_FORMAT = "#{session_name}|#{session_windows}|#{session_attached}|#{session_created}"

# What tmux prints when new-session hits an existing name
DUPLICATE_SESSION_MARKER = "duplicate session"

_UNSAFE_NAME_CHARS = re.compile(r"[^A-Za-z0-9_-]")

Runner = Callable[..., subprocess.CompletedProcess]


def derive_session_name(project_path: str) -> str:
    """Map a project path to a stable tmux session name.

    The basename keeps it recognizable, the hash of the full path keeps
    ``/a/project`` and ``/b/project`` apart.

    Example: /home/u/my.app -> my-app-1b2c3d
    """
    basename = PurePosixPath(project_path).name
    sanitized = _UNSAFE_NAME_CHARS.sub("-", basename)
    digest = hashlib.md5(project_path.encode("utf-8")).hexdigest()[:6]
    return f"{sanitized}-{digest}"


def is_duplicate_session_error(text: str) -> bool:
    """Check whether tmux error output means the session name is taken."""
    return DUPLICATE_SESSION_MARKER in text


def parse_session_list(output: str) -> list[TmuxSession]:
    """Parse ``list-sessions`` output in LIST_FORMAT.

    Lines without exactly four fields are dropped. A bad creation time
    falls back to now, a bad window count to 0.
    """
    sessions = []
    for line in output.strip().split("\n"):
        if not line:
            continue
        parts = line.split("|")
        if len(parts) != 4:
            log.debug(f"Skipping malformed session line: {line!r}")
            continue

        name, windows, attached, created = parts
        try:
            window_count = int(windows)
        except ValueError:
            window_count = 0
        try:
            created_at = datetime.fromtimestamp(int(created))
        except (ValueError, OverflowError, OSError):
            created_at = datetime.now()

        sessions.append(
            TmuxSession(
                name=name,
                windows=window_count,
                attached=attached == "1",
                created=created_at,
            )
        )
    return sessions


class TmuxManager:
    """Thin wrapper around the tmux command line."""

    def __init__(self, binary: str = "tmux", runner: Runner = subprocess.run) -> None:
        self.binary = binary
        self._run = runner

    def _tmux(self, *args: str) -> subprocess.CompletedProcess:
        return self._run(
            [self.binary, *args],
            stdin=subprocess.DEVNULL,
            capture_output=True,
            text=True,
        )

    def exists(self) -> bool:
        """Check if tmux is installed."""
        return shutil.which(self.binary) is not None

    def list_sessions(self) -> list[TmuxSession]:
        """List all tmux sessions. Returns an empty list if no server runs."""
        try:
            result = self._tmux("list-sessions", "-F", LIST_FORMAT)
        except OSError as e:
            log.debug(f"tmux list-sessions failed to run: {e}")
            return []

        if result.returncode != 0 or not result.stdout:
            return []
        return parse_session_list(result.stdout)

    def has_session(self, name: str) -> bool:
        """Check if a specific session exists."""
        try:
            return self._tmux("has-session", "-t", name).returncode == 0
        except OSError:
            return False

    def create_session(self, name: str, cwd: str, command: str) -> None:
        """Create a detached session running ``command`` in ``cwd``.

        Raises:
            DuplicateSession: If a session with this name already exists
            CreateFailed: For any other failure
        """
        try:
            result = self._tmux("new-session", "-d", "-s", name, "-c", cwd, "sh", "-c", command)
        except OSError as e:
            raise CreateFailed(f"tmux new-session failed: {e}") from e

        if result.returncode == 0:
            log.info(f"Created tmux session {name}")
            return

        stderr = result.stderr or ""
        if is_duplicate_session_error(stderr):
            raise DuplicateSession(f"tmux session {name} already exists", stderr=stderr)
        raise CreateFailed(f"tmux new-session failed: {stderr.strip()}", stderr=stderr)

    def split_pane(self, name: str, cwd: str, command: str) -> None:
        """Add a pane running ``command`` to an existing session, then re-tile.

        Raises:
            SplitFailed: If the pane could not be created
        """
        try:
            result = self._tmux("split-window", "-t", name, "-c", cwd, "sh", "-c", command)
        except OSError as e:
            raise SplitFailed(f"tmux split-window failed: {e}") from e

        if result.returncode != 0:
            stderr = result.stderr or ""
            raise SplitFailed(f"tmux split-window failed: {stderr.strip()}", stderr=stderr)

        log.info(f"Split pane in tmux session {name}")

        # Even layout is nice to have, not required
        try:
            layout = self._tmux("select-layout", "-t", name, "tiled")
            if layout.returncode != 0:
                log.debug(f"select-layout failed for {name}: {layout.stderr}")
        except OSError as e:
            log.debug(f"select-layout failed for {name}: {e}")

    def is_attached(self, name: str) -> bool:
        """Check if any client is viewing the session. False if it is gone."""
        for session in self.list_sessions():
            if session.name == name:
                return session.attached
        return False
