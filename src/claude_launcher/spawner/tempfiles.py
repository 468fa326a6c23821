"""Scoped temporary files for passing fork context to a new Claude process.

Each file lives in its own private directory. It is deleted after a grace
delay (long enough for the spawned process to read it), and anything still
registered is swept at interpreter exit or on SIGINT/SIGTERM. A hard crash
between creation and either cleanup path can still leak the file.
"""

from __future__ import annotations

import atexit
import signal
import sys
import tempfile
import threading
from pathlib import Path

from ..logging import get_logger

log = get_logger("tempfiles")

# Seconds a context file is kept after launch
CONTEXT_GRACE_SECONDS = 10.0

TEMP_PREFIX = "claude-launcher-"


class TempFileRegistry:
    """Owns every context file created by this process until it is deleted."""

    def __init__(self, grace_seconds: float = CONTEXT_GRACE_SECONDS) -> None:
        self.grace_seconds = grace_seconds
        self._files: dict[Path, threading.Timer | None] = {}
        self._lock = threading.RLock()
        self._hooks_installed = False

    def create(self, content: str, filename: str = "context.txt") -> Path:
        """Write ``content`` to a new private file and schedule its removal."""
        directory = Path(tempfile.mkdtemp(prefix=TEMP_PREFIX))
        path = directory / filename
        path.write_text(content, encoding="utf-8")

        timer = None
        if self.grace_seconds >= 0:
            # Non-daemon so the interpreter waits for it before exit hooks run
            timer = threading.Timer(self.grace_seconds, self.cleanup, args=(path,))

        with self._lock:
            self._files[path] = timer
        if timer is not None:
            timer.start()

        log.debug(f"Created context file {path}")
        return path

    def cleanup(self, path: Path) -> None:
        """Delete one file and its directory and stop tracking it."""
        with self._lock:
            timer = self._files.pop(path, None)
        if timer is not None and timer is not threading.current_thread():
            timer.cancel()
        _remove(path)

    def sweep(self) -> None:
        """Delete every file still registered."""
        with self._lock:
            pending = list(self._files.items())
            self._files.clear()
        for path, timer in pending:
            if timer is not None:
                timer.cancel()
            _remove(path)
        if pending:
            log.debug(f"Swept {len(pending)} context file(s)")

    @property
    def pending(self) -> list[Path]:
        """Files that have not been cleaned up yet."""
        with self._lock:
            return list(self._files)

    def install_exit_hooks(self) -> None:
        """Sweep on normal exit and on SIGINT/SIGTERM."""
        if self._hooks_installed:
            return
        atexit.register(self.sweep)
        if threading.current_thread() is threading.main_thread():
            for signum in (signal.SIGINT, signal.SIGTERM):
                signal.signal(signum, self._handle_signal)
        self._hooks_installed = True

    def _handle_signal(self, signum: int, frame: object) -> None:
        self.sweep()
        sys.exit(0)


def _remove(path: Path) -> None:
    try:
        path.unlink(missing_ok=True)
        path.parent.rmdir()
    except OSError as e:
        log.debug(f"Failed to remove {path}: {e}")
