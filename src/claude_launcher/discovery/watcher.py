"""File watcher for the Claude Code history file.

Watches ~/.claude/ and calls back whenever history.jsonl is written.
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Callable

from watchfiles import Change, awatch

from ..logging import get_logger
from .history import HISTORY_PATH

log = get_logger("watcher")


class HistoryWatcher:
    """Watches the history file for new prompts.

    Uses watchfiles (based on Rust's notify) for efficient file system monitoring.
    The parent directory is watched because Claude may replace the file.
    """

    def __init__(
        self,
        on_change: Callable[[], None],
        history_path: Path | None = None,
        debounce_ms: int = 500,
    ) -> None:
        """Initialize the history watcher.

        Args:
            on_change: Callback when the history file is created or modified
            history_path: File to watch. Defaults to ~/.claude/history.jsonl
            debounce_ms: Quiet period before a batch of changes is reported
        """
        self.history_path = history_path or HISTORY_PATH
        self.on_change = on_change
        self.debounce_ms = debounce_ms
        self._running = False
        self._watch_task: asyncio.Task | None = None

    async def start(self) -> None:
        """Start watching for history changes."""
        if self._running:
            return

        watch_dir = self.history_path.parent
        if not watch_dir.exists():
            log.warning(f"Claude directory does not exist: {watch_dir}")
            return

        self._running = True
        self._watch_task = asyncio.create_task(self._watch_loop())
        log.info(f"Started watching {self.history_path}")

    async def stop(self) -> None:
        """Stop watching for changes."""
        self._running = False
        if self._watch_task:
            self._watch_task.cancel()
            try:
                await self._watch_task
            except asyncio.CancelledError:
                pass
            self._watch_task = None
        log.info("Stopped watching")

    def is_relevant(self, changes: set[tuple[Change, str]]) -> bool:
        """Check whether a batch of changes touched the history file."""
        return any(
            change != Change.deleted and Path(path).name == self.history_path.name
            for change, path in changes
        )

    async def _watch_loop(self) -> None:
        """Main watch loop."""
        try:
            async for changes in awatch(
                self.history_path.parent,
                recursive=False,
                debounce=self.debounce_ms,
            ):
                if not self._running:
                    break
                if self.is_relevant(changes):
                    log.debug("History file changed")
                    self.on_change()
        except asyncio.CancelledError:
            pass
        except Exception as e:
            log.error(f"Watch loop error: {e}")
            raise

    @property
    def is_running(self) -> bool:
        """Check if the watcher is running."""
        return self._running
