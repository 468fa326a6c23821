"""Spawner module for relaunching Claude Code sessions.

Detects a terminal emulator, manages tmux sessions, and orchestrates launches.
"""

from .orchestrator import CLAUDE_FLAGS, LaunchOrchestrator
from .tempfiles import TempFileRegistry
from .terminal import TERMINALS, TerminalDetector, TerminalSpawner
from .tmux import TmuxManager, derive_session_name, is_duplicate_session_error
from .validation import is_safe_project_path, is_safe_session_id

__all__ = [
    "CLAUDE_FLAGS",
    "LaunchOrchestrator",
    "TERMINALS",
    "TempFileRegistry",
    "TerminalDetector",
    "TerminalSpawner",
    "TmuxManager",
    "derive_session_name",
    "is_duplicate_session_error",
    "is_safe_project_path",
    "is_safe_session_id",
]
