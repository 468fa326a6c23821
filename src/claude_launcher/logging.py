"""Logging configuration for Claude Launcher.

The launcher runs as a full-screen TUI, so the console only gets warnings.
Everything else goes to a log file that is truncated at the start of each run.
"""

import logging
import sys
from datetime import datetime
from pathlib import Path

LOG_DIR = Path.home() / ".cache" / "claude-launcher"
LOG_FILE = LOG_DIR / "launcher.log"

logger = logging.getLogger("claude-launcher")


def setup_logging(
    verbose: bool = False,
    log_to_file: bool = True,
    log_file: Path | None = None,
) -> None:
    """Configure logging for the application.

    Calling this more than once replaces the handlers installed by the
    previous call instead of stacking them.

    Args:
        verbose: If True, log DEBUG level to console
        log_to_file: If True, also log to file
        log_file: Override for the log file location
    """
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    logger.setLevel(logging.DEBUG)
    logger.propagate = False

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(logging.DEBUG if verbose else logging.WARNING)
    console_handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
    logger.addHandler(console_handler)

    if log_to_file:
        path = log_file or LOG_FILE
        path.parent.mkdir(parents=True, exist_ok=True)
        # One run per file; older runs are not interesting
        file_handler = logging.FileHandler(path, mode="w", encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
        )
        logger.addHandler(file_handler)

    logger.debug(f"=== Session started {datetime.now().isoformat()} ===")


def get_logger(name: str | None = None) -> logging.Logger:
    """Get a logger under the ``claude-launcher`` namespace."""
    if name:
        return logging.getLogger(f"claude-launcher.{name}")
    return logger
