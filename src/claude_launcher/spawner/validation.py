"""Validation and quoting for strings that end up on a shell command line.

Project paths and session IDs are never partially sanitized: they are either
accepted as-is or rejected.
"""

from __future__ import annotations

import os
import re
import shlex
from collections.abc import Iterable

from ..errors import InvalidInput

# Control characters plus everything that could break out of single quotes
_UNSAFE_PATH_CHARS = re.compile(r"[\x00-\x1f\x7f`$\\\"';|&<>()]")

# Claude session IDs are lowercase UUIDs
_SESSION_ID = re.compile(
    r"[a-f0-9]{8}-[a-f0-9]{4}-[a-f0-9]{4}-[a-f0-9]{4}-[a-f0-9]{12}"
)


def is_safe_project_path(path: str) -> bool:
    """Check that a project path is absolute and free of shell metacharacters."""
    if _UNSAFE_PATH_CHARS.search(path):
        return False
    return os.path.isabs(path)


def is_safe_session_id(session_id: str) -> bool:
    """Check that a session ID is a canonical lowercase UUID."""
    return _SESSION_ID.fullmatch(session_id) is not None


def validate_project_path(path: str) -> str:
    """Return the path unchanged, or raise InvalidInput."""
    if not is_safe_project_path(path):
        raise InvalidInput(f"Invalid project path: {path!r}")
    return path


def validate_session_id(session_id: str) -> str:
    """Return the session ID unchanged, or raise InvalidInput."""
    if not is_safe_session_id(session_id):
        raise InvalidInput(f"Invalid session ID format: {session_id!r}")
    return session_id


def shell_escape(value: str) -> str:
    """Escape a string for embedding inside single quotes."""
    return value.replace("'", "'\\''")


def quote_args(args: Iterable[str]) -> str:
    """Shell-quote each argument individually and join them with spaces."""
    return shlex.join(args)
