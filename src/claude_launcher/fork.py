"""Build the context summary used to fork a session into a fresh one."""

from __future__ import annotations

import re

from .store.models import Session

FIRST_MESSAGE_CHARS = 100
RECENT_MESSAGE_CHARS = 150
RECENT_MESSAGES = 3


def truncate(text: str, max_len: int) -> str:
    """Collapse whitespace and cut ``text`` to ``max_len`` chars with ``...``."""
    cleaned = re.sub(r"\s+", " ", text).strip()
    if len(cleaned) <= max_len:
        return cleaned
    return cleaned[: max_len - 3] + "..."


def extract_context(session: Session) -> str:
    """Summarize a session as an opening prompt for a new one."""
    messages = session.messages

    parts = [
        f"Continuing work on {session.project_name}.",
        "",
        "Previous context:",
        f'- Initial task: "{truncate(session.first_message, FIRST_MESSAGE_CHARS)}"',
    ]

    if len(messages) > 1:
        parts.append(f"- Total messages in session: {len(messages)}")
        parts.append("")
        parts.append("Recent conversation:")
        for message in messages[-RECENT_MESSAGES:]:
            parts.append(f'- "{truncate(message.display, RECENT_MESSAGE_CHARS)}"')

    parts.append("")
    parts.append("Continue from where we left off.")
    return "\n".join(parts)
