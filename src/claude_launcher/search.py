"""Fuzzy search over sessions.

A query is split on whitespace. Every term has to match the session's
haystack, either as a plain substring or as an in-order subsequence inside a
single word (so ``tst`` finds ``tests`` but not ``the sort``). Matching is
case-insensitive. Results are always ordered bookmarks first, then by last
activity, newest first.
"""

from __future__ import annotations

import re
from collections.abc import Sequence

from .store.models import Bookmark, Session

# Limits keep the haystack small enough to search on every keystroke
HAYSTACK_MESSAGES = 20
HAYSTACK_CHARS = 2000

_WORD_CHARS = r"[\w']"


def _term_pattern(term: str) -> re.Pattern[str]:
    gap = f"{_WORD_CHARS}*?"
    return re.compile(gap.join(re.escape(c) for c in term), re.IGNORECASE)


def fuzzy_filter(corpus: Sequence[str], query: str) -> list[int]:
    """Get the indices of corpus entries that match every query term."""
    terms = query.split()
    if not terms:
        return list(range(len(corpus)))

    lowered_terms = [t.lower() for t in terms]
    patterns = [_term_pattern(t) for t in terms]

    matches = []
    for i, text in enumerate(corpus):
        lowered = text.lower()
        if all(
            term in lowered or pattern.search(text)
            for term, pattern in zip(lowered_terms, patterns)
        ):
            matches.append(i)
    return matches


def build_haystack(
    sessions: Sequence[Session],
    bookmarks: Sequence[Bookmark] = (),
) -> list[str]:
    """Build one searchable string per session."""
    names = {b.session_id: b.name for b in bookmarks}
    haystack = []
    for session in sessions:
        recent = " ".join(m.display for m in session.messages[-HAYSTACK_MESSAGES:])
        haystack.append(
            f"{names.get(session.id, '')} {recent[:HAYSTACK_CHARS]} {session.project_name}"
        )
    return haystack


def rank_sessions(
    sessions: Sequence[Session],
    bookmarks: Sequence[Bookmark] = (),
) -> list[Session]:
    """Order sessions with bookmarks first, then most recent first."""
    bookmarked = {b.session_id for b in bookmarks}
    by_recency = sorted(sessions, key=lambda s: s.last_active, reverse=True)
    return sorted(by_recency, key=lambda s: s.id not in bookmarked)


def search_sessions(
    sessions: Sequence[Session],
    query: str,
    bookmarks: Sequence[Bookmark] = (),
) -> list[Session]:
    """Filter sessions by a fuzzy query and rank the matches."""
    if not query.strip():
        return rank_sessions(sessions, bookmarks)

    haystack = build_haystack(sessions, bookmarks)
    matched = [sessions[i] for i in fuzzy_filter(haystack, query)]
    return rank_sessions(matched, bookmarks)
