"""Tests for fork context extraction."""

from datetime import datetime

from claude_launcher.fork import extract_context, truncate
from claude_launcher.store.models import HistoryEntry, Session


def make_session(messages):
    entries = [HistoryEntry(m, "/home/u/api", "s", i) for i, m in enumerate(messages)]
    return Session(
        id="s",
        project="/home/u/api",
        project_name="api",
        last_message=messages[-1],
        message_count=len(messages),
        last_active=datetime(2024, 1, 1),
        messages=entries,
    )


class TestTruncate:
    """Tests for truncate."""

    def test_collapses_whitespace(self):
        assert truncate("  fix\n\nthe   tests ", 100) == "fix the tests"

    def test_cuts_with_ellipsis(self):
        assert truncate("abcdefghij", 8) == "abcde..."

    def test_exact_length_untouched(self):
        assert truncate("abcdefgh", 8) == "abcdefgh"


class TestExtractContext:
    """Tests for extract_context."""

    def test_single_message(self):
        context = extract_context(make_session(["set up the server"]))

        assert context == (
            "Continuing work on api.\n"
            "\n"
            "Previous context:\n"
            '- Initial task: "set up the server"\n'
            "\n"
            "Continue from where we left off."
        )

    def test_recent_messages(self):
        context = extract_context(make_session(["one", "two", "three", "four", "five"]))

        assert "- Total messages in session: 5" in context
        assert 'Recent conversation:\n- "three"\n- "four"\n- "five"' in context
        assert '- "two"' not in context

    def test_long_messages_truncated(self):
        context = extract_context(make_session(["a" * 300, "b" * 300]))

        assert f'- Initial task: "{"a" * 97}..."' in context
        assert f'- "{"b" * 147}..."' in context
