"""Tests for project path and session ID validation."""

import pytest

from claude_launcher.errors import InvalidInput
from claude_launcher.spawner.validation import (
    is_safe_project_path,
    is_safe_session_id,
    quote_args,
    shell_escape,
    validate_project_path,
    validate_session_id,
)


class TestProjectPath:
    """Tests for is_safe_project_path."""

    @pytest.mark.parametrize(
        "path",
        ["/home/u/demo", "/", "/srv/my project", "/a/b.c/d-e_f", "/tmp/ünïcode"],
    )
    def test_accepts_plain_absolute_paths(self, path):
        assert is_safe_project_path(path)

    @pytest.mark.parametrize(
        "path",
        [
            "/home/u/`whoami`",
            "/home/u/$HOME",
            "/home/u/a;rm -rf",
            "/home/u/a|b",
            "/home/u/a&b",
            "/home/u/a<b",
            "/home/u/a>b",
            "/home/u/(a)",
            "/home/u/it's",
            '/home/u/"quoted"',
            "/home/u/back\\slash",
            "/home/u/new\nline",
            "/home/u/tab\there",
            "/home/u/nul\x00",
            "/home/u/del\x7f",
        ],
    )
    def test_rejects_shell_metacharacters(self, path):
        assert not is_safe_project_path(path)

    @pytest.mark.parametrize("path", ["demo", "./demo", "../demo", "~/demo", ""])
    def test_rejects_relative_paths(self, path):
        assert not is_safe_project_path(path)

    def test_validate_raises_invalid_input(self):
        with pytest.raises(InvalidInput, match="Invalid project path"):
            validate_project_path("relative/path")

    def test_validate_returns_path(self):
        assert validate_project_path("/home/u/demo") == "/home/u/demo"


class TestSessionId:
    """Tests for is_safe_session_id."""

    def test_accepts_lowercase_uuid(self):
        assert is_safe_session_id("0b7e2f4a-1c3d-4e5f-8a9b-0c1d2e3f4a5b")

    @pytest.mark.parametrize(
        "session_id",
        [
            "not-a-uuid",
            "0B7E2F4A-1C3D-4E5F-8A9B-0C1D2E3F4A5B",
            "0b7e2f4a1c3d4e5f8a9b0c1d2e3f4a5b",
            "0b7e2f4a-1c3d-4e5f-8a9b-0c1d2e3f4a5",
            "0b7e2f4a-1c3d-4e5f-8a9b-0c1d2e3f4a5bb",
            "0b7e2f4a-1c3d4-e5f-8a9b-0c1d2e3f4a5b",
            " 0b7e2f4a-1c3d-4e5f-8a9b-0c1d2e3f4a5b",
            "0b7e2f4a-1c3d-4e5f-8a9b-0c1d2e3f4a5b\n",
            "0b7e2f4a-1c3d-4e5f-8a9b-0c1d2e3f4a5b; rm -rf /",
            "g0000000-0000-0000-0000-000000000000",
            "",
        ],
    )
    def test_rejects_everything_else(self, session_id):
        assert not is_safe_session_id(session_id)

    def test_validate_raises_invalid_input(self):
        with pytest.raises(InvalidInput, match="Invalid session ID"):
            validate_session_id("not-a-uuid")


class TestQuoting:
    """Tests for the quoting helpers."""

    def test_shell_escape_single_quotes(self):
        assert shell_escape("it's") == "it'\\''s"

    def test_shell_escape_leaves_other_text(self):
        assert shell_escape("/home/u/demo") == "/home/u/demo"

    def test_quote_args_quotes_each_argument(self):
        assert quote_args(["tmux", "attach", "-t", "demo-abc123"]) == "tmux attach -t demo-abc123"
        assert quote_args(["sh", "-c", "cd '/x' && ls"]) == "sh -c 'cd '\"'\"'/x'\"'\"' && ls'"
