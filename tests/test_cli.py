"""Tests for the command line interface."""

import pytest
from click.testing import CliRunner

from claude_launcher import cli

from conftest import SESSION_A, SESSION_B, history_line


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture(autouse=True)
def quiet_logging(monkeypatch):
    monkeypatch.setattr("claude_launcher.logging.setup_logging", lambda **kwargs: None)


@pytest.fixture
def patched_orchestrator(monkeypatch, orchestrator):
    monkeypatch.setattr(cli, "_make_orchestrator", lambda: orchestrator)
    return orchestrator


def invoke(runner, history_file, tmp_path, *args):
    return runner.invoke(
        cli.main,
        ["--history", str(history_file), "--bookmarks", str(tmp_path / "b.json"), *args],
    )


class TestListCommand:
    """Tests for `claude-launcher list`."""

    def test_lists_sessions(self, runner, history_file, tmp_path):
        result = invoke(runner, history_file, tmp_path, "list")

        assert result.exit_code == 0
        lines = result.output.strip().splitlines()
        assert len(lines) == 2
        assert SESSION_A in lines[0]
        assert "fix the failing tests" in lines[0]

    def test_query(self, runner, history_file, tmp_path):
        result = invoke(runner, history_file, tmp_path, "list", "-q", "docs")

        assert result.exit_code == 0
        assert len(result.output.strip().splitlines()) == 1
        assert "docs" in result.output

    def test_missing_history(self, runner, tmp_path):
        result = invoke(runner, tmp_path / "missing.jsonl", tmp_path, "list")

        assert result.exit_code == 1
        assert "No Claude history found" in result.output

    def test_out_of_range_timestamp_does_not_hide_other_sessions(self, runner, tmp_path):
        history = tmp_path / "history.jsonl"
        lines = [
            history_line(SESSION_A, "good prompt", "/home/u/api", 1_700_000_000_000),
            history_line(SESSION_B, "far future", "/home/u/docs", 10**20),
        ]
        history.write_text("\n".join(lines) + "\n", encoding="utf-8")

        result = invoke(runner, history, tmp_path, "list")

        assert result.exit_code == 0
        assert SESSION_A in result.output
        assert SESSION_B not in result.output


class TestResumeCommand:
    """Tests for `claude-launcher resume`."""

    def test_resume_in_tmux(self, runner, history_file, tmp_path, patched_orchestrator, spawner):
        result = invoke(runner, history_file, tmp_path, "resume", SESSION_A)

        assert result.exit_code == 0
        assert "Started tmux session api-" in result.output
        assert len(spawner.spawned) == 1

    def test_resume_direct(self, runner, history_file, tmp_path, patched_orchestrator, fake_tmux):
        result = invoke(runner, history_file, tmp_path, "resume", "--direct", SESSION_A)

        assert result.exit_code == 0
        assert "Opened ghostty directly" in result.output
        assert fake_tmux.calls == []

    def test_unknown_session(self, runner, history_file, tmp_path, patched_orchestrator):
        result = invoke(runner, history_file, tmp_path, "resume", "nope")

        assert result.exit_code == 1
        assert "Session not found" in result.output

    def test_invalid_session_id_in_history(
        self, runner, tmp_path, patched_orchestrator, fake_tmux, spawner
    ):
        history = tmp_path / "history.jsonl"
        history.write_text(
            '{"display": "hi", "project": "/home/u/demo", "sessionId": "not-a-uuid", "timestamp": 1}\n'
        )

        result = invoke(runner, history, tmp_path, "resume", "not-a-uuid")

        assert result.exit_code == 1
        assert "Invalid session ID format" in result.output
        assert fake_tmux.calls == []
        assert spawner.argvs == []


class TestForkAndFresh:
    """Tests for `claude-launcher fork` and `fresh`."""

    def test_fork(self, runner, history_file, tmp_path, patched_orchestrator, temp_files):
        result = invoke(runner, history_file, tmp_path, "fork", SESSION_A)

        assert result.exit_code == 0
        [context_file] = temp_files.pending
        assert "Continuing work on api." in context_file.read_text()

    def test_fresh(self, runner, history_file, tmp_path, patched_orchestrator, fake_tmux):
        project = tmp_path / "project"
        project.mkdir()

        result = invoke(runner, history_file, tmp_path, "fresh", str(project))

        assert result.exit_code == 0
        create = next(call for call in fake_tmux.calls if call[0] == "create")
        assert create[2] == str(project)


class TestPicker:
    """Tests for the default command."""

    def test_refuses_without_tty(self, runner, history_file, tmp_path):
        result = invoke(runner, history_file, tmp_path)

        assert result.exit_code == 1
        assert "interactive terminal" in result.output
