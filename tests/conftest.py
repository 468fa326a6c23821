"""Shared fixtures and fakes for launcher tests."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from claude_launcher.errors import DuplicateSession, SplitFailed
from claude_launcher.spawner import (
    LaunchOrchestrator,
    TempFileRegistry,
    TerminalDetector,
    TerminalSpawner,
)
from claude_launcher.store.models import TmuxSession


class FakeTmux:
    """In-memory stand-in for TmuxManager.

    Sessions live in a dict of name -> attached. Errors queued in
    ``create_errors`` / ``split_errors`` are raised before the fake's own
    logic runs, to simulate races with other launchers.
    """

    def __init__(self, installed: bool = True) -> None:
        self.installed = installed
        self.sessions: dict[str, bool] = {}
        self.calls: list[tuple] = []
        self.create_errors: list[Exception] = []
        self.split_errors: list[Exception] = []

    def exists(self) -> bool:
        self.calls.append(("exists",))
        return self.installed

    def list_sessions(self) -> list[TmuxSession]:
        from datetime import datetime

        self.calls.append(("list",))
        return [
            TmuxSession(name=name, windows=1, attached=attached, created=datetime.now())
            for name, attached in self.sessions.items()
        ]

    def create_session(self, name: str, cwd: str, command: str) -> None:
        self.calls.append(("create", name, cwd, command))
        if self.create_errors:
            raise self.create_errors.pop(0)
        if name in self.sessions:
            raise DuplicateSession(f"duplicate session: {name}", stderr=f"duplicate session: {name}")
        self.sessions[name] = False

    def split_pane(self, name: str, cwd: str, command: str) -> None:
        self.calls.append(("split", name, cwd, command))
        if self.split_errors:
            raise self.split_errors.pop(0)
        if name not in self.sessions:
            raise SplitFailed(f"can't find session: {name}")

    def is_attached(self, name: str) -> bool:
        self.calls.append(("is_attached", name))
        return self.sessions.get(name, False)

    def count(self, kind: str) -> int:
        return sum(1 for call in self.calls if call[0] == kind)


class RecordingSpawner(TerminalSpawner):
    """Spawner that records commands instead of starting processes."""

    def __init__(self) -> None:
        self.argvs: list[list[str]] = []
        self.spawned: list[list[str]] = []
        super().__init__(popen=self.argvs.append)

    def spawn(self, terminal, command_args) -> None:
        self.spawned.append(list(command_args))
        super().spawn(terminal, command_args)


@pytest.fixture
def bin_dir(tmp_path: Path) -> Path:
    """A PATH directory containing a fake ghostty executable."""
    directory = tmp_path / "bin"
    directory.mkdir()
    (directory / "ghostty").touch()
    return directory


@pytest.fixture
def detector(bin_dir: Path) -> TerminalDetector:
    return TerminalDetector(search_path=str(bin_dir))


@pytest.fixture
def fake_tmux() -> FakeTmux:
    return FakeTmux()


@pytest.fixture
def spawner() -> RecordingSpawner:
    return RecordingSpawner()


@pytest.fixture
def temp_files():
    registry = TempFileRegistry(grace_seconds=-1)
    yield registry
    registry.sweep()


@pytest.fixture
def orchestrator(detector, fake_tmux, spawner, temp_files) -> LaunchOrchestrator:
    return LaunchOrchestrator(
        detector=detector,
        tmux=fake_tmux,
        spawner=spawner,
        temp_files=temp_files,
    )


SESSION_A = "0b7e2f4a-1c3d-4e5f-8a9b-0c1d2e3f4a5b"
SESSION_B = "9f8e7d6c-5b4a-4321-8fed-cba987654321"


def history_line(session_id: str, display: str, project: str, timestamp: int) -> str:
    return json.dumps(
        {
            "display": display,
            "project": project,
            "sessionId": session_id,
            "timestamp": timestamp,
            "pastedContents": {},
        }
    )


@pytest.fixture
def history_file(tmp_path: Path) -> Path:
    """A small history.jsonl with two sessions in two projects."""
    path = tmp_path / "history.jsonl"
    lines = [
        history_line(SESSION_A, "set up the api server", "/home/u/api", 1_700_000_000_000),
        history_line(SESSION_B, "write docs for deploy", "/home/u/docs", 1_700_000_100_000),
        history_line(SESSION_A, "fix the failing tests", "/home/u/api", 1_700_000_200_000),
        "not json at all",
        json.dumps({"display": "no session id", "project": "/x", "timestamp": 1}),
        "",
    ]
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return path
