"""Tests for the history file watcher."""

from watchfiles import Change

from claude_launcher.discovery import HistoryWatcher


class TestHistoryWatcher:
    """Tests for HistoryWatcher change filtering."""

    def test_history_write_is_relevant(self, tmp_path):
        path = tmp_path / "history.jsonl"
        watcher = HistoryWatcher(on_change=lambda: None, history_path=path)

        assert watcher.is_relevant({(Change.modified, str(path))})
        assert watcher.is_relevant({(Change.added, str(path))})

    def test_other_files_and_deletes_are_ignored(self, tmp_path):
        path = tmp_path / "history.jsonl"
        watcher = HistoryWatcher(on_change=lambda: None, history_path=path)

        assert not watcher.is_relevant({(Change.modified, str(tmp_path / "settings.json"))})
        assert not watcher.is_relevant({(Change.deleted, str(path))})

    def test_not_running_until_started(self, tmp_path):
        watcher = HistoryWatcher(on_change=lambda: None, history_path=tmp_path / "h.jsonl")
        assert not watcher.is_running
