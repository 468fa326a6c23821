"""Tests for bookmark persistence."""

import json

import pytest

from claude_launcher.bookmarks import BookmarkStore

from conftest import SESSION_A, SESSION_B


@pytest.fixture
def store(tmp_path):
    return BookmarkStore(tmp_path / "launcher" / "bookmarks.json")


class TestBookmarkStore:
    """Tests for BookmarkStore."""

    def test_empty_when_missing(self, store):
        assert store.load() == []
        assert not store.is_bookmarked(SESSION_A)

    def test_add_creates_file(self, store):
        store.add("api work", SESSION_A, "/home/u/api", "api")

        data = json.loads(store.path.read_text())
        assert data[0]["name"] == "api work"
        assert data[0]["sessionId"] == SESSION_A
        assert data[0]["projectName"] == "api"
        assert data[0]["createdAt"]

    def test_newest_bookmark_first(self, store):
        store.add("first", SESSION_A, "/home/u/api", "api")
        store.add("second", SESSION_B, "/home/u/docs", "docs")

        assert [b.name for b in store.load()] == ["second", "first"]

    def test_add_existing_renames(self, store):
        store.add("old name", SESSION_A, "/home/u/api", "api")
        store.add("new name", SESSION_A, "/home/u/api", "api")

        bookmarks = store.load()
        assert len(bookmarks) == 1
        assert bookmarks[0].name == "new name"

    def test_remove(self, store):
        store.add("first", SESSION_A, "/home/u/api", "api")
        store.add("second", SESSION_B, "/home/u/docs", "docs")

        store.remove(SESSION_A)

        assert not store.is_bookmarked(SESSION_A)
        assert store.get(SESSION_B).name == "second"

    def test_corrupt_file_loads_empty(self, store):
        store.path.parent.mkdir(parents=True)
        store.path.write_text("{not json")

        assert store.load() == []

    def test_wrong_shape_loads_empty(self, store):
        store.path.parent.mkdir(parents=True)
        store.path.write_text(json.dumps({"name": "x"}))

        assert store.load() == []
