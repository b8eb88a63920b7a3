import sqlite3

import pytest

from practicum.shortener_storage import SQLiteStorage, URLExistsError, URLNotFoundError


@pytest.fixture
def storage(tmp_path):
    with SQLiteStorage(tmp_path / "storage.db") as st:
        yield st


def test_save_and_get_round_trip(storage):
    storage.save_url("https://example.com/a", "abc")
    assert storage.get_url("abc") == "https://example.com/a"


def test_ids_increase(storage):
    first = storage.save_url("https://example.com/a", "a")
    second = storage.save_url("https://example.com/b", "b")
    assert first >= 1
    assert second > first


def test_ids_not_reused_after_delete(storage):
    first = storage.save_url("https://example.com/a", "a")
    storage.delete_url("a")
    second = storage.save_url("https://example.com/a", "a")
    assert second > first


def test_duplicate_alias_raises(storage):
    storage.save_url("https://example.com/a", "dup")
    with pytest.raises(URLExistsError) as info:
        storage.save_url("https://example.com/b", "dup")
    assert str(info.value) == "URL already exists"
    assert storage.get_url("dup") == "https://example.com/a"


def test_same_url_under_two_aliases(storage):
    storage.save_url("https://example.com/a", "one")
    storage.save_url("https://example.com/a", "two")
    assert storage.get_url("one") == storage.get_url("two")


def test_get_missing_raises(storage):
    with pytest.raises(URLNotFoundError) as info:
        storage.get_url("missing")
    assert str(info.value) == "URL not found"


def test_delete_removes(storage):
    storage.save_url("https://example.com/a", "gone")
    storage.delete_url("gone")
    with pytest.raises(URLNotFoundError):
        storage.get_url("gone")


def test_delete_missing_raises(storage):
    with pytest.raises(URLNotFoundError):
        storage.delete_url("missing")


def test_data_persists_across_reopen(tmp_path):
    path = tmp_path / "persist.db"
    with SQLiteStorage(path) as st:
        st.save_url("https://example.com/kept", "kept")
    with SQLiteStorage(path) as st:
        assert st.get_url("kept") == "https://example.com/kept"


def test_unopenable_path_raises(tmp_path):
    with pytest.raises(sqlite3.OperationalError):
        SQLiteStorage(tmp_path / "missing" / "dir" / "db.sqlite")