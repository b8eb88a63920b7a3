import pytest

from practicum.advisor_storage import (
    FileStorage,
    NoSavedPagesError,
    Page,
    PageStorageError,
    SQLiteStorage,
)


def test_hash_of_empty_page_is_sha1_of_nothing():
    assert Page().hash() == "da39a3ee5e6b4b0d3255bfef95601890afd80709"


def test_hash_is_stable_and_depends_on_user():
    page = Page("https://example.com/a", "alice")
    assert page.hash() == Page("https://example.com/a", "alice").hash()
    assert page.hash() != Page("https://example.com/a", "bob").hash()
    assert len(page.hash()) == 40


def test_hash_concatenates_url_and_user():
    assert Page("ab", "c").hash() == Page("a", "bc").hash()


def test_file_storage_round_trip(tmp_path):
    storage = FileStorage(tmp_path)
    page = Page("https://example.com/a", "alice")
    assert storage.is_exists(page) is False
    storage.save(page)
    assert (tmp_path / "alice" / page.hash()).exists()
    assert storage.is_exists(page) is True
    assert storage.pick_random("alice") == page
    storage.remove(page)
    assert storage.is_exists(page) is False


def test_file_storage_empty_directory_has_no_pages(tmp_path):
    storage = FileStorage(tmp_path)
    page = Page("https://example.com/a", "alice")
    storage.save(page)
    storage.remove(page)
    with pytest.raises(NoSavedPagesError):
        storage.pick_random("alice")


def test_file_storage_unknown_user_is_an_error(tmp_path):
    with pytest.raises(PageStorageError) as info:
        FileStorage(tmp_path).pick_random("nobody")
    assert not isinstance(info.value, NoSavedPagesError)


def test_file_storage_pick_is_one_of_saved(tmp_path):
    storage = FileStorage(tmp_path)
    pages = {Page(f"https://example.com/{n}", "alice") for n in range(5)}
    for page in pages:
        storage.save(page)
    for _ in range(10):
        assert storage.pick_random("alice") in pages


def test_file_storage_remove_missing_fails(tmp_path):
    with pytest.raises(PageStorageError):
        FileStorage(tmp_path).remove(Page("https://example.com/x", "alice"))


def test_sqlite_round_trip(tmp_path):
    with SQLiteStorage(tmp_path / "pages.db") as storage:
        storage.init()
        page = Page("https://example.com/a", "alice")
        assert storage.is_exists(page) is False
        storage.save(page)
        assert storage.is_exists(page) is True
        assert storage.pick_random("alice") == page
        storage.remove(page)
        assert storage.is_exists(page) is False
        with pytest.raises(NoSavedPagesError):
            storage.pick_random("alice")


def test_sqlite_pages_are_per_user(tmp_path):
    with SQLiteStorage(tmp_path / "pages.db") as storage:
        storage.init()
        storage.save(Page("https://example.com/a", "alice"))
        with pytest.raises(NoSavedPagesError):
            storage.pick_random("bob")


def test_sqlite_without_table_fails(tmp_path):
    with SQLiteStorage(tmp_path / "pages.db") as storage:
        with pytest.raises(PageStorageError):
            storage.save(Page("https://example.com/a", "alice"))


def test_sqlite_closed_fails(tmp_path):
    storage = SQLiteStorage(tmp_path / "pages.db")
    storage.init()
    storage.close()
    with pytest.raises(PageStorageError):
        storage.is_exists(Page("https://example.com/a", "alice"))