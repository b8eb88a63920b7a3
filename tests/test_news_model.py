from datetime import datetime, timezone

import pytest

from practicum.news_model import (
    IncorrectIDError,
    MemoryNewsStore,
    NotFoundError,
    Options,
    Post,
)


def make(title, day):
    return Post(title=title, content="c", link="https://example.com",
                pub_time=datetime(2024, 1, day, tzinfo=timezone.utc))


@pytest.fixture
def store():
    s = MemoryNewsStore()
    s.add_post([make("Effective Go", 1), make("The Go Memory Model", 2), make("Rust news", 3)])
    return s


def test_duplicates_skipped(store):
    assert store.add_post([make("Effective Go", 5), make("New", 5)]) == 1
    assert store.count_posts() == 4


def test_sorted_newest_first(store):
    titles = [p.title for p in store.get_posts()]
    assert titles == ["Rust news", "The Go Memory Model", "Effective Go"]


def test_pagination(store):
    posts = store.get_posts(Options(count=1, offset=1))
    assert [p.title for p in posts] == ["The Go Memory Model"]


def test_search(store):
    opt = Options(search_query="go")
    assert store.count_posts(opt) == 2
    assert {p.title for p in store.get_posts(opt)} == {"Effective Go", "The Go Memory Model"}


def test_empty_raises(store):
    with pytest.raises(NotFoundError):
        store.get_posts(Options(search_query="python"))


def test_post_by_id(store):
    post = store.get_posts()[0]
    assert store.post_by_id(post.id) == post
    with pytest.raises(IncorrectIDError):
        store.post_by_id("")
    with pytest.raises(IncorrectIDError):
        store.post_by_id("xyz")
    with pytest.raises(NotFoundError):
        store.post_by_id("0" * 24)


def test_to_dict_keys():
    data = make("t", 1).to_dict()
    assert set(data) == {"id", "title", "content", "pubTime", "link"}
    assert data["pubTime"].startswith("2024-01-01T00:00:00")