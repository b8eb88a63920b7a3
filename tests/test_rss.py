from datetime import datetime, timedelta, timezone

import pytest

from practicum.rss import RssError, fetch, parse_feed, parse_pub_time, strip_tags

FEED = b"""<?xml version="1.0"?>
<rss><channel><title>T</title>
<item><title>First</title><link>https://example.com/1</link>
<description>&lt;p&gt;Hello&lt;/p&gt;\n\n   world</description>
<pubDate>Mon, 02 Jan 2006 15:04:05 -0700</pubDate></item>
<item><title>Second</title><link>https://example.com/2</link><description>x</description></item>
</channel></rss>"""


def test_strip_tags():
    assert strip_tags("<b>bold</b> text") == "bold text"


def test_parse_numeric_zone():
    t = parse_pub_time("Mon, 02 Jan 2006 15:04:05 -0700")
    assert t == datetime(2006, 1, 2, 22, 4, 5, tzinfo=timezone.utc)


def test_parse_named_zone():
    t = parse_pub_time("Mon, 02 Jan 2006 15:04:05 GMT")
    assert t == datetime(2006, 1, 2, 15, 4, 5, tzinfo=timezone.utc)


def test_fallback():
    now = datetime(2020, 5, 5, tzinfo=timezone.utc)
    assert parse_pub_time("", now) == now
    assert parse_pub_time("garbage 12", now) == now


def test_parse_feed():
    before = datetime.now().astimezone() - timedelta(seconds=1)
    posts = parse_feed(FEED)
    assert [p.title for p in posts] == ["First", "Second"]
    assert posts[0].content == "Hello\nworld"
    assert posts[0].link == "https://example.com/1"
    assert posts[0].pub_time >= before


def test_not_rss():
    with pytest.raises(RssError):
        parse_feed(b"<feed></feed>")
    with pytest.raises(RssError):
        parse_feed(b"<rss")


class FakeResponse:
    content = FEED


class FakeSession:
    def __init__(self):
        self.urls = []

    def get(self, url):
        self.urls.append(url)
        return FakeResponse()


def test_fetch():
    session = FakeSession()
    posts = fetch("https://example.com/rss", session)
    assert session.urls == ["https://example.com/rss"]
    assert len(posts) == 2