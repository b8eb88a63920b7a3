"""Fetch and decode RSS feeds into news posts."""

from __future__ import annotations

import re
import xml.etree.ElementTree as ET
from datetime import datetime, timezone
from typing import Any

import requests

from practicum.news_model import Post

_TAG = re.compile(r"<[^>]*>")
_BLANK_LINES = re.compile(r"\n{2,}\s+")
_LAYOUT = "%a, %d %b %Y %H:%M:%S"


class RssError(Exception):
    """The feed cannot be fetched or decoded."""


def strip_tags(text: str) -> str:
    """Remove HTML tags from text."""
    return _TAG.sub("", text)


def parse_pub_time(value: str, now: datetime | None = None) -> datetime:
    """Parse an RFC 1123 date (numeric or named zone); fall back to ``now``."""
    fallback = now if now is not None else datetime.now().astimezone()
    if not value:
        return fallback
    try:
        if value[-1].isdigit():
            return datetime.strptime(value, _LAYOUT + " %z")
        stamp, _, _zone = value.rpartition(" ")
        return datetime.strptime(stamp, _LAYOUT).replace(tzinfo=timezone.utc)
    except ValueError:
        return fallback


def _text(item: ET.Element, tag: str) -> str:
    child = item.find(tag)
    return "".join(child.itertext()) if child is not None else ""


def parse_feed(data: bytes) -> list[Post]:
    """Decode an RSS document into posts."""
    try:
        root = ET.fromstring(data)
    except ET.ParseError as exc:
        raise RssError(f"GoNews.rss.Parse: {exc}") from exc
    if root.tag != "rss":
        raise RssError(f"GoNews.rss.Parse: expected element type <rss> but have <{root.tag}>")
    posts = []
    for item in root.findall("channel/item"):
        content = _BLANK_LINES.sub("\n", strip_tags(_text(item, "description")))
        pub_date = _text(item, "pubDate").replace(",", "")
        posts.append(Post(
            title=_text(item, "title"),
            link=_text(item, "link"),
            content=content,
            pub_time=parse_pub_time(pub_date),
        ))
    return posts


def fetch(url: str, session: Any = None) -> list[Post]:
    """Download a feed and decode it."""
    client = session if session is not None else requests
    try:
        resp = client.get(url)
        body = resp.content
    except requests.RequestException as exc:
        raise RssError(f"GoNews.rss.Parse: {exc}") from exc
    if body is None:
        raise RssError("GoNews.rss.Parse: response body is nil")
    return parse_feed(body)