"""News posts, query options and an in-memory news store."""

from __future__ import annotations

import re
import threading
import uuid
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from typing import Any, Iterable, Protocol

ZERO_TIME = datetime(1, 1, 1, tzinfo=timezone.utc)
_HEX = set("0123456789abcdefABCDEF")
_WORD = re.compile(r"\w+")


class NewsStorageError(Exception):
    """Base class for news storage errors."""

    default_message = "news storage error"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)


class NotFoundError(NewsStorageError):
    default_message = "post not found"


class IncorrectIDError(NewsStorageError):
    default_message = "incorrect id"


def _format_time(value: datetime) -> str:
    if value.tzinfo is None:
        value = value.astimezone()
    text = value.strftime("%Y-%m-%dT%H:%M:%S")
    if value.microsecond:
        text += "." + f"{value.microsecond:06d}".rstrip("0")
    offset = value.strftime("%z")
    if offset in ("+0000", "-0000", ""):
        return text + "Z"
    return f"{text}{offset[:3]}:{offset[3:]}"


@dataclass
class Post:
    """A news post taken from an RSS feed."""

    id: str = ""
    title: str = ""
    content: str = ""
    pub_time: datetime = ZERO_TIME
    link: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "content": self.content,
            "pubTime": _format_time(self.pub_time),
            "link": self.link,
        }


@dataclass
class Options:
    """Text search and pagination options."""

    search_query: str = ""
    count: int = 0
    offset: int = 0


class NewsStore(Protocol):
    def add_post(self, posts: list[Post]) -> int: ...
    def get_posts(self, options: Options | None = None) -> list[Post]: ...
    def post_by_id(self, post_id: str) -> Post: ...
    def count_posts(self, options: Options | None = None) -> int: ...
    def close(self) -> None: ...


def _words(text: str) -> set[str]:
    return set(_WORD.findall(text.lower()))


def _score(title: str, query: str) -> int:
    return len(_words(title) & _words(query))


class MemoryNewsStore:
    """Thread-safe in-memory news store with unique titles."""

    def __init__(self, posts: Iterable[Post] = ()) -> None:
        self._lock = threading.Lock()
        self._posts: list[Post] = []
        self.add_post(list(posts))

    def add_post(self, posts: list[Post]) -> int:
        """Store posts, skipping titles already present; return how many were stored."""
        added = 0
        with self._lock:
            titles = {p.title for p in self._posts}
            for post in posts:
                if post.title in titles:
                    continue
                titles.add(post.title)
                self._posts.append(replace(post, id=uuid.uuid4().hex[:24]))
                added += 1
        return added

    def _matching(self, options: Options | None) -> list[Post]:
        query = options.search_query if options else ""
        with self._lock:
            posts = list(self._posts)
        if not query:
            return sorted(posts, key=lambda p: p.pub_time, reverse=True)
        scored = [(p, _score(p.title, query)) for p in posts]
        return [p for p, s in sorted(scored, key=lambda ps: ps[1], reverse=True) if s > 0]

    def get_posts(self, options: Options | None = None) -> list[Post]:
        posts = self._matching(options)
        if options is not None:
            if options.offset > 0:
                posts = posts[options.offset:]
            if options.count > 0:
                posts = posts[: options.count]
        if not posts:
            raise NotFoundError()
        return posts

    def post_by_id(self, post_id: str) -> Post:
        if not post_id or len(post_id) != 24 or not set(post_id) <= _HEX:
            raise IncorrectIDError()
        with self._lock:
            found = next((p for p in self._posts if p.id == post_id.lower()), None)
        if found is None:
            raise NotFoundError()
        return found

    def count_posts(self, options: Options | None = None) -> int:
        return len(self._matching(options))

    def close(self) -> None:
        return None