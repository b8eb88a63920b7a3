"""Comment model and an in-memory comment store."""

from __future__ import annotations

import itertools
import os
import re
import threading
from collections.abc import Callable
from dataclasses import dataclass, field, replace
from datetime import datetime, timedelta, timezone
from typing import Any

ZERO_TIME = datetime(1, 1, 1, tzinfo=timezone.utc)

_TIME_RE = re.compile(
    r"(\d{4})-(\d{2})-(\d{2})T(\d{2}):(\d{2}):(\d{2})(?:\.(\d{1,9}))?(Z|[+-]\d{2}:\d{2})\Z"
)
_HEX = set("0123456789abcdefABCDEF")


class CommentStorageError(Exception):
    """Base class for comment storage errors."""

    default_message = "comment storage error"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)


class NoCommentsError(CommentStorageError):
    default_message = "No comments on provided post id"


class ParentNotFoundError(CommentStorageError):
    default_message = "Parent comment not found"


class IncorrectParentIDError(CommentStorageError):
    default_message = "Incorrect parent id"


class IncorrectPostIDError(CommentStorageError):
    default_message = "Incorrect post id"


def _format_time(value: datetime) -> str:
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    text = (
        f"{value.year:04d}-{value.month:02d}-{value.day:02d}"
        f"T{value.hour:02d}:{value.minute:02d}:{value.second:02d}"
    )
    if value.microsecond:
        text += "." + f"{value.microsecond:06d}".rstrip("0")
    offset = value.utcoffset() or timedelta()
    if not offset:
        return text + "Z"
    sign = "-" if offset < timedelta() else "+"
    minutes = abs(int(offset.total_seconds())) // 60
    return f"{text}{sign}{minutes // 60:02d}:{minutes % 60:02d}"


def _parse_time(text: str) -> datetime:
    match = _TIME_RE.match(text)
    if match is None:
        raise ValueError(f"invalid time: {text!r}")
    year, month, day, hour, minute, second = (int(g) for g in match.groups()[:6])
    fraction = (match.group(7) or "").ljust(6, "0")[:6]
    zone = match.group(8)
    if zone == "Z":
        tz = timezone.utc
    else:
        sign = -1 if zone[0] == "-" else 1
        tz = timezone(sign * timedelta(hours=int(zone[1:3]), minutes=int(zone[4:6])))
    return datetime(year, month, day, hour, minute, second, int(fraction), tzinfo=tz)


def _lookup(data: dict[str, Any], key: str) -> Any:
    if key in data:
        return data[key]
    lowered = key.lower()
    return next((value for name, value in data.items() if name.lower() == lowered), None)


def _string(data: dict[str, Any], key: str) -> str:
    value = _lookup(data, key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValueError(f"{key} must be a string")
    return value


@dataclass
class Comment:
    """A comment on a news post."""

    id: str = ""
    parent_id: str = ""
    news_id: str = ""
    content: str = ""
    pub_time: datetime = ZERO_TIME
    childs: list[Comment] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "ID": self.id,
            "ParentID": self.parent_id,
            "NewsID": self.news_id,
            "Content": self.content,
            "PubTime": _format_time(self.pub_time),
            "Childs": [child.to_dict() for child in self.childs],
        }

    @classmethod
    def from_dict(cls, data: Any) -> Comment:
        if not isinstance(data, dict):
            raise ValueError("comment must be a JSON object")
        pub_time = _lookup(data, "PubTime")
        if pub_time is None:
            parsed_time = ZERO_TIME
        elif isinstance(pub_time, str):
            parsed_time = _parse_time(pub_time)
        else:
            raise ValueError("PubTime must be a string")
        childs = _lookup(data, "Childs")
        if childs is None:
            childs = []
        if not isinstance(childs, list):
            raise ValueError("Childs must be a list")
        return cls(
            id=_string(data, "ID"),
            parent_id=_string(data, "ParentID"),
            news_id=_string(data, "NewsID"),
            content=_string(data, "Content"),
            pub_time=parsed_time,
            childs=[cls.from_dict(child) for child in childs],
        )


def _is_object_id(value: str) -> bool:
    return len(value) == 24 and all(c in _HEX for c in value)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class CommentStore:
    """Thread-safe in-memory store of comments keyed by 24-hex-digit identifiers."""

    def __init__(self, clock: Callable[[], datetime] = _utc_now) -> None:
        self._clock = clock
        self._lock = threading.Lock()
        self._comments: list[Comment] = []
        self._machine = os.urandom(5)
        self._counter = itertools.count(int.from_bytes(os.urandom(3), "big"))

    def _new_id(self, now: datetime) -> str:
        seconds = int(now.timestamp()) & 0xFFFFFFFF
        counter = next(self._counter) & 0xFFFFFF
        return (seconds.to_bytes(4, "big") + self._machine + counter.to_bytes(3, "big")).hex()

    def add_comment(self, comment: Comment) -> str:
        """Store a comment and return its new identifier."""
        if not _is_object_id(comment.news_id):
            raise IncorrectPostIDError()
        with self._lock:
            if comment.parent_id:
                if not _is_object_id(comment.parent_id):
                    raise IncorrectParentIDError()
                parent = comment.parent_id.lower()
                if not any(stored.id == parent for stored in self._comments):
                    raise ParentNotFoundError()
            now = self._clock()
            now = now.replace(microsecond=now.microsecond // 1000 * 1000)
            new_id = self._new_id(now)
            self._comments.append(
                Comment(
                    id=new_id,
                    parent_id=comment.parent_id,
                    news_id=comment.news_id,
                    content=comment.content,
                    pub_time=now,
                    childs=[],
                )
            )
        return new_id

    def comments(self, news_id: str) -> list[Comment]:
        """Return every comment on a post, newest first."""
        if not news_id or not _is_object_id(news_id):
            raise IncorrectPostIDError()
        with self._lock:
            found = [replace(c, childs=[]) for c in self._comments if c.news_id == news_id]
        if not found:
            raise NoCommentsError()
        return sorted(found, key=lambda c: c.pub_time, reverse=True)