"""Request identifiers: short time-based IDs and a WSGI middleware that attaches them."""

from __future__ import annotations

import time
from collections.abc import Callable, Iterable, Sequence
from datetime import datetime, timezone
from typing import Any

REQUEST_ID_HEADER = "X-Request-Id"
REQUEST_ID_ENVIRON = "HTTP_X_REQUEST_ID"
REQUEST_ID_KEY = "practicum.request_id"

_DEFAULT_ALPHABET = "abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789"
_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
_NANOS = 10**9


def _shuffle(alphabet: str) -> str:
    chars = list(alphabet)
    i, j = 0, len(chars) - 1
    while j > 0:
        r = (i * j + ord(chars[i]) + ord(chars[j])) % len(chars)
        chars[i], chars[r] = chars[r], chars[i]
        i += 1
        j -= 1
    return "".join(chars)


class _Sqids:
    """Reversible encoding of non-negative integers into short alphanumeric IDs."""

    def __init__(self, alphabet: str = _DEFAULT_ALPHABET, min_length: int = 0) -> None:
        if min_length > len(alphabet):
            raise ValueError("minimum length exceeds alphabet length")
        self.alphabet = _shuffle(alphabet)
        self.min_length = min_length

    def encode(self, numbers: Sequence[int]) -> str:
        if not numbers:
            return ""
        if any(n < 0 for n in numbers):
            raise ValueError("numbers must be non-negative")
        size = len(self.alphabet)
        offset = sum(ord(self.alphabet[n % size]) + i for i, n in enumerate(numbers))
        offset = (offset + len(numbers)) % size
        alphabet = self.alphabet[offset:] + self.alphabet[:offset]
        prefix = alphabet[0]
        alphabet = alphabet[::-1]
        parts = [prefix]
        for i, number in enumerate(numbers):
            parts.append(self._to_id(number, alphabet[1:]))
            if i < len(numbers) - 1:
                parts.append(alphabet[0])
                alphabet = _shuffle(alphabet)
        result = "".join(parts)
        if self.min_length > len(result):
            result += alphabet[0]
            while self.min_length > len(result):
                alphabet = _shuffle(alphabet)
                result += alphabet[: self.min_length - len(result)]
        return result

    def decode(self, value: str) -> list[int]:
        numbers: list[int] = []
        if not value or any(c not in self.alphabet for c in value):
            return numbers
        offset = self.alphabet.index(value[0])
        alphabet = (self.alphabet[offset:] + self.alphabet[:offset])[::-1]
        rest = value[1:]
        while rest:
            head, sep, tail = rest.partition(alphabet[0])
            if not head:
                return numbers
            numbers.append(self._to_number(head, alphabet[1:]))
            if sep:
                alphabet = _shuffle(alphabet)
            rest = tail
        return numbers

    @staticmethod
    def _to_id(number: int, alphabet: str) -> str:
        chars: list[str] = []
        while True:
            number, digit = divmod(number, len(alphabet))
            chars.append(alphabet[digit])
            if number <= 0:
                break
        return "".join(reversed(chars))

    @staticmethod
    def _to_number(value: str, alphabet: str) -> int:
        result = 0
        for char in value:
            result = result * len(alphabet) + alphabet.index(char)
        return result


_SQIDS = _Sqids(min_length=10)


def new_request_id(now: datetime | None = None) -> str:
    """Generate a short ID from the Unix time in seconds and in nanoseconds."""
    if now is None:
        nanos = time.time_ns()
    else:
        if now.tzinfo is None:
            now = now.astimezone()
        delta = now - _EPOCH
        nanos = (delta.days * 86400 + delta.seconds) * _NANOS + delta.microseconds * 1000
    return _SQIDS.encode([nanos // _NANOS, nanos])


def get_request_id(environ: dict[str, Any] | None) -> str:
    """Return the request ID stored in a WSGI environ, or an empty string."""
    if environ is None:
        return ""
    value = environ.get(REQUEST_ID_KEY)
    return value if isinstance(value, str) else ""


class RequestIDMiddleware:
    """Ensure every request carries an X-Request-Id and expose it in the environ."""

    def __init__(self, app: Callable[..., Iterable[bytes]],
                 clock: Callable[[], datetime] | None = None) -> None:
        self.app = app
        self.clock = clock

    def __call__(self, environ: dict[str, Any], start_response: Callable[..., Any]) -> Iterable[bytes]:
        request_id = environ.get(REQUEST_ID_ENVIRON, "")
        if not request_id:
            request_id = new_request_id(self.clock() if self.clock else None)
            environ[REQUEST_ID_ENVIRON] = request_id
        environ[REQUEST_ID_KEY] = request_id
        return self.app(environ, start_response)