"""Saved pages of the article advisor bot, kept in files or in SQLite."""

from __future__ import annotations

import hashlib
import json
import os
import random
import sqlite3
import threading
from dataclasses import dataclass
from pathlib import Path
from types import TracebackType
from typing import Any, Protocol

_DEFAULT_PERM = 0o774


class PageStorageError(Exception):
    """A page storage operation failed."""


class NoSavedPagesError(PageStorageError):
    """The user has no saved pages."""

    def __init__(self, message: str = "no saved page") -> None:
        super().__init__(message)


@dataclass(frozen=True)
class Page:
    """A link a user sent to the bot."""

    url: str = ""
    user_name: str = ""

    def hash(self) -> str:
        """Hex SHA-1 of the URL followed by the user name."""
        digest = hashlib.sha1()
        digest.update(self.url.encode("utf-8"))
        digest.update(self.user_name.encode("utf-8"))
        return digest.hexdigest()


class PageStorage(Protocol):
    def save(self, page: Page) -> None: ...
    def pick_random(self, user_name: str) -> Page: ...
    def remove(self, page: Page) -> None: ...
    def is_exists(self, page: Page) -> bool: ...


def _encode(page: Page) -> str:
    return json.dumps({"URL": page.url, "UserName": page.user_name}, ensure_ascii=False)


def _decode(text: str) -> Page:
    data: Any = json.loads(text)
    if not isinstance(data, dict):
        raise ValueError("page must be a JSON object")
    url = data.get("URL", "")
    user_name = data.get("UserName", "")
    if not isinstance(url, str) or not isinstance(user_name, str):
        raise ValueError("page fields must be strings")
    return Page(url=url, user_name=user_name)


class FileStorage:
    """Keeps each page in its own file under a directory named after the user."""

    def __init__(self, base_path: str | os.PathLike[str], rng: random.Random | None = None) -> None:
        self.base_path = Path(base_path)
        self._rng = rng if rng is not None else random.Random()

    def _path(self, page: Page) -> Path:
        return self.base_path / page.user_name / page.hash()

    def save(self, page: Page) -> None:
        """Write the page to a file named after its hash."""
        directory = self.base_path / page.user_name
        try:
            directory.mkdir(mode=_DEFAULT_PERM, parents=True, exist_ok=True)
            (directory / page.hash()).write_text(_encode(page), encoding="utf-8")
        except OSError as exc:
            raise PageStorageError(f"can't save page: {exc}") from exc

    def pick_random(self, user_name: str) -> Page:
        """Return one of the user's pages chosen at random."""
        directory = self.base_path / user_name
        try:
            names = sorted(os.listdir(directory))
        except OSError as exc:
            raise PageStorageError(f"can't pick random page: {exc}") from exc
        if not names:
            raise NoSavedPagesError("can't pick random page: no saved page")
        return self._decode_page(directory / self._rng.choice(names))

    def remove(self, page: Page) -> None:
        """Delete the page's file."""
        path = self._path(page)
        try:
            path.unlink()
        except OSError as exc:
            raise PageStorageError(f"can't remove file {path}: {exc}") from exc

    def is_exists(self, page: Page) -> bool:
        """Report whether the page has been saved."""
        path = self._path(page)
        try:
            path.stat()
        except FileNotFoundError:
            return False
        except OSError as exc:
            raise PageStorageError(f"can't check if file {path} exists: {exc}") from exc
        return True

    @staticmethod
    def _decode_page(path: Path) -> Page:
        try:
            return _decode(path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            raise PageStorageError(f"can't decode page: {exc}") from exc


class SQLiteStorage:
    """Keeps pages in an SQLite table."""

    def __init__(self, path: str | os.PathLike[str]) -> None:
        self._lock = threading.Lock()
        try:
            self._db = sqlite3.connect(path, check_same_thread=False, isolation_level=None)
            self._db.execute("SELECT 1")
        except sqlite3.Error as exc:
            raise PageStorageError(f"can't connect to database: {exc}") from exc

    def __enter__(self) -> SQLiteStorage:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def _execute(self, message: str, query: str, params: tuple[Any, ...] = ()) -> sqlite3.Cursor:
        with self._lock:
            try:
                return self._db.execute(query, params)
            except sqlite3.Error as exc:
                raise PageStorageError(f"{message}: {exc}") from exc

    def init(self) -> None:
        """Create the pages table if it is missing."""
        self._execute("can't create table",
                      "CREATE TABLE IF NOT EXISTS pages (url TEXT, user_name TEXT)")

    def save(self, page: Page) -> None:
        self._execute("can't save page to database",
                      "INSERT INTO pages (url, user_name) VALUES (?, ?)",
                      (page.url, page.user_name))

    def pick_random(self, user_name: str) -> Page:
        cursor = self._execute(
            "can't pick random page",
            "SELECT url FROM pages WHERE user_name = ? ORDER BY RANDOM() LIMIT 1",
            (user_name,),
        )
        with self._lock:
            try:
                row = cursor.fetchone()
            except sqlite3.Error as exc:
                raise PageStorageError(f"can't pick random page: {exc}") from exc
        if row is None:
            raise NoSavedPagesError()
        return Page(url=row[0], user_name=user_name)

    def remove(self, page: Page) -> None:
        self._execute("can't remove page",
                      "DELETE FROM pages WHERE url = ? AND user_name = ?",
                      (page.url, page.user_name))

    def is_exists(self, page: Page) -> bool:
        cursor = self._execute("can't check if page exists",
                               "SELECT COUNT(*) FROM pages WHERE url = ? AND user_name = ?",
                               (page.url, page.user_name))
        with self._lock:
            (count,) = cursor.fetchone()
        return count > 0

    def close(self) -> None:
        with self._lock:
            self._db.close()