"""SQLite storage of shortened URLs keyed by alias."""

from __future__ import annotations

import os
import sqlite3
import threading
from types import TracebackType

_SCHEMA = """
CREATE TABLE IF NOT EXISTS url(
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    alias TEXT NOT NULL UNIQUE,
    url TEXT NOT NULL);
CREATE INDEX IF NOT EXISTS idx_alias ON url(alias);
"""


class URLNotFoundError(LookupError):
    """No URL is stored under the alias."""

    def __init__(self, message: str = "URL not found") -> None:
        super().__init__(message)


class URLExistsError(ValueError):
    """The alias is already taken."""

    def __init__(self, message: str = "URL already exists") -> None:
        super().__init__(message)


class SQLiteStorage:
    """Stores URLs under unique aliases in an SQLite database."""

    def __init__(self, storage_path: str | os.PathLike[str]) -> None:
        self._lock = threading.Lock()
        self._db = sqlite3.connect(storage_path, check_same_thread=False, isolation_level=None)
        try:
            self._db.executescript(_SCHEMA)
        except sqlite3.Error:
            self._db.close()
            raise

    def __enter__(self) -> SQLiteStorage:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def save_url(self, url: str, alias: str) -> int:
        """Store a URL under an alias and return the new row's id."""
        with self._lock:
            try:
                cursor = self._db.execute("INSERT INTO url(url, alias) VALUES(?, ?)", (url, alias))
            except sqlite3.IntegrityError as exc:
                if "UNIQUE constraint failed" in str(exc):
                    raise URLExistsError() from exc
                raise
        return int(cursor.lastrowid or 0)

    def get_url(self, alias: str) -> str:
        """Return the URL stored under an alias."""
        with self._lock:
            row = self._db.execute("SELECT url FROM url WHERE alias=?", (alias,)).fetchone()
        if row is None:
            raise URLNotFoundError()
        return row[0]

    def delete_url(self, alias: str) -> None:
        """Delete the URL stored under an alias."""
        with self._lock:
            cursor = self._db.execute("DELETE FROM url WHERE alias=?", (alias,))
        if cursor.rowcount == 0:
            raise URLNotFoundError()

    def close(self) -> None:
        with self._lock:
            self._db.close()