"""Telegram bot that saves links for users and hands them back at random."""

from __future__ import annotations

import argparse
import logging
import sys
import time
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Protocol
from urllib.parse import urlsplit

from practicum.advisor_storage import (
    NoSavedPagesError,
    Page,
    PageStorage,
    PageStorageError,
    SQLiteStorage,
)
from practicum.telegram_client import TelegramClient, TelegramError, Update

TG_BOT_HOST = "api.telegram.org"
SQLITE_STORAGE_PATH = "data/sqlite/database.db"
BATCH_SIZE = 100

RND_CMD = "/rnd"
HELP_CMD = "/help"
START_CMD = "/start"

MSG_HELP = """I can save and keep you pages. Also I can offer you them to read.
In order to save the page, just send me al link to it.
In order to get a random page from your list, send me command /rnd.
Caution! After that, this page will be removed from your list!"""
MSG_HELLO = "Hi there! 👾\n\n" + MSG_HELP
MSG_UNKNOWN_COMMAND = "Unknown command 🤔"
MSG_NO_SAVED_PAGES = "You have no saved pages 🙊"
MSG_SAVED = "Saved! 👌"
MSG_ALREADY_EXISTS = "You have already have this page in your list 🤗"

_log = logging.getLogger(__name__)


class EventType(IntEnum):
    UNKNOWN = 0
    MESSAGE = 1


@dataclass(frozen=True)
class Meta:
    """Who sent a message and in which chat."""

    chat_id: int
    username: str


@dataclass(frozen=True)
class Event:
    """Something a user sent to the bot."""

    type: EventType
    text: str = ""
    meta: Any = None


class UnknownEventTypeError(ValueError):
    def __init__(self, message: str = "unknown event type") -> None:
        super().__init__(message)


class UnknownMetaTypeError(TypeError):
    def __init__(self, message: str = "unknown meta type") -> None:
        super().__init__(message)


class Fetcher(Protocol):
    def fetch(self, limit: int) -> list[Event]: ...


class EventProcessor(Protocol):
    def process(self, event: Event) -> None: ...


class _Client(Protocol):
    def updates(self, offset: int, limit: int) -> list[Update]: ...
    def send_message(self, chat_id: int, text: str) -> None: ...


def is_url(text: str) -> bool:
    """True when the text parses as a URL with a host."""
    if any(ord(c) < 0x20 or c == "\x7f" for c in text):
        return False
    try:
        parts = urlsplit(text)
        parts.port
    except ValueError:
        return False
    host = parts.netloc.rpartition("@")[2]
    return bool(host) and " " not in host


def _to_event(update: Update) -> Event:
    if update.message is None:
        return Event(type=EventType.UNKNOWN)
    message = update.message
    return Event(
        type=EventType.MESSAGE,
        text=message.text,
        meta=Meta(chat_id=message.chat.id, username=message.sender.username),
    )


class Processor:
    """Turns bot API updates into events and answers them."""

    def __init__(self, client: _Client, storage: PageStorage) -> None:
        self.client = client
        self.storage = storage
        self.offset = 0

    def fetch(self, limit: int) -> list[Event]:
        """Fetch up to ``limit`` new events and move the offset past them."""
        try:
            updates = self.client.updates(self.offset, limit)
        except TelegramError as exc:
            raise TelegramError(f"can't get events: {exc}") from exc
        if not updates:
            return []
        self.offset = updates[-1].id + 1
        return [_to_event(update) for update in updates]

    def process(self, event: Event) -> None:
        """Answer one event."""
        if event.type is not EventType.MESSAGE:
            raise UnknownEventTypeError("can't process message: unknown event type")
        if not isinstance(event.meta, Meta):
            raise UnknownMetaTypeError("can't process message: can't get meta: unknown meta type")
        self._do_cmd(event.text, event.meta.chat_id, event.meta.username)

    def _do_cmd(self, text: str, chat_id: int, username: str) -> None:
        text = text.strip()
        _log.info("got new command '%s' from '%s'", text, username)
        if is_url(text):
            self._save_page(chat_id, text, username)
        elif text == RND_CMD:
            self._send_random(chat_id, username)
        elif text == HELP_CMD:
            self.client.send_message(chat_id, MSG_HELP)
        elif text == START_CMD:
            self.client.send_message(chat_id, MSG_HELLO)
        else:
            self.client.send_message(chat_id, MSG_UNKNOWN_COMMAND)

    def _save_page(self, chat_id: int, url: str, username: str) -> None:
        page = Page(url=url, user_name=username)
        if self.storage.is_exists(page):
            self.client.send_message(chat_id, MSG_ALREADY_EXISTS)
            return
        self.storage.save(page)
        self.client.send_message(chat_id, MSG_SAVED)

    def _send_random(self, chat_id: int, username: str) -> None:
        try:
            page = self.storage.pick_random(username)
        except NoSavedPagesError:
            self.client.send_message(chat_id, MSG_NO_SAVED_PAGES)
            return
        self.client.send_message(chat_id, page.url)
        self.storage.remove(page)


class Consumer:
    """Fetches events in batches and hands each to a processor, forever."""

    def __init__(self, fetcher: Fetcher, processor: EventProcessor, batch_size: int,
                 sleep: Callable[[float], None] = time.sleep) -> None:
        self.fetcher = fetcher
        self.processor = processor
        self.batch_size = batch_size
        self._sleep = sleep

    def start(self) -> None:
        """Run the fetch-and-process loop; it only ends by an exception."""
        while True:
            try:
                events = self.fetcher.fetch(self.batch_size)
            except Exception as exc:
                _log.error("[ERR] consumer: %s", exc)
                continue
            if not events:
                self._sleep(1)
                continue
            self.handle_events(events)

    def handle_events(self, events: Iterable[Event]) -> None:
        """Process each event; a failing event is logged and skipped."""
        for event in events:
            _log.info("got new event: %s", event.text)
            try:
                self.processor.process(event)
            except Exception as exc:
                _log.error("can't handle event: %s", exc)


def main(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Article advisor Telegram bot")
    parser.add_argument("--tg-bot-token", default="", help="token for access to telebot")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO)
    if not args.tg_bot_token:
        _log.critical("Token is not specified!")
        return 1

    try:
        storage = SQLiteStorage(SQLITE_STORAGE_PATH)
    except PageStorageError as exc:
        _log.critical("can't connect to database: %s", exc)
        return 1
    with storage:
        try:
            storage.init()
        except PageStorageError as exc:
            _log.critical("can't init database: %s", exc)
            return 1
        processor = Processor(TelegramClient(TG_BOT_HOST, args.tg_bot_token), storage)
        _log.info("service started")
        try:
            Consumer(processor, processor, BATCH_SIZE).start()
        except KeyboardInterrupt:
            _log.info("service is stopped")
    return 0


if __name__ == "__main__":
    sys.exit(main())