"""A small client for the Telegram bot API: fetch updates and send messages."""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any
from urllib.parse import urlencode

import requests

GET_UPDATES_METHOD = "getUpdates"
SEND_MESSAGE_METHOD = "sendMessage"


class TelegramError(Exception):
    """A request to the bot API failed or its answer could not be read."""


@dataclass(frozen=True)
class Chat:
    id: int = 0


@dataclass(frozen=True)
class Sender:
    username: str = ""


@dataclass(frozen=True)
class IncomingMessage:
    text: str = ""
    sender: Sender = field(default_factory=Sender)
    chat: Chat = field(default_factory=Chat)


@dataclass(frozen=True)
class Update:
    id: int = 0
    message: IncomingMessage | None = None


def _object(value: Any, name: str) -> Mapping[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise TelegramError(f"{name} must be a JSON object")
    return value


def _int(value: Any, name: str) -> int:
    if value is None:
        return 0
    if isinstance(value, bool) or not isinstance(value, int):
        raise TelegramError(f"{name} must be an integer")
    return value


def _str(value: Any, name: str) -> str:
    if value is None:
        return ""
    if not isinstance(value, str):
        raise TelegramError(f"{name} must be a string")
    return value


def _message(value: Any) -> IncomingMessage | None:
    if value is None:
        return None
    data = _object(value, "message")
    return IncomingMessage(
        text=_str(data.get("text"), "text"),
        sender=Sender(_str(_object(data.get("from"), "from").get("username"), "username")),
        chat=Chat(_int(_object(data.get("chat"), "chat").get("id"), "chat id")),
    )


def parse_updates(data: bytes | str | Mapping[str, Any]) -> list[Update]:
    """Decode a getUpdates response into its updates."""
    if isinstance(data, (bytes, str)):
        try:
            doc: Any = json.loads(data)
        except ValueError as exc:
            raise TelegramError(str(exc)) from exc
    else:
        doc = data
    result = _object(doc, "updates response").get("result")
    if result is None:
        return []
    if not isinstance(result, list):
        raise TelegramError("result must be a list")
    updates = []
    for item in result:
        entry = _object(item, "update")
        updates.append(Update(id=_int(entry.get("update_id"), "update_id"),
                              message=_message(entry.get("message"))))
    return updates


class TelegramClient:
    """Talks to the bot API on a host with a bot token."""

    def __init__(self, host: str, token: str, session: Any = None) -> None:
        self.host = host
        self.base_path = "bot" + token
        self._session = session if session is not None else requests.Session()

    def _do_request(self, method: str, params: dict[str, str]) -> bytes:
        query = urlencode(sorted(params.items()))
        url = f"https://{self.host}/{self.base_path}/{method}?{query}"
        try:
            return self._session.get(url).content
        except requests.RequestException as exc:
            raise TelegramError(f"can't do request: {exc}") from exc

    def updates(self, offset: int, limit: int) -> list[Update]:
        """Fetch up to ``limit`` updates starting at ``offset``."""
        try:
            body = self._do_request(GET_UPDATES_METHOD,
                                    {"offset": str(offset), "limit": str(limit)})
            return parse_updates(body)
        except TelegramError as exc:
            raise TelegramError(f"can't get updates: {exc}") from exc

    def send_message(self, chat_id: int, text: str) -> None:
        """Send a text message to a chat."""
        try:
            self._do_request(SEND_MESSAGE_METHOD, {"chat_id": str(chat_id), "text": text})
        except TelegramError as exc:
            raise TelegramError(f"can't send message: {exc}") from exc