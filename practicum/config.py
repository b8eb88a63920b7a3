"""YAML configuration for the HTTP services."""

from __future__ import annotations

import os
import re
from dataclasses import dataclass, field
from datetime import timedelta
from fractions import Fraction
from pathlib import Path
from typing import Any

import yaml


class ConfigError(ValueError):
    """The configuration cannot be read or is invalid."""


_UNITS = {
    "ns": Fraction(1),
    "us": Fraction(1000),
    "µs": Fraction(1000),
    "μs": Fraction(1000),
    "ms": Fraction(10**6),
    "s": Fraction(10**9),
    "m": Fraction(60 * 10**9),
    "h": Fraction(3600 * 10**9),
}
_PART = re.compile(r"(\d+(?:\.\d*)?|\.\d+)(ns|us|µs|μs|ms|s|m|h)")


def parse_duration(value: Any) -> timedelta:
    """Parse a duration such as "4s", "1h30m" or "500ms"; integers are nanoseconds."""
    if isinstance(value, bool):
        raise ConfigError(f"invalid duration: {value!r}")
    if isinstance(value, int):
        return timedelta(microseconds=value / 1000)
    if not isinstance(value, str):
        raise ConfigError(f"invalid duration: {value!r}")
    text = value
    sign = 1
    if text[:1] in "+-" and text:
        sign = -1 if text[0] == "-" else 1
        text = text[1:]
    if text == "0":
        return timedelta()
    if not text:
        raise ConfigError(f"invalid duration: {value!r}")
    total = Fraction(0)
    pos = 0
    while pos < len(text):
        match = _PART.match(text, pos)
        if match is None:
            raise ConfigError(f"invalid duration: {value!r}")
        total += Fraction(match.group(1)) * _UNITS[match.group(2)]
        pos = match.end()
    return timedelta(microseconds=sign * int(total) / 1000)


@dataclass
class HTTPServer:
    """HTTP server settings."""

    address: str = ""
    read_timeout: timedelta = field(default_factory=timedelta)
    write_timeout: timedelta = field(default_factory=timedelta)
    idle_timeout: timedelta = field(default_factory=timedelta)
    max_body_size: int = 0
    time_out: timedelta = field(default_factory=timedelta)
    user: str = ""
    password: str = ""


@dataclass
class CensorConfig:
    censor_list: list[str] = field(default_factory=list)
    http_server: HTTPServer = field(default_factory=HTTPServer)


@dataclass
class CommentsConfig:
    storage_path: str = ""
    http_server: HTTPServer = field(default_factory=HTTPServer)


@dataclass
class NewsConfig:
    urls: list[str] = field(default_factory=list)
    period: int = 0
    storage_path: str = ""
    http_server: HTTPServer = field(default_factory=HTTPServer)


@dataclass
class ShortenerConfig:
    env: str = "local"
    storage_path: str = ""
    http_server: HTTPServer = field(default_factory=HTTPServer)


def _read_yaml(path: str | os.PathLike[str]) -> dict[str, Any]:
    file = Path(path)
    if not file.exists():
        raise ConfigError(f"Config file does not exist: {path}")
    try:
        text = file.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(str(exc)) from exc
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Unmarshal: {exc}") from exc
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError("Unmarshal: configuration root must be a mapping")
    return data


def _section(data: dict[str, Any], key: str) -> dict[str, Any]:
    value = data.get(key)
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ConfigError(f"Unmarshal: {key} must be a mapping")
    return value


def _string(data: dict[str, Any], key: str, default: str = "") -> str:
    if key not in data:
        return default
    value = data[key]
    if value is None:
        return ""
    if isinstance(value, (dict, list)):
        raise ConfigError(f"Unmarshal: {key} must be a string")
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _int(data: dict[str, Any], key: str) -> int:
    value = data.get(key)
    if value is None:
        return 0
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigError(f"Unmarshal: {key} must be an integer")
    return value


def _duration(data: dict[str, Any], key: str, default: str | None = None) -> timedelta:
    value = data.get(key, default)
    if value is None:
        return timedelta()
    return parse_duration(value)


def _strings(data: dict[str, Any], key: str) -> list[str]:
    value = data.get(key)
    if value is None:
        return []
    if not isinstance(value, list):
        raise ConfigError(f"Unmarshal: {key} must be a list")
    return [_string({"v": item}, "v") for item in value]


def _http_server(data: dict[str, Any]) -> HTTPServer:
    section = _section(data, "http_server")
    return HTTPServer(
        address=_string(section, "address"),
        read_timeout=_duration(section, "read_timeout"),
        write_timeout=_duration(section, "write_timeout"),
        idle_timeout=_duration(section, "idle_timeout"),
        max_body_size=_int(section, "max_body_size"),
    )


def load_censor_config(path: str | os.PathLike[str]) -> CensorConfig:
    """Load the censor service configuration."""
    data = _read_yaml(path)
    return CensorConfig(censor_list=_strings(data, "censor_list"), http_server=_http_server(data))


def load_comments_config(path: str | os.PathLike[str]) -> CommentsConfig:
    """Load the comments service configuration."""
    data = _read_yaml(path)
    return CommentsConfig(storage_path=_string(data, "storage_path"), http_server=_http_server(data))


def load_news_config(path: str | os.PathLike[str]) -> NewsConfig:
    """Load the news aggregator configuration."""
    data = _read_yaml(path)
    return NewsConfig(
        urls=_strings(data, "rss"),
        period=_int(data, "request_period"),
        storage_path=_string(data, "storage_path"),
        http_server=_http_server(data),
    )


def load_shortener_config(path: str | os.PathLike[str] = "./config/local.yaml") -> ShortenerConfig:
    """Load the URL shortener configuration, applying defaults and required checks."""
    data = _read_yaml(path)
    section = _section(data, "http_server")
    server = HTTPServer(
        address=_string(section, "address", "localhost:8080"),
        time_out=_duration(section, "time_out", "4s"),
        idle_timeout=_duration(section, "idle_timeout", "60s"),
        user=_string(section, "user"),
        password=_string(section, "password"),
    )
    if "HTTP_SERVER_PASSWORD" in os.environ:
        server.password = os.environ["HTTP_SERVER_PASSWORD"]
    cfg = ShortenerConfig(
        env=_string(data, "env", "local"),
        storage_path=_string(data, "storage_path"),
        http_server=server,
    )
    missing = [
        name
        for name, value in (
            ("storage_path", cfg.storage_path),
            ("http_server.user", server.user),
            ("http_server.password", server.password),
        )
        if not value
    ]
    if missing:
        raise ConfigError(f"Cannot read config: required fields are empty: {', '.join(missing)}")
    return cfg