"""Structured logging: JSON records, bound fields, pretty console output and a discarding handler."""

from __future__ import annotations

import json
import logging
import sys
from collections.abc import Mapping
from datetime import datetime
from typing import Any, TextIO, Union

from termcolor import colored

FIELDS_ATTR = "fields"

_LEVEL_NAMES = {
    logging.DEBUG: "DEBUG",
    logging.INFO: "INFO",
    logging.WARNING: "WARN",
    logging.ERROR: "ERROR",
    logging.CRITICAL: "ERROR",
}

_LEVEL_COLOURS = {
    logging.DEBUG: "magenta",
    logging.INFO: "blue",
    logging.WARNING: "yellow",
    logging.ERROR: "red",
    logging.CRITICAL: "red",
}


def _level_name(levelno: int) -> str:
    return _LEVEL_NAMES.get(levelno, logging.getLevelName(levelno))


def _record_fields(record: logging.LogRecord) -> dict[str, Any]:
    fields = getattr(record, FIELDS_ATTR, None)
    return dict(fields) if isinstance(fields, Mapping) else {}


class JsonFormatter(logging.Formatter):
    """Render a record as one JSON object: time, level, msg, then bound fields."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "time": datetime.fromtimestamp(record.created).astimezone().isoformat(),
            "level": _level_name(record.levelno),
            "msg": record.getMessage(),
        }
        payload.update(_record_fields(record))
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False, default=str)


class DiscardHandler(logging.Handler):
    """A handler that drops every record."""

    def emit(self, record: logging.LogRecord) -> None:
        return None


class PrettyHandler(logging.Handler):
    """Human-friendly console output with coloured levels and indented fields."""

    def __init__(self, stream: TextIO | None = None, level: int = logging.DEBUG) -> None:
        super().__init__(level)
        self.stream = stream if stream is not None else sys.stdout

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level = _level_name(record.levelno) + ":"
            colour = _LEVEL_COLOURS.get(record.levelno)
            if colour:
                level = colored(level, colour)
            fields = _record_fields(record)
            body = (
                json.dumps(fields, indent=2, sort_keys=True, ensure_ascii=False, default=str)
                if fields
                else ""
            )
            stamp = datetime.fromtimestamp(record.created).strftime("[%H:%M:%S.")
            stamp += f"{int(record.msecs):03d}]"
            line = " ".join(
                (stamp, level, colored(record.getMessage(), "cyan"), colored(body, "white"))
            )
            self.stream.write(line + "\n")
            self.flush()
        except Exception:
            self.handleError(record)

    def flush(self) -> None:
        flush = getattr(self.stream, "flush", None)
        if flush is not None:
            flush()


class _BoundLogger(logging.LoggerAdapter):
    """Logger adapter that attaches a fixed set of fields to every record."""

    def process(self, msg: Any, kwargs: Any) -> tuple[Any, Any]:
        fields = dict(self.extra[FIELDS_ATTR])
        extra = dict(kwargs.pop("extra", None) or {})
        extra_fields = extra.get(FIELDS_ATTR)
        if isinstance(extra_fields, Mapping):
            fields.update(extra_fields)
        extra[FIELDS_ATTR] = fields
        kwargs["extra"] = extra
        return msg, kwargs


LoggerLike = Union[logging.Logger, logging.LoggerAdapter]


def setup_logger(stream: TextIO | None = None) -> logging.Logger:
    """Make JSON output at debug level the default for the root logger."""
    handler = logging.StreamHandler(stream if stream is not None else sys.stdout)
    handler.setFormatter(JsonFormatter())
    root = logging.getLogger()
    root.handlers = [handler]
    root.setLevel(logging.DEBUG)
    return root


def error_field(err: BaseException) -> dict[str, str]:
    """Represent an error as a log field."""
    return {"error": str(err)}


def bind(logger: LoggerLike, **kwargs: Any) -> logging.LoggerAdapter:
    """Return a logger that adds the given fields to every record."""
    if isinstance(logger, _BoundLogger):
        fields = dict(logger.extra[FIELDS_ATTR])
        fields.update(kwargs)
        return _BoundLogger(logger.logger, {FIELDS_ATTR: fields})
    return _BoundLogger(logger, {FIELDS_ATTR: dict(kwargs)})


def discard_logger() -> logging.Logger:
    """A logger whose records go nowhere."""
    logger = logging.getLogger("practicum.discard")
    logger.handlers = [DiscardHandler()]
    logger.propagate = False
    logger.setLevel(logging.DEBUG)
    return logger