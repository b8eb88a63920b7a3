"""Tiny HTTP service that reports the days left until 1 January 2025."""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Callable, Sequence
from datetime import datetime, timezone

from flask import Flask, Response, request

TARGET = datetime(2025, 1, 1, tzinfo=timezone.utc)

_log = logging.getLogger(__name__)


def days_left(now: datetime | None = None) -> int:
    """Whole days from ``now`` until the target date, truncated toward zero."""
    if now is None:
        now = datetime.now(timezone.utc)
    elif now.tzinfo is None:
        now = now.astimezone()
    return int((TARGET - now).total_seconds() / 3600 / 24)


def create_app(clock: Callable[[], datetime] | None = None) -> Flask:
    """Build the WSGI app serving GET /status."""
    app = Flask(__name__, static_folder=None)

    def check_role() -> None:
        if request.headers.get("User-Role") == "admin":
            _log.info("red button user detected")

    def status() -> Response:
        days = days_left(clock() if clock is not None else None)
        return Response(f"Days left: {days}", status=200, mimetype="text/plain")

    app.before_request(check_role)
    app.add_url_rule("/status", "status", status, methods=["GET"])
    return app


def main(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Days-left status service")
    parser.add_argument("--port", type=int, default=8080, help="port to listen on")
    args = parser.parse_args(argv)

    print("Server running!")
    try:
        create_app().run(host="0.0.0.0", port=args.port)
    except OSError as exc:
        _log.critical(str(exc))
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())