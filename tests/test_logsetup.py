import io
import json
import logging
import re

import pytest

from practicum.logsetup import (
    JsonFormatter,
    PrettyHandler,
    bind,
    discard_logger,
    error_field,
    setup_logger,
)


@pytest.fixture
def restore_root():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    root.handlers = handlers
    root.setLevel(level)


def _last_json(stream):
    return json.loads(stream.getvalue().splitlines()[-1])


def test_error_field_holds_message():
    assert error_field(ValueError("boom")) == {"error": "boom"}


def test_setup_logger_writes_json_at_debug(restore_root):
    stream = io.StringIO()
    logger = setup_logger(stream)
    logger.debug("hello", extra={"fields": {"k": 1}})
    record = _last_json(stream)
    assert record["level"] == "DEBUG"
    assert record["msg"] == "hello"
    assert record["k"] == 1
    assert list(record)[:3] == ["time", "level", "msg"]


def test_warning_level_is_named_warn(restore_root):
    stream = io.StringIO()
    setup_logger(stream).warning("careful")
    assert _last_json(stream)["level"] == "WARN"


def test_bind_adds_and_merges_fields(restore_root):
    stream = io.StringIO()
    base = setup_logger(stream)
    log = bind(bind(base, op="a.b"), request_id="rid")
    log.info("served", extra={"fields": error_field(RuntimeError("bad"))})
    record = _last_json(stream)
    assert record["op"] == "a.b"
    assert record["request_id"] == "rid"
    assert record["error"] == "bad"
    assert record["level"] == "INFO"


def test_discard_logger_writes_nothing(restore_root):
    stream = io.StringIO()
    setup_logger(stream)
    discard_logger().error("lost")
    assert stream.getvalue() == ""


def test_json_formatter_direct():
    record = logging.LogRecord("x", logging.ERROR, __file__, 1, "value %d", (5,), None)
    record.fields = {"alias": "abc"}
    data = json.loads(JsonFormatter().format(record))
    assert data["msg"] == "value 5"
    assert data["level"] == "ERROR"
    assert data["alias"] == "abc"


def test_pretty_handler_output():
    stream = io.StringIO()
    logger = logging.getLogger("practicum.test.pretty")
    logger.handlers = [PrettyHandler(stream)]
    logger.propagate = False
    logger.setLevel(logging.DEBUG)
    bind(logger, alias="abc").info("saved")
    out = stream.getvalue()
    assert re.match(r"^\[\d\d:\d\d:\d\d\.\d{3}\] ", out)
    assert "INFO:" in out
    assert "saved" in out
    assert '"alias": "abc"' in out