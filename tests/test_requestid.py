from datetime import datetime, timedelta, timezone

from practicum.requestid import (
    REQUEST_ID_ENVIRON,
    RequestIDMiddleware,
    _Sqids,
    _SQIDS,
    get_request_id,
    new_request_id,
)

NOW = datetime(2024, 5, 1, 12, 0, 0, 123456, tzinfo=timezone.utc)


def test_known_encoding_with_min_length():
    assert _Sqids(min_length=10).encode([1, 2, 3]) == "86Rf07xd4z"


def test_known_encoding_without_min_length():
    assert _Sqids().encode([1, 2, 3]) == "86Rf07"


def test_request_id_round_trip():
    rid = new_request_id(NOW)
    seconds, nanos = _SQIDS.decode(rid)
    assert seconds == int(NOW.timestamp())
    assert nanos // 10**9 == seconds
    assert nanos % 10**9 == NOW.microsecond * 1000


def test_request_id_shape_and_determinism():
    rid = new_request_id(NOW)
    assert len(rid) >= 10
    assert rid.isalnum()
    assert new_request_id(NOW) == rid
    assert new_request_id(NOW + timedelta(microseconds=1)) != rid


def test_request_id_from_current_time_decodes():
    numbers = _SQIDS.decode(new_request_id())
    assert len(numbers) == 2
    assert numbers[1] // 10**9 == numbers[0]


def _run(middleware, environ):
    seen = {}

    def app(env, start_response):
        seen["id"] = get_request_id(env)
        start_response("200 OK", [])
        return [b"ok"]

    body = RequestIDMiddleware(app, **middleware)(environ, lambda *a: None)
    return seen["id"], body


def test_middleware_generates_id():
    environ = {}
    rid, body = _run({"clock": lambda: NOW}, environ)
    assert body == [b"ok"]
    assert rid == new_request_id(NOW)
    assert environ[REQUEST_ID_ENVIRON] == rid


def test_middleware_keeps_existing_header():
    rid, _ = _run({}, {REQUEST_ID_ENVIRON: "abc"})
    assert rid == "abc"


def test_get_request_id_missing():
    assert get_request_id({}) == ""
    assert get_request_id(None) == ""