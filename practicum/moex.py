"""Console client for share quotes from the Moscow Exchange ISS API."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from collections.abc import Mapping, Sequence
from typing import Any

import requests
from tabulate import tabulate

from practicum.logsetup import JsonFormatter

ISS_URL = ("https://iss.moex.com/iss/engines/stock/markets/shares/boards/TQBR/"
           "securities.json?securities={ticker}")
LOG_FILE = "internal/logger/logger.json"
HEADERS = ("Наименование компании", "Тикер", "Последняя стоимость за акцию")

_log = logging.getLogger(__name__)


class MoexError(Exception):
    """Quotes could not be fetched or read."""


def market_data_url(ticker: str) -> str:
    """The ISS URL with market data for comma-separated tickers."""
    return ISS_URL.format(ticker=ticker)


def get_market_data(ticker: str, session: Any = None) -> dict[str, Any]:
    """Fetch the ISS document for the tickers."""
    _log.info("GetMarketData")
    client = session if session is not None else requests
    url = market_data_url(ticker)
    _log.info("Request URL: %s", url)
    try:
        resp = client.get(url)
    except requests.RequestException as exc:
        _log.error(str(exc))
        raise MoexError(f"request error: {exc}") from exc
    if resp.status_code != 200:
        _log.error("bad status %s", resp.status_code)
        raise MoexError(f"bad status: {resp.status_code}")
    try:
        doc = json.loads(resp.content)
    except ValueError as exc:
        _log.error(str(exc))
        raise MoexError(f"json unmarshal error: {exc}") from exc
    if not isinstance(doc, dict):
        raise MoexError("json unmarshal error: document is not an object")
    return doc


def _block(doc: Mapping[str, Any], name: str) -> tuple[list[Any], list[Any]]:
    block = doc.get(name) or {}
    if not isinstance(block, Mapping):
        raise MoexError(f"{name} must be an object")
    columns = block.get("columns") or []
    data = block.get("data") or []
    if not isinstance(columns, list) or not isinstance(data, list):
        raise MoexError(f"{name} has malformed columns or data")
    return columns, data


def extract_data(doc: Mapping[str, Any] | None) -> list[dict[str, Any]]:
    """Join market data rows with security names by ticker."""
    _log.info("ExtractData")
    if doc is None:
        _log.error("doc is nil")
        raise MoexError("doc is nil")

    names: dict[str, str] = {}
    for row in _block(doc, "securities")[1]:
        if not isinstance(row, list) or len(row) < 10:
            raise MoexError("malformed securities row")
        secid, sec_name = row[0], row[9]
        if not isinstance(secid, str) or not isinstance(sec_name, str):
            raise MoexError("malformed securities row")
        names[secid] = sec_name

    columns, data = _block(doc, "marketdata")
    result = []
    for row in data:
        if row is None:
            _log.error("row is nil")
            continue
        if not isinstance(row, list) or not row or not isinstance(row[0], str):
            raise MoexError("malformed marketdata row")
        entry = dict(zip(columns, row))
        if row[0] in names:
            entry["SECNAME"] = names[row[0]]
        result.append(entry)
    return result


def _format_value(value: Any) -> str:
    if value is None:
        return "<nil>"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer() and abs(value) < 1e21:
        return str(int(value))
    return str(value)


def _text(entry: Mapping[str, Any], key: str) -> str:
    value = entry.get(key)
    if not isinstance(value, str):
        raise MoexError(f"{key} is missing")
    return value


def render_table(rows: Sequence[Mapping[str, Any]], count: int) -> str:
    """Render the first ``count`` rows as a borderless table."""
    if count > len(rows):
        raise MoexError(f"expected {count} rows, got {len(rows)}")
    body = [
        [_text(entry, "SECNAME"), _text(entry, "SECID"), _format_value(entry.get("LAST"))]
        for entry in rows[:count]
    ]
    return tabulate(body, headers=HEADERS, tablefmt="presto", disable_numparse=True)


def _ask(prompt: str) -> str | None:
    try:
        return input(prompt)
    except EOFError:
        return None


def _show_quotes() -> None:
    ticker = _ask("Введите тикер: ")
    if ticker is None:
        _log.error("Invalid input in 1 menu")
        print("Ошибка ввода")
        return
    count = len(ticker.split(","))
    try:
        rows = extract_data(get_market_data(ticker))
        _log.info("Print to console")
        print(render_table(rows, count))
    except MoexError as exc:
        print(exc)


def _menu() -> int:
    _log.info("StartMenu")
    while True:
        _log.info("Main menu")
        print("\nВыберите действие:")
        print("1 - Получить котировки по тикеру")
        print("2 - Посмотреть список доступных инструментов")
        print("3 - Выйти")
        choice = _ask("Введите номер действия: ")
        if choice is None:
            _log.error("Invalid input in main menu")
            return 0
        choice = choice.strip()
        if choice == "1":
            _log.info("User choices 1")
            _show_quotes()
        elif choice == "2":
            _log.info("User choices 2")
            print("Функция просмотра списка инструментов пока не реализована.")
        elif choice == "3":
            _log.info("App exiting")
            print("Выход из программы.")
            return 0
        else:
            _log.error("Invalid choice in main menu")
            print("Please try again")


def main(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Moscow Exchange quotes")
    parser.add_argument("--log-file", default=LOG_FILE, help="file for JSON logs")
    args = parser.parse_args(argv)

    try:
        handler = logging.FileHandler(args.log_file, mode="a", encoding="utf-8")
    except OSError as exc:
        print(f"error opening file: {exc}")
        return 1
    handler.setFormatter(JsonFormatter())
    _log.addHandler(handler)
    _log.setLevel(logging.DEBUG)
    _log.propagate = False
    try:
        _log.debug("Logger setup load successful")
        return _menu()
    finally:
        _log.removeHandler(handler)
        handler.close()


if __name__ == "__main__":
    sys.exit(main())