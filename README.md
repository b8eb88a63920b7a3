# practicum

A collection of small command-line tools, a tiny HTTP service and a Telegram
bot, together with a shared toolkit for structured logging, request IDs and
YAML configuration, and storage layers for comments, news posts and
shortened URLs.

## Installation

```
pip install .
```

To run the test suite:

```
pip install ".[test]"
pytest
```

## Commands

### `practicum-daysleft`

Starts a Flask application serving `GET /status`, which answers with a
plain-text line such as `Days left: 42`: the whole days left until
1 January 2025 (UTC), truncated toward zero. Requests carrying the header
`User-Role: admin` are noted in the log. It listens on `0.0.0.0`, port 8080
by default; use `--port` to change it.

### `practicum-advisor`

Runs a Telegram bot that keeps a personal reading list:

* send it a link (a text that parses as a URL with a host) to save the page;
* `/rnd` sends back a random saved page and removes it from the list;
* `/help` prints help, `/start` a greeting.

The bot token is given with `--tg-bot-token`; without it the command exits
with status 1. Pages are stored in the SQLite database
`data/sqlite/database.db`, whose directory must already exist. Updates are
fetched in batches of 100; the bot runs until interrupted.

### `practicum-moex`

An interactive menu that looks up the latest share prices on the Moscow
Exchange (ISS API, board TQBR) for one or more comma-separated tickers and
prints them as a table of company name, ticker and last price. Menu item 2
(list of instruments) only prints a notice that it is not available. Logs
are written as JSON to `internal/logger/logger.json`, or to the file given
with `--log-file`.

### `practicum-calculator`

An interactive calculator for two whole numbers from 1 to 10, written either
in Arabic numerals or in Roman numerals (`I` to `X`), with one of `+`, `-`,
`*`, `/` (division is integer division), for example `3 + 4` or `VI * II`.
Roman expressions give Roman results. Mixing the two systems, using more
than one operator, numbers outside 1–10, or a zero or negative Roman result
is an error: the message is printed to standard error and the program exits
with status 1.

### `practicum-disk-usage`

Prints total, free, available and used space in gigabytes for the disk
holding a path given as an optional argument (the filesystem root by
default).

## Library use

### Logging and request IDs

* `practicum.logsetup.setup_logger(stream)` makes JSON output at debug level
  the root logger's default; `bind(logger, **fields)` returns a logger that
  adds fields to every record; `error_field(err)` gives `{"error": str(err)}`.
  `JsonFormatter`, `PrettyHandler` (coloured console lines) and
  `DiscardHandler` / `discard_logger()` are also available.
* `practicum.requestid.RequestIDMiddleware` is WSGI middleware that ensures
  each request has an `X-Request-Id` (generating a short time-based one with
  `new_request_id()` when missing); `get_request_id(environ)` reads it back.

### Configuration

`practicum.config` loads YAML settings into dataclasses:
`load_censor_config`, `load_comments_config`, `load_news_config` and
`load_shortener_config` (the last applies defaults, takes the password from
`HTTP_SERVER_PASSWORD` when set, and requires `storage_path`,
`http_server.user` and `http_server.password`). Durations such as `4s` or
`1h30m` are parsed by `parse_duration`. Problems raise `ConfigError`.

### Comments

```python
from practicum.comment_tree import build
from practicum.comments_store import Comment

roots = build([
    Comment.from_dict({"ID": "1", "ParentID": "", "NewsID": "n", "Content": "first"}),
    Comment.from_dict({"ID": "2", "ParentID": "1", "NewsID": "n", "Content": "reply"}),
])
roots[0].childs[0].comment.content  # "reply"
```

`practicum.comments_store.CommentStore` is a thread-safe in-memory store:
`add_comment(comment)` returns a new 24-hex-digit id, and `comments(news_id)`
returns a post's comments newest first, raising `IncorrectPostIDError`,
`IncorrectParentIDError`, `ParentNotFoundError` or `NoCommentsError`.

### News

* `practicum.news_model` defines `Post`, `Options` and `MemoryNewsStore`
  (unique titles, text search by title words, pagination, lookup by id).
* `practicum.rss.parse_feed(data)` turns an RSS document into posts (HTML
  stripped from descriptions); `fetch(url)` downloads and decodes a feed.

### Shortened URLs

`practicum.shortener_storage.SQLiteStorage(path)` stores URLs under unique
aliases with `save_url`, `get_url` and `delete_url`, raising
`URLExistsError` and `URLNotFoundError`. `practicum.randomstr.new_random_string(size)`
makes random alphanumeric aliases.

### Reading list and Telegram

`practicum.advisor_storage` offers `Page`, `FileStorage` and `SQLiteStorage`;
`practicum.telegram_client.TelegramClient` fetches updates and sends
messages; `practicum.advisor_bot` holds the `Processor` and `Consumer` the
bot command is built from.

## What is not included

The package has no HTTP front ends for the comment censor, the comment
service, the news aggregator or the URL shortener, and no request/response
logging middleware. Their storage, configuration loaders and helpers are
here, but nothing serves them over HTTP and no command starts them.