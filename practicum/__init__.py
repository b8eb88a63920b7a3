"""Command-line tools, a days-left service, a reading-list bot and shared helpers for logging, request IDs, configuration and storage."""

__version__ = "0.1.0"