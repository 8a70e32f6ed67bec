"""
Console output and the run journal.

Every subcommand logs to the console through Rich. When enabled, the
workflow milestones (week advanced, pull requests fetched and filtered,
draft checked) are also appended to a journal file in the cache
directory, one JSON object per line, so a week's runs can be replayed.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from rich.logging import RichHandler

from .config import LoggingConfig

ROOT_LOGGER = "twir_digest"
PLAIN_FORMAT = "%(asctime)s %(levelname)s %(message)s"


def setup_logging(cfg: LoggingConfig, cache_dir: Path | None) -> logging.Logger:
    """Attach the console handler and, if enabled, the journal file handler."""
    level = _level(cfg.level)
    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(level)
    for handler in logger.handlers:
        handler.close()
    logger.handlers = []
    logger.propagate = False

    if cfg.console:
        console = RichHandler(rich_tracebacks=True, show_time=False, show_path=False)
        console.setFormatter(logging.Formatter("%(message)s"))
        logger.addHandler(console)

    if cfg.file and cache_dir is not None:
        cache_dir.mkdir(parents=True, exist_ok=True)
        journal = logging.FileHandler(cache_dir / cfg.filename, encoding="utf-8")
        if cfg.format == "jsonl":
            journal.setFormatter(JournalFormatter())
        else:
            journal.setFormatter(logging.Formatter(PLAIN_FORMAT))
        logger.addHandler(journal)

    for handler in logger.handlers:
        handler.setLevel(level)
    return logger


def log_event(logger: logging.Logger, event: str, message: str, **fields: Any) -> None:
    """Log a workflow milestone with its named step and structured fields."""
    logger.info(message, extra={"event": event, "fields": fields})


class JournalFormatter(logging.Formatter):
    """One JSON object per record: step name first, then the event fields."""

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "event": getattr(record, "event", None),
            "time": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "message": record.getMessage(),
        }
        entry.update(getattr(record, "fields", {}))
        return json.dumps(entry, ensure_ascii=False, default=str)


def _level(name: str) -> int:
    return getattr(logging, name.upper(), logging.INFO)
