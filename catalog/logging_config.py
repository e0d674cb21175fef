"""Logging configuration for the catalog.

Everything logs under the ``catalog`` logger tree. Console output is for
people; the JSONL file (one per day) is for grepping and loading later.
Catalog events (saves, updates, deletes, imports) carry an ``event_type``
plus their fields as top-level JSON keys.
"""

import json
import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional

__all__ = [
    "setup_logging",
    "get_logger",
    "log_catalog_event",
]

ROOT_LOGGER = "catalog"

_DEFAULT_LOG_DIR = Path(__file__).parent.parent / "logs"


class JSONLFileHandler(logging.Handler):
    """Appends one JSON object per record to ``catalog_YYYYMMDD.jsonl``."""

    def __init__(self, log_dir: Path):
        super().__init__()
        self.log_dir = Path(log_dir)
        self.log_dir.mkdir(parents=True, exist_ok=True)

    def emit(self, record: logging.LogRecord) -> None:
        try:
            created = datetime.fromtimestamp(record.created)
            entry = {
                "timestamp": created.isoformat(),
                "level": record.levelname,
                "logger": record.name,
                "message": record.getMessage(),
            }
            event_type = getattr(record, "event_type", None)
            if event_type:
                entry["event_type"] = event_type
                entry.update(getattr(record, "event_data", {}))
            if record.exc_info:
                entry["exception"] = logging.Formatter().formatException(record.exc_info)

            path = self.log_dir / f"catalog_{created:%Y%m%d}.jsonl"
            with open(path, "a", encoding="utf-8") as f:
                f.write(json.dumps(entry, ensure_ascii=False, default=str) + "\n")
        except Exception:
            self.handleError(record)


class ColoredConsoleHandler(logging.StreamHandler):
    """Colors the line by level when writing to a terminal."""

    COLORS = {
        "DEBUG": "\033[36m",
        "INFO": "\033[32m",
        "WARNING": "\033[33m",
        "ERROR": "\033[31m",
        "CRITICAL": "\033[35m",
    }
    RESET = "\033[0m"

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        event_type = getattr(record, "event_type", None)
        if event_type:
            message = f"{message} [{event_type}]"
        if getattr(self.stream, "isatty", lambda: False)():
            message = f"{self.COLORS.get(record.levelname, '')}{message}{self.RESET}"
        return message


def setup_logging(
    level: int = logging.INFO,
    log_to_file: bool = True,
    log_to_console: bool = True,
    log_dir: Optional[Path] = None,
) -> logging.Logger:
    """Attach console and/or JSONL handlers to the ``catalog`` logger.

    Calling it again replaces the handlers from the previous call.
    """
    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(level)
    logger.handlers.clear()

    if log_to_console:
        console_handler = ColoredConsoleHandler(sys.stdout)
        console_handler.setFormatter(logging.Formatter(
            "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
            datefmt="%H:%M:%S",
        ))
        logger.addHandler(console_handler)

    if log_to_file:
        logger.addHandler(JSONLFileHandler(log_dir or _DEFAULT_LOG_DIR))

    return logger


def get_logger(name: str) -> logging.Logger:
    """Logger for a catalog module, e.g. ``get_logger("feed")`` -> ``catalog.feed``."""
    return logging.getLogger(f"{ROOT_LOGGER}.{name}")


def log_catalog_event(
    event_type: str,
    data: Dict[str, Any],
    level: int = logging.INFO,
) -> None:
    """Log a structured catalog event.

    Args:
        event_type: e.g. 'product_saved', 'import_failed'
        data: Event fields. An optional 'message' becomes the log message;
            the rest are written as JSON keys by the file handler.
    """
    logger = logging.getLogger(ROOT_LOGGER)
    fields = dict(data)
    message = fields.pop("message", event_type)
    logger.log(level, message, extra={"event_type": event_type, "event_data": fields})
