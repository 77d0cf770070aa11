"""Logging configuration for the catalog filters.

Provides console output plus structured JSONL files, so filter recomputes
and navigation events can be replayed when debugging a session.
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
    "log_filter_event",
    "LOG_DIR",
]

LOG_DIR = Path(__file__).parent.parent / "logs"


class JSONLFileHandler(logging.Handler):
    """Writes one JSON object per record, one file per day."""

    def __init__(self, log_dir: Path, prefix: str = "shopfilter"):
        super().__init__()
        self.log_dir = log_dir
        self.log_dir.mkdir(parents=True, exist_ok=True)
        self.prefix = prefix

    def _get_log_file(self) -> Path:
        today = datetime.now().strftime("%Y%m%d")
        return self.log_dir / f"{self.prefix}_{today}.jsonl"

    def emit(self, record: logging.LogRecord) -> None:
        try:
            entry = {
                "timestamp": datetime.now().isoformat(),
                "level": record.levelname,
                "logger": record.name,
                "message": record.getMessage(),
            }

            if hasattr(record, "event_type"):
                entry["event_type"] = record.event_type
            if hasattr(record, "extra_data"):
                entry.update(record.extra_data)

            with open(self._get_log_file(), "a", encoding="utf-8") as f:
                f.write(json.dumps(entry, ensure_ascii=False, default=str) + "\n")

        except Exception:
            self.handleError(record)


class ColoredConsoleHandler(logging.StreamHandler):
    """Console handler that colors the level name on a TTY."""

    # ANSI escape per level name
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
        if hasattr(self.stream, "isatty") and self.stream.isatty():
            color = self.COLORS.get(record.levelname, "")
            if color:
                message = message.replace(
                    record.levelname, f"{color}{record.levelname}{self.RESET}", 1
                )
        return message


def setup_logging(
    level: int = logging.INFO,
    log_to_file: bool = True,
    log_to_console: bool = True,
    log_dir: Optional[Path] = None,
) -> logging.Logger:
    """Attach fresh handlers to the ``shopfilter`` logger.

    Earlier handlers are closed first, so calling this again (for example
    once per CLI run) never duplicates output. The JSONL file takes
    everything the logger lets through, so ``recompute`` events only reach
    it at debug level.

    Args:
        level: Threshold for the package logger and the console.
        log_to_file: Append structured records under ``log_dir``.
        log_to_console: Print human-readable lines to stdout.
        log_dir: Directory for the daily files; ``LOG_DIR`` when omitted.

    Returns:
        The ``shopfilter`` logger.
    """
    logger = logging.getLogger("shopfilter")
    logger.setLevel(level)

    for handler in list(logger.handlers):
        handler.close()
    logger.handlers.clear()

    if log_to_console:
        console_handler = ColoredConsoleHandler(sys.stdout)
        console_handler.setLevel(level)
        console_handler.setFormatter(logging.Formatter(
            "%(asctime)s [%(levelname)s] %(message)s",
            datefmt="%H:%M:%S"
        ))
        logger.addHandler(console_handler)

    if log_to_file:
        file_handler = JSONLFileHandler(log_dir or LOG_DIR)
        file_handler.setLevel(logging.DEBUG)
        logger.addHandler(file_handler)

    return logger


def get_logger(name: str = "shopfilter") -> logging.Logger:
    """Get a logger, prefixing ``name`` with 'shopfilter.' when needed."""
    if name == "shopfilter" or name.startswith("shopfilter."):
        return logging.getLogger(name)
    return logging.getLogger(f"shopfilter.{name}")


def log_filter_event(
    event_type: str,
    data: Dict[str, Any],
    level: int = logging.INFO,
    logger_name: str = "shopfilter",
) -> None:
    """Emit one session event as a structured record.

    The session reports ``navigate``, ``recompute`` and ``clear`` through
    here. Every key of ``data`` except ``message`` lands as a top-level field
    of the JSONL entry; ``message`` (or the event name) is the console text.
    Nothing is built when ``level`` is filtered out.
    """
    logger = get_logger(logger_name)
    if not logger.isEnabledFor(level):
        return

    record = logger.makeRecord(
        logger.name,
        level,
        "(shopfilter)",
        0,
        data.get("message", event_type),
        (),
        None,
    )
    record.event_type = event_type
    record.extra_data = {k: v for k, v in data.items() if k != "message"}

    logger.handle(record)
