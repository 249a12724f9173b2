"""
Logging setup shared by every meetpoint module.

Console records go to stderr through Rich. `meetpoint serve` additionally
appends JSON lines to `serve.log` in the working directory.
"""

import logging
import sys
import json
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler

SERVE_LOG = "serve.log"


class JSONFormatter(logging.Formatter):
    """One JSON object per record."""
    def format(self, record: logging.LogRecord) -> str:
        return json.dumps({
            "timestamp": self.formatTime(record, self.datefmt),
            "level":     record.levelname,
            "logger":    record.name,
            "message":   record.getMessage(),
        })


def _serving() -> bool:
    return len(sys.argv) > 1 and sys.argv[1] == "serve"


def get_logger(name: str, level: int | str = logging.INFO) -> logging.Logger:
    """
    Logger for a meetpoint module, with handlers attached on first use.

    Parameters
    ----------
    name
        Module name, usually __name__.
    level
        Initial level; `set_level` changes it later.
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)
    if logger.handlers:
        return logger

    console_handler = RichHandler(console=Console(stderr=True), rich_tracebacks=True)
    console_handler.setLevel(level)
    logger.addHandler(console_handler)

    if _serving():
        file_handler = logging.FileHandler(Path.cwd() / SERVE_LOG, mode="a", encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(JSONFormatter())
        logger.addHandler(file_handler)
    return logger


def set_level(level: int | str) -> None:
    """
    Change the level of every meetpoint logger and its handlers (`meetpoint -v`).
    """
    for name, logger in logging.Logger.manager.loggerDict.items():
        if not name.startswith("meetpoint") or not isinstance(logger, logging.Logger):
            continue
        logger.setLevel(level)
        for handler in logger.handlers:
            handler.setLevel(level)
