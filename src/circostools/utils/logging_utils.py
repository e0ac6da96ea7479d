"""Logging utilities for circostools."""

import logging
import sys
from pathlib import Path
from typing import Optional, TextIO


class LevelPrefixFormatter(logging.Formatter):
    """Prefix each record with its lowercased level name ("debug ...")."""

    def format(self, record: logging.LogRecord) -> str:
        return f"{record.levelname.lower()} {super().format(record)}"


def setup_logger(
    name: str = "circostools",
    log_file: Optional[str] = None,
    level: int = logging.WARNING,
    format_string: Optional[str] = None,
    stream: Optional[TextIO] = None,
) -> logging.Logger:
    """
    Set up and configure a logger.

    Console records go to stderr so that stdout only carries track data.

    Args:
        name: Logger name
        log_file: Optional path to log file
        level: Logging level (default: WARNING)
        format_string: Custom format string for the log file
        stream: Console stream (default: sys.stderr at call time)

    Returns:
        Configured logger instance
    """
    if format_string is None:
        format_string = "%(asctime)s - %(levelname)s - %(message)s"

    logger = logging.getLogger(name)
    logger.setLevel(level)

    # Clear existing handlers
    for handler in logger.handlers:
        handler.close()
    logger.handlers.clear()

    # Console handler
    console_handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(LevelPrefixFormatter("%(message)s"))
    logger.addHandler(console_handler)

    # File handler (optional)
    if log_file is not None:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(level)
        file_handler.setFormatter(logging.Formatter(format_string))
        logger.addHandler(file_handler)

    return logger
