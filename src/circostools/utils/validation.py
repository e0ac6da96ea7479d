"""Input validation utilities for circostools."""

import logging
import os
from pathlib import Path
from typing import Optional

from circostools.exceptions import InputNotFoundError

logger = logging.getLogger(__name__)


def is_stdin(filepath: Optional[str]) -> bool:
    return filepath is None or filepath == "-"


def validate_file_exists(filepath: Optional[str], description: str = "File") -> None:
    """
    Validate that an input file exists and can be read.

    None and "-" stand for standard input and always pass.

    Args:
        filepath: Path to check
        description: Description for error message

    Raises:
        InputNotFoundError: If the file is missing or unreadable
    """
    if is_stdin(filepath):
        return

    path = Path(filepath)
    if not path.is_file():
        raise InputNotFoundError(f"{description} not found: {filepath}")
    if not os.access(path, os.R_OK):
        raise InputNotFoundError(f"{description} is not readable: {filepath}")

    logger.debug(f"{description}: {filepath}")
