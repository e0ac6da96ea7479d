"""Stream and file I/O utilities for circostools."""

import logging
from pathlib import Path
from typing import IO, Optional, Union

import click
import pandas as pd

logger = logging.getLogger(__name__)


def open_input(filepath: Optional[str] = None) -> IO:
    """
    Open a text input stream.

    Undecodable bytes are replaced with U+FFFD so the parser can skip the
    affected lines instead of aborting the run.

    Args:
        filepath: Input path; None or "-" reads standard input

    Returns:
        File object usable as a context manager (stdin is never closed)
    """
    return click.open_file(filepath or "-", "r", errors="replace")


def open_output(filepath: Optional[str] = None) -> IO:
    """
    Open a text output stream.

    Args:
        filepath: Output path; None or "-" writes standard output

    Returns:
        File object usable as a context manager (stdout is never closed)
    """
    if filepath and filepath != "-":
        Path(filepath).parent.mkdir(parents=True, exist_ok=True)
    return click.open_file(filepath or "-", "w")


def save_table(
    df: pd.DataFrame,
    filepath: Union[str, Path],
) -> None:
    """
    Save DataFrame as a tab-separated table.

    Args:
        df: DataFrame to save
        filepath: Output file path
    """
    filepath = Path(filepath)
    filepath.parent.mkdir(parents=True, exist_ok=True)

    df.to_csv(filepath, sep="\t", index=False)
    logger.info(f"Saved {len(df)} records to {filepath.name}")
