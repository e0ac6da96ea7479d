"""Utility modules for circostools."""

from circostools.utils.config import read_config_file
from circostools.utils.io import open_input, open_output, save_table
from circostools.utils.logging_utils import setup_logger
from circostools.utils.validation import is_stdin, validate_file_exists
