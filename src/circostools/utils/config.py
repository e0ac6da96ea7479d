"""Configuration file reading for circostools."""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Union

import yaml

from circostools.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

YAML_SUFFIXES = [".yaml", ".yml"]


def read_config_file(path: Union[str, Path]) -> Dict[str, Any]:
    """
    Read a YAML or JSON configuration file into a dict.

    Files ending in .yaml/.yml are parsed as YAML, anything else as JSON.
    An empty file gives an empty dict.

    Args:
        path: Configuration file path

    Returns:
        Mapping of option names to values

    Raises:
        ConfigurationError: If the file is missing, unparsable, or does not
            hold a mapping
    """
    path = Path(path)
    if not path.is_file():
        raise ConfigurationError(f"Configuration file not found: {path}")

    try:
        with open(path, "r") as f:
            if path.suffix in YAML_SUFFIXES:
                d = yaml.safe_load(f)
            else:
                d = json.load(f)
    except (yaml.YAMLError, json.JSONDecodeError) as e:
        raise ConfigurationError(f"Cannot parse configuration file {path}: {e}") from e

    if d is None:
        d = {}
    if not isinstance(d, dict):
        raise ConfigurationError(f"Configuration file {path} must contain a mapping")

    logger.info(f"Loaded configuration from {path}")
    return d
