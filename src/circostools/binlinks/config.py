"""
binlinks configuration.

All options live in one frozen dataclass that is built once (from the
command line, a YAML/JSON file or a plain dict), validated, and then passed
explicitly to the parser, the aggregator and the renderer.
"""

import json
import math
from dataclasses import asdict, dataclass, fields
from enum import IntEnum
from typing import Any, Dict, List, Optional

import yaml

from circostools.exceptions import ConfigurationError


class LinkEnd(IntEnum):
    """Which link endpoint(s) are binned."""
    SOURCE = 0
    TARGET = 1
    BOTH = 2

    @property
    def ends(self) -> tuple:
        if self is LinkEnd.BOTH:
            return (0, 1)
        return (int(self),)


class OutputStyle(IntEnum):
    """Track layouts."""
    TOTAL = 0        # one value per bin
    TOP_TARGET = 1   # top contributing target chromosome per bin
    PER_TARGET = 2   # one line per (bin, target chromosome)
    STACKED = 3      # comma-joined values over all target chromosomes


# Section name accepted in config files holding options for several tools
CONFIG_SECTION = "binlinks"

# Alternative option names
ALIASES = {"file": "links"}


@dataclass(frozen=True)
class BinLinksConfig:
    """Options of the binlinks tool."""

    links: Optional[str] = None
    bin_size: Optional[float] = None
    link_end: LinkEnd = LinkEnd.SOURCE
    min_link_size: Optional[float] = None
    max_link_size: Optional[float] = None
    output_style: OutputStyle = OutputStyle.TOTAL
    color_by_chr: bool = False
    color_prefix: str = ""
    normalize: bool = False
    num: bool = False
    removeintra: bool = False
    log: bool = False
    debug: int = 0

    # =========================================================================
    # Serialization
    # =========================================================================

    def to_dict(self) -> dict:
        d = asdict(self)
        d["link_end"] = int(self.link_end)
        d["output_style"] = int(self.output_style)
        return d

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "BinLinksConfig":
        """
        Create a config from a mapping of option names to values.

        Raises:
            ConfigurationError: Unknown option, conflicting aliases, or a
                value that cannot be converted to the option's type
        """
        options = _canonical_options(d)
        return cls(**{name: _coerce(name, value) for name, value in options.items()})

    @classmethod
    def from_yaml(cls, path: str) -> "BinLinksConfig":
        with open(path, "r") as f:
            d = yaml.safe_load(f)
        return cls.from_dict(d)

    @classmethod
    def from_json(cls, path: str) -> "BinLinksConfig":
        with open(path, "r") as f:
            d = json.load(f)
        return cls.from_dict(d)

    # =========================================================================
    # Validation
    # =========================================================================

    def validate(self) -> List[str]:
        """Check option values, returning a list of problems."""
        problems = []

        if self.bin_size is None:
            problems.append("bin_size is required")
        elif not math.isfinite(self.bin_size) or self.bin_size <= 0:
            problems.append(f"bin_size must be a finite number > 0 (got {self.bin_size})")

        for name in ("min_link_size", "max_link_size"):
            value = getattr(self, name)
            if value is not None and (not math.isfinite(value) or value < 0):
                problems.append(f"{name} must be a finite number >= 0 (got {value})")

        if self.debug < 0:
            problems.append(f"debug level must be >= 0 (got {self.debug})")

        return problems


def _canonical_options(d: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    """Resolve aliases and the optional section, rejecting unknown names."""
    if d is None:
        return {}
    if not isinstance(d, dict):
        raise ConfigurationError(f"Configuration must be a mapping, got {type(d).__name__}")
    if isinstance(d.get(CONFIG_SECTION), dict):
        others = sorted(str(key) for key in d if key != CONFIG_SECTION)
        if others:
            raise ConfigurationError(
                f"Options outside the {CONFIG_SECTION} section: {', '.join(others)}"
            )
        d = d[CONFIG_SECTION]

    known = {f.name for f in fields(BinLinksConfig)}
    options: Dict[str, Any] = {}
    for key, value in d.items():
        name = ALIASES.get(key, key)
        if name not in known:
            raise ConfigurationError(f"Unknown option: {key}")
        if name in options and options[name] != value:
            raise ConfigurationError(
                f"Conflicting values for {name}: {options[name]!r} and {value!r}"
            )
        options[name] = value
    return options


def _coerce(name: str, value: Any) -> Any:
    """Convert a raw option value to the type of the config field."""
    if value is None:
        return None
    try:
        if name in ("bin_size", "min_link_size", "max_link_size"):
            return float(value)
        if name == "link_end":
            return LinkEnd(int(value))
        if name == "output_style":
            return OutputStyle(int(value))
        if name == "debug":
            return int(value)
        if name in ("links", "color_prefix"):
            return str(value)
        return _as_bool(value)
    except (TypeError, ValueError):
        raise ConfigurationError(f"Invalid value for {name}: {value!r}") from None


def _as_bool(value: Any) -> bool:
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in ("1", "yes", "true", "on"):
            return True
        if lowered in ("0", "no", "false", "off", ""):
            return False
        raise ValueError(value)
    return bool(value)


def load_config(
    overrides: Optional[Dict[str, Any]] = None,
    config_file: Optional[str] = None,
) -> BinLinksConfig:
    """
    Build and validate a binlinks config.

    Values in ``overrides`` win over values read from ``config_file``.

    Args:
        overrides: Option values, usually from the command line
        config_file: Optional YAML (.yaml/.yml) or JSON file

    Returns:
        Validated BinLinksConfig

    Raises:
        ConfigurationError: Invalid or missing options
    """
    from circostools.utils.config import read_config_file

    options: Dict[str, Any] = {}
    if config_file:
        options.update(_canonical_options(read_config_file(config_file)))
    if overrides:
        options.update(_canonical_options(overrides))

    config = BinLinksConfig.from_dict(options)
    problems = config.validate()
    if problems:
        raise ConfigurationError("; ".join(problems))
    return config
