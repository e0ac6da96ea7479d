"""
Track rendering for binned links.

Output lines are ``chr start end value [field]``:

    style 0   value = bin total, optional fill_color of the top target
    style 1   top target only, with its fill_color
    style 2   one line per target, highest value first, with fill_color
    style 3   value = comma-joined per-target values over all targets;
              the matching fill_color list is written once to the
              auxiliary stream before any data line
"""

import logging
import math
from typing import Dict, Iterator, List, Optional, TextIO

from circostools.binlinks.aggregate import (
    AggregationCell,
    AggregationTable,
    chromosome_sort_key,
)
from circostools.binlinks.config import BinLinksConfig, OutputStyle
from circostools.binlinks.intervals import bin_interval

logger = logging.getLogger(__name__)

VALUE_FORMAT = "{:.4f}"


def log_scale(value: float) -> float:
    """log10 of a positive value; 0 stays 0."""
    if value <= 0:
        return 0.0
    return math.log10(value)


def format_value(value: float) -> str:
    return VALUE_FORMAT.format(value)


def color_name(chrom: str, config: BinLinksConfig) -> str:
    return f"{config.color_prefix}{chrom}"


def target_values(
    chrom: str,
    targets: Dict[str, AggregationCell],
    config: BinLinksConfig,
) -> Dict[str, float]:
    """Per-target counts or sizes of one bin, with intra links zeroed if requested."""
    values = {}
    for target, cell in targets.items():
        if config.removeintra and target == chrom:
            values[target] = 0
        else:
            values[target] = cell.n if config.num else cell.size
    return values


def rank_targets(values: Dict[str, float]) -> List[str]:
    """Targets by descending value; ties in chromosome order."""
    return sorted(values, key=lambda t: (-values[t], chromosome_sort_key(t)))


def scale(value: float, total: float, config: BinLinksConfig) -> float:
    """Apply normalization (styles 1-3) and log scaling to a per-target value."""
    if config.normalize and total:
        value = value / total
    if config.log:
        value = log_scale(value)
    return value


def _render_bin(
    chrom: str,
    bin_index: int,
    targets: Dict[str, AggregationCell],
    config: BinLinksConfig,
    all_targets: List[str],
) -> Iterator[str]:
    span = bin_interval(bin_index, config.bin_size)
    prefix = f"{chrom} {span.start} {span.end}"
    values = target_values(chrom, targets, config)
    total = sum(values.values())
    style = config.output_style

    if style == OutputStyle.TOTAL:
        value = log_scale(total) if config.log else total
        line = f"{prefix} {format_value(value)}"
        contributing = [t for t in rank_targets(values) if values[t] > 0]
        if config.color_by_chr and contributing:
            line += f" fill_color={color_name(contributing[0], config)}"
        yield line

    elif style in (OutputStyle.TOP_TARGET, OutputStyle.PER_TARGET):
        ranked = rank_targets(values)
        if style == OutputStyle.TOP_TARGET:
            ranked = ranked[:1]
        for target in ranked:
            value = scale(values[target], total, config)
            yield f"{prefix} {format_value(value)} fill_color={color_name(target, config)}"

    else:
        stacked = ",".join(
            format_value(scale(values.get(target, 0), total, config))
            for target in all_targets
        )
        yield f"{prefix} {stacked}"


def render_lines(table: AggregationTable, config: BinLinksConfig) -> Iterator[str]:
    """
    Render the aggregation table as track lines.

    Args:
        table: Populated aggregation table
        config: Validated binlinks configuration

    Yields:
        One output line (without newline) per emitted record
    """
    all_targets = table.target_chromosomes
    for chrom, bin_index, targets in table.iter_bins():
        yield from _render_bin(chrom, bin_index, targets, config, all_targets)


def stacked_color_header(table: AggregationTable, config: BinLinksConfig) -> Optional[str]:
    """fill_color list matching the stacked values of style 3, else None."""
    if config.output_style != OutputStyle.STACKED:
        return None
    colors = ",".join(color_name(t, config) for t in table.target_chromosomes)
    return f"fill_color={colors}"


def write_track(
    table: AggregationTable,
    config: BinLinksConfig,
    out: TextIO,
    aux: TextIO,
) -> int:
    """
    Write the track to ``out`` and the style-3 color list to ``aux``.

    Returns:
        Number of lines written to ``out``
    """
    header = stacked_color_header(table, config)
    if header is not None:
        aux.write(header + "\n")
        aux.flush()

    n_lines = 0
    for line in render_lines(table, config):
        out.write(line + "\n")
        n_lines += 1

    logger.info(f"Wrote {n_lines} lines (output_style={int(config.output_style)})")
    return n_lines
