"""Link binning and link-density tracks."""

import logging
import sys
from typing import Optional, TextIO

from circostools.binlinks.aggregate import (
    AggregationCell,
    AggregationTable,
    build_table,
    chromosome_sort_key,
)
from circostools.binlinks.config import BinLinksConfig, LinkEnd, OutputStyle, load_config
from circostools.binlinks.intervals import Interval, make_interval
from circostools.binlinks.parser import Endpoint, Link, iter_links
from circostools.binlinks.render import render_lines, stacked_color_header, write_track

logger = logging.getLogger(__name__)

__all__ = [
    "AggregationCell",
    "AggregationTable",
    "BinLinksConfig",
    "Endpoint",
    "Interval",
    "Link",
    "LinkEnd",
    "OutputStyle",
    "build_table",
    "chromosome_sort_key",
    "iter_links",
    "load_config",
    "make_interval",
    "render_lines",
    "run_binlinks",
    "stacked_color_header",
    "write_track",
]


def run_binlinks(
    config: BinLinksConfig,
    output_file: Optional[str] = None,
    table_file: Optional[str] = None,
    aux: Optional[TextIO] = None,
) -> AggregationTable:
    """
    Bin a link list and write the density track.

    The input path is checked before anything is read, and the whole input is
    aggregated before the first output line is written.

    Args:
        config: Validated binlinks configuration
        output_file: Track output path (default: stdout)
        table_file: Optional TSV export of the raw aggregation table
        aux: Auxiliary stream for the style-3 color list (default: stderr)

    Returns:
        The aggregation table

    Raises:
        InputNotFoundError: If the input path cannot be read
    """
    from circostools.utils.io import open_input, open_output, save_table
    from circostools.utils.validation import validate_file_exists

    validate_file_exists(config.links, "Link file")

    logger.info(f"Input: {config.links or 'stdin'}")
    logger.info(
        f"bin_size={config.bin_size} link_end={int(config.link_end)} "
        f"output_style={int(config.output_style)}"
    )

    with open_input(config.links) as f:
        table = build_table(iter_links(f), config)

    with open_output(output_file) as out:
        write_track(table, config, out, aux if aux is not None else sys.stderr)

    if table_file:
        save_table(table.to_frame(config.bin_size), table_file)

    return table
