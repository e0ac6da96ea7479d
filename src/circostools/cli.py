"""
circostools CLI - Command Line Interface for Circos data preparation.

Usage:
    circostools <command> [options]

Each command is an independent conversion tool.
"""

import logging

import click
from click.core import ParameterSource

from circostools import __version__

# CLI parameters that map onto BinLinksConfig fields
BINLINKS_OPTIONS = [
    "links",
    "bin_size",
    "link_end",
    "min_link_size",
    "max_link_size",
    "output_style",
    "color_by_chr",
    "color_prefix",
    "normalize",
    "num",
    "removeintra",
    "log",
    "debug",
]


@click.group()
@click.version_option(version=__version__, prog_name="circostools")
def main():
    """circostools - Utilities for preparing Circos input data.

    Each command is an independent conversion tool. Use
    'circostools <command> --help' for detailed usage of each command.
    """
    pass


# ============================================================================
# Link Commands
# ============================================================================

@main.command()
@click.option("-i", "--links", "--file", "links", help="Link file (default: stdin)")
@click.option("-b", "--bin-size", type=float, help="Bin size in bases (required)")
@click.option("--link-end", type=int, default=0, show_default=True,
              help="Endpoint to bin: 0=source, 1=target, 2=both")
@click.option("--min-link-size", type=float, help="Minimum size of both link ends")
@click.option("--max-link-size", type=float,
              help="Maximum size of both link ends (applies to each end)")
@click.option("--output-style", type=int, default=0, show_default=True,
              help="0=total, 1=top target, 2=per target, 3=stacked")
@click.option("--color-by-chr", is_flag=True,
              help="Style 0: add fill_color of the top target chromosome")
@click.option("--color-prefix", default="", help="Prefix for chromosome color names")
@click.option("--normalize", is_flag=True,
              help="Styles 1-3: divide target values by the bin total")
@click.option("--num", is_flag=True, help="Count links instead of summing overlap")
@click.option("--removeintra", is_flag=True,
              help="Ignore links whose target is the source chromosome")
@click.option("--log", is_flag=True, help="Report log10 of values (0 stays 0)")
@click.option("--debug", count=True, help="Diagnostics on stderr (repeat for more)")
@click.option("-c", "--config", "config_file", help="Config file (YAML/JSON)")
@click.option("-o", "--output", help="Output track file (default: stdout)")
@click.option("--table", "table_file", help="Write the raw bin table as TSV")
@click.option("--log-file", help="Also write log messages to this file")
@click.option("-v", "--verbose", is_flag=True, help="Verbose output")
@click.pass_context
def binlinks(ctx, links, bin_size, link_end, min_link_size, max_link_size,
             output_style, color_by_chr, color_prefix, normalize, num,
             removeintra, log, debug, config_file, output, table_file,
             log_file, verbose):
    """Bin links into a link-density track.

    Reads a link list (one link per line, or two lines per link) and sums,
    for every bin of --bin-size bases, the overlap (or, with --num, the
    number) of links per target chromosome. Options given here override
    those read from --config.
    """
    from circostools.binlinks import load_config, run_binlinks
    from circostools.exceptions import ConfigurationError, InputNotFoundError
    from circostools.utils.logging_utils import setup_logger

    if debug:
        level = logging.DEBUG
    elif verbose:
        level = logging.INFO
    else:
        level = logging.WARNING
    setup_logger(log_file=log_file, level=level)

    overrides = {
        name: ctx.params[name]
        for name in BINLINKS_OPTIONS
        if ctx.get_parameter_source(name) is not ParameterSource.DEFAULT
    }

    try:
        config = load_config(overrides, config_file)
        if config.debug and level > logging.DEBUG:
            setup_logger(log_file=log_file, level=logging.DEBUG)
        run_binlinks(config, output_file=output, table_file=table_file)
    except (ConfigurationError, InputNotFoundError) as e:
        raise click.ClickException(str(e)) from e


if __name__ == "__main__":
    main()
