"""Binning of link endpoints into a sparse aggregation table."""

import logging
import re
from dataclasses import dataclass
from itertools import groupby
from typing import Dict, Iterable, Iterator, List, Tuple

import pandas as pd

from circostools.binlinks.config import BinLinksConfig
from circostools.binlinks.intervals import bin_interval, bin_overlaps
from circostools.binlinks.parser import Link

logger = logging.getLogger(__name__)

_NUMBER = re.compile(r"\d+")

CellKey = Tuple[str, int, str]

TABLE_COLUMNS = ["chr", "bin", "start", "end", "target", "size", "n"]


def chromosome_sort_key(name: str) -> tuple:
    """
    Numeric-aware sort key for chromosome names.

    The first embedded integer compares numerically (hs2 < hs10); names
    without digits sort after numbered ones; ties fall back to the name.
    """
    match = _NUMBER.search(name)
    if match is None:
        return (1, 0, name)
    return (0, int(match.group()), name)


@dataclass
class AggregationCell:
    """Accumulated overlap for one (source chr, bin, target chr)."""
    size: int = 0
    n: int = 0


class AggregationTable:
    """
    Sparse table of AggregationCells keyed by (source chr, bin, target chr).

    Also tracks every chromosome seen as a source or as a target, in
    encounter order.
    """

    def __init__(self):
        self.cells: Dict[CellKey, AggregationCell] = {}
        self._sources: Dict[str, None] = {}
        self._targets: Dict[str, None] = {}

    def __len__(self) -> int:
        return len(self.cells)

    def __getitem__(self, key: CellKey) -> AggregationCell:
        return self.cells[key]

    def add(self, chrom: str, bin_index: int, other_chrom: str, overlap: int) -> None:
        """Add one endpoint's overlap with a bin."""
        cell = self.cells.get((chrom, bin_index, other_chrom))
        if cell is None:
            cell = self.cells[(chrom, bin_index, other_chrom)] = AggregationCell()
        cell.size += overlap
        if overlap > 0:
            cell.n += 1

    def register(self, chrom: str, other_chrom: str) -> None:
        self._sources.setdefault(chrom)
        self._targets.setdefault(other_chrom)

    @property
    def source_chromosomes(self) -> List[str]:
        return sorted(self._sources, key=chromosome_sort_key)

    @property
    def target_chromosomes(self) -> List[str]:
        return sorted(self._targets, key=chromosome_sort_key)

    def iter_bins(self) -> Iterator[Tuple[str, int, Dict[str, AggregationCell]]]:
        """
        Walk bins in render order.

        Yields:
            (source chr, bin index, {target chr: cell}) sorted by source
            chromosome (numeric-aware) and then by bin
        """
        keys = sorted(self.cells, key=lambda k: (chromosome_sort_key(k[0]), k[1]))
        for (chrom, bin_index), group in groupby(keys, key=lambda k: (k[0], k[1])):
            yield chrom, bin_index, {k[2]: self.cells[k] for k in group}

    def to_frame(self, bin_size: float) -> pd.DataFrame:
        """Cells as a DataFrame, one row per cell in render order."""
        rows = []
        for chrom, bin_index, targets in self.iter_bins():
            span = bin_interval(bin_index, bin_size)
            for target in sorted(targets, key=chromosome_sort_key):
                cell = targets[target]
                rows.append([chrom, bin_index, span.start, span.end, target, cell.size, cell.n])
        return pd.DataFrame(rows, columns=TABLE_COLUMNS)


def passes_size_filter(link: Link, config: BinLinksConfig) -> bool:
    """
    Check both endpoints against min_link_size / max_link_size.

    Both bounds are inclusive and apply to each endpoint's cardinality.
    """
    for end in link:
        size = end.interval.cardinality
        if config.min_link_size is not None and size < config.min_link_size:
            return False
        if config.max_link_size is not None and size > config.max_link_size:
            return False
    return True


def build_table(links: Iterable[Link], config: BinLinksConfig) -> AggregationTable:
    """
    Bin the selected endpoints of every link into an aggregation table.

    Args:
        links: Parsed links, consumed once
        config: Validated binlinks configuration

    Returns:
        Populated AggregationTable
    """
    table = AggregationTable()
    ends = config.link_end.ends
    n_links = 0
    n_filtered = 0

    for link in links:
        n_links += 1
        if not passes_size_filter(link, config):
            n_filtered += 1
            if config.debug:
                logger.debug(
                    f"link {link.link_id} filtered by size "
                    f"{link.source.interval.cardinality} {link.target.interval.cardinality}"
                )
            continue

        for e in ends:
            this, other = link[e], link[1 - e]
            if config.debug:
                logger.debug(
                    f"link {link.link_id} end {e} {this.chrom} "
                    f"{this.interval.start} {this.interval.end} other {other.chrom}"
                )
            for bin_index, overlap in bin_overlaps(this.interval, config.bin_size):
                table.add(this.chrom, bin_index, other.chrom, overlap)
                if config.debug > 1:
                    logger.debug(
                        f"cell {this.chrom} {bin_index} {other.chrom} overlap {overlap}"
                    )
            table.register(this.chrom, other.chrom)

    logger.info(
        f"Read {n_links} links, {n_filtered} filtered by size, "
        f"{len(table)} cells over {len(table.source_chromosomes)} chromosomes"
    )
    return table
