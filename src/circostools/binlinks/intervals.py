"""Closed integer intervals and fixed-size genomic bins."""

import math
from typing import Iterator, NamedTuple, Tuple


class Interval(NamedTuple):
    """Closed interval [start, end] with start <= end."""

    start: int
    end: int

    @property
    def cardinality(self) -> int:
        return self.end - self.start + 1

    def overlap(self, other: "Interval") -> int:
        """Number of positions shared with another interval."""
        return max(0, min(self.end, other.end) - max(self.start, other.start) + 1)


def make_interval(x: int, y: int) -> Interval:
    """
    Build an interval from two coordinates given in either order.

    Inverted ranges are swapped; equal coordinates give a single-position
    interval.
    """
    if x > y:
        x, y = y, x
    return Interval(int(x), int(y))


def bin_index(position: int, bin_size: float) -> int:
    """
    Index of the bin holding a position.

    This is floor(position / bin_size), corrected by one step where a
    fractional bin size makes the truncated bin boundaries disagree with it.
    """
    index = math.floor(position / bin_size)
    while bin_interval(index, bin_size).start > position:
        index -= 1
    while bin_interval(index, bin_size).end < position:
        index += 1
    return index


def bin_interval(index: int, bin_size: float) -> Interval:
    """Genomic range covered by a bin, anchored at 0."""
    return Interval(int(index * bin_size), int((index + 1) * bin_size) - 1)


def bin_overlaps(interval: Interval, bin_size: float) -> Iterator[Tuple[int, int]]:
    """
    Walk the bins covering an interval.

    Args:
        interval: Endpoint interval
        bin_size: Bin width in bases

    Yields:
        (bin index, overlap between the bin range and the interval)
    """
    first = bin_index(interval.start, bin_size)
    last = bin_index(interval.end, bin_size)
    for index in range(first, last + 1):
        yield index, bin_interval(index, bin_size).overlap(interval)
