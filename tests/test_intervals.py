"""Tests for interval and bin arithmetic."""

import pytest

from circostools.binlinks.intervals import (
    Interval,
    bin_index,
    bin_interval,
    bin_overlaps,
    make_interval,
)


class TestMakeInterval:
    """Test interval normalization."""

    def test_inverted_range_is_swapped(self):
        """Start and end are swapped when given in reverse."""
        assert make_interval(200, 100) == Interval(100, 200)

    def test_single_point(self):
        """Equal coordinates give a one-base interval."""
        interval = make_interval(42, 42)
        assert interval == Interval(42, 42)
        assert interval.cardinality == 1

    @pytest.mark.parametrize("x,y", [(0, 0), (1, 10), (10, 1), (150, 250), (999, 3)])
    def test_cardinality_and_symmetry(self, x, y):
        """Cardinality is |x - y| + 1 and argument order does not matter."""
        assert make_interval(x, y).cardinality == abs(x - y) + 1
        assert make_interval(x, y) == make_interval(y, x)


class TestOverlap:
    """Test interval intersection."""

    def test_partial_overlap(self):
        assert Interval(100, 199).overlap(Interval(150, 250)) == 50

    def test_disjoint(self):
        assert Interval(0, 99).overlap(Interval(100, 200)) == 0

    def test_touching_single_base(self):
        assert Interval(200, 299).overlap(Interval(100, 200)) == 1


class TestBins:
    """Test bin layout."""

    def test_bin_interval(self):
        """Bin b covers [b*size, (b+1)*size - 1]."""
        assert bin_interval(0, 100) == Interval(0, 99)
        assert bin_interval(2, 100) == Interval(200, 299)

    def test_bin_index(self):
        assert bin_index(0, 100) == 0
        assert bin_index(99, 100) == 0
        assert bin_index(100, 100) == 1

    @pytest.mark.parametrize("bin_size", [1, 7, 100, 2.5, 1000.0])
    def test_bins_tile_without_gaps(self, bin_size):
        """Consecutive bins touch and never overlap."""
        for b in range(50):
            assert bin_interval(b, bin_size).end + 1 == bin_interval(b + 1, bin_size).start
        assert bin_interval(0, bin_size).start == 0

    def test_bin_overlaps_example(self):
        """[100, 200] with 100 bp bins: 100 bases in bin 1, 1 base in bin 2."""
        assert list(bin_overlaps(Interval(100, 200), 100)) == [(1, 100), (2, 1)]

    @pytest.mark.parametrize("interval", [
        Interval(0, 9),
        Interval(5, 5),
        Interval(123, 4567),
        Interval(1000, 1999),
    ])
    @pytest.mark.parametrize("bin_size", [1, 3, 100, 2.5, 333.3])
    def test_overlap_conservation(self, interval, bin_size):
        """Overlaps over all covering bins add up to the interval size."""
        overlaps = [overlap for _, overlap in bin_overlaps(interval, bin_size)]
        assert sum(overlaps) == interval.cardinality
        assert all(overlap > 0 for overlap in overlaps)

    def test_bin_index_matches_fractional_bin_bounds(self):
        """Positions map to the bin whose truncated range holds them."""
        assert bin_index(999, 333.3) == 3
        assert bin_interval(3, 333.3).start == 999
        for position in range(0, 2000, 7):
            span = bin_interval(bin_index(position, 333.3), 333.3)
            assert span.start <= position <= span.end
