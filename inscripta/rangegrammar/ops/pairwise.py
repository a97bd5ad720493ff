"""
Element-wise set algebra: row ``i`` of x is combined with row ``i`` of y. Both collections must have the same
length, and genomic rows must be on the same sequence. Results keep the columns of x and the row order.

The strand of a result row is the strand of x when both strands agree, and Unstranded otherwise.
"""
from typing import Callable

from inscripta.rangegrammar.collection.ranges import RangeCollection
from inscripta.rangegrammar.exc import DisjointIntervalsException
from inscripta.rangegrammar.location.interval import MISSING_END, MISSING_START, AnyInterval
from inscripta.rangegrammar.location.strand import Strand
from inscripta.rangegrammar.util.object_validation import ObjectValidation


def _result(x: AnyInterval, y: AnyInterval, start: int, end: int) -> AnyInterval:
    strand = x.strand if x.strand == y.strand else Strand.UNSTRANDED
    return x.reset_coordinates(start, end).reset_strand(strand)


def intersect_interval(x: AnyInterval, y: AnyInterval) -> AnyInterval:
    """Shared positions of two intervals. Adjacent intervals give the zero-width interval at their boundary;
    separated intervals give the sentinel ``(0, -1)``."""
    start = max(x.start, y.start)
    end = min(x.end, y.end)
    if end < start - 1:
        return _result(x, y, MISSING_START, MISSING_END)
    return _result(x, y, start, end)


def union_interval(x: AnyInterval, y: AnyInterval) -> AnyInterval:
    if max(x.start, y.start) - min(x.end, y.end) - 1 > 0:
        raise DisjointIntervalsException(f"Intervals neither overlap nor are adjacent: {x!r}, {y!r}")
    return _result(x, y, min(x.start, y.start), max(x.end, y.end))


def setdiff_interval(x: AnyInterval, y: AnyInterval) -> AnyInterval:
    """Positions of x not in y. A fully covered x gives the zero-width interval at its start."""
    if x.overlap_width(y) < 1:
        return _result(x, y, x.start, x.end)
    if y.start <= x.start and x.end <= y.end:
        return _result(x, y, x.start, x.start - 1)
    if x.start < y.start and y.end < x.end:
        raise DisjointIntervalsException(f"Difference of {x!r} and {y!r} is not a single interval")
    if y.start <= x.start:
        return _result(x, y, y.end + 1, x.end)
    return _result(x, y, x.start, y.start - 1)


def span_interval(x: AnyInterval, y: AnyInterval) -> AnyInterval:
    """Smallest interval covering both."""
    return _result(x, y, min(x.start, y.start), max(x.end, y.end))


def between_interval(x: AnyInterval, y: AnyInterval) -> AnyInterval:
    """Positions strictly between two intervals; zero-width when adjacent, the sentinel when overlapping."""
    if x.end < y.start:
        return _result(x, y, x.end + 1, y.start - 1)
    if y.end < x.start:
        return _result(x, y, y.end + 1, x.start - 1)
    return _result(x, y, MISSING_START, MISSING_END)


def _pairwise(x: RangeCollection, y: RangeCollection, func: Callable) -> RangeCollection:
    ObjectValidation.require_same_kind(x, y)
    ObjectValidation.require_same_length(x, y)
    for x_interval, y_interval in zip(x, y):
        ObjectValidation.require_same_sequence(x_interval, y_interval)
    return x.with_intervals([func(x_interval, y_interval) for x_interval, y_interval in zip(x, y)])


def intersect_pairs(x: RangeCollection, y: RangeCollection) -> RangeCollection:
    return _pairwise(x, y, intersect_interval)


def union_pairs(x: RangeCollection, y: RangeCollection) -> RangeCollection:
    return _pairwise(x, y, union_interval)


def setdiff_pairs(x: RangeCollection, y: RangeCollection) -> RangeCollection:
    return _pairwise(x, y, setdiff_interval)


def span_pairs(x: RangeCollection, y: RangeCollection) -> RangeCollection:
    return _pairwise(x, y, span_interval)


def between_pairs(x: RangeCollection, y: RangeCollection) -> RangeCollection:
    return _pairwise(x, y, between_interval)


def gap_pairs(x: RangeCollection, y: RangeCollection, span: bool = False) -> RangeCollection:
    """The gap between each pair of rows, or with ``span`` the full span covering both."""
    return span_pairs(x, y) if span else between_pairs(x, y)
