"""
The Overlap Engine computes the match relation between two collections: every ``(x_row, y_row)`` pair whose
intervals overlap under the given tolerances, ordered by ``x_row`` and then ``y_row``.

``y`` is indexed once (see :class:`~inscripta.rangegrammar.index.IntervalIndex`) and queried once per row of ``x``.
Matches are produced lazily by :func:`iter_matches`; :func:`match` materializes them.
"""
import logging
from dataclasses import dataclass
from typing import Iterator, List, Tuple

from inscripta.rangegrammar.collection.ranges import RangeCollection
from inscripta.rangegrammar.exc import ValidationException
from inscripta.rangegrammar.index.interval_index import OverlapMode
from inscripta.rangegrammar.util.object_validation import ObjectValidation

logger = logging.getLogger(__name__)

Match = Tuple[int, int]


@dataclass(frozen=True)
class OverlapParameters:
    """Tolerances of the overlap test.

    Args:
        maxgap: Positions added to both ends of each x interval before testing; at least -1. A negative value
            keeps x in place and requires at least ``-maxgap`` shared positions, so -1 is plain overlap.
        minoverlap: Minimum number of shared positions; at least 0.
        mode: ``any``, ``within`` (x inside y) or ``contains`` (y inside x).
        directed: Only match intervals on the same strand. Two Unstranded intervals match each other.
    """

    maxgap: int = 0
    minoverlap: int = 1
    mode: OverlapMode = OverlapMode.ANY
    directed: bool = False

    def __post_init__(self):
        if self.maxgap < -1:
            raise ValidationException(f"maxgap must be >= -1: {self.maxgap}")
        if self.minoverlap < 0:
            raise ValidationException(f"minoverlap must be >= 0: {self.minoverlap}")
        object.__setattr__(self, "mode", OverlapMode.from_value(self.mode))


def _iter_matches(
    x: RangeCollection, y: RangeCollection, parameters: OverlapParameters, threads: int
) -> Iterator[Match]:
    index = y.index(stranded=parameters.directed, threads=threads)
    for x_row, interval in enumerate(x):
        y_rows = index.query_overlaps(interval, parameters.maxgap, parameters.minoverlap, parameters.mode)
        for y_row in sorted(y_rows):
            yield x_row, y_row


def iter_matches(
    x: RangeCollection,
    y: RangeCollection,
    maxgap: int = 0,
    minoverlap: int = 1,
    mode: OverlapMode = OverlapMode.ANY,
    directed: bool = False,
    threads: int = 1,
) -> Iterator[Match]:
    """Lazily yields matching ``(x_row, y_row)`` pairs in ``x_row``, ``y_row`` order. Arguments are validated
    before the first pair is requested."""
    ObjectValidation.require_same_kind(x, y)
    parameters = OverlapParameters(maxgap, minoverlap, mode, directed)
    return _iter_matches(x, y, parameters, threads)


def match(
    x: RangeCollection,
    y: RangeCollection,
    maxgap: int = 0,
    minoverlap: int = 1,
    mode: OverlapMode = OverlapMode.ANY,
    directed: bool = False,
    threads: int = 1,
) -> List[Match]:
    """All matching ``(x_row, y_row)`` pairs, sorted by ``x_row`` and then ``y_row``."""
    matches = list(iter_matches(x, y, maxgap, minoverlap, mode, directed, threads))
    logger.debug(f"Matched {len(x)} x rows against {len(y)} y rows: {len(matches)} pairs")
    return matches


def self_match(
    x: RangeCollection,
    maxgap: int = 0,
    minoverlap: int = 1,
    mode: OverlapMode = OverlapMode.ANY,
    directed: bool = False,
) -> List[Match]:
    """Matches of a collection against itself, without the reflexive pairs."""
    return [(i, j) for i, j in iter_matches(x, x, maxgap, minoverlap, mode, directed) if i != j]


def count_overlaps(
    x: RangeCollection,
    y: RangeCollection,
    name: str = "n_overlaps",
    maxgap: int = 0,
    minoverlap: int = 1,
    mode: OverlapMode = OverlapMode.ANY,
    directed: bool = False,
) -> RangeCollection:
    """Adds a column counting the y intervals matched by each x interval."""
    counts = [0] * len(x)
    for x_row, _ in iter_matches(x, y, maxgap, minoverlap, mode, directed):
        counts[x_row] += 1
    return x.mutate(**{name: counts})


def _matched_rows(x, y, maxgap, minoverlap, mode, directed) -> List[bool]:
    matched = [False] * len(x)
    for x_row, _ in iter_matches(x, y, maxgap, minoverlap, mode, directed):
        matched[x_row] = True
    return matched


def filter_by_overlaps(
    x: RangeCollection,
    y: RangeCollection,
    maxgap: int = 0,
    minoverlap: int = 1,
    mode: OverlapMode = OverlapMode.ANY,
    directed: bool = False,
) -> RangeCollection:
    """Rows of x matching at least one y interval, in their original order."""
    return x.filter(_matched_rows(x, y, maxgap, minoverlap, mode, directed))


def filter_by_non_overlaps(
    x: RangeCollection,
    y: RangeCollection,
    maxgap: int = 0,
    minoverlap: int = 1,
    mode: OverlapMode = OverlapMode.ANY,
    directed: bool = False,
) -> RangeCollection:
    """Rows of x matching no y interval, in their original order."""
    return x.filter([not matched for matched in _matched_rows(x, y, maxgap, minoverlap, mode, directed)])
