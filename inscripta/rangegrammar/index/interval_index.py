"""
The Interval Index answers overlap and nearest-neighbor queries against one side of a binary operation.

One :class:`PartitionIndex` is built per partition (sequence, or sequence and strand for directed queries). Each
partition holds an augmented, self-balancing interval tree from :mod:`intervaltree` for overlap candidates, and
two sorted arrays (by start and by end) answering precede/follow queries by binary search.

:mod:`intervaltree` stores half-open intervals and rejects null ones, so every closed ``[start, end]`` is stored
as ``[start, end + 1)``, zero-width intervals are widened to one position, and every candidate is re-tested
against its real coordinates.
"""
import logging
from bisect import bisect_left, bisect_right
from collections import defaultdict
from concurrent.futures import ThreadPoolExecutor
from typing import Dict, Hashable, List, Optional, Sequence, Tuple

from intervaltree import IntervalTree

from inscripta.rangegrammar.location.distance import Direction
from inscripta.rangegrammar.location.interval import AnyInterval
from inscripta.rangegrammar.util.enum import HasMemberMixin

logger = logging.getLogger(__name__)


class OverlapMode(str, HasMemberMixin):
    """Containment requirement on top of positional overlap, from the point of view of the query interval."""

    ANY = "any"
    # the query lies inside the indexed interval
    WITHIN = "within"
    # the indexed interval lies inside the query
    CONTAINS = "contains"


class PartitionIndex:
    """Index over the intervals of a single partition. Rows are the row indices of the source collection."""

    def __init__(self, intervals: Sequence[AnyInterval], rows: Sequence[int]):
        self._intervals: Dict[int, AnyInterval] = {row: intervals[row] for row in rows}
        self._tree = IntervalTree.from_tuples(
            (interval.start, max(interval.end, interval.start) + 1, row) for row, interval in self._intervals.items()
        )
        by_start = sorted(rows, key=lambda r: (intervals[r].start, r))
        self._rows_by_start = by_start
        self._starts = [intervals[r].start for r in by_start]
        # among equal ends the last entry has the smallest start, then the smallest row
        by_end = sorted(rows, key=lambda r: (intervals[r].end, -intervals[r].start, -r))
        self._rows_by_end = by_end
        self._ends = [intervals[r].end for r in by_end]

    def __len__(self):
        return len(self._intervals)

    def __getitem__(self, row: int) -> AnyInterval:
        return self._intervals[row]

    def _candidates(self, lo: int, hi: int) -> List[int]:
        """Rows whose interval satisfies ``end >= lo`` and ``start <= hi``."""
        if lo <= hi:
            hits = self._tree.overlap(lo, hi + 1)
        else:
            hits = self._tree.at(lo)
        return [
            hit.data
            for hit in hits
            if self._intervals[hit.data].end >= lo and self._intervals[hit.data].start <= hi
        ]

    def _sorted(self, rows: List[int]) -> List[int]:
        return sorted(rows, key=lambda r: (self._intervals[r].start, r))

    def query_overlaps(
        self,
        interval: AnyInterval,
        maxgap: int = 0,
        minoverlap: int = 1,
        mode: OverlapMode = OverlapMode.ANY,
    ) -> List[int]:
        """Rows matching the query, sorted ascending by start and then by row.

        Args:
            interval: The query.
            maxgap: The query is extended by this many positions on both ends before testing. A negative value
                leaves the query in place and instead requires at least ``-maxgap`` shared positions.
            minoverlap: Minimum number of shared positions between the (extended) query and a match.
            mode: Containment requirement; see :class:`OverlapMode`.
        """
        if maxgap < 0:
            query_start, query_end = interval.start, interval.end
            minoverlap = max(minoverlap, -maxgap)
        else:
            query_start = interval.start - maxgap
            query_end = interval.end + maxgap
        matches = []
        for row in self._candidates(query_start + minoverlap - 1, query_end - minoverlap + 1):
            other = self._intervals[row]
            if min(query_end, other.end) - max(query_start, other.start) + 1 < minoverlap:
                continue
            if mode is OverlapMode.WITHIN and not (other.start <= interval.start and interval.end <= other.end):
                continue
            if mode is OverlapMode.CONTAINS and not (interval.start <= other.start and other.end <= interval.end):
                continue
            matches.append(row)
        return self._sorted(matches)

    def first_after(self, position: int) -> Optional[int]:
        """Row of the interval with the smallest start strictly greater than ``position``."""
        i = bisect_right(self._starts, position)
        return self._rows_by_start[i] if i < len(self._starts) else None

    def last_before(self, position: int) -> Optional[int]:
        """Row of the interval with the largest end strictly less than ``position``."""
        i = bisect_left(self._ends, position)
        return self._rows_by_end[i - 1] if i > 0 else None

    def query_nearest(self, interval: AnyInterval, direction: Direction = Direction.NEAREST) -> Optional[int]:
        """Row of the nearest indexed interval, or None.

        ``PRECEDE`` finds intervals starting after the query ends (the query precedes them), ``FOLLOW`` finds
        intervals ending before the query starts. ``NEAREST`` ranks by the number of positions between the two
        intervals, so overlapping and adjacent intervals tie at 0; ties go to the smaller start, then the smaller
        row.
        """
        if direction is Direction.PRECEDE:
            return self.first_after(interval.end)
        if direction is Direction.FOLLOW:
            return self.last_before(interval.start)
        candidates = []
        overlapping = self._candidates(interval.start, interval.end)
        if overlapping:
            candidates.append((0, self._sorted(overlapping)[0]))
        followed = self.last_before(interval.start)
        if followed is not None:
            candidates.append((interval.start - self._intervals[followed].end - 1, followed))
        preceded = self.first_after(interval.end)
        if preceded is not None:
            candidates.append((self._intervals[preceded].start - interval.end - 1, preceded))
        if not candidates:
            return None
        _, row = min(candidates, key=lambda item: (item[0], self._intervals[item[1]].start, item[1]))
        return row


def partition_key(interval: AnyInterval, stranded: bool = False) -> Hashable:
    if stranded:
        return interval.sequence, interval.strand
    return interval.sequence


class IntervalIndex:
    """A set of :class:`PartitionIndex` objects, one per partition of a collection.

    Indices are immutable once built, so a single index can be queried from several threads.
    """

    def __init__(self, intervals: Sequence[AnyInterval], stranded: bool = False, threads: int = 1):
        """
        Parameters
        ----------
        intervals
            Intervals of the collection, in row order
        stranded
            Partition by sequence and strand instead of sequence only
        threads
            Number of worker threads used to build partitions
        """
        self.stranded = stranded
        rows_by_key: Dict[Hashable, List[int]] = defaultdict(list)
        for row, interval in enumerate(intervals):
            rows_by_key[partition_key(interval, stranded)].append(row)
        keys = list(rows_by_key)
        if threads > 1 and len(keys) > 1:
            with ThreadPoolExecutor(max_workers=threads) as pool:
                built = list(pool.map(lambda key: PartitionIndex(intervals, rows_by_key[key]), keys))
        else:
            built = [PartitionIndex(intervals, rows_by_key[key]) for key in keys]
        self._partitions: Dict[Hashable, PartitionIndex] = dict(zip(keys, built))
        logger.debug(f"Indexed {len(intervals)} intervals in {len(keys)} partitions (stranded={stranded})")

    def __len__(self):
        return sum(len(partition) for partition in self._partitions.values())

    @property
    def partition_keys(self) -> List[Hashable]:
        return list(self._partitions)

    def partition(self, key: Hashable) -> Optional[PartitionIndex]:
        return self._partitions.get(key)

    def partition_for(self, interval: AnyInterval) -> Optional[PartitionIndex]:
        return self._partitions.get(partition_key(interval, self.stranded))

    def query_overlaps(
        self,
        interval: AnyInterval,
        maxgap: int = 0,
        minoverlap: int = 1,
        mode: OverlapMode = OverlapMode.ANY,
    ) -> List[int]:
        partition = self.partition_for(interval)
        if partition is None:
            return []
        return partition.query_overlaps(interval, maxgap, minoverlap, OverlapMode.from_value(mode))

    def query_nearest(self, interval: AnyInterval, direction: Direction = Direction.NEAREST) -> Optional[int]:
        partition = self.partition_for(interval)
        if partition is None:
            return None
        return partition.query_nearest(interval, Direction.from_value(direction))

    def items(self) -> List[Tuple[Hashable, PartitionIndex]]:
        return list(self._partitions.items())
