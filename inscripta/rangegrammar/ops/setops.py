"""
Vector-wise set algebra. These operations treat collections as sets of covered positions: row identity and
attribute columns are discarded, and the result is a new minimal tiling sorted by sequence, strand and start.

Without ``directed`` every sequence is one partition and results are Unstranded. With ``directed``,
each sequence is split by strand and an Unstranded interval is compatible with every strand. For
``reduce``/``union``/``disjoin``/``coverage``/``gaps`` it is added to every stranded partition of its sequence,
and only a sequence with no stranded intervals keeps an Unstranded partition. ``intersect``/``setdiff`` test each
x partition against every compatible y partition; the result carries the strand of the x side.

Zero-width intervals cover no positions and never contribute to a result.
"""
from collections import defaultdict
from typing import Dict, Hashable, List, Optional, Tuple

from inscripta.rangegrammar.collection.ranges import RangeCollection
from inscripta.rangegrammar.index.interval_index import partition_key
from inscripta.rangegrammar.location.interval import AnyInterval, GenomicInterval, Interval
from inscripta.rangegrammar.location.strand import Strand
from inscripta.rangegrammar.util.object_validation import ObjectValidation

Span = Tuple[int, int]


def _merge(spans: List[Span]) -> List[Span]:
    """Sorted, non-overlapping, non-adjacent spans covering the same positions."""
    merged: List[Span] = []
    for start, end in sorted(spans):
        if merged and start <= merged[-1][1] + 1:
            if end > merged[-1][1]:
                merged[-1] = (merged[-1][0], end)
        else:
            merged.append((start, end))
    return merged


def _spans_by_partition(
    *collections: RangeCollection, stranded: bool, spread_unstranded: bool = False
) -> Dict[Hashable, List[Span]]:
    """Covered spans per partition. With ``spread_unstranded``, Unstranded spans of a stranded partitioning are
    copied into every stranded partition of the same sequence and dropped from their own partition."""
    spans = defaultdict(list)
    for collection in collections:
        for interval in collection:
            if interval.width > 0:
                spans[partition_key(interval, stranded)].append((interval.start, interval.end))
    if not (stranded and spread_unstranded):
        return spans
    for sequence, strand in [key for key in spans if key[1] is Strand.UNSTRANDED]:
        targets = [key for key in spans if key[0] == sequence and key[1] is not Strand.UNSTRANDED]
        if targets:
            unstranded = spans.pop((sequence, strand))
            for key in targets:
                spans[key].extend(unstranded)
    return spans


def _blocks_by_partition(
    *collections: RangeCollection, stranded: bool, spread_unstranded: bool = False
) -> Dict[Hashable, List[Span]]:
    spans = _spans_by_partition(*collections, stranded=stranded, spread_unstranded=spread_unstranded)
    return {key: _merge(key_spans) for key, key_spans in spans.items()}


def _compatible_blocks(blocks: Dict[Hashable, List[Span]], key: Hashable, stranded: bool) -> List[Span]:
    """Blocks of another collection that apply to the partition ``key``; Unstranded is a wildcard."""
    if not stranded:
        return blocks.get(key, [])
    sequence, strand = key
    spans = [
        span
        for (other_sequence, other_strand), other_blocks in blocks.items()
        if other_sequence == sequence and strand.is_compatible(other_strand)
        for span in other_blocks
    ]
    return _merge(spans)


def _intersect_blocks(blocks: List[Span], others: List[Span]) -> List[Span]:
    result = []
    i = j = 0
    while i < len(blocks) and j < len(others):
        start = max(blocks[i][0], others[j][0])
        end = min(blocks[i][1], others[j][1])
        if start <= end:
            result.append((start, end))
        if blocks[i][1] < others[j][1]:
            i += 1
        else:
            j += 1
    return result


def _subtract_blocks(blocks: List[Span], others: List[Span]) -> List[Span]:
    result = []
    j = 0
    for start, end in blocks:
        current = start
        while j < len(others) and others[j][1] < current:
            j += 1
        k = j
        while k < len(others) and others[k][0] <= end:
            if others[k][0] > current:
                result.append((current, others[k][0] - 1))
            current = max(current, others[k][1] + 1)
            k += 1
        if current <= end:
            result.append((current, end))
    return result


def _make_interval(key: Hashable, start: int, end: int, stranded: bool, genomic: bool) -> AnyInterval:
    if not genomic:
        return Interval(start, end)
    sequence, strand = key if stranded else (key, Strand.UNSTRANDED)
    return GenomicInterval(start, end, sequence, strand)


def _build(
    blocks: Dict[Hashable, List[Span]],
    stranded: bool,
    genomic: bool,
    counts: Optional[Dict[Hashable, List[int]]] = None,
) -> RangeCollection:
    rows = []
    for key, spans in blocks.items():
        for i, (start, end) in enumerate(spans):
            rows.append((_make_interval(key, start, end, stranded, genomic), counts[key][i] if counts else None))
    rows.sort(key=lambda row: row[0].sort_key())
    columns = {"count": [count for _, count in rows]} if counts is not None else None
    return RangeCollection([interval for interval, _ in rows], columns, genomic=genomic)


def reduce(x: RangeCollection, directed: bool = False) -> RangeCollection:
    """Merges overlapping and adjacent intervals of a single collection."""
    return _build(_blocks_by_partition(x, stranded=directed, spread_unstranded=True), directed, x.is_genomic)


def union(x: RangeCollection, y: RangeCollection, directed: bool = False) -> RangeCollection:
    """Positions covered by x or y."""
    ObjectValidation.require_same_kind(x, y)
    blocks = _blocks_by_partition(x, y, stranded=directed, spread_unstranded=True)
    return _build(blocks, directed, x.is_genomic or y.is_genomic)


def intersect(x: RangeCollection, y: RangeCollection, directed: bool = False) -> RangeCollection:
    """Positions covered by both x and y."""
    ObjectValidation.require_same_kind(x, y)
    y_blocks = _blocks_by_partition(y, stranded=directed)
    result = {
        key: _intersect_blocks(blocks, _compatible_blocks(y_blocks, key, directed))
        for key, blocks in _blocks_by_partition(x, stranded=directed).items()
    }
    return _build(result, directed, x.is_genomic or y.is_genomic)


def setdiff(x: RangeCollection, y: RangeCollection, directed: bool = False) -> RangeCollection:
    """Positions covered by x but not by y."""
    ObjectValidation.require_same_kind(x, y)
    y_blocks = _blocks_by_partition(y, stranded=directed)
    result = {
        key: _subtract_blocks(blocks, _compatible_blocks(y_blocks, key, directed))
        for key, blocks in _blocks_by_partition(x, stranded=directed).items()
    }
    return _build(result, directed, x.is_genomic or y.is_genomic)


def _disjoin_spans(spans: List[Span]) -> Tuple[List[Span], List[int]]:
    """Cuts the covered positions at every start and every ``end + 1``; returns the pieces and their depth."""
    delta = defaultdict(int)
    for start, end in spans:
        delta[start] += 1
        delta[end + 1] -= 1
    points = sorted(delta)
    pieces, depths = [], []
    depth = 0
    for point, next_point in zip(points, points[1:]):
        depth += delta[point]
        if depth > 0:
            pieces.append((point, next_point - 1))
            depths.append(depth)
    return pieces, depths


def disjoin(x: RangeCollection, directed: bool = False) -> RangeCollection:
    """Splits the covered positions into pieces whose boundaries are exactly the input endpoints."""
    return coverage(x, directed).drop("count")


def coverage(x: RangeCollection, directed: bool = False) -> RangeCollection:
    """:func:`disjoin` with a ``count`` column holding the number of input intervals covering each piece."""
    blocks, counts = {}, {}
    for key, spans in _spans_by_partition(x, stranded=directed, spread_unstranded=True).items():
        blocks[key], counts[key] = _disjoin_spans(spans)
    return _build(blocks, directed, x.is_genomic, counts)


def gaps(
    x: RangeCollection, start: Optional[int] = None, end: Optional[int] = None, directed: bool = False
) -> RangeCollection:
    """Uncovered positions in each partition, between ``start`` and ``end`` when given and otherwise between the
    first and last covered position of the partition."""
    result = {}
    for key, blocks in _blocks_by_partition(x, stranded=directed, spread_unstranded=True).items():
        lower = blocks[0][0] if start is None else start
        upper = blocks[-1][1] if end is None else end
        complement = _subtract_blocks([(lower, upper)], blocks) if lower <= upper else []
        result[key] = complement
    return _build(result, directed, x.is_genomic)
