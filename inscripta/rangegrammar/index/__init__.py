"""
Ephemeral per-partition indices used by the overlap and nearest-neighbor engines. Indices are derived from a
:class:`~inscripta.rangegrammar.collection.ranges.RangeCollection` on demand and are never persisted.
"""
from inscripta.rangegrammar.index.interval_index import (  # noqa: F401
    IntervalIndex,
    PartitionIndex,
    OverlapMode,
    partition_key,
)
