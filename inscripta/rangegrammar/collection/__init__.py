"""
Interval collections. A :class:`RangeCollection` is an ordered sequence of intervals with a :class:`ColumnTable`
of attributes; a :class:`GroupedRangeCollection` adds a per-row group key used by aggregation.
"""
from inscripta.rangegrammar.collection.columns import ColumnTable  # noqa: F401
from inscripta.rangegrammar.collection.ranges import RangeCollection  # noqa: F401
from inscripta.rangegrammar.collection.grouped import GroupedRangeCollection  # noqa: F401
