"""
The Grouping Layer assigns group keys to rows without touching the rows themselves, and folds groups into a
plain :class:`~inscripta.rangegrammar.collection.columns.ColumnTable`.
"""
from typing import Union

from inscripta.rangegrammar.collection.columns import ColumnTable
from inscripta.rangegrammar.collection.grouped import Aggregation, GroupedRangeCollection
from inscripta.rangegrammar.collection.ranges import RangeCollection
from inscripta.rangegrammar.exc import ColumnCollisionException, ValidationException
from inscripta.rangegrammar.index.interval_index import OverlapMode
from inscripta.rangegrammar.ops.join import DEFAULT_SUFFIX, Suffix, compose_join
from inscripta.rangegrammar.ops.overlap import iter_matches

# interval attributes usable as grouping keys alongside attribute columns
COORDINATE_KEYS = ("sequence", "strand", "start", "end", "width")


def _key_values(collection: RangeCollection, name: str):
    if name in collection.columns:
        return collection.columns[name]
    if name in COORDINATE_KEYS:
        return [getattr(interval, name) for interval in collection]
    raise ValidationException(f"Cannot group by {name}: no such column")


def group_by(collection: RangeCollection, *names: str) -> GroupedRangeCollection:
    """Groups rows by the tuple of values of the named columns (or interval attributes such as ``sequence``)."""
    if not names:
        raise ValidationException("At least one grouping column is required")
    values = [_key_values(collection, name) for name in names]
    return GroupedRangeCollection(collection, list(zip(*values)), names)


def group_by_overlaps(
    x: RangeCollection,
    y: RangeCollection,
    maxgap: int = 0,
    minoverlap: int = 1,
    mode: OverlapMode = OverlapMode.ANY,
    directed: bool = False,
    suffix: Suffix = DEFAULT_SUFFIX,
    name: str = "query",
) -> GroupedRangeCollection:
    """Inner overlap join of x and y, grouped by the originating x row index, which is also added as a column.
    Rows of x without any match do not appear."""
    if name in x.column_names or name in y.column_names:
        raise ColumnCollisionException(f"Column {name} already exists and cannot hold the query index")
    pairs = list(iter_matches(x, y, maxgap, minoverlap, mode, directed))
    query_rows = [x_row for x_row, _ in pairs]
    joined = compose_join(x, y, pairs, suffix).mutate(**{name: query_rows})
    return GroupedRangeCollection(joined, [(row,) for row in query_rows], [name])


def summarise(collection: Union[RangeCollection, GroupedRangeCollection], **aggregations: Aggregation) -> ColumnTable:
    """Folds each group with the given aggregations. An ungrouped collection is folded as a single group."""
    if isinstance(collection, RangeCollection):
        collection = GroupedRangeCollection(collection, [()] * len(collection), [])
    return collection.summarise(**aggregations)


def ungroup(collection: GroupedRangeCollection) -> RangeCollection:
    return collection.ungroup()
