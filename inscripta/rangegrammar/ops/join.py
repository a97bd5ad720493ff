"""
The Join Compositor combines two collections through the Overlap or Nearest-Neighbor Engine.

Every join produces one row per matched ``(x_row, y_row)`` pair, grouped by x row ascending with y rows in match
order. Output columns are the x columns, then the y coordinates (``start``, ``end`` and, for genomic y,
``sequence`` and ``strand``), then the y columns. The y coordinates always take the right suffix
(``start.y``); an attribute name present on both sides takes the left suffix on the x side and the right suffix
on the y side. Without suffixes every name is kept as-is and duplicates raise
:class:`~inscripta.rangegrammar.exc.ColumnCollisionException`.

In a left join, an unmatched x row is kept once with the missing-value sentinel in place of the y coordinates
(``start=0``, ``end=-1``, ``sequence="."``, Unstranded) and the type-appropriate null in every other y column.
"""
import logging
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

from inscripta.rangegrammar.collection.columns import ColumnTable
from inscripta.rangegrammar.collection.ranges import RangeCollection
from inscripta.rangegrammar.exc import ValidationException
from inscripta.rangegrammar.index.interval_index import OverlapMode
from inscripta.rangegrammar.location.distance import Direction
from inscripta.rangegrammar.location.interval import MISSING_END, MISSING_SEQUENCE, MISSING_START, MISSING_STRAND
from inscripta.rangegrammar.ops.nearest import nearest, nearest_distances
from inscripta.rangegrammar.ops.overlap import iter_matches
from inscripta.rangegrammar.ops.pairwise import intersect_interval

logger = logging.getLogger(__name__)

DEFAULT_SUFFIX = (".x", ".y")
Suffix = Optional[Sequence[str]]
Pair = Tuple[int, Optional[int]]

_MISSING_COORDINATES = {
    "start": MISSING_START,
    "end": MISSING_END,
    "sequence": MISSING_SEQUENCE,
    "strand": MISSING_STRAND,
}


def _coordinate_names(x: RangeCollection, y: RangeCollection) -> List[str]:
    # an empty y may not carry the genomic flag of x
    return ["start", "end", "sequence", "strand"] if x.is_genomic or y.is_genomic else ["start", "end"]


def _y_coordinate(y: RangeCollection, row: int, name: str) -> Any:
    return getattr(y[row], name)


def _resolve_names(x: RangeCollection, y: RangeCollection, suffix: Suffix) -> Tuple[Dict, Dict, Dict]:
    """Output names of the x columns, the y coordinates and the y columns."""
    coordinate_names = _coordinate_names(x, y)
    if suffix is None:
        return (
            {name: name for name in x.column_names},
            {name: name for name in coordinate_names},
            {name: name for name in y.column_names},
        )
    if len(suffix) != 2:
        raise ValidationException(f"Suffix must be a pair of strings: {suffix}")
    left, right = suffix
    shared = set(x.column_names) & set(y.column_names)
    return (
        {name: name + left if name in shared else name for name in x.column_names},
        {name: name + right for name in coordinate_names},
        {name: name + right if name in shared else name for name in y.column_names},
    )


def compose_join(
    x: RangeCollection,
    y: RangeCollection,
    pairs: Iterable[Pair],
    suffix: Suffix,
    intersect: bool = False,
) -> RangeCollection:
    """Builds the joined collection from a stream of pairs; ``None`` y rows take the missing values.

    With ``intersect`` the output intervals are the intersections of each pair instead of the x intervals.
    """
    x_names, coordinate_names, y_names = _resolve_names(x, y, suffix)
    x_rows: List[int] = []
    y_rows: List[Optional[int]] = []
    intervals = []
    for x_row, y_row in pairs:
        x_rows.append(x_row)
        y_rows.append(y_row)
        if intersect and y_row is not None:
            intervals.append(intersect_interval(x[x_row], y[y_row]))
        else:
            intervals.append(x[x_row])

    y_columns = ColumnTable(
        {
            **{
                out_name: [
                    _MISSING_COORDINATES[name] if row is None else _y_coordinate(y, row, name) for row in y_rows
                ]
                for name, out_name in coordinate_names.items()
            },
            **{
                out_name: [y.columns.null_value(name) if row is None else y.columns[name][row] for row in y_rows]
                for name, out_name in y_names.items()
            },
        },
        n_rows=len(y_rows),
    )
    columns = x.columns.take(x_rows).rename(x_names).hstack(y_columns)
    logger.debug(f"Joined {len(x)} x rows with {len(y)} y rows into {len(x_rows)} rows")
    return RangeCollection(intervals, columns, genomic=x.is_genomic)


def join_overlap_inner(
    x: RangeCollection,
    y: RangeCollection,
    maxgap: int = 0,
    minoverlap: int = 1,
    mode: OverlapMode = OverlapMode.ANY,
    directed: bool = False,
    suffix: Suffix = DEFAULT_SUFFIX,
) -> RangeCollection:
    """One row per matched pair, with the coordinates of the x row."""
    return compose_join(x, y, iter_matches(x, y, maxgap, minoverlap, mode, directed), suffix)


def find_overlaps(
    x: RangeCollection,
    y: RangeCollection,
    maxgap: int = 0,
    minoverlap: int = 1,
    mode: OverlapMode = OverlapMode.ANY,
    directed: bool = False,
    suffix: Suffix = DEFAULT_SUFFIX,
) -> RangeCollection:
    """Alias of :func:`join_overlap_inner`."""
    return join_overlap_inner(x, y, maxgap, minoverlap, mode, directed, suffix)


def join_overlap_intersect(
    x: RangeCollection,
    y: RangeCollection,
    maxgap: int = 0,
    minoverlap: int = 1,
    mode: OverlapMode = OverlapMode.ANY,
    directed: bool = False,
    suffix: Suffix = DEFAULT_SUFFIX,
) -> RangeCollection:
    """Same rows as :func:`join_overlap_inner`; coordinates are the intersection of each pair."""
    return compose_join(x, y, iter_matches(x, y, maxgap, minoverlap, mode, directed), suffix, intersect=True)


def _left_pairs(x: RangeCollection, matches: Iterable[Tuple[int, int]]) -> Iterable[Pair]:
    """Interleaves unmatched x rows, in x order, into a stream of matches sorted by x row."""
    next_row = 0
    for x_row, y_row in matches:
        while next_row < x_row:
            yield next_row, None
            next_row += 1
        yield x_row, y_row
        next_row = x_row + 1
    while next_row < len(x):
        yield next_row, None
        next_row += 1


def join_overlap_left(
    x: RangeCollection,
    y: RangeCollection,
    maxgap: int = 0,
    minoverlap: int = 1,
    mode: OverlapMode = OverlapMode.ANY,
    directed: bool = False,
    suffix: Suffix = DEFAULT_SUFFIX,
) -> RangeCollection:
    """All inner join rows plus one row per unmatched x row carrying the missing-value sentinel."""
    return compose_join(x, y, _left_pairs(x, iter_matches(x, y, maxgap, minoverlap, mode, directed)), suffix)


def join_overlap_self(
    x: RangeCollection,
    maxgap: int = 0,
    minoverlap: int = 1,
    mode: OverlapMode = OverlapMode.ANY,
    directed: bool = False,
    suffix: Suffix = DEFAULT_SUFFIX,
) -> RangeCollection:
    """Overlaps of a collection with itself, excluding each row's match with itself. Output coordinates are the
    intersecting span of each pair."""
    pairs = ((i, j) for i, j in iter_matches(x, x, maxgap, minoverlap, mode, directed) if i != j)
    return compose_join(x, x, pairs, suffix, intersect=True)


def join_nearest(
    x: RangeCollection,
    y: RangeCollection,
    direction: Direction = Direction.NEAREST,
    directed: bool = False,
    suffix: Suffix = DEFAULT_SUFFIX,
) -> RangeCollection:
    """One row per x row that has a neighbor in the given direction; x rows without one are dropped."""
    pairs = [(x_row, y_row) for x_row, y_row in nearest(x, y, direction, directed) if y_row is not None]
    return compose_join(x, y, pairs, suffix)


def join_precede(x: RangeCollection, y: RangeCollection, directed: bool = False, suffix: Suffix = DEFAULT_SUFFIX):
    """Joins each x row to the nearest y interval starting after it ends."""
    return join_nearest(x, y, Direction.PRECEDE, directed, suffix)


def join_follow(x: RangeCollection, y: RangeCollection, directed: bool = False, suffix: Suffix = DEFAULT_SUFFIX):
    """Joins each x row to the nearest y interval ending before it starts."""
    return join_nearest(x, y, Direction.FOLLOW, directed, suffix)


def join_nearest_left(x: RangeCollection, y: RangeCollection, directed: bool = False, suffix: Suffix = DEFAULT_SUFFIX):
    return join_nearest(x, y, Direction.LEFT, directed, suffix)


def join_nearest_right(
    x: RangeCollection, y: RangeCollection, directed: bool = False, suffix: Suffix = DEFAULT_SUFFIX
):
    return join_nearest(x, y, Direction.RIGHT, directed, suffix)


def join_nearest_upstream(
    x: RangeCollection, y: RangeCollection, directed: bool = False, suffix: Suffix = DEFAULT_SUFFIX
):
    return join_nearest(x, y, Direction.UPSTREAM, directed, suffix)


def join_nearest_downstream(
    x: RangeCollection, y: RangeCollection, directed: bool = False, suffix: Suffix = DEFAULT_SUFFIX
):
    return join_nearest(x, y, Direction.DOWNSTREAM, directed, suffix)


def add_nearest_distance(
    x: RangeCollection,
    y: RangeCollection,
    name: str = "distance",
    direction: Direction = Direction.NEAREST,
    directed: bool = False,
) -> RangeCollection:
    """Adds a column with the distance from each x interval to its nearest y interval (None when absent)."""
    return x.mutate(**{name: nearest_distances(x, y, direction, directed)})
