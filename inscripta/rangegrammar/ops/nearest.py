"""
The Nearest-Neighbor Engine finds, for every row of x, the single nearest y interval in a given direction.

``precede`` looks for y intervals that x precedes (y starts after x ends); ``follow`` looks for y intervals that
x follows (y ends before x starts). ``left``/``right`` are their positional aliases, and ``upstream``/
``downstream`` resolve to them per row from the strand of x, the same way strand-aware shifts do.
``nearest`` ranks by the same :func:`~inscripta.rangegrammar.location.distance.distance` that
:func:`nearest_distances` reports, so an adjacent y and an overlapping y both sit at 0 and the smaller start wins.
"""
from typing import List, Optional, Tuple

from inscripta.rangegrammar.collection.ranges import RangeCollection
from inscripta.rangegrammar.location.distance import Direction, distance
from inscripta.rangegrammar.location.interval import AnyInterval
from inscripta.rangegrammar.location.strand import Strand
from inscripta.rangegrammar.util.object_validation import ObjectValidation

NearestMatch = Tuple[int, Optional[int]]


def resolve_direction(direction: Direction, interval: AnyInterval) -> Direction:
    """Maps a direction onto NEAREST, PRECEDE or FOLLOW for one query interval."""
    direction = Direction.from_value(direction)
    if direction is Direction.LEFT:
        return Direction.FOLLOW
    if direction is Direction.RIGHT:
        return Direction.PRECEDE
    if direction in (Direction.UPSTREAM, Direction.DOWNSTREAM):
        interval.strand.assert_directional()
        # upstream on the plus strand is to the left
        if (direction is Direction.UPSTREAM) == (interval.strand is Strand.PLUS):
            return Direction.FOLLOW
        return Direction.PRECEDE
    return direction


def nearest(
    x: RangeCollection,
    y: RangeCollection,
    direction: Direction = Direction.NEAREST,
    directed: bool = False,
) -> List[NearestMatch]:
    """One ``(x_row, y_row)`` entry per row of x, in row order; ``y_row`` is None when there is no candidate.

    Args:
        x: Query collection.
        y: Collection searched for neighbors.
        direction: See :class:`~inscripta.rangegrammar.location.distance.Direction`.
        directed: Only consider y intervals on the same strand as the x interval.
    """
    ObjectValidation.require_same_kind(x, y)
    directions = [resolve_direction(direction, interval) for interval in x]
    index = y.index(stranded=directed)
    return [(x_row, index.query_nearest(interval, directions[x_row])) for x_row, interval in enumerate(x)]


def precede(x: RangeCollection, y: RangeCollection, directed: bool = False) -> List[NearestMatch]:
    return nearest(x, y, Direction.PRECEDE, directed)


def follow(x: RangeCollection, y: RangeCollection, directed: bool = False) -> List[NearestMatch]:
    return nearest(x, y, Direction.FOLLOW, directed)


def nearest_distances(
    x: RangeCollection,
    y: RangeCollection,
    direction: Direction = Direction.NEAREST,
    directed: bool = False,
) -> List[Optional[int]]:
    """Distance from each x interval to its nearest y interval, or None when there is none."""
    return [
        None if y_row is None else distance(x[x_row], y[y_row])
        for x_row, y_row in nearest(x, y, direction, directed)
    ]
