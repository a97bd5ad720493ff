from typing import Optional

from inscripta.rangegrammar.location.interval import AnyInterval
from inscripta.rangegrammar.util.enum import HasMemberMixin


class Direction(str, HasMemberMixin):
    """Which side of a query interval a nearest-neighbor search looks at."""

    NEAREST = "nearest"
    PRECEDE = "precede"
    FOLLOW = "follow"
    LEFT = "left"
    RIGHT = "right"
    UPSTREAM = "upstream"
    DOWNSTREAM = "downstream"


def distance(x: AnyInterval, y: AnyInterval) -> Optional[int]:
    """Number of positions strictly between two intervals. Overlapping and adjacent intervals have distance 0.
    Intervals on different sequences have no distance (``None``)."""
    if x.sequence != y.sequence:
        return None
    return max(0, max(x.start, y.start) - min(x.end, y.end) - 1)
