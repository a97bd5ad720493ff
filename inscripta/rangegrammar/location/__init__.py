"""
Interval value types and the stateless arithmetic defined on them. :class:`Interval` is a closed integer range,
:class:`GenomicInterval` anchors one to a sequence and :class:`Strand`. The :mod:`anchor` module computes new
coordinates from an interval, an :class:`Anchor` and a delta.
"""

from inscripta.rangegrammar.location.strand import Strand  # noqa: F401
from inscripta.rangegrammar.location.interval import (  # noqa: F401
    Interval,
    GenomicInterval,
    AnyInterval,
    MISSING_START,
    MISSING_END,
    MISSING_SEQUENCE,
    MISSING_STRAND,
)
from inscripta.rangegrammar.location.anchor import Anchor  # noqa: F401
from inscripta.rangegrammar.location.distance import Direction, distance  # noqa: F401
