"""
Anchored coordinate arithmetic. Every function here is pure: it returns a new interval of the same kind as its
input, and raises :class:`~inscripta.rangegrammar.exc.InvalidIntervalException` rather than produce an interval
with ``end < start - 1``.

Odd deltas under a center anchor (and the unanchored ``stretch``) are split with ``delta // 2`` applied to the
start and the remainder applied to the end, so the extra unit always lands on the end side.
"""

from inscripta.rangegrammar.exc import InvalidIntervalException
from inscripta.rangegrammar.location.interval import AnyInterval
from inscripta.rangegrammar.location.strand import Strand
from inscripta.rangegrammar.util.enum import HasMemberMixin


class Anchor(str, HasMemberMixin):
    """Which coordinate is held fixed while the width of an interval changes."""

    NONE = "none"
    START = "start"
    END = "end"
    CENTER = "center"
    FIVE_PRIME = "5p"
    THREE_PRIME = "3p"

    def resolve(self, strand: Strand) -> "Anchor":
        """Resolves the strand-relative anchors to START or END. Unstranded intervals cannot be resolved."""
        if self not in (Anchor.FIVE_PRIME, Anchor.THREE_PRIME):
            return self
        strand.assert_directional()
        if (self is Anchor.FIVE_PRIME) == (strand is Strand.PLUS):
            return Anchor.START
        return Anchor.END


def _split(delta: int):
    return delta // 2, delta - delta // 2


def set_width(interval: AnyInterval, width: int, anchor: Anchor = Anchor.NONE) -> AnyInterval:
    """Returns a new interval with the given width, holding the anchor fixed. Unanchored intervals keep their start."""
    if width < 0:
        raise InvalidIntervalException(f"Width must be non-negative: {width}")
    anchor = Anchor.from_value(anchor).resolve(interval.strand)
    if anchor is Anchor.END:
        return interval.reset_coordinates(interval.end - width + 1, interval.end)
    if anchor is Anchor.CENTER:
        start_delta, end_delta = _split(width - interval.width)
        return interval.reset_coordinates(interval.start - start_delta, interval.end + end_delta)
    return interval.reset_coordinates(interval.start, interval.start + width - 1)


def stretch(interval: AnyInterval, extend: int, anchor: Anchor = Anchor.NONE) -> AnyInterval:
    """Widens (or, for negative ``extend``, narrows) an interval by ``extend`` positions in total.

    Start-anchored intervals grow at the end, end-anchored intervals grow at the start, and unanchored or
    center-anchored intervals split the growth between both sides.
    """
    anchor = Anchor.from_value(anchor).resolve(interval.strand)
    if anchor is Anchor.START:
        return interval.reset_coordinates(interval.start, interval.end + extend)
    if anchor is Anchor.END:
        return interval.reset_coordinates(interval.start - extend, interval.end)
    start_delta, end_delta = _split(extend)
    return interval.reset_coordinates(interval.start - start_delta, interval.end + end_delta)


def shift_left(interval: AnyInterval, shift: int) -> AnyInterval:
    return interval.reset_coordinates(interval.start - shift, interval.end - shift)


def shift_right(interval: AnyInterval, shift: int) -> AnyInterval:
    return interval.reset_coordinates(interval.start + shift, interval.end + shift)


def shift_upstream(interval: AnyInterval, shift: int) -> AnyInterval:
    """Translates towards the 5' end of the strand."""
    interval.strand.assert_directional()
    if interval.strand is Strand.PLUS:
        return shift_left(interval, shift)
    return shift_right(interval, shift)


def shift_downstream(interval: AnyInterval, shift: int) -> AnyInterval:
    """Translates towards the 3' end of the strand."""
    interval.strand.assert_directional()
    if interval.strand is Strand.PLUS:
        return shift_right(interval, shift)
    return shift_left(interval, shift)


def flank_left(interval: AnyInterval, width: int) -> AnyInterval:
    """The ``width`` positions immediately before the start."""
    return interval.reset_coordinates(interval.start - width, interval.start - 1)


def flank_right(interval: AnyInterval, width: int) -> AnyInterval:
    """The ``width`` positions immediately after the end."""
    return interval.reset_coordinates(interval.end + 1, interval.end + width)


def flank_upstream(interval: AnyInterval, width: int) -> AnyInterval:
    interval.strand.assert_directional()
    if interval.strand is Strand.PLUS:
        return flank_left(interval, width)
    return flank_right(interval, width)


def flank_downstream(interval: AnyInterval, width: int) -> AnyInterval:
    interval.strand.assert_directional()
    if interval.strand is Strand.PLUS:
        return flank_right(interval, width)
    return flank_left(interval, width)
