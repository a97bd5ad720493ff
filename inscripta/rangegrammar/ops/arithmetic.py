"""
Collection-wide anchor and arithmetic verbs. Each verb applies the per-interval function from
:mod:`inscripta.rangegrammar.location.anchor` to every row; values may be a scalar or one value per row.

All new intervals are computed before the result is built, so a row that fails (for example a 5' anchor on an
Unstranded interval) aborts the whole call.
"""
from typing import Callable, List, Optional, Sequence, Union

from inscripta.rangegrammar.collection.ranges import RangeCollection
from inscripta.rangegrammar.location import anchor as arith
from inscripta.rangegrammar.location.anchor import Anchor
from inscripta.rangegrammar.util.object_validation import ObjectValidation

Amount = Union[int, Sequence[int]]


def _broadcast(values: Amount, collection: RangeCollection) -> List[int]:
    if isinstance(values, int):
        return [values] * len(collection)
    values = list(values)
    ObjectValidation.require_same_length(values, collection, "Values and collection")
    return values


def _apply(collection: RangeCollection, values: Amount, func: Callable) -> RangeCollection:
    new_intervals = [func(interval, value) for interval, value in zip(collection, _broadcast(values, collection))]
    return collection.with_intervals(new_intervals)


def anchor_start(collection: RangeCollection) -> RangeCollection:
    return collection.with_anchor(Anchor.START)


def anchor_end(collection: RangeCollection) -> RangeCollection:
    return collection.with_anchor(Anchor.END)


def anchor_center(collection: RangeCollection) -> RangeCollection:
    return collection.with_anchor(Anchor.CENTER)


def anchor_5p(collection: RangeCollection) -> RangeCollection:
    return collection.with_anchor(Anchor.FIVE_PRIME)


def anchor_3p(collection: RangeCollection) -> RangeCollection:
    return collection.with_anchor(Anchor.THREE_PRIME)


def unanchor(collection: RangeCollection) -> RangeCollection:
    return collection.with_anchor(Anchor.NONE)


def set_width(collection: RangeCollection, width: Amount, anchor: Optional[Anchor] = None) -> RangeCollection:
    """Sets the width of every interval, holding the given anchor (or the collection's anchor) fixed."""
    anchor = collection.anchor if anchor is None else Anchor.from_value(anchor)
    return _apply(collection, width, lambda interval, value: arith.set_width(interval, value, anchor))


def stretch(collection: RangeCollection, extend: Amount, anchor: Optional[Anchor] = None) -> RangeCollection:
    anchor = collection.anchor if anchor is None else Anchor.from_value(anchor)
    return _apply(collection, extend, lambda interval, value: arith.stretch(interval, value, anchor))


def shift_left(collection: RangeCollection, shift: Amount) -> RangeCollection:
    return _apply(collection, shift, arith.shift_left)


def shift_right(collection: RangeCollection, shift: Amount) -> RangeCollection:
    return _apply(collection, shift, arith.shift_right)


def shift_upstream(collection: RangeCollection, shift: Amount) -> RangeCollection:
    return _apply(collection, shift, arith.shift_upstream)


def shift_downstream(collection: RangeCollection, shift: Amount) -> RangeCollection:
    return _apply(collection, shift, arith.shift_downstream)


def flank_left(collection: RangeCollection, width: Amount) -> RangeCollection:
    return _apply(collection, width, arith.flank_left)


def flank_right(collection: RangeCollection, width: Amount) -> RangeCollection:
    return _apply(collection, width, arith.flank_right)


def flank_upstream(collection: RangeCollection, width: Amount) -> RangeCollection:
    return _apply(collection, width, arith.flank_upstream)


def flank_downstream(collection: RangeCollection, width: Amount) -> RangeCollection:
    return _apply(collection, width, arith.flank_downstream)
