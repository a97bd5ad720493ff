"""
Grouping is metadata describing how to fold rows: a :class:`GroupedRangeCollection` attaches a side table of
group keys (one per row) to a :class:`RangeCollection` without reordering, duplicating or merging its rows.
"""
from collections import OrderedDict
from typing import Any, Callable, Dict, Hashable, Iterator, List, Sequence, Tuple

from inscripta.rangegrammar.collection.columns import ColumnTable
from inscripta.rangegrammar.collection.ranges import RangeCollection
from inscripta.rangegrammar.exc import ValidationException
from inscripta.rangegrammar.util.object_validation import ObjectValidation

Aggregation = Callable[[RangeCollection], Any]


def _key_order(key: Tuple) -> Tuple:
    # None sorts first; values of different types are ordered by type name
    return tuple((value is not None, type(value).__name__, value) for value in key)


class GroupedRangeCollection:
    """A :class:`RangeCollection` plus one group key per row.

    Args:
        collection: The rows being grouped.
        keys: One tuple per row. Rows with equal tuples (under value equality) share a group.
        key_names: Names of the key components; these become the leading columns of :meth:`summarise`.
    """

    def __init__(self, collection: RangeCollection, keys: Sequence[Tuple], key_names: Sequence[str]):
        ObjectValidation.require_same_length(keys, collection, "Group keys and collection")
        self._collection = collection
        self._keys = [tuple(key) for key in keys]
        self._key_names = list(key_names)
        if any(len(key) != len(self._key_names) for key in self._keys):
            raise ValidationException(f"Every group key must have {len(self._key_names)} components")

    def __len__(self):
        return len(self._collection)

    def __repr__(self):
        return f"<GroupedRangeCollection {len(self)} rows in {self.n_groups} groups by {self._key_names}>"

    @property
    def collection(self) -> RangeCollection:
        return self._collection

    @property
    def keys(self) -> List[Tuple]:
        return list(self._keys)

    @property
    def key_names(self) -> List[str]:
        return list(self._key_names)

    @property
    def groups(self) -> Dict[Tuple, List[int]]:
        """Group key to row indices, in group-key order."""
        rows: Dict[Hashable, List[int]] = {}
        for row, key in enumerate(self._keys):
            rows.setdefault(key, []).append(row)
        return OrderedDict((key, rows[key]) for key in sorted(rows, key=_key_order))

    @property
    def n_groups(self) -> int:
        return len(set(self._keys))

    def iter_groups(self) -> Iterator[Tuple[Tuple, RangeCollection]]:
        for key, rows in self.groups.items():
            yield key, self._collection.take(rows)

    def ungroup(self) -> RangeCollection:
        return self._collection

    def filter(self, selector) -> "GroupedRangeCollection":
        """Filters rows of the underlying collection, keeping each surviving row's group key."""
        mask = list(selector(self._collection) if callable(selector) else selector)
        ObjectValidation.require_same_length(mask, self._collection, "Filter mask and collection")
        kept = [i for i, keep in enumerate(mask) if keep]
        return GroupedRangeCollection(self._collection.take(kept), [self._keys[i] for i in kept], self._key_names)

    def summarise(self, **aggregations: Aggregation) -> ColumnTable:
        """Folds every group independently, in group-key order.

        Each aggregation is a function of the group's rows (as a :class:`RangeCollection`) returning one value.
        The result is a plain :class:`ColumnTable` with the key columns followed by one column per aggregation.
        """
        collisions = [name for name in aggregations if name in self._key_names]
        if collisions:
            raise ValidationException(f"Aggregations cannot reuse group key names: {collisions}")
        columns: Dict[str, List[Any]] = {name: [] for name in self._key_names}
        columns.update({name: [] for name in aggregations})
        n_groups = 0
        for key, group in self.iter_groups():
            n_groups += 1
            for name, value in zip(self._key_names, key):
                columns[name].append(value)
            for name, aggregation in aggregations.items():
                columns[name].append(aggregation(group))
        return ColumnTable(columns, n_rows=n_groups)
