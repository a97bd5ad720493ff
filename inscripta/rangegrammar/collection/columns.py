"""
:class:`ColumnTable` is the attribute side of a :class:`~inscripta.rangegrammar.collection.ranges.RangeCollection`:
N rows by M named columns. Each column holds values of a single type (``None`` is accepted anywhere as a missing
value, and mixed numeric values widen from bool to int to float). It is also the plain row-table produced by
aggregation, where coordinates are not guaranteed to survive.
"""
import math
from typing import Any, Dict, Iterable, Iterator, List, Mapping, Optional, Sequence, Tuple

from inscripta.rangegrammar.exc import ColumnCollisionException, ValidationException

# narrowest first
_NUMERIC_TOWER = (bool, int, float)


def _infer_column_type(name: str, values: Sequence[Any]) -> Optional[type]:
    column_type = None
    for value in values:
        if value is None:
            continue
        value_type = type(value)
        if column_type is None or value_type is column_type:
            column_type = value_type
        elif column_type in _NUMERIC_TOWER and value_type in _NUMERIC_TOWER:
            column_type = max(column_type, value_type, key=_NUMERIC_TOWER.index)
        elif not isinstance(value, column_type):
            raise ValidationException(
                f"Column {name} must be uniformly typed; found {column_type.__name__} and {value_type.__name__}"
            )
    return column_type


class ColumnTable:
    """An immutable, ordered mapping of column name to a tuple of values, all of the same length."""

    def __init__(self, columns: Optional[Mapping[str, Sequence[Any]]] = None, n_rows: Optional[int] = None):
        """
        Parameters
        ----------
        columns
            Mapping of column name to values. Insertion order is the column order.
        n_rows
            Number of rows. Required when there are no columns, otherwise inferred and checked.
        """
        columns = columns or {}
        self._columns: Dict[str, Tuple[Any, ...]] = {}
        self._types: Dict[str, Optional[type]] = {}
        for name, values in columns.items():
            if not isinstance(name, str):
                raise ValidationException(f"Column names must be strings, not {name!r}")
            values = tuple(values)
            if n_rows is None:
                n_rows = len(values)
            elif len(values) != n_rows:
                raise ValidationException(f"Column {name} has {len(values)} entries; expected {n_rows}")
            self._types[name] = _infer_column_type(name, values)
            self._columns[name] = values
        self._n_rows = n_rows or 0

    def __len__(self):
        return self._n_rows

    @property
    def n_rows(self) -> int:
        return self._n_rows

    @property
    def column_names(self) -> List[str]:
        return list(self._columns)

    def __contains__(self, name: str) -> bool:
        return name in self._columns

    def __getitem__(self, name: str) -> Tuple[Any, ...]:
        return self._columns[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._columns)

    def items(self) -> Iterable[Tuple[str, Tuple[Any, ...]]]:
        return self._columns.items()

    def __eq__(self, other):
        if type(other) is not ColumnTable:
            return False
        return self._n_rows == other._n_rows and self._columns == other._columns

    def __repr__(self):
        return f"<ColumnTable {self._n_rows} rows: {', '.join(self._columns)}>"

    def column_type(self, name: str) -> Optional[type]:
        """Type of the non-missing values of a column; ``None`` when every value is missing."""
        return self._types[name]

    def null_value(self, name: str) -> Any:
        """The missing value appropriate for a column: NaN for float columns, ``None`` otherwise."""
        if self._types[name] is float:
            return math.nan
        return None

    def row(self, index: int) -> Dict[str, Any]:
        return {name: values[index] for name, values in self._columns.items()}

    def to_records(self) -> List[Dict[str, Any]]:
        return [self.row(i) for i in range(self._n_rows)]

    @staticmethod
    def from_records(records: Sequence[Mapping[str, Any]], column_names: Optional[List[str]] = None) -> "ColumnTable":
        """Builds a table from row dictionaries. Keys absent from a record are missing values."""
        if column_names is None:
            column_names = []
            for record in records:
                column_names.extend(key for key in record if key not in column_names)
        return ColumnTable(
            {name: [record.get(name) for record in records] for name in column_names}, n_rows=len(records)
        )

    def take(self, indices: Sequence[int]) -> "ColumnTable":
        """Row subset (with repetition allowed) in the order given."""
        return ColumnTable(
            {name: [values[i] for i in indices] for name, values in self._columns.items()}, n_rows=len(indices)
        )

    def select(self, *names: str) -> "ColumnTable":
        missing = [name for name in names if name not in self._columns]
        if missing:
            raise ValidationException(f"No such columns: {missing}")
        return ColumnTable({name: self._columns[name] for name in names}, n_rows=self._n_rows)

    def drop(self, *names: str) -> "ColumnTable":
        return ColumnTable(
            {name: values for name, values in self._columns.items() if name not in names}, n_rows=self._n_rows
        )

    def with_columns(self, **columns: Sequence[Any]) -> "ColumnTable":
        """Adds or replaces columns; existing column order is kept and new columns are appended."""
        new_columns = dict(self._columns)
        new_columns.update(columns)
        return ColumnTable(new_columns, n_rows=self._n_rows)

    def rename(self, mapping: Mapping[str, str]) -> "ColumnTable":
        new_names = [mapping.get(name, name) for name in self._columns]
        if len(set(new_names)) != len(new_names):
            raise ColumnCollisionException(f"Renaming produces duplicate columns: {new_names}")
        return ColumnTable(
            {mapping.get(name, name): values for name, values in self._columns.items()}, n_rows=self._n_rows
        )

    def hstack(self, other: "ColumnTable") -> "ColumnTable":
        """Columns of this table followed by the columns of another table with the same number of rows."""
        if other.n_rows != self._n_rows:
            raise ValidationException(f"Cannot combine tables of {self._n_rows} and {other.n_rows} rows")
        collisions = [name for name in other if name in self._columns]
        if collisions:
            raise ColumnCollisionException(f"Duplicate column names: {collisions}")
        return ColumnTable({**self._columns, **other._columns}, n_rows=self._n_rows)

    @staticmethod
    def concat(tables: Sequence["ColumnTable"]) -> "ColumnTable":
        """Stacks tables with identical column names row-wise."""
        if not tables:
            return ColumnTable()
        names = tables[0].column_names
        for table in tables[1:]:
            if table.column_names != names:
                raise ValidationException(f"Cannot concatenate tables with columns {names} and {table.column_names}")
        return ColumnTable(
            {name: [value for table in tables for value in table[name]] for name in names},
            n_rows=sum(len(table) for table in tables),
        )
