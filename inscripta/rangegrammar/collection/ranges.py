"""
:class:`RangeCollection` pairs an ordered sequence of intervals with a :class:`ColumnTable` of per-interval
attributes. Row order is significant and is preserved by every operation unless it explicitly re-sorts.

Collections are never modified in place; every method returns a new collection. The Interval Index of a
collection is derived on first use and cached on the instance.
"""
import math
from typing import Any, Callable, Dict, Iterator, List, Mapping, Optional, Sequence, Union

from Bio.SeqFeature import FeatureLocation
from methodtools import lru_cache

from inscripta.rangegrammar.collection.columns import ColumnTable
from inscripta.rangegrammar.exc import ValidationException
from inscripta.rangegrammar.index.interval_index import IntervalIndex
from inscripta.rangegrammar.location.anchor import Anchor
from inscripta.rangegrammar.location.interval import AnyInterval, GenomicInterval, Interval
from inscripta.rangegrammar.location.strand import Strand
from inscripta.rangegrammar.util.object_validation import ObjectValidation

ColumnInput = Union[ColumnTable, Mapping[str, Sequence[Any]], None]
RowSelector = Union[Sequence[bool], Callable[["RangeCollection"], Sequence[bool]]]


class RangeCollection:
    """An ordered collection of intervals (all plain or all genomic) with a table of attribute columns."""

    def __init__(
        self,
        intervals: Sequence[AnyInterval] = (),
        columns: ColumnInput = None,
        anchor: Anchor = Anchor.NONE,
        genomic: Optional[bool] = None,
    ):
        """
        Parameters
        ----------
        intervals
            Intervals in row order
        columns
            Attribute columns, one entry per interval
        anchor
            Default anchor for width-changing arithmetic on this collection
        genomic
            Kind of an empty collection. Ignored when intervals are given.
        """
        self._intervals = tuple(intervals)
        ObjectValidation.require_uniform_interval_kind(self._intervals)
        if not isinstance(columns, ColumnTable):
            columns = ColumnTable(columns, n_rows=len(self._intervals))
        if len(columns) != len(self._intervals):
            raise ValidationException(f"Column table has {len(columns)} rows; expected {len(self._intervals)}")
        self._columns = columns
        self._anchor = Anchor.from_value(anchor)
        self._genomic = self._intervals[0].is_genomic if self._intervals else bool(genomic)

    @classmethod
    def from_coordinates(
        cls,
        starts: Sequence[int],
        ends: Sequence[int],
        sequences: Optional[Sequence[str]] = None,
        strands: Optional[Sequence[Union[Strand, str]]] = None,
        columns: ColumnInput = None,
    ) -> "RangeCollection":
        """Builds a collection from coordinate vectors. Intervals are genomic when ``sequences`` is given;
        strands may be :class:`Strand` members or their symbols and default to Unstranded."""
        if len(starts) != len(ends):
            raise ValidationException(f"Got {len(starts)} starts and {len(ends)} ends")
        if sequences is None:
            if strands is not None:
                raise ValidationException("Strands require sequence identifiers")
            return cls([Interval(start, end) for start, end in zip(starts, ends)], columns)
        if strands is None:
            strands = [Strand.UNSTRANDED] * len(starts)
        if not len(sequences) == len(strands) == len(starts):
            raise ValidationException("Coordinate, sequence and strand vectors must have the same length")
        strands = [strand if isinstance(strand, Strand) else Strand.from_symbol(strand) for strand in strands]
        return cls(
            [GenomicInterval(*fields) for fields in zip(starts, ends, sequences, strands)], columns, genomic=True
        )

    @classmethod
    def empty_like(cls, other: "RangeCollection", columns: ColumnInput = None) -> "RangeCollection":
        return cls((), columns, genomic=other.is_genomic)

    def __len__(self):
        return len(self._intervals)

    def __iter__(self) -> Iterator[AnyInterval]:
        return iter(self._intervals)

    def __getitem__(self, item: Union[int, slice, Sequence[int]]):
        if isinstance(item, int):
            return self._intervals[item]
        if isinstance(item, slice):
            return self.take(range(len(self))[item])
        return self.take(item)

    def __eq__(self, other):
        if type(other) is not RangeCollection:
            return False
        return self._intervals == other._intervals and self._columns == other._columns

    def __repr__(self):
        kind = "genomic" if self._genomic else "plain"
        return f"<RangeCollection {len(self)} {kind} intervals; columns: {self._columns.column_names}>"

    @property
    def intervals(self) -> List[AnyInterval]:
        return list(self._intervals)

    @property
    def columns(self) -> ColumnTable:
        return self._columns

    @property
    def column_names(self) -> List[str]:
        return self._columns.column_names

    @property
    def anchor(self) -> Anchor:
        return self._anchor

    @property
    def is_genomic(self) -> bool:
        return self._genomic

    @property
    def starts(self) -> List[int]:
        return [interval.start for interval in self._intervals]

    @property
    def ends(self) -> List[int]:
        return [interval.end for interval in self._intervals]

    @property
    def widths(self) -> List[int]:
        return [interval.width for interval in self._intervals]

    @property
    def sequences(self) -> List[Optional[str]]:
        return [interval.sequence for interval in self._intervals]

    @property
    def strands(self) -> List[Strand]:
        return [interval.strand for interval in self._intervals]

    @lru_cache(maxsize=4)
    def index(self, stranded: bool = False, threads: int = 1) -> IntervalIndex:
        """The Interval Index of this collection, partitioned by sequence (and strand if ``stranded``)."""
        return IntervalIndex(self._intervals, stranded=stranded, threads=threads)

    def row(self, index: int) -> Dict[str, Any]:
        """A row as a dictionary of coordinates followed by attribute columns."""
        interval = self._intervals[index]
        record = {"start": interval.start, "end": interval.end, "width": interval.width}
        if self._genomic:
            record["sequence"] = interval.sequence
            record["strand"] = interval.strand
        record.update(self._columns.row(index))
        return record

    def to_records(self) -> List[Dict[str, Any]]:
        return [self.row(i) for i in range(len(self))]

    @classmethod
    def from_records(cls, records: Sequence[Mapping[str, Any]]) -> "RangeCollection":
        """Inverse of :meth:`to_records`. Records are genomic when they carry a ``sequence`` key; ``width`` is
        derived and ignored."""
        coordinate_keys = {"start", "end", "width", "sequence", "strand"}
        genomic = any("sequence" in record for record in records)
        columns = ColumnTable.from_records(
            [{k: v for k, v in record.items() if k not in coordinate_keys} for record in records]
        )
        return cls.from_coordinates(
            [record["start"] for record in records],
            [record["end"] for record in records],
            sequences=[record["sequence"] for record in records] if genomic else None,
            strands=[record.get("strand", Strand.UNSTRANDED) for record in records] if genomic else None,
            columns=columns,
        )

    def to_biopython(self) -> List[FeatureLocation]:
        if not self._genomic:
            raise ValidationException("Only genomic collections can be converted to BioPython locations")
        return [interval.to_biopython() for interval in self._intervals]

    def take(self, indices: Sequence[int]) -> "RangeCollection":
        """Rows at the given indices, in the order given. Repeated indices repeat rows."""
        indices = list(indices)
        return RangeCollection(
            [self._intervals[i] for i in indices], self._columns.take(indices), self._anchor, self._genomic
        )

    def with_intervals(self, intervals: Sequence[AnyInterval]) -> "RangeCollection":
        """Replaces the intervals row by row, keeping the columns."""
        ObjectValidation.require_same_length(intervals, self, "Intervals and collection")
        return RangeCollection(intervals, self._columns, self._anchor, self._genomic)

    def with_columns(self, columns: ColumnInput) -> "RangeCollection":
        return RangeCollection(self._intervals, columns, self._anchor, self._genomic)

    def with_anchor(self, anchor: Anchor) -> "RangeCollection":
        return RangeCollection(self._intervals, self._columns, anchor, self._genomic)

    def filter(self, selector: RowSelector) -> "RangeCollection":
        """Keeps rows for which the selector is true. The selector is a boolean vector or a function of this
        collection returning one."""
        mask = list(selector(self) if callable(selector) else selector)
        ObjectValidation.require_same_length(mask, self, "Filter mask and collection")
        return self.take([i for i, keep in enumerate(mask) if keep])

    def mutate(
        self, **columns: Union[Sequence[Any], Callable[["RangeCollection"], Sequence[Any]]]
    ) -> "RangeCollection":
        """Adds or replaces columns. Values are vectors, scalars broadcast to every row, or functions of this
        collection returning a vector. Functions see the collection as it was before the call."""
        new_columns = {}
        for name, values in columns.items():
            if callable(values):
                values = values(self)
            if isinstance(values, (str, bytes)) or not isinstance(values, Sequence):
                values = [values] * len(self)
            ObjectValidation.require_same_length(values, self, f"Column {name} and collection")
            new_columns[name] = values
        return self.with_columns(self._columns.with_columns(**new_columns))

    def select(self, *names: str) -> "RangeCollection":
        return self.with_columns(self._columns.select(*names))

    def drop(self, *names: str) -> "RangeCollection":
        return self.with_columns(self._columns.drop(*names))

    def sort(self) -> "RangeCollection":
        """Rows ordered by sequence, start, end and strand; ties keep their original order."""
        return self.take(sorted(range(len(self)), key=lambda i: self._intervals[i].sort_key()))

    @staticmethod
    def concat(collections: Sequence["RangeCollection"]) -> "RangeCollection":
        """Stacks collections with identical columns. The anchor of the first collection is kept."""
        if not collections:
            return RangeCollection()
        for other in collections[1:]:
            ObjectValidation.require_same_kind(collections[0], other)
        return RangeCollection(
            [interval for collection in collections for interval in collection],
            ColumnTable.concat([collection.columns for collection in collections]),
            collections[0].anchor,
            any(collection.is_genomic for collection in collections),
        )

    def is_null(self, name: str) -> List[bool]:
        """Missing-value mask of a column (None or NaN)."""
        return [value is None or (isinstance(value, float) and math.isnan(value)) for value in self._columns[name]]
