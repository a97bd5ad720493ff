"""
Interval value types. :class:`Interval` is a closed integer range ``[start, end]``; :class:`GenomicInterval`
composes an :class:`Interval` with a sequence identifier and a :class:`Strand`.

Both types share the same read-only surface (``start``, ``end``, ``width``, ``sequence``, ``strand``,
``is_genomic``) so that engines can treat them uniformly. A plain :class:`Interval` reports ``sequence = None``
and ``strand = Strand.UNSTRANDED``.
"""
from functools import total_ordering
from typing import Optional, Tuple, Union

from Bio.SeqFeature import FeatureLocation

from inscripta.rangegrammar.exc import InvalidIntervalException, ValidationException
from inscripta.rangegrammar.location.strand import Strand

# Observable missing-value sentinel used for unmatched rows in left outer joins
MISSING_START = 0
MISSING_END = -1
MISSING_SEQUENCE = "."
MISSING_STRAND = Strand.UNSTRANDED


def _require_valid_coordinates(start: int, end: int):
    if not isinstance(start, int) or not isinstance(end, int):
        raise ValidationException(f"Coordinates must be integers. Start: {start!r}, end: {end!r}")
    if end < start - 1:
        raise InvalidIntervalException(f"Positions must satisfy end >= start - 1. Start: {start}, end: {end}")


@total_ordering
class Interval:
    """A closed integer range. A zero-width interval has ``end == start - 1``."""

    __slots__ = ("_start", "_end")

    is_genomic = False

    def __init__(self, start: int, end: int):
        _require_valid_coordinates(start, end)
        self._start = start
        self._end = end

    @property
    def start(self) -> int:
        return self._start

    @property
    def end(self) -> int:
        return self._end

    @property
    def width(self) -> int:
        return self._end - self._start + 1

    @property
    def sequence(self) -> Optional[str]:
        return None

    @property
    def strand(self) -> Strand:
        return Strand.UNSTRANDED

    @property
    def interval(self) -> "Interval":
        return self

    def __len__(self):
        return self.width

    def __str__(self):
        return f"{self._start}-{self._end}"

    def __repr__(self):
        return f"<Interval {str(self)}>"

    def __eq__(self, other):
        if type(other) is not Interval:
            return False
        return self._start == other._start and self._end == other._end

    def __hash__(self):
        return hash((self._start, self._end))

    def __lt__(self, other: "Interval"):
        return self.sort_key() < other.sort_key()

    def sort_key(self) -> Tuple:
        return "", self._start, self._end, Strand._order()[Strand.UNSTRANDED]

    def reset_coordinates(self, start: int, end: int) -> "Interval":
        """Returns a new interval of the same kind with new coordinates."""
        return Interval(start, end)

    def reset_strand(self, strand: Strand) -> "Interval":
        return self

    def has_overlap(self, other: "AnyInterval") -> bool:
        """Positional overlap of at least one position; sequences must agree."""
        if self.sequence != other.sequence:
            return False
        return self.overlap_width(other) >= 1

    def overlap_width(self, other: "AnyInterval") -> int:
        """Number of shared positions. Zero for adjacent intervals, negative for separated intervals."""
        return min(self.end, other.end) - max(self.start, other.start) + 1

    def contains(self, other: "AnyInterval") -> bool:
        if self.sequence != other.sequence:
            return False
        return self.start <= other.start and other.end <= self.end


@total_ordering
class GenomicInterval:
    """An :class:`Interval` anchored to a named sequence and a strand."""

    __slots__ = ("_interval", "_sequence", "_strand")

    is_genomic = True

    def __init__(self, start: int, end: int, sequence: str, strand: Strand = Strand.UNSTRANDED):
        """
        Parameters
        ----------
        start
            First position of this interval
        end
            Last position of this interval; ``start - 1`` for a zero-width interval
        sequence
            Identifier of the sequence this interval lives on
        strand
            Strand of this interval on the sequence
        """
        if not isinstance(sequence, str):
            raise ValidationException(f"Sequence identifier must be a string, not {sequence!r}")
        if type(strand) is not Strand:
            raise ValidationException(f"Strand must be a Strand, not {strand!r}")
        self._interval = Interval(start, end)
        self._sequence = sequence
        self._strand = strand

    @property
    def interval(self) -> Interval:
        return self._interval

    @property
    def start(self) -> int:
        return self._interval.start

    @property
    def end(self) -> int:
        return self._interval.end

    @property
    def width(self) -> int:
        return self._interval.width

    @property
    def sequence(self) -> str:
        return self._sequence

    @property
    def strand(self) -> Strand:
        return self._strand

    def __len__(self):
        return self.width

    def __str__(self):
        return f"{self._sequence}:{self._interval}:{self._strand}"

    def __repr__(self):
        return f"<GenomicInterval {str(self)}>"

    def __eq__(self, other):
        if type(other) is not GenomicInterval:
            return False
        return (
            self._interval == other._interval and self._sequence == other._sequence and self._strand is other._strand
        )

    def __hash__(self):
        return hash((self._interval, self._sequence, self._strand))

    def __lt__(self, other: "GenomicInterval"):
        return self.sort_key() < other.sort_key()

    def sort_key(self) -> Tuple:
        return self._sequence, self.start, self.end, Strand._order()[self._strand]

    def reset_coordinates(self, start: int, end: int) -> "GenomicInterval":
        return GenomicInterval(start, end, self._sequence, self._strand)

    def reset_strand(self, strand: Strand) -> "GenomicInterval":
        return GenomicInterval(self.start, self.end, self._sequence, strand)

    has_overlap = Interval.has_overlap
    overlap_width = Interval.overlap_width
    contains = Interval.contains

    def to_feature_location(self) -> FeatureLocation:
        """Convert to a BioPython FeatureLocation (0-based, half-open)."""
        return FeatureLocation(self.start - 1, self.end, self._strand.to_int(), ref=self._sequence)

    def to_biopython(self) -> FeatureLocation:
        """Provide a shared function signature with collections"""
        return self.to_feature_location()

    @staticmethod
    def from_biopython(location: FeatureLocation, sequence: Optional[str] = None) -> "GenomicInterval":
        """Converts a BioPython FeatureLocation. The sequence defaults to the location's ``ref`` attribute."""
        sequence = sequence if sequence is not None else location.ref
        if sequence is None:
            raise ValidationException("A sequence identifier is required to convert a FeatureLocation")
        return GenomicInterval(int(location.start) + 1, int(location.end), sequence, Strand.from_int(location.strand))


AnyInterval = Union[Interval, GenomicInterval]
