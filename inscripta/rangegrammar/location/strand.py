from enum import Enum
from functools import total_ordering
from typing import Optional

from inscripta.rangegrammar.exc import StrandRequiredException


@total_ordering
class Strand(Enum):
    PLUS = 1
    MINUS = -1
    UNSTRANDED = 0

    def __str__(self):
        return str(self.to_symbol())

    @staticmethod
    def from_symbol(value: str) -> "Strand":
        """Converts string representation of a strand to a Strand"""
        if value == "+":
            return Strand.PLUS
        if value == "-":
            return Strand.MINUS
        if value in (".", "*"):
            return Strand.UNSTRANDED
        raise ValueError("{} is not a valid string representation of a strand".format(value))

    def to_symbol(self) -> str:
        if self == Strand.PLUS:
            return "+"
        if self == Strand.MINUS:
            return "-"
        return "."

    @staticmethod
    def from_int(value: Optional[int]) -> "Strand":
        """Converts integer representation of a strand to a Strand. ``None`` is Unstranded, following Biopython."""
        if value is None:
            return Strand.UNSTRANDED
        return Strand(value)  # Raises ValueError for invalid int

    def to_int(self) -> Optional[int]:
        """Biopython representation of this strand"""
        return None if self == Strand.UNSTRANDED else self.value

    @staticmethod
    def _order():
        return {Strand.PLUS: 1, Strand.MINUS: 2, Strand.UNSTRANDED: 3}

    def __lt__(self, other):
        if not type(other) is Strand:
            raise ValueError("Cannot compare {} to {}".format(type(self).__name__, type(other).__name__))
        order = Strand._order()
        return order[self] < order[other]

    @property
    def is_directional(self) -> bool:
        return self is not Strand.UNSTRANDED

    def reverse(self) -> "Strand":
        """Returns the opposite of this Strand"""
        if self == Strand.PLUS:
            return Strand.MINUS
        if self == Strand.MINUS:
            return Strand.PLUS
        return Strand.UNSTRANDED

    def is_compatible(self, other: "Strand") -> bool:
        """Wildcard comparison: Unstranded is compatible with every strand."""
        return self == other or Strand.UNSTRANDED in (self, other)

    def assert_directional(self):
        """Raises StrandRequiredException if this Strand does not have a defined direction (plus or minus)"""
        if self not in [Strand.PLUS, Strand.MINUS]:
            raise StrandRequiredException("Strand {} does not have a defined direction".format(self))
