class RangeGrammarException(Exception):
    """
    Base exception class for RangeGrammar.
    """

    pass


class InvalidIntervalException(RangeGrammarException):
    """
    Raised when an interval would violate ``end >= start - 1``, either at construction or as the result of
    coordinate arithmetic. Invalid coordinates are never clamped.
    """

    pass


class DisjointIntervalsException(InvalidIntervalException):
    """
    Raised when an element-wise operation requires a pair of intervals to overlap or be adjacent, but they do not;
    or when the result of an element-wise difference would not be a single interval.
    """

    pass


class StrandRequiredException(RangeGrammarException):
    """
    Raised when a strand-directed operation (5'/3' anchors, upstream/downstream shifts, flanks and nearest
    searches) is performed on an Unstranded interval.
    """

    pass


class SequenceMismatchException(RangeGrammarException):
    """
    Raised when an operation requiring a shared coordinate system is given intervals on different sequences,
    or when plain and genomic collections are combined.
    """

    pass


class ShapeMismatchException(RangeGrammarException):
    """
    Raised when element-wise operations are given collections (or value vectors) of unequal length.
    """

    pass


class ColumnCollisionException(RangeGrammarException):
    """
    Raised when combining two column tables produces duplicate column names that cannot be resolved by suffixing.
    """

    pass


class ValidationException(RangeGrammarException):
    """
    Raised when object constructors or configuration models are given invalid inputs that are not
    InvalidIntervalExceptions, such as ragged columns or mixed interval kinds.
    """

    pass
