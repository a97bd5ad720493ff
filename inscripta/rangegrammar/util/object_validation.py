from inscripta.rangegrammar.exc import (
    SequenceMismatchException,
    ShapeMismatchException,
    ValidationException,
)


class ObjectValidation:
    @staticmethod
    def require_same_length(obj1, obj2, what: str = "Collections"):
        if len(obj1) != len(obj2):
            raise ShapeMismatchException("{} must have the same length: {} != {}".format(what, len(obj1), len(obj2)))

    @staticmethod
    def require_same_kind(collection1, collection2):
        """Plain and genomic collections live in different coordinate systems and cannot be combined."""
        if len(collection1) and len(collection2) and collection1.is_genomic != collection2.is_genomic:
            raise SequenceMismatchException("Cannot combine a plain interval collection with a genomic one")

    @staticmethod
    def require_same_sequence(interval1, interval2):
        if interval1.sequence != interval2.sequence:
            raise SequenceMismatchException(
                "Intervals must be on the same sequence:\n{}\n{}".format(repr(interval1), repr(interval2))
            )

    @staticmethod
    def require_uniform_interval_kind(intervals):
        kinds = {interval.is_genomic for interval in intervals}
        if len(kinds) > 1:
            raise ValidationException("Intervals must be all plain or all genomic")
