"""
Enumeration utilities.
"""
from enum import Enum

from inscripta.rangegrammar.exc import ValidationException


class HasMemberMixin(Enum):
    """Adds `has_value()` and `from_value()` lookups to string-valued enumerations."""

    @classmethod
    def has_value(cls, value) -> bool:
        return value in cls._value2member_map_

    @classmethod
    def from_value(cls, value):
        """Accepts a member or its value; raises ValidationException for anything else."""
        if isinstance(value, cls):
            return value
        if not cls.has_value(value):
            raise ValidationException(
                "{} is not a valid {}. Choose one of: {}".format(
                    value, cls.__name__, ", ".join(str(m.value) for m in cls)
                )
            )
        return cls(value)
