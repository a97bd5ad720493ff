"""
Data models. These models allow for validation of configuration and input collections.
"""

from inscripta.rangegrammar.models.models import (  # noqa: F401
    OverlapParametersModel,
    RangeCollectionModel,
)
