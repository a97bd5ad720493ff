"""
Data models. These models validate configuration and in-memory hand-off data before it reaches the engine.
"""
from dataclasses import field
from typing import Any, ClassVar, Dict, List, Optional, Type

from marshmallow import Schema, ValidationError, validate, validates_schema
from marshmallow_dataclass import dataclass

from inscripta.rangegrammar.collection.ranges import RangeCollection
from inscripta.rangegrammar.index.interval_index import OverlapMode
from inscripta.rangegrammar.ops.join import DEFAULT_SUFFIX
from inscripta.rangegrammar.ops.overlap import OverlapParameters


@dataclass
class BaseModel:
    """Base for all of the models."""

    Schema: ClassVar[Type[Schema]] = Schema  # noqa: F811

    class Meta:
        ordered = True


@dataclass
class OverlapParametersModel(BaseModel):
    """Configuration recognized by overlap and join operations."""

    maxgap: int = field(default=0, metadata={"validate": validate.Range(min=-1)})
    minoverlap: int = field(default=1, metadata={"validate": validate.Range(min=0)})
    mode: str = field(
        default=OverlapMode.ANY.value, metadata={"validate": validate.OneOf([mode.value for mode in OverlapMode])}
    )
    directed: bool = False
    suffix: Optional[List[str]] = field(
        default_factory=lambda: list(DEFAULT_SUFFIX), metadata={"validate": validate.Length(equal=2)}
    )

    def to_parameters(self) -> OverlapParameters:
        return OverlapParameters(self.maxgap, self.minoverlap, OverlapMode(self.mode), self.directed)

    def to_kwargs(self) -> Dict[str, Any]:
        """Keyword arguments accepted by the join functions."""
        return dict(
            maxgap=self.maxgap,
            minoverlap=self.minoverlap,
            mode=OverlapMode(self.mode),
            directed=self.directed,
            suffix=tuple(self.suffix) if self.suffix is not None else None,
        )


@dataclass
class RangeCollectionModel(BaseModel):
    """Data model that allows construction of a :class:`~inscripta.rangegrammar.collection.RangeCollection`.

    Strands are given as symbols (``+``, ``-``, ``.``) and require sequences.
    """

    starts: List[int]
    ends: List[int]
    sequences: Optional[List[str]] = None
    strands: Optional[List[str]] = field(
        default=None, metadata={"validate": validate.ContainsOnly(["+", "-", ".", "*"])}
    )
    columns: Optional[Dict[str, List[Any]]] = None

    @validates_schema
    def _validate_lengths(self, data, **kwargs):
        n = len(data["starts"])
        for name in ("ends", "sequences", "strands"):
            if data.get(name) is not None and len(data[name]) != n:
                raise ValidationError(f"{name} must have {n} entries", name)
        if data.get("strands") is not None and data.get("sequences") is None:
            raise ValidationError("strands require sequences", "strands")

    def to_range_collection(self) -> RangeCollection:
        return RangeCollection.from_coordinates(
            self.starts, self.ends, sequences=self.sequences, strands=self.strands, columns=self.columns
        )

    @staticmethod
    def from_range_collection(collection: RangeCollection) -> "RangeCollectionModel":
        """Convert a :class:`~inscripta.rangegrammar.collection.RangeCollection` to a RangeCollectionModel."""
        return RangeCollectionModel(
            starts=collection.starts,
            ends=collection.ends,
            sequences=collection.sequences if collection.is_genomic else None,
            strands=[strand.to_symbol() for strand in collection.strands] if collection.is_genomic else None,
            columns={name: list(values) for name, values in collection.columns.items()} or None,
        )
