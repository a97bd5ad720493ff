import pytest
from marshmallow import ValidationError

from inscripta.rangegrammar.collection import RangeCollection
from inscripta.rangegrammar.index.interval_index import OverlapMode
from inscripta.rangegrammar.models import OverlapParametersModel, RangeCollectionModel
from inscripta.rangegrammar.ops import join_overlap_inner


class TestOverlapParametersModel:
    def test_defaults(self):
        model = OverlapParametersModel.Schema().load({})
        assert model.to_kwargs() == dict(
            maxgap=0, minoverlap=1, mode=OverlapMode.ANY, directed=False, suffix=(".x", ".y")
        )

    def test_to_parameters(self):
        model = OverlapParametersModel.Schema().load({"maxgap": 2, "mode": "contains", "directed": True})
        parameters = model.to_parameters()
        assert parameters.maxgap == 2
        assert parameters.mode is OverlapMode.CONTAINS
        assert parameters.directed

    @pytest.mark.parametrize(
        "data",
        [
            {"maxgap": -2},
            {"minoverlap": -1},
            {"mode": "sideways"},
            {"suffix": [".x"]},
        ],
    )
    def test_invalid(self, data):
        with pytest.raises(ValidationError):
            OverlapParametersModel.Schema().load(data)

    def test_join_kwargs(self, x_ranges, y_ranges):
        model = OverlapParametersModel.Schema().load({"maxgap": 1, "suffix": None})
        joined = join_overlap_inner(x_ranges.select(), y_ranges.select(), **model.to_kwargs())
        assert joined.column_names == ["start", "end"]
        assert len(joined) == 5


class TestRangeCollectionModel:
    def test_load(self):
        model = RangeCollectionModel.Schema().load(
            {
                "starts": [1, 10],
                "ends": [5, 20],
                "sequences": ["chr1", "chr1"],
                "strands": ["+", "-"],
                "columns": {"name": ["a", "b"]},
            }
        )
        collection = model.to_range_collection()
        assert collection.is_genomic
        assert collection.columns["name"] == ("a", "b")

    @pytest.mark.parametrize(
        "data",
        [
            {"starts": [1, 10], "ends": [5]},
            {"starts": [1], "ends": [5], "strands": ["+"]},
            {"starts": [1], "ends": [5], "sequences": ["chr1"], "strands": ["x"]},
            {"starts": [1], "ends": [5], "sequences": ["chr1", "chr2"]},
            {"ends": [5]},
        ],
    )
    def test_invalid(self, data):
        with pytest.raises(ValidationError):
            RangeCollectionModel.Schema().load(data)

    def test_round_trip(self, genomic_x):
        model = RangeCollectionModel.from_range_collection(genomic_x)
        dumped = RangeCollectionModel.Schema().dump(model)
        assert dumped["strands"] == ["+", "-", "+", "."]
        assert RangeCollectionModel.Schema().load(dumped).to_range_collection() == genomic_x

    def test_plain(self, x_ranges):
        model = RangeCollectionModel.from_range_collection(x_ranges)
        assert model.sequences is None
        assert model.to_range_collection() == x_ranges

    def test_no_columns(self):
        collection = RangeCollection.from_coordinates([1], [2])
        assert RangeCollectionModel.from_range_collection(collection).columns is None
