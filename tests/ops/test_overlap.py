import math

import pytest

from inscripta.rangegrammar.collection import RangeCollection
from inscripta.rangegrammar.exc import SequenceMismatchException, ValidationException
from inscripta.rangegrammar.index.interval_index import OverlapMode
from inscripta.rangegrammar.ops import (
    OverlapParameters,
    count_overlaps,
    filter_by_non_overlaps,
    filter_by_overlaps,
    iter_matches,
    match,
    self_match,
)


class TestOverlapParameters:
    def test_defaults(self):
        parameters = OverlapParameters()
        assert parameters.maxgap == 0
        assert parameters.minoverlap == 1
        assert parameters.mode is OverlapMode.ANY
        assert not parameters.directed

    def test_mode_from_value(self):
        assert OverlapParameters(mode="within").mode is OverlapMode.WITHIN

    @pytest.mark.parametrize(
        "kwargs",
        [
            dict(maxgap=-2),
            dict(minoverlap=-1),
            dict(mode="sideways"),
        ],
    )
    def test_invalid(self, kwargs):
        with pytest.raises(ValidationException):
            OverlapParameters(**kwargs)


class TestMatch:
    def test_match(self, x_ranges, y_ranges):
        assert match(x_ranges, y_ranges) == [(0, 1), (0, 2), (0, 3), (0, 4)]

    def test_matches_are_positional_overlaps(self, x_ranges, y_ranges):
        expected = [
            (i, j)
            for i, a in enumerate(x_ranges)
            for j, b in enumerate(y_ranges)
            if a.start <= b.end and b.start <= a.end
        ]
        assert match(x_ranges, y_ranges) == expected

    def test_symmetric(self, genomic_x, genomic_y):
        forward = set(match(genomic_x, genomic_y))
        backward = {(x_row, y_row) for y_row, x_row in match(genomic_y, genomic_x)}
        assert forward == backward

    def test_maxgap(self, x_ranges, y_ranges):
        assert match(x_ranges, y_ranges, maxgap=1) == [(0, 0), (0, 1), (0, 2), (0, 3), (0, 4)]

    @pytest.mark.parametrize(
        "x_span,y_span,expected",
        [
            ((5, 7), (6, 6), [(0, 0)]),
            ((1, 10), (10, 20), [(0, 0)]),
            ((5, 5), (1, 10), [(0, 0)]),
            # adjacent intervals share no position
            ((1, 4), (5, 9), []),
        ],
    )
    def test_negative_maxgap(self, x_span, y_span, expected):
        x = RangeCollection.from_coordinates([x_span[0]], [x_span[1]])
        y = RangeCollection.from_coordinates([y_span[0]], [y_span[1]])
        assert match(x, y, maxgap=-1) == expected
        assert match(y, x, maxgap=-1) == expected

    def test_negative_maxgap_symmetric(self, x_ranges, y_ranges):
        forward = set(match(x_ranges, y_ranges, maxgap=-1))
        backward = {(x_row, y_row) for y_row, x_row in match(y_ranges, x_ranges, maxgap=-1)}
        assert forward == backward == set(match(x_ranges, y_ranges))

    def test_minoverlap(self, x_ranges, y_ranges):
        assert match(x_ranges, y_ranges, minoverlap=3) == [(0, 3), (0, 4)]

    @pytest.mark.parametrize(
        "mode,expected",
        [
            (OverlapMode.WITHIN, []),
            (OverlapMode.CONTAINS, [(0, 3), (0, 4)]),
        ],
    )
    def test_mode(self, x_ranges, y_ranges, mode, expected):
        assert match(x_ranges, y_ranges, mode=mode) == expected

    def test_within(self, x_ranges, y_ranges):
        assert match(y_ranges, x_ranges, mode=OverlapMode.WITHIN) == [(3, 0), (4, 0)]

    def test_genomic(self, genomic_x, genomic_y):
        assert match(genomic_x, genomic_y) == [(0, 0), (1, 1), (2, 3)]
        assert match(genomic_x, genomic_y, directed=True) == [(0, 0)]

    def test_threaded(self, genomic_x, genomic_y):
        assert match(genomic_x, genomic_y, threads=2) == match(genomic_x, genomic_y)

    def test_kind_mismatch(self, x_ranges, genomic_y):
        with pytest.raises(SequenceMismatchException):
            match(x_ranges, genomic_y)

    def test_iter_matches_validates_eagerly(self, x_ranges, y_ranges):
        with pytest.raises(ValidationException):
            iter_matches(x_ranges, y_ranges, maxgap=-5)

    def test_iter_matches_is_lazy(self, x_ranges, y_ranges):
        matches = iter_matches(x_ranges, y_ranges)
        assert next(matches) == (0, 1)

    def test_self_match(self, y_ranges):
        assert self_match(y_ranges) == [
            (0, 1),
            (0, 2),
            (1, 0),
            (1, 2),
            (1, 3),
            (2, 0),
            (2, 1),
            (2, 3),
            (2, 4),
            (3, 1),
            (3, 2),
            (3, 4),
            (4, 2),
            (4, 3),
        ]


class TestOverlapFilters:
    def test_count_overlaps(self, x_ranges, y_ranges):
        counted = count_overlaps(x_ranges, y_ranges)
        assert counted.columns["n_overlaps"] == (4, 0, 0, 0)
        assert counted.column_names == ["id", "n_overlaps"]

    def test_count_overlaps_name(self, x_ranges, y_ranges):
        assert count_overlaps(y_ranges, x_ranges, name="hits").columns["hits"] == (0, 1, 1, 1, 1)

    def test_filter_by_overlaps(self, x_ranges, y_ranges):
        assert filter_by_overlaps(x_ranges, y_ranges).columns["id"] == ("a",)
        assert filter_by_non_overlaps(x_ranges, y_ranges).columns["id"] == ("b", "c", "d")

    def test_filter_keeps_columns(self, y_ranges, x_ranges):
        filtered = filter_by_overlaps(y_ranges, x_ranges)
        assert filtered.columns["id"] == ("w", "x", "y", "z")
        assert not any(math.isnan(score) for score in filtered.columns["score"])
