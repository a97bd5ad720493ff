import pytest

from inscripta.rangegrammar.exc import StrandRequiredException
from inscripta.rangegrammar.location.distance import Direction
from inscripta.rangegrammar.location.interval import GenomicInterval, Interval
from inscripta.rangegrammar.location.strand import Strand
from inscripta.rangegrammar.ops import follow, nearest, nearest_distances, precede
from inscripta.rangegrammar.ops.nearest import resolve_direction


class TestResolveDirection:
    @pytest.mark.parametrize(
        "direction,interval,expected",
        [
            (Direction.NEAREST, Interval(1, 2), Direction.NEAREST),
            (Direction.LEFT, Interval(1, 2), Direction.FOLLOW),
            (Direction.RIGHT, Interval(1, 2), Direction.PRECEDE),
            ("precede", Interval(1, 2), Direction.PRECEDE),
            (Direction.UPSTREAM, GenomicInterval(1, 2, "chr1", Strand.PLUS), Direction.FOLLOW),
            (Direction.UPSTREAM, GenomicInterval(1, 2, "chr1", Strand.MINUS), Direction.PRECEDE),
            (Direction.DOWNSTREAM, GenomicInterval(1, 2, "chr1", Strand.PLUS), Direction.PRECEDE),
            (Direction.DOWNSTREAM, GenomicInterval(1, 2, "chr1", Strand.MINUS), Direction.FOLLOW),
        ],
    )
    def test_resolve(self, direction, interval, expected):
        assert resolve_direction(direction, interval) == expected

    def test_unstranded(self):
        with pytest.raises(StrandRequiredException):
            resolve_direction(Direction.UPSTREAM, Interval(1, 2))


class TestNearest:
    def test_nearest(self, x_ranges, y_ranges):
        # y0 is adjacent to x0, so it ties with the overlapping y1 at distance 0 and has the smaller start
        assert nearest(x_ranges, y_ranges) == [(0, 0), (1, 4), (2, 4), (3, 4)]

    def test_precede(self, x_ranges, y_ranges):
        assert precede(x_ranges, y_ranges) == [(0, None), (1, None), (2, None), (3, None)]
        assert precede(y_ranges, x_ranges) == [(0, 0), (1, 1), (2, 1), (3, 1), (4, 1)]

    def test_follow(self, x_ranges, y_ranges):
        assert follow(x_ranges, y_ranges) == [(0, 0), (1, 4), (2, 4), (3, 4)]

    def test_distances(self, x_ranges, y_ranges):
        assert nearest_distances(x_ranges, y_ranges) == [0, 1, 6, 11]
        assert nearest_distances(x_ranges, y_ranges, Direction.PRECEDE) == [None] * 4

    def test_upstream(self, genomic_x, genomic_y):
        assert nearest(genomic_x[:3], genomic_y, Direction.UPSTREAM) == [(0, None), (1, 2), (2, None)]
        assert nearest(genomic_x[:3], genomic_y, Direction.DOWNSTREAM) == [(0, 1), (1, 0), (2, None)]

    def test_directed(self, genomic_x, genomic_y):
        assert nearest(genomic_x[:3], genomic_y, Direction.DOWNSTREAM, directed=True) == [
            (0, 1),
            (1, None),
            (2, None),
        ]

    def test_upstream_unstranded(self, genomic_x, genomic_y):
        with pytest.raises(StrandRequiredException):
            nearest(genomic_x, genomic_y, Direction.UPSTREAM)
