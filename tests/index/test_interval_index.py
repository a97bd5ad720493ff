import pytest

from inscripta.rangegrammar.collection import RangeCollection
from inscripta.rangegrammar.index.interval_index import IntervalIndex, OverlapMode, PartitionIndex
from inscripta.rangegrammar.location.distance import Direction
from inscripta.rangegrammar.location.interval import GenomicInterval, Interval
from inscripta.rangegrammar.location.strand import Strand


@pytest.fixture
def y_index(y_ranges) -> IntervalIndex:
    return IntervalIndex(y_ranges.intervals)


class TestOverlapQuery:
    @pytest.mark.parametrize(
        "query,maxgap,minoverlap,expected",
        [
            (Interval(5, 9), 0, 1, [1, 2, 3, 4]),
            (Interval(10, 14), 0, 1, []),
            (Interval(10, 14), 2, 1, [4]),
            # adjacent after extension does not share a position
            (Interval(10, 14), 1, 1, []),
            (Interval(10, 14), 1, 0, [4]),
            (Interval(5, 9), 0, 3, [3, 4]),
            # negative maxgap keeps the query in place and requires -maxgap shared positions
            (Interval(2, 4), -1, 1, [0, 1, 2]),
            (Interval(2, 4), -2, 1, [0, 1]),
            (Interval(6, 6), -1, 1, [2, 3, 4]),
            (Interval(6, 6), -2, 1, []),
            # zero-width queries share no positions
            (Interval(5, 4), 0, 1, []),
            (Interval(5, 4), 0, 0, [0, 1, 2, 3]),
        ],
    )
    def test_any(self, y_index, query, maxgap, minoverlap, expected):
        assert y_index.query_overlaps(query, maxgap, minoverlap) == expected

    @pytest.mark.parametrize(
        "query,mode,expected",
        [
            (Interval(4, 5), OverlapMode.WITHIN, [1, 2]),
            (Interval(2, 8), OverlapMode.WITHIN, []),
            (Interval(2, 8), OverlapMode.CONTAINS, [0, 1, 2, 3, 4]),
            (Interval(3, 7), OverlapMode.CONTAINS, [1, 2, 3]),
            (Interval(3, 7), "contains", [1, 2, 3]),
        ],
    )
    def test_modes(self, y_index, query, mode, expected):
        assert y_index.query_overlaps(query, mode=mode) == expected

    def test_results_sorted_by_start_then_row(self):
        index = IntervalIndex([Interval(5, 10), Interval(1, 10), Interval(5, 6)])
        assert index.query_overlaps(Interval(6, 6)) == [1, 0, 2]


class TestNearestQuery:
    @pytest.mark.parametrize(
        "query,direction,expected",
        [
            (Interval(10, 14), Direction.NEAREST, 4),
            (Interval(10, 14), Direction.FOLLOW, 4),
            (Interval(10, 14), Direction.PRECEDE, None),
            (Interval(0, 0), Direction.NEAREST, 0),
            (Interval(0, 0), Direction.PRECEDE, 0),
            (Interval(0, 0), Direction.FOLLOW, None),
            # adjacent and overlapping intervals are both at distance 0, smallest start first
            (Interval(5, 5), Direction.NEAREST, 0),
            (Interval(6, 6), Direction.NEAREST, 1),
        ],
    )
    def test_nearest(self, y_index, query, direction, expected):
        assert y_index.query_nearest(query, direction) == expected

    def test_tie_prefers_follow(self):
        index = IntervalIndex([Interval(9, 10), Interval(1, 3)])
        assert index.query_nearest(Interval(6, 6)) == 1

    def test_adjacent_with_smaller_start_beats_overlap(self):
        index = IntervalIndex([Interval(1, 4), Interval(8, 20)])
        assert index.query_nearest(Interval(5, 9)) == 0

    def test_overlap_beats_distant(self):
        index = IntervalIndex([Interval(1, 3), Interval(8, 20)])
        assert index.query_nearest(Interval(5, 9)) == 1

    def test_smaller_gap_wins(self):
        index = IntervalIndex([Interval(1, 3), Interval(8, 10)])
        assert index.query_nearest(Interval(6, 6)) == 1

    def test_equal_ends_prefer_smaller_start(self):
        partition = PartitionIndex([Interval(1, 5), Interval(3, 5)], [0, 1])
        assert partition.last_before(8) == 0
        assert partition.first_after(0) == 0
        assert partition.first_after(5) is None


class TestPartitions:
    def test_unstranded(self, genomic_y):
        index = IntervalIndex(genomic_y.intervals)
        assert sorted(index.partition_keys) == ["chr1", "chr2"]
        assert len(index) == 4
        assert index.query_overlaps(GenomicInterval(10, 20, "chr1", Strand.PLUS)) == [0]
        assert index.query_overlaps(GenomicInterval(50, 60, "chr1", Strand.MINUS)) == [1]
        assert index.query_overlaps(GenomicInterval(50, 60, "chr3", Strand.MINUS)) == []
        assert index.query_nearest(GenomicInterval(50, 60, "chr3", Strand.MINUS)) is None

    def test_stranded(self, genomic_y):
        index = IntervalIndex(genomic_y.intervals, stranded=True)
        assert set(index.partition_keys) == {
            ("chr1", Strand.PLUS),
            ("chr1", Strand.MINUS),
            ("chr2", Strand.MINUS),
        }
        assert index.query_overlaps(GenomicInterval(10, 20, "chr1", Strand.PLUS)) == [0]
        assert index.query_overlaps(GenomicInterval(50, 60, "chr1", Strand.MINUS)) == []
        assert index.query_nearest(GenomicInterval(50, 60, "chr1", Strand.MINUS)) == 2

    def test_threaded_build(self, genomic_y):
        serial = IntervalIndex(genomic_y.intervals, stranded=True)
        threaded = IntervalIndex(genomic_y.intervals, stranded=True, threads=4)
        query = GenomicInterval(1, 100, "chr1", Strand.PLUS)
        assert threaded.query_overlaps(query) == serial.query_overlaps(query) == [0, 1]

    def test_collection_index_is_cached(self, genomic_y):
        assert genomic_y.index() is genomic_y.index()
        assert genomic_y.index(stranded=True) is not genomic_y.index()

    def test_empty(self):
        index = RangeCollection().index()
        assert len(index) == 0
        assert index.query_overlaps(Interval(1, 5)) == []
