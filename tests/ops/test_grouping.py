import pytest

from inscripta.rangegrammar.exc import ColumnCollisionException, ValidationException
from inscripta.rangegrammar.location.strand import Strand
from inscripta.rangegrammar.ops import group_by, group_by_overlaps, match, summarise, ungroup


class TestGroupBy:
    def test_group_by_column(self, y_ranges):
        grouped = group_by(y_ranges.mutate(parity=[s % 2 for s in y_ranges.starts]), "parity")
        assert grouped.groups == {(0,): [0, 2, 4], (1,): [1, 3]}

    def test_group_by_coordinates(self, genomic_x):
        grouped = group_by(genomic_x, "sequence", "strand")
        assert list(grouped.groups) == [
            ("chr1", Strand.PLUS),
            ("chr1", Strand.MINUS),
            ("chr1", Strand.UNSTRANDED),
            ("chr2", Strand.PLUS),
        ]

    def test_group_by_invalid(self, genomic_x):
        with pytest.raises(ValidationException):
            group_by(genomic_x, "missing")
        with pytest.raises(ValidationException):
            group_by(genomic_x)

    def test_ungroup(self, genomic_x):
        assert ungroup(group_by(genomic_x, "sequence")) is genomic_x


class TestSummarise:
    def test_grouped(self, genomic_x):
        summary = summarise(group_by(genomic_x, "sequence"), n=len, widest=lambda g: max(g.widths))
        assert summary.to_records() == [
            {"sequence": "chr1", "n": 3, "widest": 21},
            {"sequence": "chr2", "n": 1, "widest": 11},
        ]

    def test_ungrouped(self, x_ranges):
        summary = summarise(x_ranges, n=len, total=lambda g: sum(g.widths))
        assert summary.to_records() == [{"n": 4, "total": 20}]

    def test_filter_then_summarise(self, genomic_x):
        grouped = group_by(genomic_x, "sequence").filter([True, False, True, True])
        assert summarise(grouped, n=len).to_records() == [
            {"sequence": "chr1", "n": 2},
            {"sequence": "chr2", "n": 1},
        ]


class TestGroupByOverlaps:
    def test_counts_match(self, x_ranges, y_ranges):
        grouped = group_by_overlaps(x_ranges, y_ranges)
        assert grouped.collection.column_names == ["id.x", "start.y", "end.y", "id.y", "score", "query"]
        summary = summarise(grouped, n=len)
        assert summary.to_records() == [{"query": 0, "n": 4}]

    def test_counts_equal_match_cardinality(self, genomic_x, genomic_y):
        matches = match(genomic_x, genomic_y, maxgap=50)
        summary = summarise(group_by_overlaps(genomic_x, genomic_y, maxgap=50), n=len)
        for record in summary.to_records():
            assert record["n"] == len([pair for pair in matches if pair[0] == record["query"]])
        assert summary["query"] == tuple(sorted({x_row for x_row, _ in matches}))

    def test_no_matches(self, x_ranges, y_ranges):
        grouped = group_by_overlaps(x_ranges[1:], y_ranges)
        assert grouped.n_groups == 0
        assert summarise(grouped, n=len).n_rows == 0

    def test_name_collision(self, x_ranges, y_ranges):
        with pytest.raises(ColumnCollisionException):
            group_by_overlaps(x_ranges, y_ranges, name="score")
