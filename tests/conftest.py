import pytest

from inscripta.rangegrammar.collection import RangeCollection


@pytest.fixture
def x_ranges() -> RangeCollection:
    """Starts 5, 10, 15, 20 with width 5."""
    return RangeCollection.from_coordinates([5, 10, 15, 20], [9, 14, 19, 24], columns={"id": ["a", "b", "c", "d"]})


@pytest.fixture
def y_ranges() -> RangeCollection:
    """Starts 2 through 6 with widths 3 through 7."""
    return RangeCollection.from_coordinates(
        [2, 3, 4, 5, 6], [4, 5, 6, 7, 8], columns={"id": ["v", "w", "x", "y", "z"], "score": [1.0, 2.0, 3.0, 4.0, 5.0]}
    )


@pytest.fixture
def genomic_x() -> RangeCollection:
    return RangeCollection.from_coordinates(
        [10, 50, 10, 100],
        [20, 60, 20, 120],
        sequences=["chr1", "chr1", "chr2", "chr1"],
        strands=["+", "-", "+", "."],
        columns={"name": ["p1", "p2", "p3", "p4"]},
    )


@pytest.fixture
def genomic_y() -> RangeCollection:
    return RangeCollection.from_coordinates(
        [15, 55, 200, 18],
        [30, 58, 210, 19],
        sequences=["chr1", "chr1", "chr1", "chr2"],
        strands=["+", "+", "-", "-"],
        columns={"gene": ["g1", "g2", "g3", "g4"]},
    )
