"""
Engines operating on :class:`~inscripta.rangegrammar.collection.RangeCollection` values: arithmetic, overlap,
nearest-neighbor, set algebra, grouping and joins. Every operation is pure and returns a new object.
"""
from inscripta.rangegrammar.ops.arithmetic import (  # noqa: F401
    anchor_start,
    anchor_end,
    anchor_center,
    anchor_5p,
    anchor_3p,
    unanchor,
    set_width,
    stretch,
    shift_left,
    shift_right,
    shift_upstream,
    shift_downstream,
    flank_left,
    flank_right,
    flank_upstream,
    flank_downstream,
)
from inscripta.rangegrammar.ops.overlap import (  # noqa: F401
    OverlapParameters,
    iter_matches,
    match,
    self_match,
    count_overlaps,
    filter_by_overlaps,
    filter_by_non_overlaps,
)
from inscripta.rangegrammar.ops.nearest import nearest, precede, follow, nearest_distances  # noqa: F401
from inscripta.rangegrammar.ops.setops import (  # noqa: F401
    reduce,
    union,
    intersect,
    setdiff,
    disjoin,
    coverage,
    gaps,
)
from inscripta.rangegrammar.ops.pairwise import (  # noqa: F401
    intersect_pairs,
    union_pairs,
    setdiff_pairs,
    span_pairs,
    between_pairs,
    gap_pairs,
)
from inscripta.rangegrammar.ops.join import (  # noqa: F401
    join_overlap_inner,
    find_overlaps,
    join_overlap_intersect,
    join_overlap_left,
    join_overlap_self,
    join_nearest,
    join_precede,
    join_follow,
    join_nearest_left,
    join_nearest_right,
    join_nearest_upstream,
    join_nearest_downstream,
    add_nearest_distance,
)
from inscripta.rangegrammar.ops.grouping import group_by, group_by_overlaps, summarise, ungroup  # noqa: F401
