"""Contour resolution: case index + corner samples -> cell polygon.

The 16 cases are stored as data in :data:`CASE_TABLE`.  Each entry lists

* ``segments``: the contour segments crossing the cell, each a pair of
  edge points ``e(A, B)`` named by their corner arguments, and
* ``polygon``: the ordered recipe of the occupied part of the cell, where
  an ``int`` is a corner and a ``(segment, end)`` pair is an edge point.

Edge points are always requested as ``e(unoccupied, occupied)``.  With
linear interpolation the crossing is measured from the lower weight towards
the higher one, so every edge shared by two cells is computed from the same
operands in the same order and lands on bit-identical coordinates.

Saddles (cases 5 and 10) take the separated-corners reading: two corner
triangles, never a joined band.  No centre sample is taken.
"""

from __future__ import annotations

from dataclasses import dataclass
from numbers import Integral
from typing import Dict, NamedTuple, Sequence, Tuple, Union

from .config import InterpolationMode
from .errors import InvalidCase
from .grid import GridVertex

_Point = Tuple[float, float]
_Segment = Tuple[_Point, _Point]

# Corner indices, clockwise from top-left
TL, TR, BR, BL = 0, 1, 2, 3
CORNER_NAMES = ("TL", "TR", "BR", "BL")

_EdgeRef = Tuple[int, int]
_Recipe = Union[int, Tuple[int, int]]


class CaseEntry(NamedTuple):
    segments: Tuple[Tuple[_EdgeRef, _EdgeRef], ...]
    polygon: Tuple[_Recipe, ...]


# ===========================================================================
# Case table
# ===========================================================================

CASE_TABLE: Dict[int, CaseEntry] = {
    0: CaseEntry((), (TL, TR, BR, BL)),
    1: CaseEntry((((BL, TL), (BL, BR)),), (TL, TR, BR, (0, 1), (0, 0))),
    2: CaseEntry((((BR, TR), (BR, BL)),), (TL, TR, (0, 0), (0, 1), BL)),
    3: CaseEntry((((BL, TL), (BR, TR)),), (TL, TR, (0, 1), (0, 0))),
    4: CaseEntry((((TR, TL), (TR, BR)),), (TL, (0, 0), (0, 1), BR, BL)),
    5: CaseEntry(
        (((TR, TL), (BL, TL)), ((BL, BR), (TR, BR))),
        ((0, 0), TL, (0, 1), (1, 1), BR, (1, 0)),
    ),
    6: CaseEntry((((TR, TL), (BR, BL)),), (TL, (0, 0), (0, 1), BL)),
    7: CaseEntry((((TR, TL), (BL, TL)),), ((0, 1), TL, (0, 0))),
    8: CaseEntry((((TL, TR), (TL, BL)),), ((0, 0), TR, BR, BL, (0, 1))),
    9: CaseEntry((((TL, TR), (BL, BR)),), ((0, 0), TR, BR, (0, 1))),
    10: CaseEntry(
        (((TL, BL), (BR, BL)), ((TL, TR), (BR, TR))),
        ((1, 0), TR, (1, 1), (0, 1), BL, (0, 0)),
    ),
    11: CaseEntry((((TL, TR), (BR, TR)),), ((0, 0), TR, (0, 1))),
    12: CaseEntry((((TL, BL), (TR, BR)),), (BR, BL, (0, 0), (0, 1))),
    13: CaseEntry((((TR, BR), (BL, BR)),), ((0, 0), BR, (0, 1))),
    14: CaseEntry((((TL, BL), (BR, BL)),), ((0, 1), BL, (0, 0))),
    15: CaseEntry((), ()),
}

SADDLE_CASES = frozenset({5, 10})


# ===========================================================================
# Edge points
# ===========================================================================

def midpoint(a: _Point, b: _Point) -> _Point:
    """Arithmetic mean of *a* and *b* (symmetric in its arguments)."""
    return ((a[0] + b[0]) * 0.5, (a[1] + b[1]) * 0.5)


def interpolation_t(a: GridVertex, b: GridVertex, iso_value: float) -> float:
    """Fraction of the way from the lower-weight sample to the higher one.

    Equal weights have no crossing; ``0.5`` is returned.
    """
    lo = min(a.weight, b.weight)
    hi = max(a.weight, b.weight)
    if hi == lo:
        return 0.5
    return (iso_value - lo) / (hi - lo)


def lerp(a: _Point, b: _Point, t: float) -> _Point:
    return ((1.0 - t) * a[0] + t * b[0], (1.0 - t) * a[1] + t * b[1])


def edge_point(
    a: GridVertex,
    b: GridVertex,
    iso_value: float,
    mode: Union[str, InterpolationMode] = InterpolationMode.MIDPOINT,
) -> _Point:
    """Point where the contour crosses the edge from *a* to *b*.

    ``midpoint`` returns the middle of the edge.  ``linear`` returns
    ``(1-t)*a + t*b`` with ``t`` taken from :func:`interpolation_t`; it is
    only meaningful when *a* is the lower-weight end, which is how every
    entry of :data:`CASE_TABLE` calls it.
    """
    mode = InterpolationMode.parse(mode)
    if mode is InterpolationMode.MIDPOINT:
        return midpoint(a.position, b.position)
    return lerp(a.position, b.position, interpolation_t(a, b, iso_value))


# ===========================================================================
# Cell resolution
# ===========================================================================

@dataclass(frozen=True)
class ContourCell:
    """Contour of one cell.

    Attributes
    ----------
    row, col:
        Position of the cell (its top-left sample).
    case:
        Case index 0..15.
    polygon:
        Ordered points of the occupied part of the cell.
    segments:
        Contour segments through the cell, as ``(start, end)`` point pairs.
    """

    row: int
    col: int
    case: int
    polygon: Tuple[_Point, ...]
    segments: Tuple[_Segment, ...]

    @property
    def is_saddle(self) -> bool:
        return self.case in SADDLE_CASES


def resolve_cell(
    case: int,
    corners: Sequence[GridVertex],
    iso_value: float,
    mode: Union[str, InterpolationMode] = InterpolationMode.MIDPOINT,
    row: int = 0,
    col: int = 0,
) -> ContourCell:
    """Resolve *case* into the polygon and contour segments of one cell.

    Parameters
    ----------
    case:
        Case index from :func:`contour2d.classify.cell_case`.
    corners:
        ``(top_left, top_right, bottom_right, bottom_left)`` samples.
    iso_value:
        Threshold used for linear interpolation.
    mode:
        ``"midpoint"`` or ``"linear"``.
    """
    if isinstance(case, bool) or not isinstance(case, Integral) or not 0 <= case <= 15:
        raise InvalidCase(f"cell case must be an integer in [0, 15], got {case!r}")
    entry = CASE_TABLE[int(case)]
    mode = InterpolationMode.parse(mode)

    segments = tuple(
        (
            edge_point(corners[a0], corners[a1], iso_value, mode),
            edge_point(corners[b0], corners[b1], iso_value, mode),
        )
        for (a0, a1), (b0, b1) in entry.segments
    )
    polygon = tuple(
        corners[step].position if isinstance(step, int) else segments[step[0]][step[1]]
        for step in entry.polygon
    )
    return ContourCell(row, col, int(case), polygon, segments)
