"""Tests for contour2d.contour: edge points and the 16-case table.

Cells are built on the unit square::

    TL (0,0) ---- TR (1,0)
       |             |
    BL (0,1) ---- BR (1,1)
"""

import itertools

import numpy as np
import numpy.testing as npt
import pytest

from contour2d import (
    CASE_TABLE,
    GridVertex,
    InvalidCase,
    cell_case,
    edge_point,
    resolve_cell,
)
from contour2d.contour import SADDLE_CASES, interpolation_t


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

_UNIT = ((0.0, 0.0), (1.0, 0.0), (1.0, 1.0), (0.0, 1.0))

_POLYGON_SIZES = {
    0: 4, 1: 5, 2: 5, 3: 4, 4: 5, 5: 6, 6: 4, 7: 3,
    8: 5, 9: 4, 10: 6, 11: 3, 12: 4, 13: 3, 14: 3, 15: 0,
}


def _corners(weights, iso=0.5):
    """Unit-square corners ``(TL, TR, BR, BL)`` carrying *weights*."""
    return tuple(GridVertex(pos, float(w), w > iso) for pos, w in zip(_UNIT, weights))


def _corners_for_case(case):
    """Corners with weight 1 where occupied and 0 elsewhere, matching *case*."""
    code = 15 - case
    bits = [(code >> shift) & 1 for shift in (3, 2, 1, 0)]
    corners = _corners([float(b) for b in bits])
    assert cell_case([c.occupied for c in corners]) == case
    return corners


def _v(x, y, w):
    return GridVertex((x, y), w, w > 0.5)


# ===========================================================================
# Edge points
# ===========================================================================

class TestEdgePointMidpoint:
    def test_mean_of_positions(self):
        a, b = _v(0.0, 0.0, 0.0), _v(2.0, 4.0, 1.0)
        assert edge_point(a, b, 0.5, "midpoint") == (1.0, 2.0)

    def test_symmetric(self):
        rng = np.random.default_rng(0)
        for _ in range(50):
            ax, ay, bx, by = rng.random(4) * 100.0
            a, b = _v(ax, ay, 0.1), _v(bx, by, 0.9)
            assert edge_point(a, b, 0.5) == edge_point(b, a, 0.5)

    def test_ignores_weights(self):
        a, b = _v(0.0, 0.0, 0.0), _v(1.0, 0.0, 0.99)
        assert edge_point(a, b, 0.1, "midpoint") == (0.5, 0.0)


class TestEdgePointLinear:
    def test_crossing_on_segment_at_iso(self):
        a, b = _v(0.0, 0.0, 0.2), _v(2.0, 0.0, 0.9)
        x, y = edge_point(a, b, 0.5, "linear")
        assert y == 0.0
        assert 0.0 <= x <= 2.0
        t = x / 2.0
        assert a.weight + t * (b.weight - a.weight) == pytest.approx(0.5)

    def test_diagonal_segment(self):
        a, b = _v(1.0, 1.0, 0.0), _v(3.0, 5.0, 1.0)
        npt.assert_allclose(edge_point(a, b, 0.25, "linear"), (1.5, 2.0))

    def test_measured_from_first_argument(self):
        lo, hi = _v(0.0, 0.0, 0.2), _v(2.0, 0.0, 0.9)
        x_forward, _ = edge_point(lo, hi, 0.5, "linear")
        x_swapped, _ = edge_point(hi, lo, 0.5, "linear")
        assert x_forward == pytest.approx(2.0 * 3.0 / 7.0)
        assert x_swapped == pytest.approx(2.0 - x_forward)

    def test_t_uses_ordered_weights(self):
        lo, hi = _v(0.0, 0.0, 0.25), _v(1.0, 0.0, 0.75)
        assert interpolation_t(lo, hi, 0.5) == interpolation_t(hi, lo, 0.5) == 0.5

    def test_equal_weights_fall_back_to_midpoint(self):
        a, b = _v(0.0, 0.0, 0.5), _v(1.0, 1.0, 0.5)
        assert edge_point(a, b, 0.5, "linear") == (0.5, 0.5)

    def test_iso_at_lower_weight_lands_on_lower_corner(self):
        a, b = _v(3.0, 7.0, 0.5), _v(4.0, 7.0, 1.0)
        assert edge_point(a, b, 0.5, "linear") == (3.0, 7.0)

    def test_unknown_mode(self):
        a, b = _v(0.0, 0.0, 0.0), _v(1.0, 0.0, 1.0)
        with pytest.raises(ValueError):
            edge_point(a, b, 0.5, "cubic")


# ===========================================================================
# Case table
# ===========================================================================

class TestCaseTable:
    def test_has_sixteen_cases(self):
        assert sorted(CASE_TABLE) == list(range(16))

    @pytest.mark.parametrize("case", range(16))
    def test_polygon_size(self, case):
        cell = resolve_cell(case, _corners_for_case(case), 0.5)
        assert len(cell.polygon) == _POLYGON_SIZES[case]

    @pytest.mark.parametrize("case", range(16))
    def test_polygon_corners_are_the_occupied_corners(self, case):
        corners = _corners_for_case(case)
        cell = resolve_cell(case, corners, 0.5)
        used = {p for p in cell.polygon if p in _UNIT}
        assert used == {c.position for c in corners if c.occupied}

    @pytest.mark.parametrize("case", range(16))
    def test_segments_cross_mixed_edges(self, case):
        corners = _corners_for_case(case)
        cell = resolve_cell(case, corners, 0.5)
        mixed_midpoints = set()
        for a, b in itertools.combinations(corners, 2):
            if a.occupied != b.occupied:
                mixed_midpoints.add(edge_point(a, b, 0.5))
        for start, end in cell.segments:
            assert start in mixed_midpoints
            assert end in mixed_midpoints

    @pytest.mark.parametrize("case", range(16))
    def test_polygon_inside_cell(self, case):
        cell = resolve_cell(case, _corners_for_case(case), 0.5, "linear")
        for x, y in cell.polygon:
            assert 0.0 <= x <= 1.0 and 0.0 <= y <= 1.0

    def test_saddles_have_two_segments(self):
        for case in range(16):
            cell = resolve_cell(case, _corners_for_case(case), 0.5)
            expected = 2 if case in SADDLE_CASES else (0 if case in (0, 15) else 1)
            assert len(cell.segments) == expected
            assert cell.is_saddle == (case in SADDLE_CASES)


class TestSpecificCases:
    def test_case_zero_full_quad_for_any_weights(self):
        rng = np.random.default_rng(1)
        for _ in range(10):
            cell = resolve_cell(0, _corners(rng.random(4)), 0.5)
            assert cell.polygon == _UNIT
            assert cell.segments == ()

    def test_case_fifteen_empty_for_any_weights(self):
        rng = np.random.default_rng(2)
        for _ in range(10):
            cell = resolve_cell(15, _corners(rng.random(4)), 0.5)
            assert cell.polygon == ()
            assert cell.segments == ()

    def test_case_one(self):
        cell = resolve_cell(1, _corners_for_case(1), 0.5)
        assert cell.polygon == ((0.0, 0.0), (1.0, 0.0), (1.0, 1.0), (0.5, 1.0), (0.0, 0.5))
        assert cell.segments == (((0.0, 0.5), (0.5, 1.0)),)

    def test_case_five_separated_corners(self):
        cell = resolve_cell(5, _corners_for_case(5), 0.5)
        assert cell.polygon == (
            (0.5, 0.0), (0.0, 0.0), (0.0, 0.5),
            (1.0, 0.5), (1.0, 1.0), (0.5, 1.0),
        )

    def test_case_ten_separated_corners(self):
        cell = resolve_cell(10, _corners_for_case(10), 0.5)
        assert cell.polygon == (
            (0.5, 0.0), (1.0, 0.0), (1.0, 0.5),
            (0.5, 1.0), (0.0, 1.0), (0.0, 0.5),
        )

    def test_case_twelve_starts_at_bottom_right(self):
        cell = resolve_cell(12, _corners_for_case(12), 0.5)
        assert cell.polygon == ((1.0, 1.0), (0.0, 1.0), (0.0, 0.5), (1.0, 0.5))

    def test_case_seven_linear(self):
        corners = _corners([1.0, 0.0, 0.0, 0.25])
        cell = resolve_cell(7, corners, 0.5, "linear")
        npt.assert_allclose(cell.polygon, [(0.0, 2.0 / 3.0), (0.0, 0.0), (0.5, 0.0)])

    def test_records_cell_position(self):
        cell = resolve_cell(3, _corners_for_case(3), 0.5, row=4, col=9)
        assert (cell.row, cell.col, cell.case) == (4, 9, 3)


class TestInvalidCase:
    @pytest.mark.parametrize("case", [-1, 16, 100, 3.0, "3", None, True])
    def test_raises(self, case):
        with pytest.raises(InvalidCase):
            resolve_cell(case, _corners_for_case(0), 0.5)

    def test_numpy_integer_accepted(self):
        cell = resolve_cell(np.int64(13), _corners_for_case(13), 0.5)
        assert cell.case == 13
        assert type(cell.case) is int
