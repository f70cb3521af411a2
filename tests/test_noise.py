"""Tests for the Perlin noise field."""

import numpy as np
import numpy.testing as npt
import pytest

from contour2d import PerlinField
from contour2d.noise import perlin2d, permutation_table


def _index_grid(n=32):
    rows, cols = np.meshgrid(np.arange(n), np.arange(n), indexing="ij")
    return cols, rows


class TestPermutationTable:
    def test_doubled_permutation(self):
        perm = permutation_table(5)
        assert perm.shape == (512,)
        npt.assert_array_equal(np.sort(perm[:256]), np.arange(256))
        npt.assert_array_equal(perm[:256], perm[256:])

    def test_seeded(self):
        npt.assert_array_equal(permutation_table(1), permutation_table(1))
        assert not np.array_equal(permutation_table(1), permutation_table(2))


class TestPerlin2D:
    def test_zero_on_lattice(self):
        x, y = np.meshgrid(np.arange(-3, 4), np.arange(-3, 4))
        npt.assert_array_equal(perlin2d(x, y, permutation_table(0)), 0.0)

    def test_bounded(self):
        rng = np.random.default_rng(0)
        pts = rng.random((2, 5000)) * 50.0 - 25.0
        n = perlin2d(pts[0], pts[1], permutation_table(0))
        assert np.abs(n).max() <= 1.0 + 1e-12

    def test_scalar_input(self):
        assert np.ndim(perlin2d(0.3, 0.7, permutation_table(0))) == 0


class TestPerlinField:
    def test_shape_and_range(self):
        cols, rows = _index_grid()
        w = PerlinField(scale=0.11)(cols, rows)
        assert w.shape == (32, 32)
        assert w.min() >= 0.0 and w.max() <= 1.0

    def test_deterministic(self):
        cols, rows = _index_grid()
        npt.assert_array_equal(PerlinField(0.1, seed=3)(cols, rows), PerlinField(0.1, seed=3)(cols, rows))

    def test_seed_changes_field(self):
        cols, rows = _index_grid()
        assert not np.array_equal(PerlinField(0.1, seed=0)(cols, rows), PerlinField(0.1, seed=1)(cols, rows))

    def test_integral_scale_is_flat(self):
        cols, rows = _index_grid(8)
        npt.assert_array_equal(PerlinField(scale=1.0)(cols, rows), 0.5)

    def test_smooth_at_low_frequency(self):
        cols, rows = _index_grid(64)
        w = PerlinField(scale=0.02, seed=8)(cols, rows)
        assert np.abs(np.diff(w, axis=0)).max() < 0.1
        assert np.abs(np.diff(w, axis=1)).max() < 0.1

    def test_offset_pans(self):
        f = PerlinField(scale=0.25, offset=(0.5, 0.0))
        g = PerlinField(scale=0.25)
        assert f(0, 3) == pytest.approx(g(2, 3))

    def test_repr(self):
        assert "seed=4" in repr(PerlinField(seed=4))
