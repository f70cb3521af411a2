"""Coherent 2-D noise used as the default scalar field.

Algorithm
---------
Ken Perlin's improved gradient noise (SIGGRAPH 2002) restricted to two
dimensions.  Each lattice corner hashes through a seeded permutation table to
one of eight unit-ish gradients; the four corner contributions are blended
with the quintic fade ``6t^5 - 15t^4 + 10t^3``.  Raw noise lies in roughly
``[-1, 1]`` and is zero on every lattice point; :class:`PerlinField` remaps
it to ``[0, 1]`` so that ``0.5`` is the neutral level.

Everything is vectorized: coordinates may be scalars or arrays of any
broadcast-compatible shape.
"""

from __future__ import annotations

from typing import Tuple

import numpy as np
import numpy.typing as npt

_F = npt.NDArray[np.floating]

# ---------------------------------------------------------------------------
# Gradient directions indexed by ``hash & 7``
# ---------------------------------------------------------------------------
_GRADIENTS: np.ndarray = np.array(
    [[1, 1], [-1, 1], [1, -1], [-1, -1], [1, 0], [-1, 0], [0, 1], [0, -1]],
    dtype=np.float64,
)


def _fade(t: _F) -> _F:
    return t * t * t * (t * (t * 6.0 - 15.0) + 10.0)


def _lerp(a: _F, b: _F, t: _F) -> _F:
    return a + t * (b - a)


def _grad(h: np.ndarray, x: _F, y: _F) -> _F:
    g = _GRADIENTS[h & 7]
    return g[..., 0] * x + g[..., 1] * y


def permutation_table(seed: int = 0) -> np.ndarray:
    """Return the doubled (512-entry) permutation table for *seed*."""
    perm = np.random.default_rng(seed).permutation(256)
    return np.concatenate([perm, perm]).astype(np.int64)


def perlin2d(x, y, perm: np.ndarray) -> _F:
    """Raw gradient noise at ``(x, y)``, roughly in ``[-1, 1]``."""
    x = np.asarray(x, dtype=np.float64)
    y = np.asarray(y, dtype=np.float64)

    x0 = np.floor(x)
    y0 = np.floor(y)
    xf = x - x0
    yf = y - y0
    xi = x0.astype(np.int64) & 255
    yi = y0.astype(np.int64) & 255

    u = _fade(xf)
    v = _fade(yf)

    aa = perm[perm[xi] + yi]
    ab = perm[perm[xi] + yi + 1]
    ba = perm[perm[xi + 1] + yi]
    bb = perm[perm[xi + 1] + yi + 1]

    bottom = _lerp(_grad(aa, xf, yf), _grad(ba, xf - 1.0, yf), u)
    top = _lerp(_grad(ab, xf, yf - 1.0), _grad(bb, xf - 1.0, yf - 1.0), u)
    return _lerp(bottom, top, v)


class PerlinField:
    """Scalar field ``f(col, row) -> weight in [0, 1]`` backed by Perlin noise.

    Grid index ``(col, row)`` samples noise at
    ``(col * scale + offset[0], row * scale + offset[1])``.

    Parameters
    ----------
    scale:
        Noise frequency per grid step.  Values near ``0.1`` give smooth
        blobs on a 16x16 grid; integral values sample only lattice points
        and therefore return a constant ``0.5``.
    seed:
        Seed for the permutation table.
    offset:
        Shift applied in noise space, useful to pan across the field.

    The field accepts scalar indices or whole index arrays and is marked
    ``vectorized`` so :func:`~contour2d.grid.sample_grid` evaluates it in a
    single call.
    """

    vectorized = True

    def __init__(
        self,
        scale: float = 0.1,
        seed: int = 0,
        offset: Tuple[float, float] = (0.0, 0.0),
    ) -> None:
        self.scale = float(scale)
        self.seed = int(seed)
        self.offset = (float(offset[0]), float(offset[1]))
        self._perm = permutation_table(self.seed)

    def __call__(self, cols, rows) -> _F:
        x = np.asarray(cols, dtype=np.float64) * self.scale + self.offset[0]
        y = np.asarray(rows, dtype=np.float64) * self.scale + self.offset[1]
        return np.clip(0.5 * (perlin2d(x, y, self._perm) + 1.0), 0.0, 1.0)

    def __repr__(self) -> str:
        return f"PerlinField(scale={self.scale}, seed={self.seed}, offset={self.offset})"
