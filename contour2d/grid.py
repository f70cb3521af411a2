"""Grid sampling and binarization of a 2-D scalar field."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, replace
from typing import Any, Callable, NamedTuple, Optional, Tuple

import numpy as np

from .errors import InvalidGridSize

logger = logging.getLogger(__name__)

_Point = Tuple[float, float]
ScalarField = Callable[..., Any]


def _frozen(arr: np.ndarray) -> np.ndarray:
    arr = np.array(arr, copy=True)
    arr.flags.writeable = False
    return arr


class GridVertex(NamedTuple):
    """One sample of the grid, as seen by the contour resolver."""

    position: _Point
    weight: float
    occupied: bool


@dataclass(frozen=True, eq=False)
class Grid:
    """Rectangular array of field samples.

    All arrays are read-only copies; stages that derive new data return a new
    :class:`Grid` instead of writing into an existing one.

    Attributes
    ----------
    positions:
        ``(rows, cols, 2)`` array, ``positions[row, col] = (col*step_x, row*step_y)``.
    weights:
        ``(rows, cols)`` field values.
    occupied:
        ``(rows, cols)`` boolean occupancy, or ``None`` before :func:`binarize`.
    """

    positions: np.ndarray
    weights: np.ndarray
    step_x: float
    step_y: float
    occupied: Optional[np.ndarray] = None
    iso_value: Optional[float] = None

    @property
    def shape(self) -> Tuple[int, int]:
        return self.weights.shape

    @property
    def rows(self) -> int:
        return self.weights.shape[0]

    @property
    def cols(self) -> int:
        return self.weights.shape[1]

    @property
    def is_binarized(self) -> bool:
        return self.occupied is not None

    def vertex(self, row: int, col: int) -> GridVertex:
        pos = self.positions[row, col]
        occupied = bool(self.occupied[row, col]) if self.occupied is not None else False
        return GridVertex((float(pos[0]), float(pos[1])), float(self.weights[row, col]), occupied)

    def cell_corners(self, row: int, col: int) -> Tuple[GridVertex, GridVertex, GridVertex, GridVertex]:
        """Corners ``(top_left, top_right, bottom_right, bottom_left)`` of cell ``(row, col)``."""
        return (
            self.vertex(row, col),
            self.vertex(row, col + 1),
            self.vertex(row + 1, col + 1),
            self.vertex(row + 1, col),
        )


def _check_shape(rows: int, cols: int) -> None:
    if rows < 2 or cols < 2:
        raise InvalidGridSize(
            f"a grid needs at least 2x2 samples to form a cell, got {rows}x{cols}"
        )


def _is_vectorized(field: ScalarField, vectorized: Optional[bool]) -> bool:
    if vectorized is not None:
        return bool(vectorized)
    return bool(getattr(field, "vectorized", False))


def sample_grid(
    rows: int,
    cols: int,
    step_x: float,
    step_y: float,
    field: ScalarField,
    vectorized: Optional[bool] = None,
) -> Grid:
    """Sample *field* on a ``rows x cols`` grid.

    Parameters
    ----------
    rows, cols:
        Number of samples along each axis (both at least 2).
    step_x, step_y:
        Spacing between neighbouring samples.
    field:
        Callable ``field(col, row) -> weight``.  By default it is called once
        per sample with Python ``int`` indices, in row-major order.
    vectorized:
        If true, *field* is instead called once with two ``(rows, cols)``
        integer index arrays and must return weights of that shape (or a
        broadcastable scalar).  Defaults to the field's ``vectorized``
        attribute, which :class:`~contour2d.noise.PerlinField` sets.

    Returns
    -------
    Grid
        Unbinarized grid.
    """
    rows, cols = int(rows), int(cols)
    _check_shape(rows, cols)

    row_idx, col_idx = np.meshgrid(np.arange(rows), np.arange(cols), indexing="ij")
    if _is_vectorized(field, vectorized):
        weights = np.asarray(field(col_idx, row_idx), dtype=np.float64)
        if weights.shape != (rows, cols):
            weights = np.broadcast_to(weights, (rows, cols))
    else:
        weights = np.empty((rows, cols), dtype=np.float64)
        for row in range(rows):
            for col in range(cols):
                weights[row, col] = float(field(col, row))

    positions = np.stack([col_idx * float(step_x), row_idx * float(step_y)], axis=-1)
    logger.debug("Sampled %dx%d grid (step %.4g x %.4g)", rows, cols, step_x, step_y)
    return Grid(_frozen(positions), _frozen(weights), float(step_x), float(step_y))


def grid_from_weights(weights, step_x: float = 1.0, step_y: float = 1.0) -> Grid:
    """Build an unbinarized grid from an explicit ``(rows, cols)`` weight array."""
    w = np.asarray(weights, dtype=np.float64)
    if w.ndim != 2:
        raise InvalidGridSize(f"weights must be a 2-D array, got shape {w.shape}")
    return sample_grid(w.shape[0], w.shape[1], step_x, step_y, lambda c, r: w[r, c], vectorized=True)


def binarize(grid: Grid, iso_value: float) -> Grid:
    """Return a copy of *grid* with ``occupied = weights > iso_value``.

    The comparison is strict: samples equal to *iso_value* are not occupied.
    """
    occupied = grid.weights > iso_value
    logger.debug("Binarized at iso %.4g: %d/%d samples occupied",
                 iso_value, int(occupied.sum()), occupied.size)
    return replace(grid, occupied=_frozen(occupied), iso_value=float(iso_value))


def save_npz(path: str, grid: Grid) -> None:
    """Save *grid* to *path* (creates parent directories if needed)."""
    out_dir = os.path.dirname(path)
    if out_dir:
        os.makedirs(out_dir, exist_ok=True)
    arrays = {
        "positions": grid.positions,
        "weights": grid.weights,
        "steps": np.array([grid.step_x, grid.step_y]),
    }
    if grid.occupied is not None:
        arrays["occupied"] = grid.occupied
        arrays["iso_value"] = np.array(grid.iso_value)
    np.savez(path, **arrays)
