"""End-to-end contour build: sample -> binarize -> classify -> resolve -> assemble."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterator, Optional, Tuple, Union

import numpy as np

from .classify import classify_cells
from .config import ContourConfig, InterpolationMode
from .contour import ContourCell, resolve_cell
from .grid import Grid, ScalarField, binarize, sample_grid
from .mesh import Mesh, MeshAssembler
from .noise import PerlinField

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class ContourResult:
    """Everything produced by one build.

    ``grid`` and ``cells`` are exposed for inspection and debug drawing; the
    grid arrays are read-only and the cells are immutable.
    """

    grid: Grid
    cases: np.ndarray
    cells: Tuple[ContourCell, ...]
    mesh: Mesh

    def cell(self, row: int, col: int) -> ContourCell:
        n_cols = self.grid.cols - 1
        if not (0 <= row < self.grid.rows - 1 and 0 <= col < n_cols):
            raise IndexError(f"no cell at ({row}, {col})")
        return self.cells[row * n_cols + col]

    def segments(self) -> Iterator[Tuple[Tuple[float, float], Tuple[float, float]]]:
        """All contour segments, in row-major cell order."""
        for cell in self.cells:
            yield from cell.segments

    def case_histogram(self) -> np.ndarray:
        """Number of cells per case, shape ``(16,)``."""
        return np.bincount(self.cases.ravel(), minlength=16)


def march(
    grid: Grid,
    iso_value: float = 0.5,
    mode: Union[str, InterpolationMode] = InterpolationMode.MIDPOINT,
) -> ContourResult:
    """Contour an already-sampled grid.

    The grid is (re-)binarized at *iso_value*, so any previous occupancy is
    ignored.
    """
    mode = InterpolationMode.parse(mode)
    grid = binarize(grid, iso_value)
    cases = classify_cells(grid)

    assembler = MeshAssembler()
    cells = []
    for row in range(cases.shape[0]):
        for col in range(cases.shape[1]):
            cell = resolve_cell(
                int(cases[row, col]),
                grid.cell_corners(row, col),
                iso_value,
                mode,
                row=row,
                col=col,
            )
            assembler.add_polygon(cell.polygon)
            cells.append(cell)

    cases.flags.writeable = False
    result = ContourResult(grid, cases, tuple(cells), assembler.build())
    logger.debug("Case histogram: %s", result.case_histogram().tolist())
    return result


def default_field(config: ContourConfig) -> PerlinField:
    return PerlinField(scale=config.noise_scale, seed=config.seed)


def generate(config: Optional[ContourConfig] = None, field: Optional[ScalarField] = None) -> ContourResult:
    """Run the full pipeline for *config*.

    Parameters
    ----------
    config:
        Build options; defaults to ``ContourConfig()``.
    field:
        Callable ``field(col, row) -> weight`` (see :func:`sample_grid`
        for vectorized fields); defaults to a
        :class:`~contour2d.noise.PerlinField` built from the config's
        ``noise_scale`` and ``seed``.
    """
    if config is None:
        config = ContourConfig()
    if field is None:
        field = default_field(config)

    rows, cols = config.grid_shape
    step_x, step_y = config.grid_steps
    grid = sample_grid(rows, cols, step_x, step_y, field)
    result = march(grid, config.iso_value, config.interpolation_mode)
    logger.info(
        "Contoured %dx%d grid (%s): %d vertices, %d triangles",
        rows, cols, config.interpolation_mode.value,
        result.mesh.n_vertices, result.mesh.n_triangles,
    )
    return result


def rebuild(config: Optional[ContourConfig] = None, field: Optional[ScalarField] = None) -> Mesh:
    """Build a fresh mesh from scratch; nothing is reused between calls."""
    return generate(config, field).mesh
