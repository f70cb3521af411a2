"""
contour2d: marching-squares contour meshes from 2D scalar fields
=================================================================

Turns a scalar field sampled on a regular grid (Perlin noise by default)
into a filled, vertex-sharing triangle mesh of the region where the field
exceeds an iso-value.

Implemented features
--------------------
- Grid sampling of any vectorized field: :func:`sample_grid`
- Binarization and 16-case cell classification: :func:`binarize`,
  :func:`cell_case`, :func:`classify_cells`
- Table-driven contour resolution with midpoint or linear edge points:
  :func:`resolve_cell`, :data:`CASE_TABLE`
- Deduplicated, fan-triangulated mesh assembly: :class:`MeshAssembler`
- One-call rebuild from a :class:`ContourConfig`: :func:`rebuild`

Quick start
-----------

Default Perlin field::

    from contour2d import ContourConfig, rebuild

    mesh = rebuild(ContourConfig(width=32, height=32, noise_scale=0.08))
    mesh.vertices   # (N, 2) float64
    mesh.triangles  # (M, 3) uint32

Explicit weights, with access to the grid and per-cell contours::

    import numpy as np
    from contour2d import grid_from_weights, march

    grid   = grid_from_weights(np.random.rand(20, 20))
    result = march(grid, iso_value=0.5, mode="linear")
    for a, b in result.segments():
        ...
"""

from .errors import (
    Contour2DError,
    ConfigError,
    InvalidGridSize,
    InvalidCellSize,
    InvalidCase,
    UnbinarizedGrid,
)
from .config import ContourConfig, InterpolationMode, load_config
from .noise import PerlinField
from .grid import Grid, GridVertex, sample_grid, grid_from_weights, binarize, save_npz
from .classify import cell_case, classify_cells
from .contour import CASE_TABLE, ContourCell, edge_point, resolve_cell
from .mesh import Mesh, MeshAssembler, fan_triangles
from .pipeline import ContourResult, march, generate, rebuild
from .io import save_mesh, load_mesh

__version__ = "0.1.0"

__all__ = [
    # Errors
    "Contour2DError",
    "ConfigError",
    "InvalidGridSize",
    "InvalidCellSize",
    "InvalidCase",
    "UnbinarizedGrid",

    # Configuration
    "ContourConfig",
    "InterpolationMode",
    "load_config",

    # Fields
    "PerlinField",

    # Grid sampling and binarization
    "Grid",
    "GridVertex",
    "sample_grid",
    "grid_from_weights",
    "binarize",
    "save_npz",

    # Classification
    "cell_case",
    "classify_cells",

    # Contour resolution
    "CASE_TABLE",
    "ContourCell",
    "edge_point",
    "resolve_cell",

    # Mesh assembly
    "Mesh",
    "MeshAssembler",
    "fan_triangles",

    # Pipeline
    "ContourResult",
    "march",
    "generate",
    "rebuild",

    # I/O
    "save_mesh",
    "load_mesh",
]
