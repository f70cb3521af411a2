"""Mesh assembly: cell polygons -> shared vertex buffer + triangle indices."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Iterable, List, Sequence, Tuple

import numpy as np

logger = logging.getLogger(__name__)

_Point = Tuple[float, float]
_Triangle = Tuple[int, int, int]


def fan_triangles(n: int) -> Tuple[_Triangle, ...]:
    """Local triangle indices emitted for an *n*-point cell polygon.

    The pattern is fixed rather than a general triangulation.  Polygons of
    three to five points are convex fans around point 0; six-point polygons
    only come from saddle cells and are two separate corner triangles.

    >>> fan_triangles(5)
    ((0, 1, 2), (0, 2, 3), (0, 3, 4))
    >>> fan_triangles(6)
    ((0, 1, 2), (3, 4, 5))
    """
    tris: List[_Triangle] = []
    if n >= 3:
        tris.append((0, 1, 2))
    if 4 <= n < 6:
        tris.append((0, 2, 3))
    if n == 5:
        tris.append((0, 3, 4))
    if n >= 6:
        tris.append((3, 4, 5))
    return tuple(tris)


@dataclass(frozen=True, eq=False)
class Mesh:
    """Triangle mesh in the plane.

    Attributes
    ----------
    vertices:
        ``(N, 2)`` float64 positions, read-only.
    triangles:
        ``(M, 3)`` uint32 indices into *vertices*, read-only.
    """

    vertices: np.ndarray
    triangles: np.ndarray

    @property
    def n_vertices(self) -> int:
        return self.vertices.shape[0]

    @property
    def n_triangles(self) -> int:
        return self.triangles.shape[0]

    @property
    def is_empty(self) -> bool:
        return self.n_triangles == 0

    def area(self) -> float:
        """Total unsigned area of all triangles."""
        if self.is_empty:
            return 0.0
        tri = self.vertices[self.triangles.astype(np.int64)]
        ab = tri[:, 1] - tri[:, 0]
        ac = tri[:, 2] - tri[:, 0]
        return float(0.5 * np.abs(ab[:, 0] * ac[:, 1] - ab[:, 1] * ac[:, 0]).sum())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Mesh):
            return NotImplemented
        return (
            np.array_equal(self.vertices, other.vertices)
            and np.array_equal(self.triangles, other.triangles)
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Mesh(n_vertices={self.n_vertices}, n_triangles={self.n_triangles})"


class MeshAssembler:
    """Accumulates cell polygons into one vertex-sharing mesh.

    Points are deduplicated by exact coordinate equality, and the vertex
    buffer keeps first-insertion order.  Polygons must be added in row-major
    cell order for the vertex numbering to be reproducible.
    """

    def __init__(self) -> None:
        self._index: Dict[_Point, int] = {}
        self._vertices: List[_Point] = []
        self._triangles: List[_Triangle] = []

    def __len__(self) -> int:
        return len(self._vertices)

    def vertex_index(self, point: _Point) -> int:
        """Index of *point*, appending it to the vertex buffer if new."""
        key = (float(point[0]), float(point[1]))
        index = self._index.get(key)
        if index is None:
            index = len(self._vertices)
            self._index[key] = index
            self._vertices.append(key)
        return index

    def add_polygon(self, points: Sequence[_Point]) -> List[int]:
        """Add one cell polygon; returns its vertex indices."""
        indices = [self.vertex_index(p) for p in points]
        for a, b, c in fan_triangles(len(indices)):
            self._triangles.append((indices[a], indices[b], indices[c]))
        return indices

    def add_polygons(self, polygons: Iterable[Sequence[_Point]]) -> None:
        for points in polygons:
            self.add_polygon(points)

    def build(self) -> Mesh:
        vertices = np.array(self._vertices, dtype=np.float64).reshape(-1, 2)
        triangles = np.array(self._triangles, dtype=np.uint32).reshape(-1, 3)
        vertices.flags.writeable = False
        triangles.flags.writeable = False
        logger.debug("Assembled mesh: %d vertices, %d triangles",
                     vertices.shape[0], triangles.shape[0])
        return Mesh(vertices, triangles)
