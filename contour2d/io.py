"""Reading and writing meshes."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Union

import numpy as np

from .mesh import Mesh

_PathLike = Union[str, Path]


def _ensure_parent(path: Path) -> None:
    if str(path.parent):
        os.makedirs(path.parent, exist_ok=True)


def save_mesh(path: _PathLike, mesh: Mesh) -> Path:
    """Write *mesh* to *path*.

    The format follows the suffix: ``.npz`` stores the ``vertices`` and
    ``triangles`` arrays, ``.obj`` writes a Wavefront file in the ``z = 0``
    plane (1-based face indices).  Parent directories are created.
    """
    path = Path(path)
    suffix = path.suffix.lower()
    if suffix not in (".npz", ".obj"):
        raise ValueError(f"unsupported mesh format {path.suffix!r} (use .npz or .obj)")
    _ensure_parent(path)

    if suffix == ".npz":
        with open(path, "wb") as f:
            np.savez(f, vertices=mesh.vertices, triangles=mesh.triangles)
        return path

    with open(path, "w") as f:
        f.write(f"# contour2d mesh: {mesh.n_vertices} vertices, {mesh.n_triangles} triangles\n")
        for x, y in mesh.vertices:
            f.write(f"v {float(x)!r} {float(y)!r} 0.0\n")
        for a, b, c in mesh.triangles.astype(np.int64) + 1:
            f.write(f"f {a} {b} {c}\n")
    return path


def load_mesh(path: _PathLike) -> Mesh:
    """Read a mesh written by :func:`save_mesh` in ``.npz`` format."""
    with np.load(path) as data:
        vertices = np.array(data["vertices"], dtype=np.float64)
        triangles = np.array(data["triangles"], dtype=np.uint32)
    vertices.flags.writeable = False
    triangles.flags.writeable = False
    return Mesh(vertices, triangles)
