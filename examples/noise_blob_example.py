"""Perlin-noise blobs contoured with both edge-point modes.

Demonstrates: ContourConfig, generate, save_mesh
Output:       examples/noise_blob_midpoint.obj, examples/noise_blob_linear.obj

Properties verified:
    every mesh vertex is unique
    every triangle edge is shared by two triangles, or lies on a contour
    segment, or lies on the grid border
"""
import os, sys
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import numpy as np
from contour2d import ContourConfig, generate, save_mesh

_HERE = os.path.dirname(__file__)


def _open_edges(result):
    counts = {}
    for tri in result.mesh.triangles.tolist():
        for i in range(3):
            a, b = tri[i], tri[(i + 1) % 3]
            key = (min(a, b), max(a, b))
            counts[key] = counts.get(key, 0) + 1
    return [e for e, n in counts.items() if n == 1]


def _on_border(p, q, x_max, y_max):
    return (
        (np.isclose(p[0], q[0]) and (np.isclose(p[0], 0.0) or np.isclose(p[0], x_max)))
        or (np.isclose(p[1], q[1]) and (np.isclose(p[1], 0.0) or np.isclose(p[1], y_max)))
    )


def main():
    print("=" * 60)
    print("NOISE BLOBS: 32 x 32 field, noise scale 0.12, iso 0.5")
    print("=" * 60)

    base = ContourConfig(width=32.0, height=32.0, noise_scale=0.12, seed=5)
    ok = True
    for mode in ("midpoint", "linear"):
        result = generate(base.replace(interpolation_mode=mode))
        mesh = result.mesh
        verts = mesh.vertices
        index = {tuple(v): i for i, v in enumerate(verts.tolist())}
        seg = {frozenset((index[a], index[b])) for a, b in result.segments()}
        x_max, y_max = result.grid.positions[-1, -1]

        unique = np.unique(verts, axis=0).shape[0] == mesh.n_vertices
        stray = [
            (a, b) for a, b in _open_edges(result)
            if frozenset((a, b)) not in seg and not _on_border(verts[a], verts[b], x_max, y_max)
        ]

        print(f"\n[{mode}]")
        print(f"  vertices {mesh.n_vertices}   triangles {mesh.n_triangles}   area {mesh.area():.3f}")
        print(f"  case histogram: {result.case_histogram().tolist()}")
        print(f"  unique vertices: {unique}   stray open edges: {len(stray)}")
        ok = ok and unique and not stray

        out = save_mesh(os.path.join(_HERE, f"noise_blob_{mode}.obj"), mesh)
        print(f"  Saved: {out}")

    print("\n" + ("PASSED PASSED" if ok else "FAILED FAILED"))


if __name__ == "__main__":
    main()
