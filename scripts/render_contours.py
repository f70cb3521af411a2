"""Render one contour build: sample weights, contour segments and mesh.

Usage::

    python scripts/render_contours.py                        # saves contours.png
    python scripts/render_contours.py --mode linear --seed 3 --out linear.png
    python scripts/render_contours.py --config run.json

Requirements: numpy, matplotlib
"""
from __future__ import annotations

import argparse
import logging
import os
import sys

# Ensure the repo root (parent of scripts/) is importable regardless of cwd
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import matplotlib.pyplot as plt
import numpy as np
from matplotlib.collections import LineCollection

from contour2d import ContourConfig, ContourResult, generate, load_config
from contour2d.utils import configure_logging

logger = logging.getLogger("contour2d.render")


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------

def _style(ax, title: str) -> None:
    ax.set_facecolor("#111111")
    ax.set_aspect("equal")
    ax.set_xticks([])
    ax.set_yticks([])
    ax.set_title(title, color="white", fontsize=9, pad=4)
    for spine in ax.spines.values():
        spine.set_edgecolor("#444444")


def render(result: ContourResult, out_path: str) -> None:
    grid = result.grid
    xy = grid.positions.reshape(-1, 2)
    signed = (grid.weights - grid.iso_value).ravel()
    lim = max(float(np.abs(signed).max()), 1e-6)

    fig, (ax_pts, ax_seg, ax_mesh) = plt.subplots(
        1, 3, figsize=(13.5, 4.8), facecolor="#111111",
    )

    _style(ax_pts, f"samples (iso {grid.iso_value:g})")
    ax_pts.scatter(xy[:, 0], xy[:, 1], c=signed, cmap="seismic",
                   vmin=-lim, vmax=lim, s=12)

    segments = list(result.segments())
    _style(ax_seg, f"contour segments ({len(segments)})")
    ax_seg.scatter(xy[:, 0], xy[:, 1], c=np.where(grid.occupied.ravel(), "#dddddd", "#333333"), s=6)
    if segments:
        ax_seg.add_collection(LineCollection(segments, colors="#ffcc33", linewidths=1.2))

    mesh = result.mesh
    _style(ax_mesh, f"mesh ({mesh.n_vertices} v, {mesh.n_triangles} t)")
    if not mesh.is_empty:
        ax_mesh.triplot(mesh.vertices[:, 0], mesh.vertices[:, 1],
                        mesh.triangles.astype(np.int64), color="#66ccff", linewidth=0.5)
    x_max, y_max = grid.positions[-1, -1]
    for ax in (ax_pts, ax_seg, ax_mesh):
        ax.set_xlim(-0.5 * grid.step_x, x_max + 0.5 * grid.step_x)
        ax.set_ylim(y_max + 0.5 * grid.step_y, -0.5 * grid.step_y)

    plt.tight_layout(pad=0.4)
    fig.savefig(out_path, dpi=150, bbox_inches="tight", facecolor=fig.get_facecolor())
    plt.close(fig)
    logger.info("Saved: %s", out_path)


def main() -> None:
    parser = argparse.ArgumentParser(description="Render a marching-squares build to PNG.")
    parser.add_argument("--config", help="JSON file with ContourConfig options")
    parser.add_argument("--mode", choices=["midpoint", "linear"])
    parser.add_argument("--seed", type=int)
    parser.add_argument("--noise-scale", type=float)
    parser.add_argument("--out", default="contours.png", help="Output PNG path")
    args = parser.parse_args()

    configure_logging()
    config = load_config(args.config) if args.config else ContourConfig(width=32.0, height=32.0)
    config = config.replace(interpolation_mode=args.mode, seed=args.seed,
                            noise_scale=args.noise_scale)
    render(generate(config), args.out)


if __name__ == "__main__":
    main()
