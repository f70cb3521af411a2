"""
contour2d command line.

Usage:
    python -m contour2d --out mesh.obj
    python -m contour2d --config run.json --mode linear --out out/mesh.npz
"""

from __future__ import annotations

import argparse
import logging
import sys

from .config import ContourConfig, InterpolationMode, load_config
from .io import save_mesh
from .pipeline import generate
from .utils import configure_logging

logger = logging.getLogger("contour2d.cli")


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="contour2d",
        description="Build a marching-squares mesh from a Perlin noise field.",
    )
    p.add_argument("--config", help="JSON file with ContourConfig options")
    p.add_argument("--width", type=float)
    p.add_argument("--height", type=float)
    p.add_argument("--resolution", type=float)
    p.add_argument("--iso", dest="iso_value", type=float)
    p.add_argument("--mode", dest="interpolation_mode",
                   choices=[m.value for m in InterpolationMode])
    p.add_argument("--noise-scale", dest="noise_scale", type=float)
    p.add_argument("--seed", type=int)
    p.add_argument("--out", help="write the mesh to this .npz or .obj file")
    p.add_argument("--log-level", default=None,
                   help="logging level (default: $CONTOUR2D_LOG_LEVEL or INFO)")
    return p


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level)

    try:
        config = load_config(args.config) if args.config else ContourConfig()
        config = config.replace(
            width=args.width,
            height=args.height,
            resolution=args.resolution,
            iso_value=args.iso_value,
            interpolation_mode=args.interpolation_mode,
            noise_scale=args.noise_scale,
            seed=args.seed,
        )
        result = generate(config)
        if args.out:
            path = save_mesh(args.out, result.mesh)
            logger.info("Wrote %s", path)
    except (ValueError, OSError) as exc:
        logger.error("contour2d: %s", exc)
        return 1

    rows, cols = config.grid_shape
    print(f"grid {rows}x{cols}  vertices {result.mesh.n_vertices}  "
          f"triangles {result.mesh.n_triangles}  area {result.mesh.area():.4f}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
