"""Run configuration for a contour build."""

from __future__ import annotations

import dataclasses
import json
import math
from dataclasses import dataclass
from enum import Enum
from numbers import Integral
from pathlib import Path
from typing import Any, Mapping, Tuple, Union

from .errors import ConfigError


class InterpolationMode(str, Enum):
    """How a crossing point is placed on a cell edge."""

    MIDPOINT = "midpoint"
    LINEAR = "linear"

    @classmethod
    def parse(cls, value: Union[str, "InterpolationMode"]) -> "InterpolationMode":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            choices = ", ".join(m.value for m in cls)
            raise ConfigError(
                f"unknown interpolation mode {value!r} (expected one of: {choices})"
            ) from None


@dataclass(frozen=True)
class ContourConfig:
    """Options recognised by :func:`contour2d.rebuild`.

    Parameters
    ----------
    width, height:
        Physical extents of the sampled rectangle.
    resolution:
        Requested spacing between samples. The actual spacing is stretched
        so the grid covers ``[0, width] x [0, height]`` exactly.
    iso_value:
        Samples strictly above this value are occupied.
    interpolation_mode:
        ``"midpoint"`` or ``"linear"``.
    noise_scale:
        Frequency of the default Perlin field: grid index ``(col, row)``
        samples noise at ``(col * noise_scale, row * noise_scale)``.
    seed:
        Seed of the default Perlin field's permutation table.
    """

    width: float = 16.0
    height: float = 16.0
    resolution: float = 1.0
    iso_value: float = 0.5
    interpolation_mode: InterpolationMode = InterpolationMode.MIDPOINT
    noise_scale: float = 0.1
    seed: int = 0

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "interpolation_mode", InterpolationMode.parse(self.interpolation_mode)
        )
        for name in ("width", "height", "resolution"):
            value = getattr(self, name)
            if not math.isfinite(value) or value <= 0:
                raise ConfigError(f"{name} must be a positive number, got {value!r}")
        if isinstance(self.seed, bool) or not isinstance(self.seed, Integral) or self.seed < 0:
            raise ConfigError(f"seed must be a non-negative integer, got {self.seed!r}")
        for name in ("iso_value", "noise_scale"):
            if not math.isfinite(getattr(self, name)):
                raise ConfigError(f"{name} must be finite, got {getattr(self, name)!r}")

    # ------------------------------------------------------------------
    # Derived grid layout
    # ------------------------------------------------------------------

    @property
    def grid_shape(self) -> Tuple[int, int]:
        """``(rows, cols)`` of the sample grid."""
        rows = int(math.floor(self.height / self.resolution)) + 1
        cols = int(math.floor(self.width / self.resolution)) + 1
        return rows, cols

    @property
    def grid_steps(self) -> Tuple[float, float]:
        """``(step_x, step_y)`` spacing between neighbouring samples.

        A degenerate axis (a single sample) reports the requested resolution;
        the sampler rejects such grids anyway.
        """
        rows, cols = self.grid_shape
        step_x = self.width / (cols - 1) if cols > 1 else self.resolution
        step_y = self.height / (rows - 1) if rows > 1 else self.resolution
        return step_x, step_y

    # ------------------------------------------------------------------
    # Construction helpers
    # ------------------------------------------------------------------

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ContourConfig":
        """Build a config from a mapping, rejecting unknown keys."""
        known = {f.name for f in dataclasses.fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigError(f"unknown configuration keys: {', '.join(unknown)}")
        kwargs = dict(data)
        try:
            for name in ("width", "height", "resolution", "iso_value", "noise_scale"):
                if name in kwargs:
                    kwargs[name] = float(kwargs[name])
            if "seed" in kwargs:
                kwargs["seed"] = int(kwargs["seed"])
        except (TypeError, ValueError) as exc:
            raise ConfigError(str(exc)) from exc
        return cls(**kwargs)

    def to_dict(self) -> dict:
        data = dataclasses.asdict(self)
        data["interpolation_mode"] = self.interpolation_mode.value
        return data

    def replace(self, **overrides: Any) -> "ContourConfig":
        """Return a copy with *overrides* applied (``None`` values are ignored)."""
        changes = {k: v for k, v in overrides.items() if v is not None}
        return self.from_dict({**self.to_dict(), **changes})


def load_config(path: Union[str, Path]) -> ContourConfig:
    """Read a :class:`ContourConfig` from a JSON file."""
    with open(path, "r") as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ConfigError(f"{path}: expected a JSON object at top level")
    return ContourConfig.from_dict(data)
