"""Exception types raised by contour2d.

All of them signal a programming or configuration error rather than a
transient condition, so callers should let them propagate.
"""

from __future__ import annotations


class Contour2DError(ValueError):
    """Base class for every error raised by contour2d."""


class ConfigError(Contour2DError):
    """A configuration value is out of range or of the wrong kind."""


class InvalidGridSize(Contour2DError):
    """The sample grid has fewer than two rows or two columns."""


class InvalidCellSize(Contour2DError):
    """A cell was classified from something other than four corner bits."""


class InvalidCase(Contour2DError):
    """A cell case index lies outside ``[0, 15]``."""


class UnbinarizedGrid(Contour2DError):
    """A stage that needs occupancy was given a grid without it."""
