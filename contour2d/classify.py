"""Cell classification: four corner occupancy bits -> case index 0..15.

Corners are read clockwise from the top-left::

    TL --- TR        code = TL<<3 | TR<<2 | BR<<1 | BL
    |       |        case = 15 - code
    BL --- BR

so case 0 is a fully occupied cell and case 15 an empty one.  The contour
case table in :mod:`contour2d.contour` is indexed by this convention.
"""

from __future__ import annotations

from typing import Sequence

import numpy as np

from .errors import InvalidCellSize, UnbinarizedGrid
from .grid import Grid


def cell_case(bits: Sequence) -> int:
    """Case index of one cell from its ``(TL, TR, BR, BL)`` occupancy bits."""
    if len(bits) != 4:
        raise InvalidCellSize(f"a cell has exactly 4 corners, got {len(bits)}")
    code = 0
    for bit in bits:
        code = (code << 1) | int(bool(bit))
    return 15 - code


def classify_cells(grid: Grid) -> np.ndarray:
    """Case index of every cell of a binarized grid.

    Returns
    -------
    numpy.ndarray
        ``(rows-1, cols-1)`` int array; entry ``[row, col]`` is the case of
        the cell whose top-left corner is sample ``(row, col)``.
    """
    if grid.occupied is None:
        raise UnbinarizedGrid("grid must be binarized before its cells can be classified")
    occ = grid.occupied.astype(np.int64)
    top_left = occ[:-1, :-1]
    top_right = occ[:-1, 1:]
    bottom_right = occ[1:, 1:]
    bottom_left = occ[1:, :-1]
    code = (top_left << 3) | (top_right << 2) | (bottom_right << 1) | bottom_left
    return 15 - code
