"""Cell flags and velocity boundary conditions on obstacle cells.

A flag field holds one integer per cell; its bits are the members of
:class:`Cell`.  Obstacle cells carry, besides their kind (no-slip,
free-slip or outflow), one bit for each side that borders a fluid cell.
"""

from __future__ import annotations

from enum import IntFlag
from typing import List, Tuple

import numpy as np

__all__ = [
    "Cell",
    "b_east",
    "b_west",
    "b_north",
    "b_south",
    "b_north_east",
    "b_north_west",
    "b_south_east",
    "b_south_west",
    "special_boundary_values",
    "boundary_values",
]


class Cell(IntFlag):
    """Bits of a cell flag."""

    FLUID = 1 << 0
    NO_SLIP = 1 << 1
    FREE_SLIP = 1 << 2
    OUTFLOW = 1 << 3
    INFLOW = 1 << 4
    B_NORTH = 1 << 5
    B_SOUTH = 1 << 6
    B_WEST = 1 << 7
    B_EAST = 1 << 8
    INTERIOR = 1 << 9
    SURFACE = 1 << 10
    EMPTY = 1 << 11
    S_NORTH = 1 << 12
    S_SOUTH = 1 << 13
    S_WEST = 1 << 14
    S_EAST = 1 << 15


_NO_SLIP = int(Cell.NO_SLIP)
_FREE_SLIP = int(Cell.FREE_SLIP)
_OUTFLOW = int(Cell.OUTFLOW)
_INFLOW = int(Cell.INFLOW)
_NORTH = int(Cell.B_NORTH)
_SOUTH = int(Cell.B_SOUTH)
_WEST = int(Cell.B_WEST)
_EAST = int(Cell.B_EAST)
_KINDS = _NO_SLIP | _FREE_SLIP | _OUTFLOW


def _has(flag, bit: int) -> bool:
    return (int(flag) & bit) != 0


def b_east(flag) -> bool:
    """True if the obstacle cell borders fluid on its east side."""
    return _has(flag, _EAST)


def b_west(flag) -> bool:
    """True if the obstacle cell borders fluid on its west side."""
    return _has(flag, _WEST)


def b_north(flag) -> bool:
    """True if the obstacle cell borders fluid on its north side."""
    return _has(flag, _NORTH)


def b_south(flag) -> bool:
    """True if the obstacle cell borders fluid on its south side."""
    return _has(flag, _SOUTH)


def b_north_east(flag) -> bool:
    """True if the obstacle cell borders fluid to the north and the east."""
    return _has(flag, _NORTH) and _has(flag, _EAST)


def b_north_west(flag) -> bool:
    """True if the obstacle cell borders fluid to the north and the west."""
    return _has(flag, _NORTH) and _has(flag, _WEST)


def b_south_east(flag) -> bool:
    """True if the obstacle cell borders fluid to the south and the east."""
    return _has(flag, _SOUTH) and _has(flag, _EAST)


def b_south_west(flag) -> bool:
    """True if the obstacle cell borders fluid to the south and the west."""
    return _has(flag, _SOUTH) and _has(flag, _WEST)


def _cells(flag: np.ndarray, mask: int) -> List[Tuple[int, int]]:
    """Cells whose flag shares a bit with ``mask``, ``i`` outer, ``j`` inner."""
    return [tuple(ij) for ij in np.argwhere(np.asarray(flag) & mask).tolist()]


def special_boundary_values(u: np.ndarray, v: np.ndarray, flag: np.ndarray) -> None:
    """Impose a unit inflow velocity on every inflow cell."""
    for i, j in _cells(flag, _INFLOW):
        u[i, j] = 1.0
        v[i, j] = 0.0
        v[i, j - 1] = 0.0


def _wall(u: np.ndarray, v: np.ndarray, cell: int, i: int, j: int, sign: float) -> None:
    """Wall conditions; ``sign`` is -1 for no-slip and +1 for free-slip."""
    if b_east(cell):
        u[i, j] = 0.0
        v[i, j - 1] = sign * v[i + 1, j - 1]
        v[i, j] = sign * v[i + 1, j]
    if b_west(cell):
        u[i - 1, j] = 0.0
        v[i, j - 1] = sign * v[i - 1, j - 1]
        v[i, j] = sign * v[i - 1, j]
    if b_north(cell):
        v[i, j] = 0.0
        u[i - 1, j] = sign * u[i - 1, j + 1]
        u[i, j] = sign * u[i, j + 1]
    if b_south(cell):
        v[i, j - 1] = 0.0
        u[i - 1, j] = sign * u[i - 1, j - 1]
        u[i, j] = sign * u[i, j - 1]
    if b_north_east(cell):
        u[i, j] = 0.0
        u[i - 1, j] = sign * u[i - 1, j + 1]
        v[i, j] = 0.0
        v[i, j - 1] = sign * v[i + 1, j - 1]
    if b_north_west(cell):
        u[i - 1, j] = 0.0
        u[i, j] = sign * u[i, j + 1]
        v[i, j] = 0.0
        v[i, j - 1] = sign * v[i - 1, j - 1]
    if b_south_east(cell):
        u[i, j] = 0.0
        u[i - 1, j] = sign * u[i - 1, j - 1]
        v[i, j - 1] = 0.0
        v[i, j] = sign * v[i + 1, j]
    if b_south_west(cell):
        u[i - 1, j] = 0.0
        u[i, j] = sign * u[i, j - 1]
        v[i, j - 1] = 0.0
        v[i, j] = sign * v[i - 1, j]


def boundary_values(u: np.ndarray, v: np.ndarray, flag: np.ndarray) -> None:
    """Set ``u`` and ``v`` on no-slip, free-slip and outflow cells in place.

    A cell is treated only when exactly one of the three kind bits is set.
    """
    for i, j in _cells(flag, _KINDS):
        cell = int(flag[i, j])
        kind = cell & _KINDS
        if kind == _NO_SLIP:
            _wall(u, v, cell, i, j, -1.0)
        elif kind == _FREE_SLIP:
            _wall(u, v, cell, i, j, 1.0)
        elif kind == _OUTFLOW:
            # Outflow is taken to leave in the x direction.
            u[i, j] = u[i - 1, j]
            v[i, j] = v[i - 1, j]
            v[i, j - 1] = v[i - 1, j - 1]