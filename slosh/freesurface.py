"""Velocity and pressure conditions on cells at the free surface.

A surface cell is a wet cell with one or more sides next to an empty
cell; the sides are recorded in the ``S_*`` bits of :class:`Cell`.  The
shape tests below each ask whether the named sides are marked.  They do
not ask whether the other sides are free, so several of them can hold
for the same cell, and :func:`set_uvp_surface` then applies each of
them in turn.
"""

from __future__ import annotations

import numpy as np

from slosh.boundary import Cell

__all__ = [
    "s_east",
    "s_west",
    "s_north",
    "s_south",
    "s_north_east",
    "s_east_south",
    "s_south_west",
    "s_west_north",
    "s_east_west",
    "s_north_south",
    "s_north_east_south",
    "s_east_south_west",
    "s_south_west_north",
    "s_west_north_east",
    "s_all",
    "set_uvp_surface",
]

_N = int(Cell.S_NORTH)
_S = int(Cell.S_SOUTH)
_W = int(Cell.S_WEST)
_E = int(Cell.S_EAST)
_SIDES = _N | _S | _W | _E
_EMPTY = int(Cell.EMPTY)


def _all(flag, *bits: int) -> bool:
    value = int(flag)
    return all(value & bit for bit in bits)


def s_east(flag) -> bool:
    """True if the east side borders an empty cell."""
    return _all(flag, _E)


def s_west(flag) -> bool:
    """True if the west side borders an empty cell."""
    return _all(flag, _W)


def s_north(flag) -> bool:
    """True if the north side borders an empty cell."""
    return _all(flag, _N)


def s_south(flag) -> bool:
    """True if the south side borders an empty cell."""
    return _all(flag, _S)


def s_north_east(flag) -> bool:
    """True if the north and east sides border empty cells."""
    return _all(flag, _N, _E)


def s_east_south(flag) -> bool:
    """True if the east and south sides border empty cells."""
    return _all(flag, _E, _S)


def s_south_west(flag) -> bool:
    """True if the south and west sides border empty cells."""
    return _all(flag, _S, _W)


def s_west_north(flag) -> bool:
    """True if the west and north sides border empty cells."""
    return _all(flag, _W, _N)


def s_east_west(flag) -> bool:
    """True if the east and west sides border empty cells."""
    return _all(flag, _E, _W)


def s_north_south(flag) -> bool:
    """True if the north and south sides border empty cells."""
    return _all(flag, _N, _S)


def s_north_east_south(flag) -> bool:
    """True if the north, east and south sides border empty cells."""
    return _all(flag, _N, _E, _S)


def s_east_south_west(flag) -> bool:
    """True if the east, south and west sides border empty cells."""
    return _all(flag, _E, _S, _W)


def s_south_west_north(flag) -> bool:
    """True if the south, west and north sides border empty cells."""
    return _all(flag, _S, _W, _N)


def s_west_north_east(flag) -> bool:
    """True if the west, north and east sides border empty cells."""
    return _all(flag, _W, _N, _E)


def s_all(flag) -> bool:
    """True if all four sides border empty cells."""
    return _all(flag, _N, _S, _W, _E)


def _surface_cells(flag: np.ndarray):
    """Cells with any surface side, ``i`` outer and ``j`` inner."""
    return [tuple(ij) for ij in np.argwhere(np.asarray(flag) & _SIDES).tolist()]


def _velocities(u, v, flag, i, j, dx, dy, dt, gx, gy) -> None:
    cell = int(flag[i, j])
    ryx = dy / dx
    rxy = dx / dy

    def empty(a: int, b: int) -> bool:
        return (int(flag[a, b]) & _EMPTY) != 0

    # one free side
    if s_north(cell):
        v[i, j] = v[i, j - 1] - ryx * (u[i, j] - u[i - 1, j])
        if empty(i - 1, j + 1):
            u[i - 1, j + 1] = u[i - 1, j] - ryx * (v[i, j] - v[i - 1, j])
    if s_south(cell):
        v[i, j - 1] = v[i, j] + ryx * (u[i, j] - u[i - 1, j])
        if empty(i - 1, j - 1):
            u[i - 1, j - 1] = u[i - 1, j] + ryx * (v[i, j - 1] - v[i - 1, j - 1])
    if s_east(cell):
        u[i, j] = u[i - 1, j] - rxy * (v[i, j] - v[i, j - 1])
        if empty(i + 1, j - 1):
            v[i + 1, j - 1] = v[i, j - 1] - rxy * (u[i, j] - u[i, j - 1])
    if s_west(cell):
        u[i - 1, j] = u[i, j] + rxy * (v[i, j] - v[i, j - 1])
        if empty(i - 1, j - 1):
            v[i - 1, j - 1] = v[i, j - 1] + rxy * (u[i - 1, j] - u[i - 1, j - 1])

    # two adjacent free sides
    if s_north_east(cell):
        u[i, j] = u[i - 1, j]
        v[i, j] = v[i, j - 1]
        if empty(i - 1, j + 1):
            u[i - 1, j + 1] = u[i - 1, j] - ryx * (v[i, j] - v[i - 1, j])
        if empty(i + 1, j + 1):
            u[i, j + 1] = u[i, j]
            v[i + 1, j] = v[i, j]
        if empty(i + 1, j - 1):
            v[i + 1, j - 1] = v[i, j - 1] - rxy * (u[i, j] - u[i, j - 1])
    if s_west_north(cell):
        u[i - 1, j] = u[i, j]
        v[i, j] = v[i, j - 1]
        if empty(i - 1, j + 1):
            u[i - 1, j + 1] = u[i - 1, j]
            v[i - 1, j] = v[i, j]
        if empty(i - 1, j - 1):
            v[i - 1, j - 1] = v[i, j - 1] + rxy * (u[i - 1, j] - u[i - 1, j - 1])
    if s_south_west(cell):
        u[i - 1, j] = u[i, j]
        v[i, j - 1] = v[i, j]
        if empty(i - 1, j - 1):
            u[i - 1, j - 1] = u[i - 1, j]
            v[i - 1, j - 1] = v[i, j - 1]
    if s_east_south(cell):
        u[i, j] = u[i - 1, j]
        v[i, j - 1] = v[i, j]
        if empty(i - 1, j - 1):
            u[i - 1, j - 1] = u[i - 1, j] + ryx * (v[i, j - 1] - v[i - 1, j - 1])
        if empty(i + 1, j - 1):
            u[i, j - 1] = u[i, j]
            v[i + 1, j - 1] = v[i, j - 1]

    # two opposite free sides
    if s_east_west(cell):
        u[i, j] += dt * gx
        u[i - 1, j] += dt * gx
        if empty(i - 1, j - 1):
            v[i - 1, j - 1] = v[i, j - 1] + rxy * (u[i - 1, j] - u[i - 1, j - 1])
        if empty(i + 1, j - 1):
            v[i + 1, j - 1] = v[i, j - 1] - rxy * (u[i, j] - u[i, j - 1])
    if s_north_south(cell):
        v[i, j] += dt * gy
        v[i, j - 1] += dt * gy
        if empty(i - 1, j + 1):
            u[i - 1, j + 1] = u[i - 1, j] - ryx * (v[i, j] - v[i - 1, j])
        if empty(i - 1, j - 1):
            u[i - 1, j - 1] = u[i - 1, j] + ryx * (v[i, j - 1] - v[i - 1, j - 1])

    # three free sides
    if s_west_north_east(cell):
        v[i, j] = v[i, j - 1] - ryx * (u[i, j] - u[i - 1, j])
        u[i, j] += dt * gx
        u[i - 1, j] += dt * gx
        if empty(i - 1, j - 1):
            v[i - 1, j - 1] = v[i, j - 1] + rxy * (u[i - 1, j] - u[i - 1, j - 1])
        if empty(i + 1, j - 1):
            v[i + 1, j - 1] = v[i, j - 1] - rxy * (u[i, j] - u[i, j - 1])
        if empty(i - 1, j + 1):
            u[i - 1, j + 1] = u[i - 1, j]
            v[i - 1, j] = v[i, j]
        if empty(i + 1, j + 1):
            u[i, j + 1] = u[i, j]
            v[i + 1, j] = v[i, j]
    if s_south_west_north(cell):
        u[i - 1, j] = u[i, j] + rxy * (v[i, j] - v[i, j - 1])
        v[i, j] += dt * gy
        v[i, j - 1] += dt * gy
        if empty(i - 1, j - 1):
            u[i - 1, j - 1] = u[i - 1, j]
            v[i - 1, j - 1] = v[i, j - 1]
        if empty(i - 1, j + 1):
            u[i - 1, j + 1] = u[i - 1, j]
            v[i - 1, j] = v[i, j]
    if s_east_south_west(cell):
        v[i, j - 1] = v[i, j] + ryx * (u[i, j] - u[i - 1, j])
        u[i, j] += dt * gx
        u[i - 1, j] += dt * gx
        if empty(i - 1, j - 1):
            u[i - 1, j - 1] = u[i - 1, j]
            v[i - 1, j - 1] = v[i, j - 1]
        if empty(i + 1, j - 1):
            u[i, j - 1] = u[i, j]
            v[i + 1, j - 1] = v[i, j - 1]
    if s_north_east_south(cell):
        u[i, j] = u[i - 1, j] - rxy * (v[i, j] - v[i, j - 1])
        v[i, j] += dt * gy
        v[i - 1, j] += dt * gy
        if empty(i - 1, j + 1):
            u[i - 1, j + 1] = u[i - 1, j] - ryx * (v[i, j] - v[i - 1, j])
        if empty(i - 1, j - 1):
            u[i - 1, j - 1] = u[i - 1, j] + ryx * (v[i, j - 1] - v[i - 1, j - 1])
        if empty(i + 1, j - 1):
            u[i, j - 1] = u[i, j]
            v[i + 1, j - 1] = v[i, j - 1]
        if empty(i + 1, j + 1):
            u[i, j + 1] = u[i, j]
            v[i + 1, j] = v[i, j]

    # all four sides free
    if s_all(cell):
        u[i, j] += dt * gx
        u[i - 1, j] += dt * gx
        v[i, j] += dt * gy
        v[i, j - 1] += dt * gy
        if empty(i - 1, j + 1):
            u[i - 1, j + 1] = u[i - 1, j]
            v[i - 1, j] = v[i, j]
        if empty(i + 1, j + 1):
            u[i, j + 1] = u[i, j]
            v[i + 1, j] = v[i, j]
        if empty(i - 1, j - 1):
            u[i - 1, j - 1] = u[i - 1, j]
            v[i - 1, j - 1] = v[i, j - 1]
        if empty(i + 1, j - 1):
            u[i, j - 1] = u[i, j]
            v[i + 1, j - 1] = v[i, j - 1]


def _pressure(u, v, p, cell, i, j, re, dx, dy) -> None:
    if s_north(cell):
        p[i, j] = (2 / re) * ((v[i, j] - v[i, j - 1]) / dy)
    if s_south(cell):
        p[i, j] = (2 / re) * ((v[i, j] - v[i, j - 1]) / dy)
    if s_east(cell):
        p[i, j] = (2 / re) * (u[i, j] - u[i - 1, j]) / dx
    if s_west(cell):
        p[i, j] = (2 / re) * ((u[i, j] - u[i - 1, j]) / dx)

    if s_north_east(cell):
        p[i, j] = (0.5 / re) * (
            (u[i - 1, j] + u[i, j] - u[i - 1, j - 1] - u[i, j - 1]) / dy
            + (v[i, j - 1] + v[i, j] - v[i - 1, j] - v[i - 1, j - 1]) / dx
        )
    if s_west_north(cell):
        p[i, j] = (-0.5 / re) * (
            (u[i - 1, j] + u[i, j] - u[i, j - 1] - u[i - 1, j - 1]) / dy
            + (v[i + 1, j] + v[i + 1, j - 1] - v[i, j] - v[i, j - 1]) / dx
        )
    if s_south_west(cell):
        p[i, j] = (0.5 / re) * (
            (u[i, j + 1] + u[i - 1, j + 1] - u[i, j] - u[i - 1, j]) / dy
            + (-v[i, j] - v[i, j - 1] + v[i + 1, j] + v[i + 1, j - 1]) / dx
        )
    if s_east_south(cell):
        p[i, j] = (-0.5 / re) * (
            (u[i, j + 1] + u[i - 1, j + 1] - u[i, j] - u[i - 1, j]) / dy
            + (v[i, j] + v[i, j - 1] - v[i - 1, j] - v[i - 1, j - 1]) / dx
        )

    if (
        s_east_west(cell)
        or s_north_south(cell)
        or s_west_north_east(cell)
        or s_south_west_north(cell)
        or s_east_south_west(cell)
        or s_north_east_south(cell)
        or s_all(cell)
    ):
        p[i, j] = 0.0


def set_uvp_surface(
    u: np.ndarray,
    v: np.ndarray,
    p: np.ndarray,
    flag: np.ndarray,
    re: float,
    dx: float,
    dy: float,
    dt: float,
    gx: float,
    gy: float,
) -> None:
    """Set velocities, then pressures, on free-surface cells in place.

    Velocities are set on all surface cells first; pressures follow in a
    second sweep that sees the updated velocities.
    """
    cells = _surface_cells(flag)
    for i, j in cells:
        _velocities(u, v, flag, i, j, dx, dy, dt, gx, gy)
    for i, j in cells:
        _pressure(u, v, p, int(flag[i, j]), i, j, re, dx, dy)