"""Marker particles that track the fluid and the cell flags they imply."""

from __future__ import annotations

import math
import sys
from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Sequence, Set, Tuple

import numpy as np

from slosh.boundary import Cell

__all__ = [
    "ParticleLine",
    "init_particles",
    "insert_particles",
    "mark_cells",
    "u_interp",
    "v_interp",
    "advance_particles",
    "delete_particles",
]

_FLUID = int(Cell.FLUID)
_OUTFLOW = int(Cell.OUTFLOW)
_INFLOW = int(Cell.INFLOW)
_EMPTY = int(Cell.EMPTY)
_SURFACE = int(Cell.SURFACE)
_INTERIOR = int(Cell.INTERIOR)
_WALL = int(Cell.NO_SLIP | Cell.FREE_SLIP)
_WET = _FLUID | _OUTFLOW | _INFLOW


@dataclass
class ParticleLine:
    """A row of marker particles; ``points[k]`` is ``(x, y)`` of particle ``k``."""

    points: np.ndarray = field(default_factory=lambda: np.empty((0, 2)))

    def __post_init__(self) -> None:
        self.points = np.asarray(self.points, dtype=np.float64).reshape(-1, 2)

    @property
    def length(self) -> int:
        """Number of particles on the line."""
        return len(self.points)

    def __len__(self) -> int:
        return len(self.points)

    def __iter__(self) -> Iterator[Tuple[float, float]]:
        for x, y in self.points.tolist():
            yield x, y


def insert_particles(
    i: int, j: int, dx: float, dy: float, length: int, row: int
) -> ParticleLine:
    """Return row ``row`` of ``length`` evenly spaced particles in cell ``(i, j)``."""
    step_x = dx / length
    step_y = dy / length
    y = j * dy + step_y * row + step_y / 2
    points = [(i * dx + step_x * k + step_x / 2, y) for k in range(length)]
    return ParticleLine(np.array(points, dtype=np.float64).reshape(-1, 2))


def init_particles(
    imax: int, jmax: int, dx: float, dy: float, ppc: int, flag: np.ndarray
) -> List[ParticleLine]:
    """Seed about ``ppc`` particles in every inner wet cell.

    Each cell gets ``int(sqrt(ppc))`` lines of that many particles.
    """
    per_side = int(math.sqrt(ppc))
    lines = [
        insert_particles(i, j, dx, dy, per_side, row)
        for i in range(1, imax - 1)
        for j in range(1, jmax - 1)
        if int(flag[i, j]) & _WET
        for row in range(per_side)
    ]
    sys.stdout.write(f"Number of particlelines: {len(lines)} \n")
    return lines


def _cell_index(pos: float, size: float, count: int) -> Optional[int]:
    """Index ``k`` with ``k*size <= pos < (k+1)*size``, if it lies in the grid."""
    if not math.isfinite(pos):
        return None
    k = math.floor(pos / size)
    while k * size > pos:
        k -= 1
    while (k + 1) * size <= pos:
        k += 1
    return k if 0 <= k < count else None


def _occupied(
    lines: Sequence[ParticleLine], dx: float, dy: float, imax: int, jmax: int
) -> Set[Tuple[int, int]]:
    cells = set()
    for line in lines:
        for x, y in line:
            i = _cell_index(x, dx, imax)
            j = _cell_index(y, dy, jmax)
            if i is not None and j is not None:
                cells.add((i, j))
    return cells


def mark_cells(
    flag: np.ndarray, dx: float, dy: float, lines: Sequence[ParticleLine]
) -> None:
    """Reclassify open cells from the particles and mark obstacle faces, in place.

    Open cells without particles become empty; open cells with particles
    become inflow (first column), outflow (last column) or fluid, with a
    surface bit for each side that borders an empty cell, or the interior
    bit when there is none. Obstacle cells gain a bit for each side that
    borders a wet cell. Cells are visited with ``i`` outer and ``j`` inner,
    so a neighbour already visited is seen with its new flag.
    """
    imax, jmax = flag.shape
    occupied = _occupied(lines, dx, dy, imax, jmax)

    for i in range(imax):
        for j in range(jmax):
            cell = int(flag[i, j])
            if cell & _WALL == 0:
                if (i, j) not in occupied:
                    flag[i, j] = _EMPTY
                    continue
                if i == 0:
                    cell = _INFLOW
                elif i == imax - 1:
                    cell = _OUTFLOW
                else:
                    cell = _FLUID
                if i < imax - 1 and int(flag[i + 1, j]) & _EMPTY:
                    cell |= int(Cell.S_EAST) | _SURFACE
                if i > 0 and int(flag[i - 1, j]) & _EMPTY:
                    cell |= int(Cell.S_WEST) | _SURFACE
                if j < jmax - 1 and int(flag[i, j + 1]) & _EMPTY:
                    cell |= int(Cell.S_NORTH) | _SURFACE
                if j > 0 and int(flag[i, j - 1]) & _EMPTY:
                    cell |= int(Cell.S_SOUTH) | _SURFACE
                if cell & _SURFACE == 0:
                    cell |= _INTERIOR
                flag[i, j] = cell
            else:
                if i < imax - 1 and int(flag[i + 1, j]) & _WET:
                    cell |= int(Cell.B_EAST)
                if i > 0 and int(flag[i - 1, j]) & _WET:
                    cell |= int(Cell.B_WEST)
                if j < jmax - 1 and int(flag[i, j + 1]) & _WET:
                    cell |= int(Cell.B_NORTH)
                if j > 0 and int(flag[i, j - 1]) & _WET:
                    cell |= int(Cell.B_SOUTH)
                flag[i, j] = cell


def u_interp(u: np.ndarray, dx: float, dy: float, x: float, y: float) -> float:
    """Bilinear interpolation of ``u``, stored at ``(i*dx, (j-0.5)*dy)``."""
    i = int(x / dx)
    j = int((y + 0.5 * dy) / dy)
    x1, x2 = (i - 1) * dx, i * dx
    y1, y2 = (j - 1.5) * dy, (j - 0.5) * dy
    return float(
        (1 / (dx * dy))
        * (
            (x2 - x) * (y2 - y) * u[i - 1, j - 1]
            + (x - x1) * (y2 - y) * u[i, j - 1]
            + (x2 - x) * (y - y1) * u[i - 1, j]
            + (x - x1) * (y - y1) * u[i, j]
        )
    )


def v_interp(v: np.ndarray, dx: float, dy: float, x: float, y: float) -> float:
    """Bilinear interpolation of ``v``, stored at ``((i-0.5)*dx, j*dy)``."""
    i = int((x + 0.5 * dx) / dx)
    j = int(y / dy)
    x1, x2 = (i - 1.5) * dx, (i - 0.5) * dx
    y1, y2 = (j - 1) * dy, j * dy
    return float(
        (1 / (dx * dy))
        * (
            (x2 - x) * (y2 - y) * v[i - 1, j - 1]
            + (x - x1) * (y2 - y) * v[i, j - 1]
            + (x2 - x) * (y - y1) * v[i - 1, j]
            + (x - x1) * (y - y1) * v[i, j]
        )
    )


def advance_particles(
    u: np.ndarray,
    v: np.ndarray,
    dx: float,
    dy: float,
    dt: float,
    lines: Sequence[ParticleLine],
) -> None:
    """Move every particle one explicit Euler step, in place.

    A velocity component is applied only where its interpolation stencil
    lies inside the grid.
    """
    imax, jmax = u.shape
    for line in lines:
        for k, (x, y) in enumerate(line):
            i = int(x / dx)
            j = int((y + 0.5 * dy) / dy)
            if 0 < i < imax and 0 < j < jmax:
                line.points[k, 0] = x + dt * u_interp(u, dx, dy, x, y)
            i = int((x + 0.5 * dx) / dx)
            j = int(y / dy)
            if 0 < i < imax and 0 < j < jmax:
                line.points[k, 1] = y + dt * v_interp(v, dx, dy, x, y)


def delete_particles(
    dx: float, dy: float, lines: Sequence[ParticleLine], flag: np.ndarray
) -> None:
    """Drop, in place, every particle that sits in a no-slip or free-slip cell."""
    imax, jmax = flag.shape
    for line in lines:
        keep = []
        for x, y in line:
            i, j = int(x / dx), int(y / dy)
            inside = 0 <= i < imax and 0 <= j < jmax
            keep.append(not (inside and int(flag[i, j]) & _WALL))
        line.points = line.points[np.array(keep, dtype=bool)].reshape(-1, 2)