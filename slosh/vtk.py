"""Legacy ASCII VTK output for the flow fields and the marker particles."""

from __future__ import annotations

from typing import Iterator, Sequence, TextIO, Tuple

import numpy as np

from slosh.boundary import Cell
from slosh.particles import ParticleLine

__all__ = [
    "write_vtk_file",
    "write_vtk_header",
    "write_vtk_point_coordinates",
    "write_vtk_particle_file",
    "write_vtk_particle_header",
    "write_vtk_particle_coordinates",
]

_WALL = int(Cell.NO_SLIP | Cell.FREE_SLIP)


def _require_shape(name: str, field: np.ndarray, rows: int, cols: int) -> None:
    if field.shape[0] < rows or field.shape[1] < cols:
        raise ValueError(
            f"{name} has shape {field.shape}, at least ({rows}, {cols}) is needed"
        )


def write_vtk_header(fh: TextIO, imax: int, jmax: int, dx: float, dy: float) -> None:
    """Write the header of a structured-grid file with ``imax+1`` by ``jmax+1`` points."""
    if fh is None:
        raise ValueError("no file given to write_vtk_header")
    fh.write("# vtk DataFile Version 2.0\n")
    fh.write("generated by slosh output \n")
    fh.write("ASCII\n")
    fh.write("\n")
    fh.write("DATASET STRUCTURED_GRID\n")
    fh.write(f"DIMENSIONS  {imax + 1} {jmax + 1} 1 \n")
    fh.write(f"POINTS {(imax + 1) * (jmax + 1)} float\n")
    fh.write("\n")


def write_vtk_point_coordinates(
    fh: TextIO, imax: int, jmax: int, dx: float, dy: float
) -> None:
    """Write the grid point coordinates, ``j`` outer and ``i`` inner."""
    for j in range(jmax + 1):
        y = (j + 1) * dy
        fh.write("".join(f"{(i + 1) * dx:f} {y:f} 0\n" for i in range(imax + 1)))


def write_vtk_file(
    prefix: str,
    step: int,
    xlength: float,
    ylength: float,
    imax: int,
    jmax: int,
    dx: float,
    dy: float,
    u: np.ndarray,
    v: np.ndarray,
    p: np.ndarray,
) -> str:
    """Write velocity and pressure to ``<prefix>.<step>.vtk`` and return its path.

    ``imax`` and ``jmax`` count the inner cells; the fields include the
    surrounding layer of boundary cells.
    """
    u = np.asarray(u)
    v = np.asarray(v)
    p = np.asarray(p)
    _require_shape("u", u, imax + 1, jmax + 2)
    _require_shape("v", v, imax + 2, jmax + 1)
    _require_shape("p", p, imax + 1, jmax + 1)

    path = f"{prefix}.{step}.vtk"
    ux = (u[: imax + 1, : jmax + 1] + u[: imax + 1, 1 : jmax + 2]) * 0.5
    vy = (v[: imax + 1, : jmax + 1] + v[1 : imax + 2, : jmax + 1]) * 0.5
    pressure = p[1 : imax + 1, 1 : jmax + 1]

    with open(path, "w", encoding="ascii") as fh:
        write_vtk_header(fh, imax, jmax, dx, dy)
        write_vtk_point_coordinates(fh, imax, jmax, dx, dy)

        fh.write(f"POINT_DATA {(imax + 1) * (jmax + 1)} \n")
        fh.write("\n")
        fh.write("VECTORS velocity float\n")
        fh.write(
            "".join(
                f"{a:f} {b:f} 0\n"
                for a, b in zip(ux.T.ravel().tolist(), vy.T.ravel().tolist())
            )
        )

        fh.write("\n")
        fh.write(f"CELL_DATA {imax * jmax} \n")
        fh.write("SCALARS pressure float 1 \n")
        fh.write("LOOKUP_TABLE default \n")
        fh.write("".join(f"{value:f}\n" for value in pressure.T.ravel().tolist()))
    return path


def _visible_points(
    lines: Sequence[ParticleLine],
    imax: int,
    jmax: int,
    dx: float,
    dy: float,
    flag: np.ndarray,
) -> Iterator[Tuple[float, float]]:
    """Particles strictly inside the domain and not inside a wall cell."""
    rows, cols = np.shape(flag)
    for line in lines:
        for x, y in line:
            if not (0 < x < imax * dx and 0 < y < jmax * dy):
                continue
            i, j = int(x / dx), int(y / dy)
            if i >= rows or j >= cols:
                continue
            if int(flag[i, j]) & _WALL:
                continue
            yield x, y


def write_vtk_particle_header(fh: TextIO, length: int) -> None:
    """Write the header of an unstructured-grid file holding ``length`` points."""
    if fh is None:
        raise ValueError("no file given to write_vtk_particle_header")
    fh.write("# vtk DataFile Version 2.0\n")
    fh.write("ASCII\n")
    fh.write("\n")
    fh.write("DATASET UNSTRUCTURED_GRID\n")
    fh.write(f"POINTS {length} float\n")
    fh.write("\n")


def write_vtk_particle_coordinates(
    fh: TextIO,
    lines: Sequence[ParticleLine],
    imax: int,
    jmax: int,
    dx: float,
    dy: float,
    flag: np.ndarray,
) -> None:
    """Write the position of every visible particle."""
    for x, y in _visible_points(lines, imax, jmax, dx, dy, flag):
        fh.write(f"{x:f} {y:f} 0\n")


def write_vtk_particle_file(
    prefix: str,
    step: int,
    xlength: float,
    ylength: float,
    imax: int,
    jmax: int,
    dx: float,
    dy: float,
    lines: Sequence[ParticleLine],
    flag: np.ndarray,
) -> str:
    """Write the particles to ``<prefix>.particle.<step>.vtk`` and return its path."""
    path = f"{prefix}.particle.{step}.vtk"
    count = sum(1 for _ in _visible_points(lines, imax, jmax, dx, dy, flag))
    with open(path, "w", encoding="ascii") as fh:
        write_vtk_particle_header(fh, count)
        write_vtk_particle_coordinates(fh, lines, imax, jmax, dx, dy, flag)
    return path