"""Time step, momentum predictor, pressure right-hand side and velocity update.

Together with diagnostics for the pressure force on obstacles and the
kinetic energy of the fluid.
"""

from __future__ import annotations

import math
from typing import Tuple

import numpy as np

from slosh.boundary import (
    Cell,
    b_east,
    b_north,
    b_north_east,
    b_north_west,
    b_south,
    b_south_east,
    b_south_west,
    b_west,
)

__all__ = [
    "calculate_dt",
    "calculate_fg",
    "calculate_rs",
    "calculate_uv",
    "nullify_obstacles",
    "set_gravity",
    "force_x",
    "force_y",
    "kinetic_energy",
]

_FLUID = int(Cell.FLUID)
_OUTFLOW = int(Cell.OUTFLOW)
_INFLOW = int(Cell.INFLOW)
_INTERIOR = int(Cell.INTERIOR)
_WALL_BITS = int(Cell.B_NORTH | Cell.B_SOUTH | Cell.B_WEST | Cell.B_EAST | Cell.INFLOW)
_VOID = int(Cell.NO_SLIP | Cell.FREE_SLIP | Cell.EMPTY)
_BANKING_PROBLEMS = frozenset(range(1, 9))
_LATERAL_G = 0.8
_MANOEUVRE_TIME = 3.0


def _u_faces(flag: np.ndarray) -> np.ndarray:
    """Mask of cells ``i < imax-1`` whose east face carries a computed ``u``."""
    here, east = flag[:-1], flag[1:]
    fluid_here = (here & _FLUID) != 0
    return (fluid_here & ((east & _FLUID) != 0)) | (fluid_here & ((east & _OUTFLOW) != 0))


def _v_faces(flag: np.ndarray) -> np.ndarray:
    """Mask of cells ``j < jmax-1`` whose north face carries a computed ``v``."""
    return ((flag[:, :-1] & _FLUID) != 0) & ((flag[:, 1:] & _FLUID) != 0)


def calculate_dt(
    re: float,
    tau: float,
    dt: float,
    dx: float,
    dy: float,
    u: np.ndarray,
    v: np.ndarray,
) -> float:
    """Return the stable time step, or ``dt`` unchanged unless ``0 < tau < 1``."""
    umax = float(np.max(np.abs(u)))
    vmax = float(np.max(np.abs(v)))
    diffusive = (re / 2.0) / (1.0 / dx**2 + 1.0 / dy**2)
    along_x = dx / umax if umax else math.inf
    along_y = dy / vmax if vmax else math.inf
    if 0 < tau < 1:
        return tau * min(diffusive, along_x, along_y)
    return dt


def _fg_boundary(u, v, f, g, flag) -> None:
    for i, j in np.argwhere(flag & _WALL_BITS).tolist():
        cell = int(flag[i, j])
        if b_east(cell):
            f[i, j] = u[i, j]
        if b_west(cell):
            f[i - 1, j] = u[i - 1, j]
        if b_north(cell):
            g[i, j] = v[i, j]
        if b_south(cell):
            g[i, j - 1] = v[i, j - 1]
        if b_north_east(cell):
            f[i, j] = u[i, j]
            g[i, j] = v[i, j]
        if b_north_west(cell):
            f[i - 1, j] = u[i - 1, j]
            g[i, j] = v[i, j]
        if b_south_east(cell):
            f[i, j] = u[i, j]
            g[i, j - 1] = v[i, j - 1]
        if b_south_west(cell):
            f[i - 1, j] = u[i - 1, j]
            g[i, j - 1] = v[i, j - 1]
        if cell & _INFLOW:
            f[i, j] = u[i, j]


def calculate_fg(
    re: float,
    gx: float,
    gy: float,
    alpha: float,
    dt: float,
    dx: float,
    dy: float,
    u: np.ndarray,
    v: np.ndarray,
    f: np.ndarray,
    g: np.ndarray,
    flag: np.ndarray,
) -> None:
    """Fill ``f`` and ``g`` in place with the predicted momentum.

    Diffusion uses central differences, convection the donor-cell blend
    weighted by ``alpha``.
    """
    flag = np.asarray(flag)
    _fg_boundary(u, v, f, g, flag)

    ii, jj = np.nonzero(_u_faces(flag))
    if ii.size:
        uc, ue, uw = u[ii, jj], u[ii + 1, jj], u[ii - 1, jj]
        un, us = u[ii, jj + 1], u[ii, jj - 1]
        vc, ve = v[ii, jj], v[ii + 1, jj]
        vs, vse = v[ii, jj - 1], v[ii + 1, jj - 1]
        laplace = (uw - 2 * uc + ue) / dx**2 + (us - 2 * uc + un) / dy**2
        du2dx = (1 / dx) * 0.25 * (
            ((ue + uc) ** 2 - (uw + uc) ** 2)
            + alpha * (np.abs(ue + uc) * (uc - ue) - np.abs(uw + uc) * (uw - uc))
        )
        duvdy = (1 / dy) * 0.25 * (
            ((vc + ve) * (uc + un) - (vs + vse) * (us + uc))
            + alpha * (np.abs(vc + ve) * (uc - un) - np.abs(vs + vse) * (us - uc))
        )
        f[ii, jj] = uc + dt * ((1 / re) * laplace - du2dx - duvdy + gx)

    ii, jj = np.nonzero(_v_faces(flag))
    if ii.size:
        vc, ve, vw = v[ii, jj], v[ii + 1, jj], v[ii - 1, jj]
        vn, vs = v[ii, jj + 1], v[ii, jj - 1]
        uc, un = u[ii, jj], u[ii, jj + 1]
        uw, unw = u[ii - 1, jj], u[ii - 1, jj + 1]
        laplace = (vw - 2 * vc + ve) / dx**2 + (vs - 2 * vc + vn) / dy**2
        duvdx = (1 / dx) * 0.25 * (
            ((uc + un) * (vc + ve) - (uw + unw) * (vw + vc))
            + alpha * (np.abs(uc + un) * (vc - ve) - np.abs(uw + unw) * (vw - vc))
        )
        dv2dy = (1 / dy) * 0.25 * (
            ((vc + vn) ** 2 - (vs + vc) ** 2)
            + alpha * (np.abs(vc + vn) * (vc - vn) - np.abs(vs + vc) * (vs - vc))
        )
        g[ii, jj] = vc + dt * ((1 / re) * laplace - duvdx - dv2dy + gy)


def calculate_rs(
    dt: float,
    dx: float,
    dy: float,
    f: np.ndarray,
    g: np.ndarray,
    rs: np.ndarray,
    flag: np.ndarray,
) -> None:
    """Set the pressure right-hand side in place on interior cells."""
    ii, jj = np.nonzero(np.asarray(flag) & _INTERIOR)
    rs[ii, jj] = (1 / dt) * (
        (f[ii, jj] - f[ii - 1, jj]) / dx + (g[ii, jj] - g[ii, jj - 1]) / dy
    )


def calculate_uv(
    dt: float,
    dx: float,
    dy: float,
    u: np.ndarray,
    v: np.ndarray,
    f: np.ndarray,
    g: np.ndarray,
    p: np.ndarray,
    flag: np.ndarray,
) -> None:
    """Correct ``u`` and ``v`` in place with the pressure gradient."""
    flag = np.asarray(flag)
    ii, jj = np.nonzero(_u_faces(flag))
    u[ii, jj] = f[ii, jj] - (dt / dx) * (p[ii + 1, jj] - p[ii, jj])
    ii, jj = np.nonzero(_v_faces(flag))
    v[ii, jj] = g[ii, jj] - (dt / dy) * (p[ii, jj + 1] - p[ii, jj])


def nullify_obstacles(
    u: np.ndarray, v: np.ndarray, p: np.ndarray, flag: np.ndarray
) -> None:
    """Zero velocity and pressure in obstacle and empty cells."""
    mask = (np.asarray(flag) & _VOID) != 0
    u[mask] = 0.0
    v[mask] = 0.0
    p[mask] = 0.0


def set_gravity(gx: float, gy: float, t: float, prob: int) -> Tuple[float, float]:
    """Return the body force at time ``t`` for problem ``prob``.

    The tanker problems (1 to 8) feel a lateral acceleration for the first
    seconds of the run; other problems keep the given force.
    """
    if prob in _BANKING_PROBLEMS:
        gx = _LATERAL_G if t < _MANOEUVRE_TIME else 0.0
    return gx, gy


def force_x(dy: float, p: np.ndarray, flag: np.ndarray) -> float:
    """Net pressure force in x on obstacle faces next to inner cells."""
    flag = np.asarray(flag)
    inner = p[1:-1, 1:-1]
    pushes = (flag[2:, 1:-1] & int(Cell.B_WEST)) != 0
    pulls = (flag[:-2, 1:-1] & int(Cell.B_EAST)) != 0
    return float(np.sum(inner[pushes] * dy) - np.sum(inner[pulls] * dy))


def force_y(dx: float, p: np.ndarray, flag: np.ndarray) -> float:
    """Net pressure force in y on obstacle faces next to inner cells."""
    flag = np.asarray(flag)
    inner = p[1:-1, 1:-1]
    pushes = (flag[1:-1, 2:] & int(Cell.B_SOUTH)) != 0
    pulls = (flag[1:-1, :-2] & int(Cell.B_NORTH)) != 0
    return float(np.sum(inner[pushes] * dx) - np.sum(inner[pulls] * dx))


def kinetic_energy(u: np.ndarray, v: np.ndarray, flag: np.ndarray) -> float:
    """Sum of ``(u**2 + v**2) / 2`` over inner fluid cells."""
    fluid = (np.asarray(flag)[1:-1, 1:-1] & _FLUID) != 0
    ui = u[1:-1, 1:-1][fluid]
    vi = v[1:-1, 1:-1][fluid]
    return float(np.sum(0.5 * (ui * ui + vi * vi)))