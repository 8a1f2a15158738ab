"""Grid fields, binary matrix dumps and ASCII PGM geometry images.

A field is a two-dimensional numpy array indexed ``field[i, j]``, where
``i`` runs along x and ``j`` along y.
"""

from __future__ import annotations

import sys
from typing import Tuple

import numpy as np

__all__ = [
    "PgmError",
    "new_field",
    "new_flag_field",
    "write_matrix",
    "read_matrix",
    "read_pgm",
]

_FLOAT = np.dtype("=f4")


class PgmError(Exception):
    """A PGM image could not be opened or is malformed."""


def new_field(imax: int, jmax: int, value: float = 0.0) -> np.ndarray:
    """Return an ``imax`` by ``jmax`` float field filled with ``value``."""
    return np.full((imax, jmax), value, dtype=np.float64)


def new_flag_field(imax: int, jmax: int, value: int = 0) -> np.ndarray:
    """Return an ``imax`` by ``jmax`` integer field filled with ``value``."""
    return np.full((imax, jmax), value, dtype=np.int64)


def write_matrix(filename: str, m: np.ndarray, first: bool = True) -> None:
    """Write ``m`` as single-precision floats, ``j`` outer and ``i`` inner.

    With ``first`` true the file is replaced; otherwise the values are
    appended to it.
    """
    data = np.asarray(m, dtype=_FLOAT)
    if data.ndim != 2:
        raise ValueError("matrix must be two-dimensional")
    mode = "wb" if first else "ab"
    with open(filename, mode) as fh:
        fh.write(data.tobytes(order="F"))


def read_matrix(filename: str, shape: Tuple[int, int]) -> np.ndarray:
    """Read a field of ``shape`` from the start of a file made by :func:`write_matrix`."""
    imax, jmax = shape
    count = imax * jmax
    with open(filename, "rb") as fh:
        raw = fh.read(count * _FLOAT.itemsize)
    if len(raw) < count * _FLOAT.itemsize:
        raise ValueError(
            f"Inputfile {filename} holds fewer than {count} values"
        )
    values = np.frombuffer(raw, dtype=_FLOAT)
    return values.reshape((imax, jmax), order="F").astype(np.float64)


def read_pgm(filename: str) -> np.ndarray:
    """Read an ASCII PGM image into an integer field ``pic[x, y]``.

    The first image row becomes the top row, ``y = height - 1``.
    """
    try:
        fh = open(filename, "rb")
    except OSError as exc:
        raise PgmError(f"Can not read file {filename} !!!") from exc

    with fh:
        if len(fh.read(3)) != 3:
            raise PgmError("Error Wrong Magic field!")

        line = fh.readline()
        while line.startswith(b"#"):
            line = fh.readline()

        dims = line.split()
        try:
            xsize, ysize = int(dims[0]), int(dims[1])
        except (IndexError, ValueError) as exc:
            raise PgmError("missing image size") from exc
        sys.stdout.write(f"Image size: {xsize} x {ysize}\n")

        fh.readline()  # number of grey levels, not used
        tokens = iter(fh.read().split())

        pic = new_flag_field(xsize, ysize)
        sys.stdout.write("Image initialised...\n")
        for row in range(ysize):
            shown = []
            for col in range(xsize):
                token = next(tokens, None)
                if token is None:
                    raise PgmError("read failed")
                try:
                    value = int(token)
                except ValueError as exc:
                    raise PgmError("read failed") from exc
                pic[col, ysize - 1 - row] = value
                shown.append(str(value))
            sys.stdout.write("".join(shown) + "\n")

    return pic