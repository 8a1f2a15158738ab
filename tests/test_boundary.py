import numpy as np
import pytest

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
    boundary_values,
    special_boundary_values,
)


def _fields(imax=4, jmax=4, seed=1):
    rng = np.random.default_rng(seed)
    return rng.standard_normal((imax, jmax)), rng.standard_normal((imax, jmax))


def _flags(imax=4, jmax=4):
    return np.zeros((imax, jmax), dtype=np.int64)


@pytest.mark.parametrize(
    "predicate, flag, expected",
    [
        (b_east, Cell.B_EAST, True),
        (b_east, Cell.B_EAST | Cell.B_NORTH, True),
        (b_east, Cell.B_WEST, False),
        (b_west, Cell.B_WEST | Cell.B_SOUTH, True),
        (b_north, Cell.B_NORTH, True),
        (b_south, Cell.B_NORTH, False),
        (b_north_east, Cell.B_EAST, False),
        (b_north_east, Cell.B_EAST | Cell.B_NORTH, True),
        (b_north_west, Cell.B_WEST | Cell.B_NORTH, True),
        (b_south_east, Cell.B_SOUTH | Cell.B_EAST, True),
        (b_south_west, 0, False),
        (b_south_west, Cell.B_SOUTH | Cell.B_WEST, True),
    ],
)
def test_predicates(predicate, flag, expected):
    assert predicate(int(flag)) is expected


def test_no_slip_east_wall():
    u, v = _fields()
    u0, v0 = u.copy(), v.copy()
    flag = _flags()
    flag[1, 1] = Cell.NO_SLIP | Cell.B_EAST
    boundary_values(u, v, flag)
    assert u[1, 1] == 0.0
    assert v[1, 1] == -v0[2, 1]
    assert v[1, 0] == -v0[2, 0]
    changed = np.zeros_like(flag, dtype=bool)
    changed[1, 1] = True
    assert np.array_equal(u[~changed], u0[~changed])
    untouched = np.ones_like(flag, dtype=bool)
    untouched[1, 0] = untouched[1, 1] = False
    assert np.array_equal(v[untouched], v0[untouched])


def test_free_slip_west_wall():
    u, v = _fields()
    v0 = v.copy()
    flag = _flags()
    flag[2, 1] = Cell.FREE_SLIP | Cell.B_WEST
    boundary_values(u, v, flag)
    assert u[1, 1] == 0.0
    assert v[2, 0] == v0[1, 0]
    assert v[2, 1] == v0[1, 1]


def test_no_slip_north_east_corner():
    u, v = _fields()
    u0, v0 = u.copy(), v.copy()
    flag = _flags()
    flag[1, 1] = Cell.NO_SLIP | Cell.B_EAST | Cell.B_NORTH
    boundary_values(u, v, flag)
    assert u[1, 1] == 0.0
    assert u[0, 1] == -u0[0, 2]
    assert v[1, 1] == 0.0
    assert v[1, 0] == -v0[2, 0]


def test_free_slip_north_copies_tangential():
    u, v = _fields()
    u0 = u.copy()
    flag = _flags()
    flag[2, 1] = Cell.FREE_SLIP | Cell.B_NORTH
    boundary_values(u, v, flag)
    assert v[2, 1] == 0.0
    assert u[1, 1] == u0[1, 2]
    assert u[2, 1] == u0[2, 2]


def test_outflow_copies_from_west():
    u, v = _fields()
    u0, v0 = u.copy(), v.copy()
    flag = _flags()
    flag[3, 2] = Cell.OUTFLOW
    boundary_values(u, v, flag)
    assert u[3, 2] == u0[2, 2]
    assert v[3, 2] == v0[2, 2]
    assert v[3, 1] == v0[2, 1]


def test_fluid_and_mixed_kinds_untouched():
    u, v = _fields()
    u0, v0 = u.copy(), v.copy()
    flag = _flags()
    flag[1, 1] = Cell.FLUID
    flag[2, 2] = Cell.NO_SLIP | Cell.FREE_SLIP | Cell.B_EAST
    boundary_values(u, v, flag)
    assert np.array_equal(u, u0)
    assert np.array_equal(v, v0)


def test_special_inflow_values():
    u, v = _fields()
    flag = _flags()
    flag[0, 2] = Cell.INFLOW
    special_boundary_values(u, v, flag)
    assert u[0, 2] == 1.0
    assert v[0, 2] == 0.0
    assert v[0, 1] == 0.0