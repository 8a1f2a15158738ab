import numpy as np
import pytest

from slosh.fields import (
    PgmError,
    new_field,
    new_flag_field,
    read_matrix,
    read_pgm,
    write_matrix,
)


def _write(path, text):
    path.write_bytes(text.encode("ascii"))
    return str(path)


def test_new_field_shape_and_fill():
    field = new_field(4, 3, 2.5)
    assert field.shape == (4, 3)
    assert np.all(field == 2.5)


def test_new_flag_field_is_integer():
    flags = new_flag_field(2, 5, 7)
    assert flags.shape == (2, 5)
    assert np.issubdtype(flags.dtype, np.integer)
    assert np.all(flags == 7)


def test_write_matrix_order_is_j_outer(tmp_path):
    path = str(tmp_path / "m.bin")
    m = np.array([[1.0, 2.0], [3.0, 4.0]])
    write_matrix(path, m, True)
    values = np.fromfile(path, dtype="=f4")
    assert values.tolist() == [1.0, 3.0, 2.0, 4.0]


def test_round_trip(tmp_path):
    path = str(tmp_path / "m.bin")
    m = np.arange(12, dtype=float).reshape(4, 3) * 0.5
    write_matrix(path, m, True)
    back = read_matrix(path, (4, 3))
    np.testing.assert_array_equal(back, m)


def test_append_and_overwrite(tmp_path):
    path = tmp_path / "m.bin"
    m = new_field(3, 2, 1.0)
    write_matrix(str(path), m, True)
    size_one = path.stat().st_size
    write_matrix(str(path), m, False)
    assert path.stat().st_size == 2 * size_one
    write_matrix(str(path), m, True)
    assert path.stat().st_size == size_one


def test_read_matrix_short_file(tmp_path):
    path = str(tmp_path / "m.bin")
    write_matrix(path, new_field(2, 2, 1.0), True)
    with pytest.raises(ValueError):
        read_matrix(path, (3, 3))


def test_read_pgm_orientation(tmp_path):
    path = _write(
        tmp_path / "g.pgm",
        "P2\n# comment\n3 2\n5\n0 1 2\n3 4 5\n",
    )
    pic = read_pgm(path)
    assert pic.shape == (3, 2)
    assert pic[:, 1].tolist() == [0, 1, 2]
    assert pic[:, 0].tolist() == [3, 4, 5]


def test_read_pgm_pixels_over_lines(tmp_path):
    path = _write(tmp_path / "g.pgm", "P2\n2 2\n4\n4\n4 0\n0\n")
    pic = read_pgm(path)
    assert pic[0, 1] == 4 and pic[1, 1] == 4
    assert pic[0, 0] == 0 and pic[1, 0] == 0


def test_read_pgm_missing_file(tmp_path):
    with pytest.raises(PgmError):
        read_pgm(str(tmp_path / "missing.pgm"))


def test_read_pgm_short_magic(tmp_path):
    path = _write(tmp_path / "g.pgm", "P2")
    with pytest.raises(PgmError):
        read_pgm(path)


def test_read_pgm_missing_pixels(tmp_path):
    path = _write(tmp_path / "g.pgm", "P2\n2 2\n4\n1 2 3\n")
    with pytest.raises(PgmError):
        read_pgm(path)


def test_read_pgm_bad_size(tmp_path):
    path = _write(tmp_path / "g.pgm", "P2\nabc\n4\n")
    with pytest.raises(PgmError):
        read_pgm(path)