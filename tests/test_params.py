import pytest

from slosh.params import (
    ParameterError,
    find_string,
    read_double,
    read_int,
    read_string,
)


@pytest.fixture
def datafile(tmp_path):
    def make(text):
        path = tmp_path / "problem.dat"
        path.write_text(text)
        return str(path)

    return make


SAMPLE = """# sample parameter file
imax 50
jmax   20   # cells in y

xlength 5.0
dt 0.05
Re 1e2
geometry tank.pgm trailing
problem breaking_dam
"""


def test_read_int_basic(datafile):
    path = datafile(SAMPLE)
    assert read_int(path, "imax") == 50
    assert read_int(path, "jmax") == 20


def test_read_double_values(datafile):
    path = datafile(SAMPLE)
    assert read_double(path, "xlength") == 5.0
    assert read_double(path, "dt") == 0.05
    assert read_double(path, "Re") == 1e2


def test_read_string_takes_first_word(datafile):
    path = datafile(SAMPLE)
    assert read_string(path, "geometry") == "tank.pgm"
    assert read_string(path, "problem") == "breaking_dam"


def test_star_prefix_is_ignored(datafile):
    path = datafile(SAMPLE)
    assert read_int(path, "*imax") == read_int(path, "imax")
    assert read_string(path, "*problem") == "breaking_dam"


def test_find_string_strips_leading_space_and_comment(datafile):
    path = datafile(SAMPLE)
    assert find_string(path, "jmax").strip() == "20"
    assert find_string(path, "geometry") == "tank.pgm trailing"


def test_commented_out_entry_is_not_found(datafile):
    path = datafile("# imax 3\njmax 4\n")
    with pytest.raises(ParameterError) as info:
        read_int(path, "imax")
    assert info.value.message == "variable not found"
    assert info.value.variable == "imax"


def test_first_occurrence_wins(datafile):
    path = datafile("imax 7\nimax 9\n")
    assert read_int(path, "imax") == 7


def test_separator_character_is_consumed(datafile):
    path = datafile("imax=5\n")
    assert read_int(path, "imax") == 5


def test_integer_prefix_is_parsed(datafile):
    path = datafile("itermax 12abc\n")
    assert read_int(path, "itermax") == 12


def test_non_numeric_int_raises(datafile):
    path = datafile("imax abc\n")
    with pytest.raises(ParameterError) as info:
        read_int(path, "imax")
    assert info.value.message == "wrong format"


def test_non_numeric_double_raises(datafile):
    path = datafile("dt fast\n")
    with pytest.raises(ParameterError) as info:
        read_double(path, "dt")
    assert info.value.message == "wrong format"


def test_name_without_value_raises_with_line(datafile):
    path = datafile("imax 5\nlonely\njmax 3\n")
    with pytest.raises(ParameterError) as info:
        read_int(path, "jmax")
    assert info.value.message == "wrong format"
    assert info.value.variable == "lonely"
    assert info.value.line == 2


def test_matching_name_with_only_blanks_raises(datafile):
    path = datafile("imax   \n")
    with pytest.raises(ParameterError) as info:
        find_string(path, "imax")
    assert info.value.message == "wrong format"


def test_missing_file_raises(tmp_path):
    missing = str(tmp_path / "absent.dat")
    with pytest.raises(ParameterError) as info:
        read_int(missing, "imax")
    assert info.value.message == "Could not open file"
    assert "Line" not in str(info.value)


def test_not_found_message_names_file_and_variable(datafile):
    path = datafile("imax 5\n")
    with pytest.raises(ParameterError) as info:
        find_string(path, "omg")
    text = str(info.value)
    assert "variable not found" in text
    assert path in text
    assert "Variable: omg" in text


def test_echo_format_int(datafile, capsys):
    path = datafile("imax 50\n")
    read_int(path, "imax")
    out = capsys.readouterr().out
    assert out == f"File: {path}\t\timax" + " " * 11 + "= 50\n"


def test_echo_format_double(datafile, capsys):
    path = datafile("dt 0.5\n")
    read_double(path, "dt")
    out = capsys.readouterr().out
    assert out == f"File: {path}\t\tdt" + " " * 13 + "= 0.500000\n"


def test_echo_long_name_has_no_padding(datafile, capsys):
    path = datafile("a_very_long_parameter_name word\n")
    read_string(path, "a_very_long_parameter_name")
    out = capsys.readouterr().out
    assert out == f"File: {path}\t\ta_very_long_parameter_name= word\n"