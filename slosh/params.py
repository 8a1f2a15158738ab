"""Reading named values from a plain-text parameter file.

Each meaningful line of a parameter file starts with a name made of
letters, digits and underscores, followed by its value.  Everything after
a ``#`` is a comment.  A name given with a leading ``*`` is looked up
without the star.
"""

from __future__ import annotations

import re
import sys

__all__ = [
    "ParameterError",
    "find_string",
    "read_string",
    "read_int",
    "read_double",
]

# The characters C's isspace() treats as white space.
_WHITESPACE = " \t\n\v\f\r"
_NAME = re.compile(r"[A-Za-z0-9_]*")
_INT = re.compile(r"[+-]?\d+")
_FLOAT = re.compile(
    r"[+-]?(?:(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?|inf(?:inity)?|nan)",
    re.IGNORECASE,
)
_PAD_WIDTH = 15


class ParameterError(Exception):
    """A parameter file could not be read or holds a malformed entry."""

    def __init__(self, message: str, filename: str, variable: str, line: int = 0):
        self.message = message
        self.filename = filename
        self.variable = variable
        self.line = line
        text = f"{message}  File: {filename}   Variable: {variable}"
        if line:
            text += f"  Line: {line}"
        super().__init__(text)


def find_string(filename: str, name: str) -> str:
    """Return the text that follows ``name`` on its first line in the file.

    Leading white space of the value is removed; the line terminator is not
    part of the result.  Raises :class:`ParameterError` when the file cannot
    be opened, when any line before the match has a name without a value,
    or when the name does not occur.
    """
    try:
        fh = open(filename, encoding="utf-8", errors="replace")
    except OSError as exc:
        raise ParameterError("Could not open file", filename, name) from exc

    line_no = 0
    with fh:
        for line_no, raw in enumerate(fh, start=1):
            line = raw.split("#", 1)[0].lstrip(_WHITESPACE)
            if not line:
                continue

            key = _NAME.match(line).group()
            rest = line[len(key):]
            if not rest or rest[0] == "\n":
                raise ParameterError("wrong format", filename, key, line_no)
            if key != name:
                continue

            value = rest[1:].lstrip(_WHITESPACE)
            if not value:
                raise ParameterError("wrong format", filename, key, line_no)
            return value.rstrip("\r\n")

    raise ParameterError("variable not found", filename, name, line_no)


def _lookup(filename: str, name: str) -> str:
    return find_string(filename, name[1:] if name.startswith("*") else name)


def _echo(filename: str, name: str, shown: str) -> None:
    padding = " " * (_PAD_WIDTH - min(len(name), _PAD_WIDTH))
    sys.stdout.write(f"File: {filename}\t\t{name}{padding}= {shown}\n")


def read_string(filename: str, name: str) -> str:
    """Return the first white-space separated word of the named value."""
    value = _lookup(filename, name)
    words = value.split()
    if not words:
        raise ParameterError("wrong format", filename, name)
    word = words[0]
    _echo(filename, name, word)
    return word


def read_int(filename: str, name: str) -> int:
    """Return the integer at the start of the named value."""
    value = _lookup(filename, name)
    match = _INT.match(value.lstrip(_WHITESPACE))
    if match is None:
        raise ParameterError("wrong format", filename, name)
    number = int(match.group())
    _echo(filename, name, str(number))
    return number


def read_double(filename: str, name: str) -> float:
    """Return the floating-point number at the start of the named value."""
    value = _lookup(filename, name)
    match = _FLOAT.match(value.lstrip(_WHITESPACE))
    if match is None:
        raise ParameterError("wrong format", filename, name)
    number = float(match.group())
    _echo(filename, name, f"{number:f}")
    return number