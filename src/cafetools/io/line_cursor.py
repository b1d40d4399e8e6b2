"""
Fixed-width field cursor for CafeMol text records.

This module provides ``LineCursor``, a small stateful reader that walks one
line of text left-to-right and consumes fixed-width fields at an explicit
running offset. It is the lowest layer of the native-info codec and is also
used by the time-series reader.

Column conventions:

- integer fields occupy ``INT_WIDTH`` (6) columns, right-justified
- floating-point fields occupy ``FLOAT_WIDTH`` (12) columns, right-justified,
  written with ``FLOAT_PRECISION`` (4) decimal places
- every field after the first is preceded by a single space column
"""


from __future__ import annotations

import re

from cafetools.utils.exceptions import MalformedNumberError, OutOfBoundsError

INT_WIDTH = 6
FLOAT_WIDTH = 12
FLOAT_PRECISION = 4

_INT_RE = re.compile(r"^[+-]?\d+$")
_FLOAT_RE = re.compile(r"^[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?$")


def to_int(text: str) -> int:
    """Convert a trimmed field to ``int`` or raise ``MalformedNumberError``."""
    if not _INT_RE.match(text):
        raise MalformedNumberError(text, "int")
    return int(text)


def to_float(text: str) -> float:
    """Convert a trimmed field to ``float`` or raise ``MalformedNumberError``."""
    if not _FLOAT_RE.match(text):
        raise MalformedNumberError(text, "float")
    return float(text)


def format_int(value: int, width: int = INT_WIDTH) -> str:
    return f"{int(value):{width}d}"


def format_float(value: float, width: int = FLOAT_WIDTH,
                 precision: int = FLOAT_PRECISION) -> str:
    return f"{float(value):{width}.{precision}f}"


class LineCursor:
    """
    Sequential reader of fixed-width fields within a single line.

    Parameters
    ----------
    line : str
        Text to read, without its line terminator.
    pos : int, optional
        Starting offset (default: 0).

    Notes
    -----
    - Reads never go past the end of the line; a short line raises
      ``OutOfBoundsError`` instead of returning a truncated slice.
    - Returned text is stripped of surrounding whitespace.

    Examples
    --------
    >>> c = LineCursor("     1      2.5000")
    >>> c.parse_int()
    1
    >>> c.parse_float()
    2.5
    """

    def __init__(self, line: str, pos: int = 0):
        self.line = line
        self.pos = pos

    def take(self, width: int) -> str:
        """Return the next ``width`` characters (trimmed) and advance the offset."""
        end = self.pos + width
        if end > len(self.line):
            raise OutOfBoundsError(self.pos, width, len(self.line), self.line)
        text = self.line[self.pos:end]
        self.pos = end
        return text.strip()

    def take_with_leading_space(self, width: int) -> str:
        """Skip the single separator column, then ``take(width)``."""
        self.take(1)
        return self.take(width)

    def take_tail(self, width: int) -> str:
        """
        Skip the separator column and return at most ``width`` trailing characters.

        Used for the short type tag closing every record; a tail shorter than
        ``width`` is accepted, a missing separator column is not.
        """
        self.take(1)
        end = min(self.pos + width, len(self.line))
        text = self.line[self.pos:end]
        self.pos = end
        return text.strip()

    def parse_int(self) -> int:
        return self._convert(self.take(INT_WIDTH), to_int)

    def parse_float(self) -> float:
        return self._convert(self.take(FLOAT_WIDTH), to_float)

    def parse_int_with_space(self) -> int:
        self.take(1)
        return self.parse_int()

    def parse_float_with_space(self) -> float:
        self.take(1)
        return self.parse_float()

    def _convert(self, text: str, convert):
        try:
            return convert(text)
        except MalformedNumberError as exc:
            exc.line = self.line
            raise

    def at_end(self) -> bool:
        return self.pos >= len(self.line)
