""""managing exceptions raised while parsing and analyzing CafeMol files"""

from __future__ import annotations


class ParseError(Exception):
    """Raised when a file cannot be parsed correctly."""
    pass


class LineParseError(ParseError):
    """Raised when a single line cannot be parsed into a record."""

    def __init__(self, message: str, line: str | None = None):
        super().__init__(message)
        self.line = line


class OutOfBoundsError(LineParseError):
    """Raised when a fixed-width read reaches past the end of a line."""

    def __init__(self, offset: int, width: int, length: int, line: str | None = None):
        super().__init__(
            f"field [{offset}:{offset + width}] exceeds line length {length}", line
        )
        self.offset = offset
        self.width = width
        self.length = length


class MalformedNumberError(LineParseError):
    """Raised when a fixed-width field is not a valid numeric literal."""

    def __init__(self, text: str, expected: str, line: str | None = None):
        super().__init__(f"cannot parse {text!r} as {expected}", line)
        self.text = text
        self.expected = expected


class InconsistentUnitError(LineParseError):
    """Raised when the two unit columns of a particle group disagree."""

    def __init__(self, first: int, second: int, line: str | None = None):
        super().__init__(f"unit columns disagree: {first} != {second}", line)
        self.first = first
        self.second = second


class IOFailure(ParseError):
    """Raised when the input stream itself cannot be read to completion."""
    pass


class StreamReadError(IOFailure):
    """Raised when reading from the underlying stream fails."""
    pass


class UnterminatedBlockError(IOFailure):
    """Raised when the input ends before a block is closed with ``>>>>``."""

    def __init__(self, label: str):
        super().__init__(f"end of input inside block {label!r}")
        self.label = label


class AnalysisError(Exception):
    """Raised when an analysis step fails."""
    pass
