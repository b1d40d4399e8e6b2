"""
Block segmentation for CafeMol native-info files.

Native-info files are divided into labeled blocks:

    <<<< native contact
    ** comment lines start with '*'
    contact      1 ...
    >>>>

``BlockReader`` walks a text stream one line at a time and yields each block
as a ``Block`` (label plus its data lines). Blank and comment lines are
skipped everywhere; anything between blocks that is not an opening
delimiter is ignored.
"""


from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Iterator, List, Optional

from cafetools.utils.exceptions import StreamReadError, UnterminatedBlockError

BLOCK_START = "<<<<"
BLOCK_END = ">>>>"
COMMENT = "*"


@dataclass
class Block:
    """A labeled section of a native-info file and its raw data lines."""
    label: str
    lines: List[str] = field(default_factory=list)


def is_blank(line: str) -> bool:
    return not line.strip()


def is_comment(line: str) -> bool:
    return line.startswith(COMMENT)


def is_block_start(line: str) -> bool:
    return line.startswith(BLOCK_START)


def is_block_end(line: str) -> bool:
    return line.startswith(BLOCK_END)


class BlockReader:
    """
    Lazy, forward-only iterator of ``Block`` objects over a line stream.

    Parameters
    ----------
    stream : iterable of str
        An open text file or any iterable of lines. Line terminators are
        removed; the rest of each line is kept verbatim.

    Notes
    -----
    - Reaching the end of input while looking for the next block ends the
      iteration normally.
    - Reaching the end of input inside a block raises
      ``UnterminatedBlockError``; no partial block is yielded.
    - Read errors of the stream are re-raised as ``StreamReadError``.

    Examples
    --------
    >>> with open("protein.ninfo") as fh:
    ...     for block in BlockReader(fh):
    ...         print(block.label, len(block.lines))
    """

    def __init__(self, stream: Iterable[str]):
        self._lines = iter(stream)
        self.line_number = 0

    def __iter__(self) -> "BlockReader":
        return self

    def __next__(self) -> Block:
        label = self._seek_start()
        if label is None:
            raise StopIteration
        return self._read_contents(label)

    def _next_line(self) -> Optional[str]:
        try:
            raw = next(self._lines)
        except StopIteration:
            return None
        except (OSError, UnicodeDecodeError) as exc:
            raise StreamReadError(
                f"failed reading line {self.line_number + 1}: {exc}"
            ) from exc
        self.line_number += 1
        return raw.rstrip("\r\n")

    def _seek_start(self) -> Optional[str]:
        while True:
            line = self._next_line()
            if line is None:
                return None
            if is_blank(line) or is_comment(line):
                continue
            if is_block_start(line):
                return line[len(BLOCK_START):].strip()

    def _read_contents(self, label: str) -> Block:
        block = Block(label)
        while True:
            line = self._next_line()
            if line is None:
                raise UnterminatedBlockError(label)
            if is_blank(line) or is_comment(line):
                continue
            if is_block_end(line):
                return block
            block.lines.append(line)


def read_blocks(file_path: str | Path) -> Iterator[Block]:
    """Yield the blocks of the native-info file at ``file_path``."""
    with open(file_path, "r") as fh:
        yield from BlockReader(fh)
