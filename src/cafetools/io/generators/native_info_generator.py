"""
CafeMol native-info (.ninfo) generators.

This module serializes a ``NativeInfo`` document back to native-info text.
Only the native-contact block is reconstructed in full (delimiters, the
CafeMol header comments and one line per contact); other record kinds are
written line by line through ``format_record`` by the caller.

Generators in this module:
---

- format the ``native contact`` block of a document
- write the block to disk
- do not parse input files
"""


from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, List, Sequence, Union

from cafetools.io.block_reader import BLOCK_END, BLOCK_START
from cafetools.io.records import Contact, format_record
from cafetools.utils.constants import CONSTANTS

if TYPE_CHECKING:
    from cafetools.io.handlers.native_info_handler import NativeInfo

__all__ = [
    "contact_block_lines",
    "format_native_info",
    "write_native_info",
]

CONTACT_LEGEND = (
    "**        icon iunit1-iunit2   imp1 - imp2 imp1un-imp2un"
    "      go_nat   factor_go  dummy     coef_go"
)


def contact_block_lines(contacts: Sequence[Contact]) -> List[str]:
    """
    Return the lines of a ``native contact`` block (no line terminators).

    Examples
    ---
    >>> lines = contact_block_lines(ninfo.contacts)
    >>> lines[0]
    '<<<< native contact'
    """
    n = len(contacts)
    cutoff = CONSTANTS["definition_of_contact_A"]
    lines = [
        f"{BLOCK_START} native contact",
        f"** total_contact =   {n}",
        f"** definition_of_contact = {cutoff:10.2f} A",
        "** coef_go(kcal/mol) = factor_go * icon_dummy_mgo * cgo1210 * energy_unit_protein",
        "",
        "** contact between unit      1 and      1",
        f"** total_contact_unit =   {n}",
        CONTACT_LEGEND,
    ]
    lines.extend(format_record(c) for c in contacts)
    lines.append(BLOCK_END)
    return lines


def format_native_info(ninfo: "NativeInfo") -> str:
    """
    Serialize ``ninfo`` to native-info text.

    Returns an empty string when the document holds no contacts; otherwise
    the full contact block, every line terminated by a newline.
    """
    if not ninfo.contacts:
        return ""
    return "".join(line + "\n" for line in contact_block_lines(ninfo.contacts))


def write_native_info(file_path: Union[str, Path], ninfo: "NativeInfo") -> Path:
    """
    Write the contact block of ``ninfo`` to ``file_path``.

    Returns
    -------
    Path
        The written file path.
    """
    file_path = Path(file_path)
    with open(file_path, "w") as f:
        f.write(format_native_info(ninfo))
    return file_path
