"""
CafeMol native-info (.ninfo) handler.

This module provides the ``NativeInfo`` document, which collects the six
record kinds of a native-info file, and ``NativeInfoHandler``, which exposes
a file's records as pandas tables.

Typical use cases include:

- reading native contacts for Q-score or contact-map analysis
- inspecting bond, angle and dihedral parameters of a Go-like model
- filtering a contact set and writing it back as a native-info block

Loading is deliberately lenient: lines inside a recognized block that cannot
be parsed are dropped and loading continues, so partial or foreign
native-info files still yield every record that could be read. Blocks with
unrecognized labels are ignored. Pass ``strict=True`` to re-raise the first
line error instead.
"""


from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterable, List, Sequence

import pandas as pd

from cafetools.io.base_handler import FileHandler
from cafetools.io.block_reader import Block, BlockReader
from cafetools.io.records import (
    LAYOUTS,
    LAYOUTS_BY_LABEL,
    AicgAngle,
    AicgDihedralAngle,
    Angle,
    Bond,
    Contact,
    DihedralAngle,
    Record,
    RecordLayout,
    layout_for,
    parse_record,
    record_columns,
    record_to_row,
)
from cafetools.utils.exceptions import LineParseError
from cafetools.utils.logging import get_logger

logger = get_logger(__name__)


@dataclass
class NativeInfo:
    """
    Parsed contents of a native-info file.

    Attributes
    ----------
    bonds, angles, dihedral_angles, contacts, aicg_angles, aicg_dihedral_angles : list
        Records of each kind in file order. The lists are plain mutable
        lists so callers may filter or sort them in place.
    """
    bonds: List[Bond] = field(default_factory=list)
    angles: List[Angle] = field(default_factory=list)
    dihedral_angles: List[DihedralAngle] = field(default_factory=list)
    contacts: List[Contact] = field(default_factory=list)
    aicg_angles: List[AicgAngle] = field(default_factory=list)
    aicg_dihedral_angles: List[AicgDihedralAngle] = field(default_factory=list)

    @classmethod
    def load(cls, stream: Iterable[str], strict: bool = False) -> "NativeInfo":
        """
        Build a document from a stream of native-info text.

        Parameters
        ----------
        stream : iterable of str
            Open text file or iterable of lines.
        strict : bool, optional
            If True, re-raise the first line that fails to parse instead of
            dropping it (default: False).

        Returns
        -------
        NativeInfo
            Document holding every record that could be parsed.

        Raises
        ------
        IOFailure
            If the stream cannot be read or ends inside a block.
        """
        ninfo = cls()
        for block in BlockReader(stream):
            layout = LAYOUTS_BY_LABEL.get(block.label)
            if layout is None:
                logger.debug("ignoring block %r (%d lines)", block.label, len(block.lines))
                continue
            records = convert_block(block, layout, strict=strict)
            getattr(ninfo, layout.collection).extend(records)
        return ninfo

    @classmethod
    def from_file(cls, file_path: str | Path, strict: bool = False) -> "NativeInfo":
        with open(file_path, "r") as fh:
            return cls.load(fh, strict=strict)

    def records(self, kind: str) -> List[Record]:
        """Return the collection holding records of ``kind`` (e.g. ``"contact"``)."""
        return getattr(self, layout_for(kind).collection)

    def counts(self) -> Dict[str, int]:
        return {l.collection: len(getattr(self, l.collection)) for l in LAYOUTS}

    def is_empty(self) -> bool:
        return not any(self.counts().values())

    def to_text(self) -> str:
        from cafetools.io.generators.native_info_generator import format_native_info
        return format_native_info(self)

    def __str__(self) -> str:
        return self.to_text()


def convert_block(block: Block, layout: RecordLayout, strict: bool = False) -> List[Record]:
    """Parse every line of ``block`` as ``layout``, dropping lines that fail."""
    records: List[Record] = []
    dropped = 0
    for line in block.lines:
        try:
            records.append(parse_record(line, layout))
        except LineParseError as exc:
            if strict:
                raise
            dropped += 1
            logger.debug("dropping line in %r: %s", block.label, exc)
    logger.debug(
        "block %r: %d %s record(s), %d dropped",
        block.label, len(records), layout.kind, dropped,
    )
    return records


def records_to_dataframe(records: Sequence[Record], layout: RecordLayout) -> pd.DataFrame:
    """Flatten ``records`` of one kind into a table (see ``record_columns``)."""
    rows = [record_to_row(r) for r in records]
    return pd.DataFrame(rows, columns=record_columns(layout))


class NativeInfoHandler(FileHandler):
    """
    Parser for CafeMol native-info files (``.ninfo``).

    Parsed Data
    -----------
    Summary table
        One row per native contact, returned by ``dataframe()``, with columns:
        ["index", "unit_1", "index_1", "intra_index_1",
         "unit_2", "index_2", "intra_index_2",
         "length", "factor", "dummy", "coefficient", "ty"]

    Per-kind tables
        Returned by ``table(kind)`` for any of
        ["bond", "angle", "dihedral_angle", "contact",
         "aicg_angle", "aicg_dihedral_angle"].

    Metadata
        Returned by ``metadata()``, containing:
        ["n_bonds", "n_angles", "n_dihedral_angles", "n_contacts",
         "n_aicg_angles", "n_aicg_dihedral_angles"]

    Notes
    -----
    - Unparseable record lines are skipped unless ``strict=True``.
    - The typed records are available through ``native_info()``.
    """

    def __init__(self, file_path: str | Path = "native.ninfo", strict: bool = False):
        super().__init__(file_path)
        self.strict = strict
        self._ninfo: NativeInfo | None = None

    def _parse(self) -> tuple[pd.DataFrame, dict[str, Any]]:
        ninfo = NativeInfo.from_file(self.path, strict=self.strict)
        self._ninfo = ninfo

        df = records_to_dataframe(ninfo.contacts, layout_for("contact"))
        meta: Dict[str, Any] = {f"n_{name}": n for name, n in ninfo.counts().items()}
        logger.info(
            "parsed %s: %s",
            self.path.name,
            ", ".join(f"{n} {name}" for name, n in ninfo.counts().items()),
        )
        return df, meta

    # ---- Accessors ----
    def native_info(self) -> NativeInfo:
        """Return the parsed ``NativeInfo`` document."""
        if not self._parsed:
            self.parse()
        assert self._ninfo is not None
        return self._ninfo

    def table(self, kind: str = "contact") -> pd.DataFrame:
        """
        Return the records of one kind as a DataFrame.

        Parameters
        ----------
        kind : str, optional
            Record kind name (default: ``"contact"``).

        Returns
        -------
        pandas.DataFrame
            One row per record; columns as described by ``record_columns``.

        Examples
        --------
        >>> h = NativeInfoHandler("protein.ninfo")
        >>> bonds = h.table("bond")
        """
        if kind == "contact":
            return self.dataframe()
        layout = layout_for(kind)
        return records_to_dataframe(self.native_info().records(kind), layout)

    def n_records(self, kind: str = "contact") -> int:
        return int(self.metadata().get(f"n_{layout_for(kind).collection}", 0))
