"""
CafeMol time-series (.ts) handler.

This module provides a handler for parsing CafeMol ``.ts`` files, which
report per-step thermodynamic and structural quantities (temperature,
radius of gyration, energies, Q-score, RMSD) for the whole system and for
each unit.

Typical use cases include:

- tracking Q-score or radius of gyration versus step
- converting a time series to CSV
- concatenating restarted runs
"""


from __future__ import annotations

from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any, Dict, List

import pandas as pd

from cafetools.io.base_handler import FileHandler
from cafetools.io.line_cursor import LineCursor, to_float, to_int
from cafetools.utils.constants import CONSTANTS
from cafetools.utils.exceptions import LineParseError
from cafetools.utils.logging import get_logger

logger = get_logger(__name__)

COLUMNS = ["unit", "step", "tempk", "radg", "etot", "velet", "qscore", "rmsd"]

# (name, width, decimals) of the float columns following ``step``
_FLOAT_COLUMNS = (
    ("tempk", 8, 2),
    ("radg", 8, 2),
    ("etot", 10, 2),
    ("velet", 10, 2),
    ("qscore", 6, 3),
    ("rmsd", 8, 2),
)


@dataclass(frozen=True)
class SnapShot:
    """One line of a time series: the state of one unit (or all) at one step."""
    unit: str
    step: int
    tempk: float
    radg: float
    etot: float
    velet: float
    qscore: float
    rmsd: float

    @classmethod
    def parse(cls, line: str) -> "SnapShot":
        """
        Parse one fixed-width time-series line.

        Examples
        --------
        >>> s = SnapShot.parse("               0   360.00   366.38      33.93     377.23  0.000   732.77")
        >>> s.step, s.radg
        (0, 366.38)
        """
        cursor = LineCursor(line)
        try:
            values: Dict[str, Any] = {
                "unit": cursor.take(6),
                "step": to_int(cursor.take(10)),
            }
            for name, width, _ in _FLOAT_COLUMNS:
                values[name] = to_float(cursor.take_with_leading_space(width))
        except LineParseError as exc:
            exc.line = line
            raise
        return cls(**values)

    def to_line(self) -> str:
        text = f"{self.unit:<5} {self.step:10d}"
        for name, width, decimals in _FLOAT_COLUMNS:
            text += f" {getattr(self, name):{width}.{decimals}f}"
        return text

    def __str__(self) -> str:
        return self.to_line()


class TimeSeriesHandler(FileHandler):
    """
    Parser for CafeMol time-series files (``.ts``).

    Parsed Data
    -----------
    Summary table
        One row per data line, returned by ``dataframe()``, with columns:
        ["unit", "step", "tempk", "radg", "etot", "velet", "qscore", "rmsd"]

        ``unit`` is an empty string for whole-system rows.

    Metadata
        Returned by ``metadata()``, containing:
        ["n_records", "n_steps", "units"]

    Notes
    -----
    - The leading header lines (9 by default) are skipped.
    - A data line that cannot be parsed raises ``LineParseError`` naming the
      file and line number.
    """

    def __init__(self, file_path: str | Path = "md.ts",
                 header_lines: int = CONSTANTS["time_series_header_lines"]):
        super().__init__(file_path)
        self.header_lines = header_lines

    def _parse(self) -> tuple[pd.DataFrame, dict[str, Any]]:
        rows: List[Dict[str, Any]] = []
        with open(self.path, "r") as fh:
            for lineno, raw in enumerate(fh, start=1):
                if lineno <= self.header_lines:
                    continue
                line = raw.rstrip("\r\n")
                if not line.strip():
                    continue
                try:
                    snap = SnapShot.parse(line)
                except LineParseError as exc:
                    raise LineParseError(
                        f"{self.path.name}:{lineno}: {exc}", line
                    ) from exc
                rows.append(asdict(snap))

        df = pd.DataFrame(rows, columns=COLUMNS)
        units = sorted(u for u in df["unit"].unique() if u) if not df.empty else []
        meta: Dict[str, Any] = {
            "n_records": int(len(df)),
            "n_steps": int(df["step"].nunique()) if not df.empty else 0,
            "units": units,
        }
        logger.info("parsed %s: %d records", self.path.name, meta["n_records"])
        return df, meta

    # ---- Accessors ----
    def system_rows(self) -> pd.DataFrame:
        """Return only whole-system rows (empty ``unit``)."""
        df = self.dataframe()
        return df[df["unit"] == ""].reset_index(drop=True)

    def snapshots(self) -> List[SnapShot]:
        return [SnapShot(**row) for row in self.dataframe().to_dict("records")]
