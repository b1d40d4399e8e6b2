"""
CafeMol time-series (.ts) generators.

This module rewrites parsed time series into other text forms:

- ``write_time_series_csv`` converts whole-system rows to CSV
- ``concatenate_time_series`` joins several ``.ts`` files (e.g. restarted
  runs) into one stream, keeping only the first file's header
"""


from __future__ import annotations

from pathlib import Path
from typing import IO, Sequence, Union

import pandas as pd

from cafetools.io.handlers.time_series_handler import TimeSeriesHandler
from cafetools.utils.constants import CONSTANTS

__all__ = [
    "CSV_COLUMNS",
    "time_series_to_csv_frame",
    "write_time_series_csv",
    "concatenate_time_series",
]

CSV_COLUMNS = ["step", "tempk", "radg", "etot", "velet", "qscore", "rmsd"]

# decimals written per CSV column
_CSV_DECIMALS = {"tempk": 2, "radg": 2, "etot": 2, "velet": 2, "qscore": 3, "rmsd": 2}


def time_series_to_csv_frame(handler: TimeSeriesHandler) -> pd.DataFrame:
    """
    Return the whole-system rows as a table of preformatted strings.

    Unit rows are dropped; floats are rounded to the decimals used by the
    ``.ts`` format itself.
    """
    df = handler.system_rows()[CSV_COLUMNS].copy()
    for col, decimals in _CSV_DECIMALS.items():
        df[col] = df[col].map(lambda v, d=decimals: f"{v:.{d}f}")
    df["step"] = df["step"].astype(int)
    return df


def write_time_series_csv(
    handler: TimeSeriesHandler,
    file_path: Union[str, Path],
) -> Path:
    """
    Write whole-system rows of a time series as CSV.

    Parameters
    ----------
    handler : TimeSeriesHandler
        Handler of the input ``.ts`` file.
    file_path : str | Path
        Output CSV path.

    Returns
    -------
    Path
        The written CSV path.

    Examples
    ---
    >>> write_time_series_csv(TimeSeriesHandler("md.ts"), "md.csv")
    PosixPath('md.csv')
    """
    file_path = Path(file_path)
    time_series_to_csv_frame(handler).to_csv(file_path, index=False)
    return file_path


def concatenate_time_series(
    paths: Sequence[Union[str, Path]],
    out: IO[str],
    header_lines: int = CONSTANTS["time_series_header_lines"],
) -> int:
    """
    Copy ``paths`` to ``out``, skipping the header of every file but the first.

    Returns
    -------
    int
        Number of lines written.
    """
    written = 0
    for i, path in enumerate(paths):
        with open(path, "r") as fh:
            for lineno, line in enumerate(fh, start=1):
                if i > 0 and lineno <= header_lines:
                    continue
                out.write(line if line.endswith("\n") else line + "\n")
                written += 1
    return written
