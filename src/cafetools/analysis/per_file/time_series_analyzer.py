"""
Time-series (.ts) analysis utilities.

This module provides helper functions for extracting columns of a parsed
CafeMol time series via ``TimeSeriesHandler``.
"""


from __future__ import annotations
from typing import Optional
import pandas as pd

from cafetools.io.handlers.time_series_handler import COLUMNS, TimeSeriesHandler


def get_time_series_data(handler: TimeSeriesHandler, column: str,
                         unit: Optional[str] = None) -> pd.DataFrame:
    """Extract ``step`` and one quantity for the whole system or one unit.

    Works on
    --------
    TimeSeriesHandler — ``.ts``

    Parameters
    ----------
    handler : TimeSeriesHandler
        Parsed time-series handler.
    column : str
        Quantity to extract (e.g. ``"qscore"``, ``"radg"``).
    unit : str, optional
        Unit label; whole-system rows are used when None.

    Returns
    -------
    pandas.DataFrame
        Table with columns ``step`` and ``column``.

    Examples
    --------
    >>> h = TimeSeriesHandler("md.ts")
    >>> df = get_time_series_data(h, "qscore")
    """
    if column not in COLUMNS or column in ("unit", "step"):
        raise KeyError(f"Unknown time-series column {column!r}. Available: {COLUMNS[2:]}")
    df = handler.dataframe()
    df = df[df["unit"] == (unit or "")]
    return df[["step", column]].reset_index(drop=True)
