"""
Base file-handler abstraction for cafetools.

This module defines the abstract ``FileHandler`` class, which provides the
common interface and lifecycle used by all cafetools file handlers
(``NativeInfoHandler``, ``TimeSeriesHandler``).

The base class standardizes how CafeMol files are:

- loaded from disk
- parsed lazily into structured tabular data
- exposed via a uniform DataFrame-based API
- accompanied by lightweight metadata
"""


from __future__ import annotations
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any
import pandas as pd

class FileHandler(ABC):
    """
    Abstract base class for cafetools file handlers.

    Subclasses are responsible for parsing a specific CafeMol file format
    and exposing its contents as structured pandas DataFrames.

    Parsed Data
    -----------
    Main table
        A pandas.DataFrame returned by ``dataframe()``, whose columns
        depend on the specific file type.

    Metadata
        A dictionary of lightweight metadata returned by ``metadata()``,
        typically including record counts.

    Notes
    -----
    - Parsing is performed lazily and cached after the first access.
    - Subclasses must implement the private ``_parse()`` method.
    """

    def __init__(self, file_path: str | Path):
        self.path = Path(file_path)
        self._parsed = False
        self._df: pd.DataFrame | None = None
        self._meta: dict[str, Any] = {}

    # ---- public API
    def parse(self) -> None:
        """Parse the file once and cache the resulting DataFrame and metadata."""
        if not self._parsed:
            if not self.path.exists():
                raise FileNotFoundError(f"File not found: {self.path}")
            df, meta = self._parse()
            self._df = df
            self._meta = meta or {}
            self._parsed = True

    def dataframe(self) -> pd.DataFrame:
        """
            Return the parsed file contents as a pandas DataFrame.

            Returns
            -------
            pandas.DataFrame
                Structured table representing the parsed file contents.

            Examples
            --------
            >>> h = NativeInfoHandler("protein.ninfo")
            >>> df = h.dataframe()
            """
        if not self._parsed:
            self.parse()
        assert self._df is not None
        return self._df

    def metadata(self) -> dict[str, Any]:
        """Return a copy of the metadata extracted during parsing."""
        if not self._parsed:
            self.parse()
        return dict(self._meta)

    # ---- subclasses must implement
    @abstractmethod
    def _parse(self) -> tuple[pd.DataFrame, dict[str, Any]]:
        """Read+parse file and return (df, metadata)."""
        ...
