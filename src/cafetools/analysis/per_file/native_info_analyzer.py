"""
Native-info analysis utilities.

This module provides helper functions for selecting and tabulating records
of a parsed CafeMol native-info file, via ``NativeInfoHandler`` or a
``NativeInfo`` document.

Typical use cases include:

- restricting native contacts to a residue range (e.g. one domain)
- sorting contacts by their record index before per-contact analysis
- extracting a record table for export or plotting
"""


from __future__ import annotations
from typing import Optional
import pandas as pd

from cafetools.io.handlers.native_info_handler import NativeInfo, NativeInfoHandler


def filter_contacts_by_index(ninfo: NativeInfo, lower: int, upper: int) -> NativeInfo:
    """Return a document holding only contacts with both particles in ``[lower, upper]``.

    Works on
    --------
    NativeInfo — ``.ninfo``

    Parameters
    ----------
    ninfo : NativeInfo
        Source document (left unchanged).
    lower, upper : int
        Inclusive bounds on the global particle index.

    Returns
    -------
    NativeInfo
        New document whose only non-empty collection is ``contacts``.

    Examples
    --------
    >>> domain = filter_contacts_by_index(ninfo, 114, 174)
    >>> print(domain)
    """
    if lower > upper:
        raise ValueError(f"lower bound {lower} is greater than upper bound {upper}")
    contacts = [
        c for c in ninfo.contacts
        if all(lower <= p.index <= upper for p in c.pair)
    ]
    return NativeInfo(contacts=contacts)


def sort_contacts(ninfo: NativeInfo) -> None:
    """Sort ``ninfo.contacts`` in place by record index."""
    ninfo.contacts.sort(key=lambda c: c.index)


def get_record_table(handler: NativeInfoHandler, kind: str = "contact",
                     ty: Optional[str] = None) -> pd.DataFrame:
    """Extract the table of one record kind, optionally restricted to one type tag.

    Works on
    --------
    NativeInfoHandler — ``.ninfo``

    Parameters
    ----------
    handler : NativeInfoHandler
        Parsed native-info handler.
    kind : str, optional
        Record kind (default: ``"contact"``).
    ty : str, optional
        Keep only rows whose type tag equals ``ty``.

    Returns
    -------
    pandas.DataFrame
        Record table with the columns described by ``record_columns``.

    Examples
    --------
    >>> h = NativeInfoHandler("protein.ninfo")
    >>> df = get_record_table(h, "dihedral_angle", ty="pppp")
    """
    df = handler.table(kind)
    if ty is not None:
        df = df[df["ty"] == ty].reset_index(drop=True)
    return df.copy()


def get_contact_table(handler: NativeInfoHandler) -> pd.DataFrame:
    return get_record_table(handler, "contact")
