"""
Tests for NativeInfoHandler and the native-info analyzers.

These tests validate:
- the contact table columns and record-count metadata
- per-kind tables and type-tag selection
- lazy, cached parsing and missing-file errors
- contact filtering by particle-index range and sorting
"""

from __future__ import annotations

from pathlib import Path

import pytest

from cafetools.analysis.per_file.native_info_analyzer import (
    filter_contacts_by_index,
    get_contact_table,
    get_record_table,
    sort_contacts,
)
from cafetools.io.handlers.native_info_handler import NativeInfo, NativeInfoHandler


def test_contact_table_columns(ninfo_file: Path):
    h = NativeInfoHandler(ninfo_file)
    df = h.dataframe()
    assert list(df.columns) == [
        "index",
        "unit_1", "index_1", "intra_index_1",
        "unit_2", "index_2", "intra_index_2",
        "length", "factor", "dummy", "coefficient", "ty",
    ]
    assert df["index_2"].tolist() == [63, 40]
    assert df["length"].tolist() == pytest.approx([6.2398, 5.1120])
    assert set(df["ty"]) == {"p-p"}


def test_metadata_counts(ninfo_file: Path):
    h = NativeInfoHandler(ninfo_file)
    meta = h.metadata()
    assert meta["n_contacts"] == 2
    assert meta["n_bonds"] == 1
    assert meta["n_aicg_dihedral_angles"] == 1
    assert h.n_records("angle") == 1


def test_metadata_is_a_copy(ninfo_file: Path):
    h = NativeInfoHandler(ninfo_file)
    h.metadata()["n_contacts"] = 99
    assert h.metadata()["n_contacts"] == 2


def test_table_for_other_kinds(ninfo_file: Path):
    h = NativeInfoHandler(ninfo_file)
    bonds = h.table("bond")
    assert list(bonds.columns[:7]) == [
        "index", "unit_1", "index_1", "intra_index_1", "unit_2", "index_2", "intra_index_2",
    ]
    assert bonds["ty"].tolist() == ["pp"]

    dih = h.table("aicg_dihedral_angle")
    assert "index_4" in dih.columns
    assert len(dih) == 1


def test_unknown_kind_raises(ninfo_file: Path):
    h = NativeInfoHandler(ninfo_file)
    with pytest.raises(ValueError):
        h.table("torsion")


def test_parse_is_lazy_and_cached(ninfo_file: Path, monkeypatch: pytest.MonkeyPatch):
    h = NativeInfoHandler(ninfo_file)
    assert h._parsed is False

    calls = {"n": 0}
    original = NativeInfo.from_file

    def counting(*args, **kwargs):
        calls["n"] += 1
        return original(*args, **kwargs)

    monkeypatch.setattr(NativeInfo, "from_file", staticmethod(counting))
    h.dataframe()
    h.metadata()
    h.native_info()
    assert calls["n"] == 1


def test_missing_file_raises(tmp_path: Path):
    h = NativeInfoHandler(tmp_path / "missing.ninfo")
    with pytest.raises(FileNotFoundError):
        h.dataframe()


def test_get_record_table_filters_by_ty(ninfo_file: Path):
    h = NativeInfoHandler(ninfo_file)
    assert len(get_record_table(h, "contact", ty="p-p")) == 2
    assert get_record_table(h, "contact", ty="s-s").empty
    assert len(get_contact_table(h)) == 2


def test_filter_contacts_by_index(ninfo_file: Path):
    ninfo = NativeInfoHandler(ninfo_file).native_info()

    kept = filter_contacts_by_index(ninfo, 1, 45)
    assert [c.index for c in kept.contacts] == [2]
    assert kept.bonds == []

    assert filter_contacts_by_index(ninfo, 114, 174).contacts == []
    assert len(filter_contacts_by_index(ninfo, 1, 100).contacts) == 2
    # the source document is left untouched
    assert len(ninfo.contacts) == 2


def test_filter_rejects_inverted_range(ninfo_file: Path):
    ninfo = NativeInfoHandler(ninfo_file).native_info()
    with pytest.raises(ValueError):
        filter_contacts_by_index(ninfo, 10, 1)


def test_sort_contacts(ninfo_file: Path):
    ninfo = NativeInfoHandler(ninfo_file).native_info()
    ninfo.contacts.reverse()
    sort_contacts(ninfo)
    assert [c.index for c in ninfo.contacts] == [1, 2]
