"""
Tests for NativeInfo loading and contact-block serialization.

These tests validate:
- blocks are dispatched to record kinds by their exact label
- unknown blocks and unparseable lines are skipped without error
- strict loading re-raises the first line error
- the contact block is written with the CafeMol header and round-trips
"""

from __future__ import annotations

import io
from pathlib import Path

import pytest

from cafetools.io.generators.native_info_generator import (
    contact_block_lines,
    format_native_info,
    write_native_info,
)
from cafetools.io.handlers.native_info_handler import NativeInfo
from cafetools.utils.exceptions import InconsistentUnitError, UnterminatedBlockError

from conftest import (
    AICGDIH_LINE,
    BOND_LINE,
    CONTACT_LINE,
    CONTACT_LINE_2,
)


def _load(text: str, **kwargs) -> NativeInfo:
    return NativeInfo.load(io.StringIO(text), **kwargs)


def test_load_dispatches_every_kind(ninfo_text: str):
    ninfo = _load(ninfo_text)
    assert ninfo.counts() == {
        "bonds": 1,
        "angles": 1,
        "dihedral_angles": 1,
        "contacts": 2,
        "aicg_angles": 1,
        "aicg_dihedral_angles": 1,
    }
    assert ninfo.bonds[0].to_line() == BOND_LINE
    assert [c.index for c in ninfo.contacts] == [1, 2]
    assert ninfo.records("aicg_dihedral_angle")[0].to_line() == AICGDIH_LINE


def test_plain_one_four_label_is_not_recognized():
    text = "<<<< 1-4 contacts with L_AICG2_PLUS\n" + AICGDIH_LINE + "\n>>>>\n"
    ninfo = _load(text)
    assert ninfo.aicg_dihedral_angles == []
    assert ninfo.is_empty()


def test_unknown_label_contributes_nothing():
    text = "<<<< native something else\n" + CONTACT_LINE + "\n>>>>\n"
    ninfo = _load(text)
    assert ninfo.is_empty()


def test_truncated_line_is_dropped():
    text = "\n".join([
        "<<<< native contact",
        CONTACT_LINE,
        CONTACT_LINE_2[:50],
        ">>>>",
    ])
    ninfo = _load(text)
    assert len(ninfo.contacts) == 1
    assert ninfo.contacts[0].to_line() == CONTACT_LINE


def test_inconsistent_unit_line_is_omitted():
    bad = CONTACT_LINE_2.replace("contact      2      1      1", "contact      2      1      2", 1)
    text = "\n".join(["<<<< native contact", bad, CONTACT_LINE, ">>>>"])
    ninfo = _load(text)
    assert [c.index for c in ninfo.contacts] == [1]


def test_strict_mode_raises_first_error():
    bad = CONTACT_LINE_2.replace("contact      2      1      1", "contact      2      1      2", 1)
    text = "\n".join(["<<<< native contact", CONTACT_LINE, bad, ">>>>"])
    with pytest.raises(InconsistentUnitError):
        _load(text, strict=True)


def test_unterminated_block_aborts_load():
    text = "<<<< native contact\n" + CONTACT_LINE + "\n"
    with pytest.raises(UnterminatedBlockError):
        _load(text)


def test_collections_are_mutable_lists(ninfo_text: str):
    ninfo = _load(ninfo_text)
    ninfo.contacts.reverse()
    assert [c.index for c in ninfo.contacts] == [2, 1]
    ninfo.contacts[:] = [c for c in ninfo.contacts if c.index == 1]
    assert len(ninfo.contacts) == 1


def test_empty_document_formats_to_nothing():
    ninfo = _load("** nothing here\n")
    assert ninfo.is_empty()
    assert all(n == 0 for n in ninfo.counts().values())
    assert format_native_info(ninfo) == ""
    assert str(ninfo) == ""


def test_contact_block_layout(ninfo_text: str):
    ninfo = _load(ninfo_text)
    assert contact_block_lines(ninfo.contacts) == [
        "<<<< native contact",
        "** total_contact =   2",
        "** definition_of_contact =       6.50 A",
        "** coef_go(kcal/mol) = factor_go * icon_dummy_mgo * cgo1210 * energy_unit_protein",
        "",
        "** contact between unit      1 and      1",
        "** total_contact_unit =   2",
        "**        icon iunit1-iunit2   imp1 - imp2 imp1un-imp2un      go_nat   factor_go  dummy     coef_go",
        CONTACT_LINE,
        CONTACT_LINE_2,
        ">>>>",
    ]
    assert format_native_info(ninfo).endswith(">>>>\n")


def test_written_contact_block_loads_back(tmp_path: Path, ninfo_text: str):
    ninfo = _load(ninfo_text)
    out = write_native_info(tmp_path / "contacts.ninfo", ninfo)
    reloaded = NativeInfo.from_file(out)
    assert reloaded.contacts == ninfo.contacts
    assert reloaded.bonds == []
    assert format_native_info(reloaded) == format_native_info(ninfo)
