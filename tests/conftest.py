from __future__ import annotations

from pathlib import Path

import pytest

BOND_LINE = "bond      1      1      1      1      2      1      2       3.7629       1.0000       1.0000     110.4000 pp"
ANGLE_LINE = "angl      1      1      1      2      3      4      2      3      4     148.8728       1.0000       1.0000      20.0000 ppp"
DIHEDRAL_LINE = "dihd      1      1      1      2      3      4      5      2      3      4      5    -124.4044       1.0000       1.0000       1.0000       0.5000 pppp"
CONTACT_LINE = "contact      1      1      1      2     63      2     63      6.2398      1.0000      1      0.5986 p-p"
CONTACT_LINE_2 = "contact      2      1      1      3     40      3     40      5.1120      1.0000      1      0.3000 p-p"
AICG13_LINE = "aicg13      1      1      1      2      3      4      2      3      4       7.3690       1.0000       1.0000       1.1928       0.1500 ppp"
AICGDIH_LINE = "aicgdih      1      1      1      2      3      4      5      2      3      4      5    -124.4044       1.0000       1.0000       0.4350       0.1500 pppp"


def _ninfo_text() -> str:
    return "\n".join([
        "**********************************************",
        "** native info written by CafeMol",
        "",
        "<<<< native bond length",
        "** total_contact = 1",
        BOND_LINE,
        ">>>>",
        "",
        "<<<< native bond angles",
        ANGLE_LINE,
        ">>>>",
        "",
        "<<<< native dihedral angles",
        DIHEDRAL_LINE,
        ">>>>",
        "",
        "<<<< native contact",
        "** contact between unit      1 and      1",
        CONTACT_LINE,
        CONTACT_LINE_2,
        ">>>>",
        "",
        "<<<< 1-3 contacts with L_AICG2 or L_AICG2_PLUS",
        AICG13_LINE,
        ">>>>",
        "",
        "<<<< <<<< 1-4 contacts with L_AICG2_PLUS",
        AICGDIH_LINE,
        ">>>>",
        "",
    ])


@pytest.fixture
def ninfo_text() -> str:
    return _ninfo_text()


@pytest.fixture
def ninfo_file(tmp_path: Path) -> Path:
    p = tmp_path / "protein.ninfo"
    p.write_text(_ninfo_text(), encoding="utf-8")
    return p
