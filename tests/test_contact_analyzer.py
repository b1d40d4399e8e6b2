"""
Tests for native-contact analysis over caller-supplied frames.
"""

from __future__ import annotations

import numpy as np
import pytest

from cafetools.analysis.composed.contact_analyzer import (
    contact_distances,
    contact_state_table,
    contact_states,
    qscore,
    qscore_series,
    radius_of_gyration,
    rg_series,
)
from cafetools.io.records import Contact, Particle, ParticleGroup
from cafetools.utils.exceptions import AnalysisError


def _contact(index: int, i: int, j: int, length: float) -> Contact:
    pair = ParticleGroup.of(Particle(1, i, i), Particle(1, j, j))
    return Contact(index=index, pair=pair, length=length, factor=1.0,
                   dummy=1, coefficient=0.3, ty="p-p")


@pytest.fixture
def contacts():
    # particles 1-2 native at 1.0, particles 1-3 native at 2.0
    return [_contact(2, 1, 3, 2.0), _contact(1, 1, 2, 1.0)]


@pytest.fixture
def coords():
    return np.array([[0.0, 0.0, 0.0], [1.1, 0.0, 0.0], [0.0, 3.0, 0.0]])


def test_distances(contacts, coords):
    assert contact_distances(contacts, coords) == pytest.approx([3.0, 1.1])


def test_states_use_tolerance(contacts, coords):
    # 1.1 <= 1.0 * 1.2 is formed, 3.0 > 2.0 * 1.2 is broken
    assert contact_states(contacts, coords).tolist() == [0, 1]
    assert contact_states(contacts, coords, tolerance=1.6).tolist() == [1, 1]


def test_qscore_counts_contacts_shorter_than_native(contacts, coords):
    assert qscore(contacts, coords) == 0.0
    shrunk = coords * 0.5
    assert qscore(contacts, shrunk) == pytest.approx(1.0)
    assert qscore([], coords) == 0.0


def test_radius_of_gyration():
    coords = np.array([[1.0, 0.0, 0.0], [-1.0, 0.0, 0.0]])
    assert radius_of_gyration(coords) == pytest.approx(1.0)
    assert radius_of_gyration(coords + 5.0) == pytest.approx(1.0)
    with pytest.raises(AnalysisError):
        radius_of_gyration(np.zeros((0, 3)))


def test_out_of_range_particle_raises(contacts):
    with pytest.raises(AnalysisError):
        contact_distances(contacts, np.zeros((2, 3)))


def test_state_table_orders_contacts_by_index(contacts, coords):
    frames = [
        {"step": 0, "time": 0.0, "coords": coords},
        {"step": 100, "time": 1.0, "coords": coords * 0.5},
    ]
    df = contact_state_table(contacts, frames)
    assert list(df.columns) == ["step", 1, 2]
    assert df.loc[0].tolist() == [0, 1, 0]
    assert df.loc[1].tolist() == [100, 1, 1]


def test_qscore_and_rg_series(contacts, coords):
    frames = [
        {"step": 0, "time": 0.0, "coords": coords},
        {"step": 100, "time": 1.0, "coords": coords * 0.5},
    ]
    q = qscore_series(contacts, frames)
    assert list(q.columns) == ["time", "qscore"]
    assert q["qscore"].tolist() == pytest.approx([0.0, 1.0])

    rg = rg_series(frames)
    assert list(rg.columns) == ["time", "rg"]
    assert rg["rg"].iloc[1] == pytest.approx(rg["rg"].iloc[0] * 0.5)
