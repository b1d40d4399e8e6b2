"""
Native-contact analysis over trajectory frames.

This module evaluates native contacts of a ``NativeInfo`` document against
particle coordinates. Frames are supplied by the caller as mappings with
keys ``step``, ``time`` and ``coords`` (an ``(N, 3)`` array); particle index
``i`` of a record refers to row ``i - 1``.

Typical use cases include:

- per-contact formed/broken states along a trajectory
- fraction of native contacts (Q-score) versus time
- radius of gyration versus time
"""


from __future__ import annotations
from typing import Any, Iterable, Mapping, Sequence
import numpy as np
import pandas as pd

from cafetools.io.records import Contact
from cafetools.utils.constants import CONSTANTS
from cafetools.utils.exceptions import AnalysisError


def _pair_rows(contacts: Sequence[Contact], n_particles: int) -> tuple[np.ndarray, np.ndarray]:
    i = np.array([c.pair[0].index - 1 for c in contacts], dtype=int)
    j = np.array([c.pair[1].index - 1 for c in contacts], dtype=int)
    bad = (i < 0) | (j < 0) | (i >= n_particles) | (j >= n_particles)
    if bad.any():
        c = contacts[int(np.argmax(bad))]
        raise AnalysisError(
            f"contact {c.index} refers to a particle outside 1..{n_particles}"
        )
    return i, j


def contact_distances(contacts: Sequence[Contact], coords: np.ndarray) -> np.ndarray:
    """Return the distance of every contact pair in ``coords``."""
    coords = np.asarray(coords, dtype=float)
    if not contacts:
        return np.zeros(0)
    i, j = _pair_rows(contacts, len(coords))
    return np.linalg.norm(coords[i] - coords[j], axis=1)


def contact_states(contacts: Sequence[Contact], coords: np.ndarray,
                   tolerance: float = CONSTANTS["contact_tolerance"]) -> np.ndarray:
    """Return 1 for every contact within ``tolerance`` times its native length, else 0."""
    lengths = np.array([c.length for c in contacts], dtype=float)
    return (contact_distances(contacts, coords) <= lengths * tolerance).astype(int)


def qscore(contacts: Sequence[Contact], coords: np.ndarray) -> float:
    """Return the fraction of contacts shorter than their native length."""
    if not contacts:
        return 0.0
    lengths = np.array([c.length for c in contacts], dtype=float)
    return float(np.mean(contact_distances(contacts, coords) < lengths))


def radius_of_gyration(coords: np.ndarray) -> float:
    """Return the radius of gyration of ``coords`` (unit masses)."""
    coords = np.asarray(coords, dtype=float)
    if coords.size == 0:
        raise AnalysisError("cannot compute radius of gyration of zero particles")
    centered = coords - coords.mean(axis=0)
    return float(np.sqrt((centered ** 2).sum(axis=1).mean()))


def contact_state_table(contacts: Sequence[Contact],
                        frames: Iterable[Mapping[str, Any]]) -> pd.DataFrame:
    """
    Tabulate contact states along ``frames``.

    Returns
    -------
    pandas.DataFrame
        Column ``step`` followed by one 0/1 column per contact, named by the
        contact's record index, in increasing index order.
    """
    ordered = sorted(contacts, key=lambda c: c.index)
    columns = ["step"] + [c.index for c in ordered]
    rows = [
        [int(f["step"])] + contact_states(ordered, f["coords"]).tolist()
        for f in frames
    ]
    return pd.DataFrame(rows, columns=columns)


def qscore_series(contacts: Sequence[Contact],
                  frames: Iterable[Mapping[str, Any]]) -> pd.DataFrame:
    """Return a ``time, qscore`` table for ``frames``."""
    rows = [(f["time"], qscore(contacts, f["coords"])) for f in frames]
    return pd.DataFrame(rows, columns=["time", "qscore"])


def rg_series(frames: Iterable[Mapping[str, Any]]) -> pd.DataFrame:
    """Return a ``time, rg`` table for ``frames``."""
    rows = [(f["time"], radius_of_gyration(f["coords"])) for f in frames]
    return pd.DataFrame(rows, columns=["time", "rg"])
