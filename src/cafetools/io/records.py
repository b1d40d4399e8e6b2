"""
CafeMol native-info record codecs.

This module defines the typed records stored in CafeMol native-info
(``.ninfo``) files and a single table-driven codec that converts each record
kind to and from its fixed-width text line.

Record kinds and their line keywords:

- ``Bond``               : ``bond``     (particle pair)
- ``Angle``              : ``angl``     (particle triple)
- ``DihedralAngle``      : ``dihd``     (particle quad)
- ``Contact``            : ``contact``  (particle pair)
- ``AicgAngle``          : ``aicg13``   (particle triple, 1-3 contact)
- ``AicgDihedralAngle``  : ``aicgdih``  (particle quad, 1-4 contact)

Every kind is described by a ``RecordLayout`` in ``LAYOUTS``; parsing and
formatting walk the same layout, so ``format_record(parse_record(line))``
reproduces ``line`` exactly for well-formed input.
"""


from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Dict, Iterator, Optional, Tuple, Type

from cafetools.io.line_cursor import LineCursor, format_float, format_int
from cafetools.utils.exceptions import InconsistentUnitError, LineParseError, OutOfBoundsError


@dataclass(frozen=True)
class Particle:
    """One atom/residue reference: unit, global index and index within the unit."""
    unit: int
    index: int
    intra_index: int


class Arity(IntEnum):
    PAIR = 2
    TRIPLE = 3
    QUAD = 4


# Which of the two unit columns each particle takes its unit from.
UNIT_SLOTS: Dict[Arity, Tuple[int, ...]] = {
    Arity.PAIR: (0, 1),
    Arity.TRIPLE: (0, 1, 1),
    Arity.QUAD: (0, 0, 1, 1),
}


@dataclass(frozen=True)
class ParticleGroup:
    """
    Fixed-arity ordered group of particles embedded in a record.

    Parameters
    ----------
    arity : Arity
        ``PAIR``, ``TRIPLE`` or ``QUAD``.
    particles : tuple of Particle
        Exactly ``arity`` particles, in file order.
    """
    arity: Arity
    particles: Tuple[Particle, ...]

    def __post_init__(self):
        if len(self.particles) != int(self.arity):
            raise ValueError(
                f"{self.arity.name} group needs {int(self.arity)} particles, "
                f"got {len(self.particles)}"
            )

    @classmethod
    def of(cls, *particles: Particle) -> "ParticleGroup":
        return cls(Arity(len(particles)), tuple(particles))

    def __iter__(self) -> Iterator[Particle]:
        return iter(self.particles)

    def __len__(self) -> int:
        return len(self.particles)

    def __getitem__(self, i: int) -> Particle:
        return self.particles[i]

    @property
    def units(self) -> Tuple[int, int]:
        """The two unit values as written in the unit columns."""
        slots = UNIT_SLOTS[self.arity]
        return self.particles[slots.index(0)].unit, self.particles[slots.index(1)].unit


def parse_group(cursor: LineCursor, arity: Arity) -> ParticleGroup:
    """
    Read ``unit unit idx... intra...`` from ``cursor``.

    The first unit column is read without a separator; the caller consumes
    the separator preceding the whole group.
    """
    first = cursor.parse_int()
    second = cursor.parse_int_with_space()
    if first != second:
        raise InconsistentUnitError(first, second, cursor.line)
    n = int(arity)
    indices = [cursor.parse_int_with_space() for _ in range(n)]
    intra_indices = [cursor.parse_int_with_space() for _ in range(n)]
    units = (first, second)
    particles = tuple(
        Particle(units[slot], index, intra)
        for slot, index, intra in zip(UNIT_SLOTS[arity], indices, intra_indices)
    )
    return ParticleGroup(arity, particles)


def format_group(group: ParticleGroup) -> str:
    columns = [format_int(u) for u in group.units]
    columns += [format_int(p.index) for p in group]
    columns += [format_int(p.intra_index) for p in group]
    return " ".join(columns)


# ----------------------------------------------------------------------
# Record kinds
# ----------------------------------------------------------------------
class Record:
    """Common behavior of all native-info records."""

    @classmethod
    def parse(cls, line: str) -> "Record":
        return parse_record(line, LAYOUTS_BY_CLASS[cls])

    def to_line(self) -> str:
        return format_record(self)

    def __str__(self) -> str:
        return self.to_line()

    @property
    def group(self) -> ParticleGroup:
        return getattr(self, LAYOUTS_BY_CLASS[type(self)].group_field)


@dataclass(frozen=True)
class Bond(Record):
    index: int
    pair: ParticleGroup
    length: float
    factor: float
    correct_mgo: float
    coefficient: float
    ty: str


@dataclass(frozen=True)
class Angle(Record):
    index: int
    triple: ParticleGroup
    angle: float
    factor: float
    correct_mgo: float
    coefficient: float
    ty: str


@dataclass(frozen=True)
class DihedralAngle(Record):
    index: int
    quad: ParticleGroup
    angle: float
    factor: float
    correct_mgo: float
    coefficient1: float
    coefficient3: float
    ty: str


@dataclass(frozen=True)
class Contact(Record):
    index: int
    pair: ParticleGroup
    length: float
    factor: float
    dummy: int
    coefficient: float
    ty: str


@dataclass(frozen=True)
class AicgAngle(Record):
    index: int
    triple: ParticleGroup
    value: float
    factor: float
    correct_mgo: float
    coefficient: float
    width: float
    ty: str


@dataclass(frozen=True)
class AicgDihedralAngle(Record):
    index: int
    quad: ParticleGroup
    value: float
    factor: float
    correct_mgo: float
    coefficient: float
    width: float
    ty: str


# ----------------------------------------------------------------------
# Layout table
# ----------------------------------------------------------------------
@dataclass(frozen=True)
class FieldSpec:
    """One column group of a record line: name, value kind, separator flag."""
    name: str
    kind: str  # "int" | "float" | "group"
    spaced: bool = True


@dataclass(frozen=True)
class RecordLayout:
    """
    Declarative description of one record kind's line format.

    Attributes
    ----------
    kind : str
        Canonical kind name (e.g. ``"contact"``).
    keyword : str
        Leading label keyword; its length is the label width.
    record_cls : type
        Dataclass built from the parsed values.
    arity : Arity
        Size of the embedded particle group.
    fields : tuple of FieldSpec
        Columns between the keyword and the type tag, in order.
    tag_width : int
        Maximum width of the trailing type tag (after its separator).
    block_label : str
        Label of the block holding this kind.
    collection : str
        ``NativeInfo`` attribute holding records of this kind.
    """
    kind: str
    keyword: str
    record_cls: Type[Record]
    arity: Arity
    fields: Tuple[FieldSpec, ...]
    tag_width: int
    block_label: str
    collection: str

    @property
    def group_field(self) -> str:
        return next(f.name for f in self.fields if f.kind == "group")

    @property
    def scalar_fields(self) -> Tuple[str, ...]:
        return tuple(f.name for f in self.fields if f.kind != "group" and f.name != "index")


def _spaced(*names_kinds: Tuple[str, str]) -> Tuple[FieldSpec, ...]:
    return tuple(FieldSpec(name, kind) for name, kind in names_kinds)


LAYOUTS: Tuple[RecordLayout, ...] = (
    RecordLayout(
        kind="bond", keyword="bond", record_cls=Bond, arity=Arity.PAIR,
        fields=_spaced(("index", "int"), ("pair", "group"), ("length", "float"),
                       ("factor", "float"), ("correct_mgo", "float"),
                       ("coefficient", "float")),
        tag_width=2, block_label="native bond length", collection="bonds",
    ),
    RecordLayout(
        kind="angle", keyword="angl", record_cls=Angle, arity=Arity.TRIPLE,
        fields=_spaced(("index", "int"), ("triple", "group"), ("angle", "float"),
                       ("factor", "float"), ("correct_mgo", "float"),
                       ("coefficient", "float")),
        tag_width=3, block_label="native bond angles", collection="angles",
    ),
    RecordLayout(
        kind="dihedral_angle", keyword="dihd", record_cls=DihedralAngle, arity=Arity.QUAD,
        fields=_spaced(("index", "int"), ("quad", "group"), ("angle", "float"),
                       ("factor", "float"), ("correct_mgo", "float"),
                       ("coefficient1", "float"), ("coefficient3", "float")),
        tag_width=4, block_label="native dihedral angles", collection="dihedral_angles",
    ),
    # Contact floats are packed without separator columns.
    RecordLayout(
        kind="contact", keyword="contact", record_cls=Contact, arity=Arity.PAIR,
        fields=(
            FieldSpec("index", "int"),
            FieldSpec("pair", "group"),
            FieldSpec("length", "float", spaced=False),
            FieldSpec("factor", "float", spaced=False),
            FieldSpec("dummy", "int"),
            FieldSpec("coefficient", "float", spaced=False),
        ),
        tag_width=3, block_label="native contact", collection="contacts",
    ),
    RecordLayout(
        kind="aicg_angle", keyword="aicg13", record_cls=AicgAngle, arity=Arity.TRIPLE,
        fields=_spaced(("index", "int"), ("triple", "group"), ("value", "float"),
                       ("factor", "float"), ("correct_mgo", "float"),
                       ("coefficient", "float"), ("width", "float")),
        tag_width=3, block_label="1-3 contacts with L_AICG2 or L_AICG2_PLUS",
        collection="aicg_angles",
    ),
    # The label keeps its leading "<<<< " as found in CafeMol output.
    RecordLayout(
        kind="aicg_dihedral_angle", keyword="aicgdih", record_cls=AicgDihedralAngle,
        arity=Arity.QUAD,
        fields=_spaced(("index", "int"), ("quad", "group"), ("value", "float"),
                       ("factor", "float"), ("correct_mgo", "float"),
                       ("coefficient", "float"), ("width", "float")),
        tag_width=4, block_label="<<<< 1-4 contacts with L_AICG2_PLUS",
        collection="aicg_dihedral_angles",
    ),
)

LAYOUTS_BY_CLASS: Dict[type, RecordLayout] = {l.record_cls: l for l in LAYOUTS}
LAYOUTS_BY_KIND: Dict[str, RecordLayout] = {l.kind: l for l in LAYOUTS}
LAYOUTS_BY_LABEL: Dict[str, RecordLayout] = {l.block_label: l for l in LAYOUTS}


def layout_for(kind: str) -> RecordLayout:
    """Return the layout registered under ``kind`` (e.g. ``"contact"``)."""
    try:
        return LAYOUTS_BY_KIND[kind]
    except KeyError:
        raise ValueError(
            f"unknown record kind {kind!r}; expected one of {sorted(LAYOUTS_BY_KIND)}"
        ) from None


# ----------------------------------------------------------------------
# Generic codec
# ----------------------------------------------------------------------
def parse_record(line: str, layout: RecordLayout) -> Record:
    """
    Parse one record line according to ``layout``.

    Parameters
    ----------
    line : str
        Record text without its line terminator.
    layout : RecordLayout
        Layout of the expected record kind.

    Returns
    -------
    Record
        Instance of ``layout.record_cls``.

    Raises
    ------
    OutOfBoundsError
        If the line is shorter than the layout requires.
    MalformedNumberError
        If a numeric column does not hold a valid literal.
    InconsistentUnitError
        If the two unit columns disagree.

    Examples
    --------
    >>> line = "contact      1      1      1      2     63      2     63      6.2398      1.0000      1      0.5986 p-p"
    >>> parse_record(line, layout_for("contact")).length
    6.2398
    """
    label_width = len(layout.keyword)
    if len(line) < label_width:
        raise OutOfBoundsError(0, label_width, len(line), line)

    cursor = LineCursor(line[label_width:])
    values: Dict[str, object] = {}
    try:
        for spec in layout.fields:
            if spec.spaced:
                cursor.take(1)
            if spec.kind == "int":
                values[spec.name] = cursor.parse_int()
            elif spec.kind == "float":
                values[spec.name] = cursor.parse_float()
            else:
                values[spec.name] = parse_group(cursor, layout.arity)
        values["ty"] = cursor.take_tail(layout.tag_width)
    except LineParseError as exc:
        exc.line = line
        raise
    return layout.record_cls(**values)


def format_record(record: Record, layout: Optional[RecordLayout] = None) -> str:
    """Format ``record`` back into its fixed-width line (no terminator)."""
    layout = layout or LAYOUTS_BY_CLASS[type(record)]
    parts = [layout.keyword]
    for spec in layout.fields:
        value = getattr(record, spec.name)
        if spec.kind == "int":
            text = format_int(value)
        elif spec.kind == "float":
            text = format_float(value)
        else:
            text = format_group(value)
        parts.append(" " + text if spec.spaced else text)
    parts.append(" " + record.ty)
    return "".join(parts)


def record_to_row(record: Record) -> Dict[str, object]:
    """Flatten a record into a dict suitable for a ``pandas.DataFrame`` row."""
    layout = LAYOUTS_BY_CLASS[type(record)]
    row: Dict[str, object] = {"index": record.index}
    for i, p in enumerate(record.group, start=1):
        row[f"unit_{i}"] = p.unit
        row[f"index_{i}"] = p.index
        row[f"intra_index_{i}"] = p.intra_index
    for name in layout.scalar_fields:
        row[name] = getattr(record, name)
    row["ty"] = record.ty
    return row


def record_columns(layout: RecordLayout) -> list[str]:
    columns = ["index"]
    for i in range(1, int(layout.arity) + 1):
        columns += [f"unit_{i}", f"index_{i}", f"intra_index_{i}"]
    columns += list(layout.scalar_fields)
    columns.append("ty")
    return columns
