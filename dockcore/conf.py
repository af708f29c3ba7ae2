"""Conformations of ligands and flexible residues, and changes applied to them."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Optional, Sequence

from dockcore.geometry import (
    ZERO_VEC,
    Vec,
    dot,
    mat_vec_product,
    normalized_angle,
    vec_add,
    vec_distance_sqr,
    vec_scale,
)
from dockcore.quaternion import (
    QT_IDENTITY,
    Quaternion,
    quaternion_difference,
    quaternion_increment,
    quaternion_to_angle,
    quaternion_to_r3,
    random_orientation,
)
from dockcore.randomness import Rng, random_fl, random_in_box, random_inside_sphere


@dataclass
class Scale:
    """Per-kind magnitudes for positions, orientations and torsions."""

    position: float
    orientation: float
    torsion: float


@dataclass
class ConfSize:
    """Number of torsions of each ligand and of each flexible residue."""

    ligands: list[int] = field(default_factory=list)
    flex: list[int] = field(default_factory=list)

    def num_degrees_of_freedom(self) -> int:
        return sum(self.ligands) + sum(self.flex) + 6 * len(self.ligands)


def torsions_set_to_null(torsions: list[float]) -> None:
    """Set every torsion in place to zero."""
    torsions[:] = [0.0] * len(torsions)


def torsions_increment(torsions: list[float], c: Sequence[float], factor: float) -> None:
    """Add ``factor * c`` to the torsions in place; results are normalized angles."""
    torsions[:] = [
        normalized_angle(t + normalized_angle(factor * dt))
        for t, dt in zip(torsions, c, strict=True)
    ]


def torsions_randomize(torsions: list[float], generator: Rng) -> None:
    """Replace every torsion in place with a uniform angle in [-pi, pi]."""
    torsions[:] = [random_fl(-math.pi, math.pi, generator) for _ in torsions]


def torsions_too_close(
    torsions1: Sequence[float], torsions2: Sequence[float], cutoff: float
) -> bool:
    """True if every pair of torsions differs by at most ``cutoff`` (modulo 2*pi)."""
    if len(torsions1) != len(torsions2):
        raise ValueError("torsion lists differ in length")
    return all(
        abs(normalized_angle(a - b)) <= cutoff for a, b in zip(torsions1, torsions2)
    )


def torsions_generate(
    torsions: list[float],
    spread: float,
    rp: float,
    rs: Optional[Sequence[float]],
    generator: Rng,
) -> None:
    """Perturb torsions in place, or copy them from ``rs`` with probability ``rp``."""
    if rs is not None and len(rs) != len(torsions):
        raise ValueError("reference torsions differ in length")
    for i in range(len(torsions)):
        if rs is not None and random_fl(0.0, 1.0, generator) < rp:
            torsions[i] = rs[i]
        else:
            torsions[i] += random_fl(-spread, spread, generator)


@dataclass
class RigidChange:
    """A change of position and of orientation (angle times axis)."""

    position: Vec = ZERO_VEC
    orientation: Vec = ZERO_VEC

    def values(self) -> list[float]:
        return [*self.position, *self.orientation]


@dataclass
class RigidConf:
    """Position and orientation of a rigid body."""

    position: Vec = ZERO_VEC
    orientation: Quaternion = QT_IDENTITY

    def set_to_null(self) -> None:
        self.position = ZERO_VEC
        self.orientation = QT_IDENTITY

    def increment(self, c: RigidChange, factor: float) -> None:
        self.position = vec_add(self.position, vec_scale(factor, c.position))
        self.orientation = quaternion_increment(
            self.orientation, vec_scale(factor, c.orientation)
        )

    def randomize(self, corner1: Vec, corner2: Vec, generator: Rng) -> None:
        self.position = random_in_box(corner1, corner2, generator)
        self.orientation = random_orientation(generator)

    def too_close(
        self, c: RigidConf, position_cutoff: float, orientation_cutoff: float
    ) -> bool:
        if vec_distance_sqr(self.position, c.position) > position_cutoff**2:
            return False
        difference = quaternion_difference(self.orientation, c.orientation)
        return dot(difference, difference) <= orientation_cutoff**2

    def mutate_position(self, spread: float, generator: Rng) -> None:
        self.position = vec_add(
            self.position, vec_scale(spread, random_inside_sphere(generator))
        )

    def mutate_orientation(self, spread: float, generator: Rng) -> None:
        rotation = vec_scale(spread, random_inside_sphere(generator))
        self.orientation = quaternion_increment(self.orientation, rotation)

    def generate(
        self,
        position_spread: float,
        orientation_spread: float,
        rp: float,
        rs: Optional[RigidConf],
        generator: Rng,
    ) -> None:
        if rs is not None and random_fl(0.0, 1.0, generator) < rp:
            self.position = rs.position
        else:
            self.mutate_position(position_spread, generator)
        if rs is not None and random_fl(0.0, 1.0, generator) < rp:
            self.orientation = rs.orientation
        else:
            self.mutate_orientation(orientation_spread, generator)

    def apply(self, coords: Sequence[Vec]) -> list[Vec]:
        """Rotate and then translate each of ``coords``."""
        m = quaternion_to_r3(self.orientation)
        return [vec_add(mat_vec_product(m, v), self.position) for v in coords]

    def values(self) -> list[float]:
        return [*self.position, *quaternion_to_angle(self.orientation)]


@dataclass
class LigandChange:
    rigid: RigidChange = field(default_factory=RigidChange)
    torsions: list[float] = field(default_factory=list)

    def values(self) -> list[float]:
        return [*self.rigid.values(), *self.torsions]


@dataclass
class LigandConf:
    rigid: RigidConf = field(default_factory=RigidConf)
    torsions: list[float] = field(default_factory=list)

    def set_to_null(self) -> None:
        self.rigid.set_to_null()
        torsions_set_to_null(self.torsions)

    def increment(self, c: LigandChange, factor: float) -> None:
        self.rigid.increment(c.rigid, factor)
        torsions_increment(self.torsions, c.torsions, factor)

    def randomize(self, corner1: Vec, corner2: Vec, generator: Rng) -> None:
        self.rigid.randomize(corner1, corner2, generator)
        torsions_randomize(self.torsions, generator)

    def values(self) -> list[float]:
        return [*self.rigid.values(), *self.torsions]


@dataclass
class ResidueChange:
    torsions: list[float] = field(default_factory=list)

    def values(self) -> list[float]:
        return list(self.torsions)


@dataclass
class ResidueConf:
    torsions: list[float] = field(default_factory=list)

    def set_to_null(self) -> None:
        torsions_set_to_null(self.torsions)

    def increment(self, c: ResidueChange, factor: float) -> None:
        torsions_increment(self.torsions, c.torsions, factor)

    def randomize(self, generator: Rng) -> None:
        torsions_randomize(self.torsions, generator)

    def values(self) -> list[float]:
        return list(self.torsions)


class Change:
    """A flat-indexable change to a :class:`Conf`, initially all zeros."""

    def __init__(self, size: ConfSize) -> None:
        self.ligands = [LigandChange(torsions=[0.0] * n) for n in size.ligands]
        self.flex = [ResidueChange(torsions=[0.0] * n) for n in size.flex]

    def _locate(self, index: int) -> tuple[object, str, int]:
        if index < 0:
            raise IndexError("change index out of range")
        for lig in self.ligands:
            if index < 3:
                return lig.rigid, "position", index
            index -= 3
            if index < 3:
                return lig.rigid, "orientation", index
            index -= 3
            if index < len(lig.torsions):
                return lig, "torsions", index
            index -= len(lig.torsions)
        for res in self.flex:
            if index < len(res.torsions):
                return res, "torsions", index
            index -= len(res.torsions)
        raise IndexError("change index out of range")

    def __getitem__(self, index: int) -> float:
        owner, attr, k = self._locate(index)
        return getattr(owner, attr)[k]

    def __setitem__(self, index: int, value: float) -> None:
        owner, attr, k = self._locate(index)
        seq = getattr(owner, attr)
        if isinstance(seq, list):
            seq[k] = value
        else:
            items = list(seq)
            items[k] = value
            setattr(owner, attr, tuple(items))

    def __len__(self) -> int:
        return sum(6 + len(lig.torsions) for lig in self.ligands) + sum(
            len(res.torsions) for res in self.flex
        )

    def values(self) -> list[float]:
        out: list[float] = []
        for lig in self.ligands:
            out.extend(lig.values())
        for res in self.flex:
            out.extend(res.values())
        return out

    def __repr__(self) -> str:
        return f"Change(ligands={self.ligands!r}, flex={self.flex!r})"


class Conf:
    """The conformation of all ligands and flexible residues."""

    def __init__(self, size: Optional[ConfSize] = None) -> None:
        if size is None:
            size = ConfSize()
        self.ligands = [LigandConf(torsions=[0.0] * n) for n in size.ligands]
        self.flex = [ResidueConf(torsions=[0.0] * n) for n in size.flex]

    def set_to_null(self) -> None:
        for lig in self.ligands:
            lig.set_to_null()
        for res in self.flex:
            res.set_to_null()

    def increment(self, c: Change, factor: float) -> None:
        """Apply ``factor * c``; torsions get normalized, orientations do not."""
        for lig, dlig in zip(self.ligands, c.ligands, strict=True):
            lig.increment(dlig, factor)
        for res, dres in zip(self.flex, c.flex, strict=True):
            res.increment(dres, factor)

    def internal_too_close(self, c: Conf, torsions_cutoff: float) -> bool:
        if len(self.ligands) != len(c.ligands):
            raise ValueError("conformations differ in number of ligands")
        return all(
            torsions_too_close(a.torsions, b.torsions, torsions_cutoff)
            for a, b in zip(self.ligands, c.ligands)
        )

    def external_too_close(self, c: Conf, cutoff: Scale) -> bool:
        if len(self.ligands) != len(c.ligands):
            raise ValueError("conformations differ in number of ligands")
        for a, b in zip(self.ligands, c.ligands):
            if not a.rigid.too_close(b.rigid, cutoff.position, cutoff.orientation):
                return False
        if len(self.flex) != len(c.flex):
            raise ValueError("conformations differ in number of flexible residues")
        return all(
            torsions_too_close(a.torsions, b.torsions, cutoff.torsion)
            for a, b in zip(self.flex, c.flex)
        )

    def too_close(self, c: Conf, cutoff: Scale) -> bool:
        return self.internal_too_close(c, cutoff.torsion) and self.external_too_close(
            c, cutoff
        )

    def generate_internal(
        self, torsion_spread: float, rp: float, rs: Optional[Conf], generator: Rng
    ) -> None:
        """Reset rigid parts and perturb ligand torsions; torsions are not normalized."""
        for i, lig in enumerate(self.ligands):
            lig.rigid.position = ZERO_VEC
            lig.rigid.orientation = QT_IDENTITY
            reference = rs.ligands[i].torsions if rs is not None else None
            torsions_generate(lig.torsions, torsion_spread, rp, reference, generator)

    def generate_external(
        self, spread: Scale, rp: float, rs: Optional[Conf], generator: Rng
    ) -> None:
        """Perturb rigid parts and residue torsions; torsions are not normalized."""
        for i, lig in enumerate(self.ligands):
            reference = rs.ligands[i].rigid if rs is not None else None
            lig.rigid.generate(
                spread.position, spread.orientation, rp, reference, generator
            )
        for i, res in enumerate(self.flex):
            reference_torsions = rs.flex[i].torsions if rs is not None else None
            torsions_generate(
                res.torsions, spread.torsion, rp, reference_torsions, generator
            )

    def randomize(self, corner1: Vec, corner2: Vec, generator: Rng) -> None:
        for lig in self.ligands:
            lig.randomize(corner1, corner2, generator)
        for res in self.flex:
            res.randomize(generator)

    def values(self) -> list[float]:
        out: list[float] = []
        for lig in self.ligands:
            out.extend(lig.values())
        for res in self.flex:
            out.extend(res.values())
        return out

    def __repr__(self) -> str:
        return f"Conf(ligands={self.ligands!r}, flex={self.flex!r})"


@dataclass
class OutputType:
    """A conformation with its energy and coordinates; ordered by energy."""

    c: Conf
    e: float
    coords: list[Vec] = field(default_factory=list)

    def __lt__(self, other: OutputType) -> bool:
        if not isinstance(other, OutputType):
            return NotImplemented
        return self.e < other.e