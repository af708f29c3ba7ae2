"""Reading atoms from PDB files."""

from __future__ import annotations

import math
from dataclasses import dataclass, field

from dockcore.errors import ParseError, PathLike, open_input
from dockcore.geometry import Vec, vec_distance_sqr

_MIN_ATOM_LINE_LENGTH = 66  # the B-factor occupies columns 61-66


@dataclass
class PdbAtom:
    """One ATOM or HETATM record."""

    id: int
    name: str
    residue_name: str
    residue_id: int
    coords: Vec
    b_factor: float
    element: str


@dataclass
class Pdb:
    """The atoms of a PDB file."""

    atoms: list[PdbAtom] = field(default_factory=list)

    def check(self, min_distance: float) -> list[tuple[PdbAtom, PdbAtom, float]]:
        """Report every pair of atoms closer than ``min_distance``.

        Each pair is printed and also returned with its distance.
        """
        limit = min_distance * min_distance
        close = []
        for i, a in enumerate(self.atoms):
            for b in self.atoms[i + 1 :]:
                d2 = vec_distance_sqr(a.coords, b.coords)
                if d2 < limit:
                    d = math.sqrt(d2)
                    print(
                        f"The distance between {a.id}:{a.name}:{a.element}"
                        f" and {b.id}:{b.name}:{b.element} is {d:g}"
                    )
                    close.append((a, b, d))
        return close


def _field(line: str, first: int, last: int) -> str:
    """Columns ``first`` to ``last`` (1-based, inclusive) without surrounding blanks."""
    return line[first - 1 : last].strip()


def _unsigned(text: str) -> int:
    value = int(text)
    if value < 0:
        raise ValueError(f"{text!r} is not an unsigned number")
    return value


def string_to_pdb_atom(line: str) -> PdbAtom:
    """Parse a fixed-column ATOM/HETATM record; raises ValueError if malformed."""
    if len(line) < _MIN_ATOM_LINE_LENGTH:
        raise ValueError("the line is too short")
    return PdbAtom(
        id=_unsigned(_field(line, 7, 11)),
        name=_field(line, 13, 16),
        residue_name=_field(line, 18, 20),
        residue_id=int(_field(line, 23, 26)),
        coords=(
            float(_field(line, 31, 38)),
            float(_field(line, 39, 46)),
            float(_field(line, 47, 54)),
        ),
        b_factor=float(_field(line, 61, 66)),
        element=_field(line, 77, 78),
    )


def parse_pdb(name: PathLike) -> Pdb:
    """Read the ATOM and HETATM records of a PDB file; other lines are ignored."""
    result = Pdb()
    with open_input(name) as stream:
        for count, raw in enumerate(stream, start=1):
            line = raw.rstrip("\n")
            if line.startswith(("ATOM  ", "HETATM")):
                try:
                    result.atoms.append(string_to_pdb_atom(line))
                except ValueError as exc:
                    raise ParseError(name, count, "ATOM syntax incorrect") from exc
    return result