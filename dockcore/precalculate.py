"""Tabulated pairwise scoring functions with linear interpolation."""

from __future__ import annotations

import math
import sys
from abc import ABC, abstractmethod
from typing import Sequence

from dockcore.geometry import EPSILON
from dockcore.matrix import TriangularMatrix

MAX_FL = sys.float_info.max
_LAST_SAMPLE_TOLERANCE = 1e-9


class ScoringFunction(ABC):
    """A pairwise function of two atom types and their distance."""

    @abstractmethod
    def cutoff(self) -> float:
        """Distance beyond which the function is not evaluated."""

    @abstractmethod
    def num_atom_types(self) -> int:
        """Number of atom types in the typing scheme used."""

    @abstractmethod
    def eval(self, t1: int, t2: int, r: float) -> float:
        """Value for atom types ``t1`` and ``t2`` at distance ``r``."""


class PrecalculateElement:
    """Samples of one type pair's function on a grid uniform in squared distance."""

    def __init__(self, n: int, factor: float) -> None:
        self.fast: list[float] = [0.0] * n
        self.smooth: list[tuple[float, float]] = [(0.0, 0.0)] * n  # (e, dor)
        self.factor = factor

    def eval_fast(self, r2: float) -> float:
        """Piecewise-constant value at squared distance ``r2``."""
        i = int(self.factor * r2)
        if not 0 <= i < len(self.fast):
            raise IndexError("squared distance outside the tabulated range")
        return self.fast[i]

    def eval_deriv(self, r2: float) -> tuple[float, float]:
        """Interpolated (value, derivative divided by r) at squared distance ``r2``."""
        r2_factored = self.factor * r2
        i1 = int(r2_factored)
        i2 = i1 + 1
        rem = r2_factored - i1
        n = len(self.smooth)
        if i1 < 0 or i1 >= n:
            raise IndexError("squared distance outside the tabulated range")
        if i2 >= n:
            if rem < _LAST_SAMPLE_TOLERANCE:
                return self.smooth[i1]
            raise IndexError("squared distance outside the tabulated range")
        e1, d1 = self.smooth[i1]
        e2, d2 = self.smooth[i2]
        return e1 + rem * (e2 - e1), d1 + rem * (d2 - d1)

    def init_from_smooth_fst(self, rs: Sequence[float]) -> None:
        """Compute derivatives and fast values from the sampled energies."""
        n = len(self.smooth)
        if len(rs) != n or len(self.fast) != n:
            raise ValueError("sample radii and tables must have the same length")
        energies = [e for e, _ in self.smooth]
        dors = [0.0] * n
        for i in range(1, n - 1):
            delta = rs[i + 1] - rs[i - 1]
            dors[i] = (energies[i + 1] - energies[i - 1]) / (delta * rs[i])
        self.smooth = list(zip(energies, dors))
        following = energies[1:] + [0.0]
        self.fast = [(f1 + f2) / 2 for f1, f2 in zip(energies, following)]

    def min_smooth_fst(self) -> int:
        """Index of the lowest energy sample; the highest such index on ties, 0 if empty."""
        if not self.smooth:
            return 0
        return min(reversed(range(len(self.smooth))), key=lambda i: self.smooth[i][0])

    def widen_smooth_fst(self, rs: Sequence[float], left: float, right: float) -> None:
        """Flatten the energy well by ``left`` and ``right`` around its minimum."""
        min_index = self.min_smooth_fst()
        if min_index >= len(rs):
            raise ValueError("no samples to widen")
        if len(rs) != len(self.smooth):
            raise ValueError("sample radii and tables must have the same length")
        optimal_r = rs[min_index]
        r_max = rs[-1]
        energies = []
        for r in rs:
            if r < optimal_r - left:
                r += left
            elif r > optimal_r + right:
                r -= right
            else:
                r = optimal_r
            r = min(max(r, 0.0), r_max)
            energies.append(self.eval_deriv(r * r)[0])
        self.smooth = [(e, dor) for e, (_, dor) in zip(energies, self.smooth)]

    def widen(self, rs: Sequence[float], left: float, right: float) -> None:
        self.widen_smooth_fst(rs, left, right)
        self.init_from_smooth_fst(rs)


class Precalculate:
    """Tables of a scoring function for every pair of atom types."""

    def __init__(
        self, sf: ScoringFunction, v: float = MAX_FL, factor: float = 32.0
    ) -> None:
        if not factor > EPSILON:
            raise ValueError("factor must be positive")
        self.cutoff_sqr = sf.cutoff() ** 2
        self.factor = factor
        self.n = int(factor * self.cutoff_sqr) + 3
        self.data: TriangularMatrix = TriangularMatrix(
            sf.num_atom_types(), PrecalculateElement(self.n, factor)
        )
        rs = self._calculate_rs()
        for t1 in range(self.data.dim):
            for t2 in range(t1, self.data.dim):
                element = self.data[t1, t2]
                element.smooth = [(min(v, sf.eval(t1, t2, r)), 0.0) for r in rs]
                element.init_from_smooth_fst(rs)

    def _calculate_rs(self) -> list[float]:
        return [math.sqrt(i / self.factor) for i in range(self.n)]

    def _check_r2(self, r2: float) -> None:
        if r2 > self.cutoff_sqr:
            raise ValueError("squared distance exceeds the squared cutoff")

    def eval_fast(self, type_pair_index: int, r2: float) -> float:
        self._check_r2(r2)
        return self.data[type_pair_index].eval_fast(r2)

    def eval_deriv(self, type_pair_index: int, r2: float) -> tuple[float, float]:
        self._check_r2(r2)
        return self.data[type_pair_index].eval_deriv(r2)

    def index_permissive(self, t1: int, t2: int) -> int:
        return self.data.index_permissive(t1, t2)

    def widen(self, left: float, right: float) -> None:
        """Widen the energy wells of every type pair."""
        rs = self._calculate_rs()
        for t1 in range(self.data.dim):
            for t2 in range(t1, self.data.dim):
                self.data[t1, t2].widen(rs, left, right)