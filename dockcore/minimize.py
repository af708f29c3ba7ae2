"""Local optimizers: steepest descent and the quasi-Newton method."""

from __future__ import annotations

import copy
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Optional

from dockcore.bfgs import bfgs
from dockcore.conf import Change, Conf, OutputType
from dockcore.geometry import Vec
from dockcore.visited import Visited


class GridLike(ABC):
    """Interface of precomputed interaction grids."""

    @abstractmethod
    def eval(self, m: Any, v: float) -> float:
        """Energy of the model's current coordinates."""

    @abstractmethod
    def eval_deriv(self, m: Any, v: float) -> float:
        """Energy of the model's current coordinates, also setting its forces."""


class ModelLike(ABC):
    """What the optimizers need from a molecular model."""

    tried: Optional[Visited] = None

    @abstractmethod
    def eval_deriv(self, p: Any, ig: Any, v: Vec, c: Conf, g: Change) -> float:
        """Energy of conformation ``c``; writes the gradient into ``g``."""

    @abstractmethod
    def get_heavy_atom_movable_coords(self) -> list[Vec]:
        """Coordinates of the movable heavy atoms from the last evaluation."""


def _assign_change(dst: Change, src: Change) -> None:
    dst.ligands = src.ligands
    dst.flex = src.flex


@dataclass
class Ssd:
    """Steepest descent with an adaptive step factor."""

    evals: int = 300
    initial_factor: float = 1e-4
    min_factor: float = 1e-6
    up: float = 1.6
    down: float = 0.5

    def __str__(self) -> str:
        return (
            f"evals={self.evals}, initial_factor={self.initial_factor}, "
            f"min_factor={self.min_factor}, up={self.up}, down={self.down}"
        )

    def __call__(
        self, m: ModelLike, p: Any, ig: Any, out: OutputType, g: Change, v: Vec
    ) -> None:
        """Improve ``out`` in place; ``g`` ends holding the gradient at ``out.c``."""
        out.e = m.eval_deriv(p, ig, v, out.c, g)
        factor = self.initial_factor
        for _ in range(self.evals):
            if factor < self.min_factor:
                break
            candidate_c = copy.deepcopy(out.c)
            candidate_c.increment(g, -factor)
            candidate_g = copy.deepcopy(g)
            candidate_e = m.eval_deriv(p, ig, v, candidate_c, candidate_g)
            if candidate_e <= out.e:
                out.c = candidate_c
                out.e = candidate_e
                _assign_change(g, candidate_g)
                factor *= self.up
            else:
                factor *= self.down
        out.coords = m.get_heavy_atom_movable_coords()


@dataclass
class QuasiNewton:
    """BFGS local optimization of a conformation."""

    max_steps: int = 1000
    average_required_improvement: float = 0.0

    def __call__(
        self, m: ModelLike, p: Any, ig: Any, out: OutputType, g: Change, v: Vec
    ) -> None:
        """Minimize ``out`` in place; ``g`` ends holding the final gradient."""

        def objective(c: Conf, gradient: Change) -> float:
            return m.eval_deriv(p, ig, v, c, gradient)

        value, c, gradient = bfgs(
            objective,
            out.c,
            g,
            self.max_steps,
            self.average_required_improvement,
            10,
            getattr(m, "tried", None),
        )
        out.c = c
        out.e = value
        _assign_change(g, gradient)