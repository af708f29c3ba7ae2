"""Quasi-Newton (BFGS) minimization over conformations."""

from __future__ import annotations

import copy
import math
from itertools import islice
from typing import Any, Callable, Optional, Sequence

from dockcore.geometry import EPSILON
from dockcore.matrix import TriangularMatrix

_LINE_SEARCH_C0 = 0.0001
_LINE_SEARCH_MAX_TRIALS = 10
_LINE_SEARCH_MULTIPLIER = 0.5
_GRADIENT_TOLERANCE = 1e-5


def _values(v: Any) -> list[float]:
    """The flat list of floats held by a change, a conformation or a sequence."""
    values = getattr(v, "values", None)
    if callable(values):
        return list(values())
    return list(v)


def _with_values(template: Any, values: Sequence[float]) -> Any:
    """A copy of ``template`` whose flat entries are replaced by ``values``."""
    result = copy.deepcopy(template)
    for i, value in enumerate(values):
        result[i] = value
    return result


def minus_mat_vec_product(h: TriangularMatrix, vector: Any) -> list[float]:
    """Return ``-H v`` for the symmetric matrix stored in ``h``."""
    vals = _values(vector)
    n = h.dim
    return [
        -sum(h[h.index_permissive(i, j)] * vals[j] for j in range(n))
        for i in range(n)
    ]


def scalar_product(a: Any, b: Any, n: int) -> float:
    """Dot product of the first ``n`` entries of ``a`` and ``b``."""
    return sum(x * y for x, y in islice(zip(_values(a), _values(b)), n))


def bfgs_update(h: TriangularMatrix, p: Any, y: Any, alpha: float) -> bool:
    """Update the inverse Hessian estimate ``h`` in place; False if skipped."""
    yp = scalar_product(y, p, h.dim)
    if alpha * yp < EPSILON:
        return False
    minus_hy = minus_mat_vec_product(h, y)
    yhy = -scalar_product(y, minus_hy, h.dim)
    r = 1 / (alpha * yp)
    pv = _values(p)
    n = len(pv)
    ss_coefficient = alpha * alpha * (r * r * yhy + r)
    for i in range(n):
        for j in range(i, n):
            h[i, j] += (
                alpha * r * (minus_hy[i] * pv[j] + minus_hy[j] * pv[i])
                + ss_coefficient * pv[i] * pv[j]
            )
    return True


def line_search(
    f: Callable[[Any, Any], float], n: int, x: Any, g: Any, f0: float, p: Any
) -> tuple[float, Any, Any, float]:
    """Backtracking search along ``p``.

    Returns ``(alpha, x_new, g_new, f1)``. As in the classic scheme, if no
    trial is accepted the returned ``alpha`` is half of the last one tried.
    """
    alpha = 1.0
    pg = scalar_product(p, g, n)
    x_new = x
    g_new = g
    f1 = f0
    for _ in range(_LINE_SEARCH_MAX_TRIALS):
        x_new = copy.deepcopy(x)
        x_new.increment(p, alpha)
        g_new = copy.deepcopy(g)
        f1 = f(x_new, g_new)
        if f1 - f0 < _LINE_SEARCH_C0 * alpha * pg:
            break
        alpha *= _LINE_SEARCH_MULTIPLIER
    return alpha, x_new, g_new, f1


def set_diagonal(m: TriangularMatrix, x: float) -> None:
    """Set every diagonal element of ``m`` to ``x``."""
    for i in range(m.dim):
        m[i, i] = x


def bfgs(
    f: Callable[[Any, Any], float],
    x: Any,
    g: Any,
    max_steps: int,
    average_required_improvement: float,
    over: int,
    tried: Optional[Any] = None,
) -> tuple[float, Any, Any]:
    """Minimize ``f`` starting from ``x``.

    ``f(x, g)`` returns the value at ``x`` and writes the gradient into ``g``.
    The inputs are not modified; returns ``(value, x, g)`` at the final point.
    ``tried``, if given, is a memory of visited points that may cut the
    search short and is extended with the points reached.
    """
    n = len(g)
    h = TriangularMatrix(n, 0.0)
    set_diagonal(h, 1.0)

    x = copy.deepcopy(x)
    g = copy.deepcopy(g)
    f0 = f(x, g)

    if tried is not None:
        if not tried.interesting(x, f0, g):
            return f0, x, g
        tried.add(x, f0, g)

    f_orig = f0
    g_orig = copy.deepcopy(g)
    x_orig = copy.deepcopy(x)

    for step in range(max_steps):
        p = _with_values(g, minus_mat_vec_product(h, g))
        alpha, x_new, g_new, f1 = line_search(f, n, x, g, f0, p)
        y = [a - b for a, b in zip(_values(g_new), _values(g))]
        f0 = f1
        x = x_new
        g = g_new
        if not math.sqrt(scalar_product(g, g, n)) >= _GRADIENT_TOLERANCE:
            break  # also stops on NaN
        if step == 0:
            yy = scalar_product(y, y, n)
            if abs(yy) > EPSILON:
                set_diagonal(h, alpha * scalar_product(y, p, n) / yy)
        bfgs_update(h, p, y, alpha)
        if tried is not None:
            tried.add(x, f0, g)

    if not f0 <= f_orig:  # also restores on NaN
        f0 = f_orig
        x = x_orig
        g = g_orig
    return f0, x, g