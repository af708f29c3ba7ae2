"""Three-dimensional vector helpers and axis-aligned box distances."""

from __future__ import annotations

import math
import sys
from itertools import repeat

Vec = tuple[float, float, float]
Mat = tuple[Vec, Vec, Vec]

EPSILON = sys.float_info.epsilon
ZERO_VEC: Vec = (0.0, 0.0, 0.0)


def vec_add(a: Vec, b: Vec) -> Vec:
    return tuple(x + y for x, y in zip(a, b, strict=True))


def vec_sub(a: Vec, b: Vec) -> Vec:
    return tuple(x - y for x, y in zip(a, b, strict=True))


def vec_scale(factor: float, v: Vec) -> Vec:
    return tuple(factor * x for x in v)


def dot(a: Vec, b: Vec) -> float:
    return sum(x * y for x, y in zip(a, b, strict=True))


def norm(v: Vec) -> float:
    return math.sqrt(dot(v, v))


def vec_distance_sqr(a: Vec, b: Vec) -> float:
    return sum((x - y) * (x - y) for x, y in zip(a, b, strict=True))


def mat_vec_product(m: Mat, v: Vec) -> Vec:
    """Multiply a 3x3 matrix, given as rows, by a vector."""
    return tuple(dot(row, v) for row in m)


def normalized_angle(x: float) -> float:
    """Return ``x`` shifted by a multiple of 2*pi into [-pi, pi]."""
    if -math.pi <= x <= math.pi:
        return x
    return math.remainder(x, 2 * math.pi)


def int_pow(x: float, n: int) -> float:
    """Raise ``x`` to a non-negative integer power by repeated multiplication."""
    if n < 0:
        raise ValueError("exponent must be non-negative")
    return math.prod(repeat(x, n), start=1.0)


def closest_between(begin: float, end: float, x: float) -> float:
    """Clamp ``x`` into [begin, end]."""
    if begin > end:
        raise ValueError("begin must not exceed end")
    if x <= begin:
        return begin
    if x >= end:
        return end
    return x


def brick_closest(begin: Vec, end: Vec, v: Vec) -> Vec:
    """The point of the box [begin, end] closest to ``v``."""
    return tuple(closest_between(b, e, x) for b, e, x in zip(begin, end, v, strict=True))


def brick_distance_sqr(begin: Vec, end: Vec, v: Vec) -> float:
    """Squared distance from ``v`` to the box [begin, end]."""
    return vec_distance_sqr(brick_closest(begin, end, v), v)