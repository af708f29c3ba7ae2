"""Unit quaternions used to represent rigid-body orientations."""

from __future__ import annotations

import math
from dataclasses import dataclass

from dockcore.geometry import EPSILON, ZERO_VEC, Mat, Vec, norm, normalized_angle, vec_scale
from dockcore.randomness import Rng, random_normal

_EQ_TOLERANCE = 1e-9
_UNIT_AXIS_TOLERANCE = 1e-6


@dataclass(frozen=True)
class Quaternion:
    """A quaternion a + b*i + c*j + d*k."""

    a: float
    b: float
    c: float
    d: float

    def __mul__(self, other: Quaternion) -> Quaternion:
        if not isinstance(other, Quaternion):
            return NotImplemented
        a1, b1, c1, d1 = self.a, self.b, self.c, self.d
        a2, b2, c2, d2 = other.a, other.b, other.c, other.d
        return Quaternion(
            a1 * a2 - b1 * b2 - c1 * c2 - d1 * d2,
            a1 * b2 + b1 * a2 + c1 * d2 - d1 * c2,
            a1 * c2 - b1 * d2 + c1 * a2 + d1 * b2,
            a1 * d2 + b1 * c2 - c1 * b2 + d1 * a2,
        )

    def __truediv__(self, other: Quaternion) -> Quaternion:
        """Right division: the quaternion ``t`` with ``t * other == self``."""
        if not isinstance(other, Quaternion):
            return NotImplemented
        a, b, c, d = self.a, self.b, self.c, self.d
        ar, br, cr, dr = other.a, other.b, other.c, other.d
        denominator = other.norm_sqr()
        return Quaternion(
            (a * ar + b * br + c * cr + d * dr) / denominator,
            (-a * br + b * ar - c * dr + d * cr) / denominator,
            (-a * cr + b * dr + c * ar - d * br) / denominator,
            (-a * dr - b * cr + c * br + d * ar) / denominator,
        )

    def scaled(self, factor: float) -> Quaternion:
        return Quaternion(self.a * factor, self.b * factor, self.c * factor, self.d * factor)

    def norm_sqr(self) -> float:
        return self.a * self.a + self.b * self.b + self.c * self.c + self.d * self.d

    def norm(self) -> float:
        return math.hypot(self.a, self.b, self.c, self.d)

    def approx_eq(self, other: Quaternion) -> bool:
        """Elementwise approximate equality; may be false for equivalent rotations."""
        return all(
            abs(x - y) < _EQ_TOLERANCE
            for x, y in zip(
                (self.a, self.b, self.c, self.d), (other.a, other.b, other.c, other.d)
            )
        )


QT_IDENTITY = Quaternion(1.0, 0.0, 0.0, 0.0)


def axis_angle_to_quaternion(axis: Vec, angle: float) -> Quaternion:
    """Rotation by ``angle`` about the unit vector ``axis``."""
    if abs(norm(axis) - 1) > _UNIT_AXIS_TOLERANCE:
        raise ValueError("rotation axis must be a unit vector")
    angle = normalized_angle(angle)
    c = math.cos(angle / 2)
    s = math.sin(angle / 2)
    return Quaternion(c, s * axis[0], s * axis[1], s * axis[2])


def angle_to_quaternion(rotation: Vec) -> Quaternion:
    """Rotation given as angle times axis."""
    angle = norm(rotation)
    if angle > EPSILON:
        return axis_angle_to_quaternion(vec_scale(1 / angle, rotation), angle)
    return QT_IDENTITY


def quaternion_to_angle(q: Quaternion) -> Vec:
    """Inverse of :func:`angle_to_quaternion`: angle times axis, angle in [-pi, pi]."""
    c = q.a
    if -1 < c < 1:
        angle = 2 * math.acos(c)
        if angle > math.pi:
            angle -= 2 * math.pi
        s = math.sin(angle / 2)
        if abs(s) < EPSILON:
            return ZERO_VEC
        return vec_scale(angle / s, (q.b, q.c, q.d))
    return ZERO_VEC


def quaternion_to_r3(q: Quaternion) -> Mat:
    """The 3x3 rotation matrix (as rows) of a unit quaternion."""
    a, b, c, d = q.a, q.b, q.c, q.d
    aa, ab, ac, ad = a * a, a * b, a * c, a * d
    bb, bc, bd = b * b, b * c, b * d
    cc, cd = c * c, c * d
    dd = d * d
    return (
        (aa + bb - cc - dd, 2 * (-ad + bc), 2 * (ac + bd)),
        (2 * (ad + bc), aa - bb + cc - dd, 2 * (-ab + cd)),
        (2 * (-ac + bd), 2 * (ab + cd), aa - bb - cc + dd),
    )


def quaternion_is_normalized(q: Quaternion) -> bool:
    return abs(q.norm_sqr() - 1) < _EQ_TOLERANCE and abs(q.norm() - 1) < _EQ_TOLERANCE


def quaternion_normalize(q: Quaternion) -> Quaternion:
    """Return ``q`` scaled to unit length."""
    length = math.sqrt(q.norm_sqr())
    if length <= EPSILON:
        raise ValueError("cannot normalize a zero quaternion")
    return q.scaled(1 / length)


def quaternion_normalize_approx(q: Quaternion, tolerance: float = 1e-6) -> Quaternion:
    """Normalize ``q`` only if its squared norm is off from 1 by ``tolerance`` or more."""
    if abs(q.norm_sqr() - 1) < tolerance:
        return q
    return quaternion_normalize(q)


def random_orientation(generator: Rng) -> Quaternion:
    """A uniformly distributed random unit quaternion."""
    while True:
        q = Quaternion(*(random_normal(0.0, 1.0, generator) for _ in range(4)))
        length = q.norm()
        if length > EPSILON:
            return q.scaled(1 / length)


def quaternion_increment(q: Quaternion, rotation: Vec) -> Quaternion:
    """Apply ``rotation`` (angle times axis) after ``q``."""
    return quaternion_normalize_approx(angle_to_quaternion(rotation) * q)


def quaternion_difference(b: Quaternion, a: Quaternion) -> Vec:
    """The rotation that converts ``a`` into ``b``."""
    return quaternion_to_angle(b / a)