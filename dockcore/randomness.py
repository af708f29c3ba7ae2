"""Random number helpers built on a seeded Mersenne Twister generator."""

from __future__ import annotations

import os
import random
import time

from dockcore.geometry import Vec

Rng = random.Random


def make_rng(seed: int) -> Rng:
    """Create a generator seeded with ``seed``."""
    return random.Random(seed)


def random_fl(a: float, b: float, generator: Rng) -> float:
    """A uniform float in [a, b]; requires a < b."""
    if not a < b:
        raise ValueError("random_fl requires a < b")
    return generator.uniform(a, b)


def random_normal(mean: float, sigma: float, generator: Rng) -> float:
    """A normally distributed float; requires sigma >= 0."""
    if sigma < 0:
        raise ValueError("sigma must be non-negative")
    return generator.gauss(mean, sigma)


def random_int(a: int, b: int, generator: Rng) -> int:
    """A uniform integer in [a, b]; requires a <= b."""
    if a > b:
        raise ValueError("random_int requires a <= b")
    return generator.randint(a, b)


def random_sz(a: int, b: int, generator: Rng) -> int:
    """A uniform non-negative integer in [a, b]."""
    if a < 0 or b < 0:
        raise ValueError("random_sz requires non-negative bounds")
    return random_int(a, b, generator)


def random_inside_sphere(generator: Rng) -> Vec:
    """A random point strictly inside the unit sphere centred at the origin."""
    while True:
        v = tuple(random_fl(-1.0, 1.0, generator) for _ in range(3))
        if sum(x * x for x in v) < 1:
            return v


def random_in_box(corner1: Vec, corner2: Vec, generator: Rng) -> Vec:
    """A random point in the box spanned by two corners; corner1 < corner2 per axis."""
    return tuple(random_fl(lo, hi, generator) for lo, hi in zip(corner1, corner2, strict=True))


def auto_seed() -> int:
    """A seed derived from the process id and the current time, as a 32-bit signed int."""
    product = (os.getpid() * int(time.time())) & 0xFFFFFFFF
    return product - (1 << 32) if product >= (1 << 31) else product