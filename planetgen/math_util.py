"""Vector types and small numeric helpers used by world generation."""

from __future__ import annotations

import math
import random
from dataclasses import dataclass
from typing import Iterator

PI = math.pi
TAU = math.tau


class CartesianError(ValueError):
    """Raised when a polar angle lies outside ``[0, PI]``."""

    def __init__(self, alpha: float) -> None:
        self.alpha = alpha
        super().__init__(f"Alpha value must be [0..PI], was {alpha}")


@dataclass(frozen=True)
class Vec2:
    """An immutable two-dimensional vector."""

    x: float = 0.0
    y: float = 0.0

    def __add__(self, other: Vec2) -> Vec2:
        return Vec2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Vec2) -> Vec2:
        return Vec2(self.x - other.x, self.y - other.y)

    def __mul__(self, factor: float) -> Vec2:
        return Vec2(self.x * factor, self.y * factor)

    __rmul__ = __mul__

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y

    def length(self) -> float:
        return math.hypot(self.x, self.y)


@dataclass(frozen=True)
class Vec3:
    """An immutable three-dimensional vector."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def __add__(self, other: Vec3) -> Vec3:
        return Vec3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: Vec3) -> Vec3:
        return Vec3(self.x - other.x, self.y - other.y, self.z - other.z)

    def __mul__(self, factor: float) -> Vec3:
        return Vec3(self.x * factor, self.y * factor, self.z * factor)

    __rmul__ = __mul__

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y
        yield self.z

    def length(self) -> float:
        return math.sqrt(self.x * self.x + self.y * self.y + self.z * self.z)


def repeat(value: float, length: float) -> float:
    """Wrap ``value`` into the range ``[0, length]``."""
    wrapped = value - math.floor(value / length) * length
    return min(max(wrapped, 0.0), length)


def mix_values(a: float, b: float, weight_b: float) -> float:
    """Linearly blend ``a`` towards ``b`` by ``weight_b``."""
    return b * weight_b + a * (1.0 - weight_b)


def cartesian_coordinates(alpha: float, beta: float, radius: float) -> Vec3:
    """Convert polar angles on a sphere of ``radius`` to a cartesian point.

    Raises CartesianError if ``alpha`` is outside ``[0, PI]``.
    """
    if alpha < 0.0 or alpha > PI:
        raise CartesianError(alpha)

    if beta < 0.0:
        while beta < 0.0:
            beta += PI
    else:
        beta = repeat(beta, TAU)

    sin_alpha = math.sin(alpha)
    return Vec3(
        sin_alpha * math.cos(beta) * radius,
        math.cos(alpha) * radius,
        sin_alpha * math.sin(beta) * radius,
    )


def random_point_in_sphere(rng: random.Random, radius: float) -> Vec3:
    """Draw a random point whose distance from the origin is the cube root of a
    uniform sample in ``[0, radius)``."""
    u = rng.random()
    v = rng.random()

    theta = u * TAU
    phi = math.acos(2.0 * v - 1.0)

    r = (rng.random() * radius) ** (1.0 / 3.0)

    sin_phi = math.sin(phi)
    return Vec3(
        r * sin_phi * math.cos(theta),
        r * sin_phi * math.sin(theta),
        r * math.cos(phi),
    )