"""Three-component vectors and the random sampling used by the tracer."""

from __future__ import annotations

import math
import random
from dataclasses import dataclass
from typing import Iterator, Protocol


class RandomSource(Protocol):
    """Anything offering ``random()`` and ``uniform()``, such as ``random.Random``."""

    def random(self) -> float: ...

    def uniform(self, a: float, b: float) -> float: ...


def _source(rng: RandomSource | None) -> RandomSource:
    # The random module itself offers the same two functions.
    return random if rng is None else rng  # type: ignore[return-value]


@dataclass(frozen=True, slots=True)
class Vec3:
    """An immutable 3D vector of floats, also used for points and colours."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y
        yield self.z

    def __add__(self, other: Vec3) -> Vec3:
        return Vec3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: Vec3) -> Vec3:
        return Vec3(self.x - other.x, self.y - other.y, self.z - other.z)

    def __neg__(self) -> Vec3:
        return Vec3(-self.x, -self.y, -self.z)

    def __mul__(self, other: Vec3 | float) -> Vec3:
        """Scale by a number, or multiply component-wise by another vector."""
        if isinstance(other, Vec3):
            return Vec3(self.x * other.x, self.y * other.y, self.z * other.z)
        return Vec3(self.x * other, self.y * other, self.z * other)

    __rmul__ = __mul__

    def __truediv__(self, scalar: float) -> Vec3:
        return Vec3(self.x / scalar, self.y / scalar, self.z / scalar)

    def dot(self, other: Vec3) -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross(self, other: Vec3) -> Vec3:
        return Vec3(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x,
        )

    def length_squared(self) -> float:
        return self.dot(self)

    def length(self) -> float:
        return math.sqrt(self.length_squared())

    def normalized(self) -> Vec3:
        """Return the unit vector; raises ZeroDivisionError for the zero vector."""
        return self / self.length()

    def near_zero(self) -> bool:
        """True if every component is closer to zero than 1e-8."""
        s = 1e-8
        return abs(self.x) < s and abs(self.y) < s and abs(self.z) < s


def random_vec3(rng: RandomSource | None = None) -> Vec3:
    """A vector with each component uniform in [0, 1)."""
    src = _source(rng)
    return Vec3(src.random(), src.random(), src.random())


def random_vec3_in(low: float, high: float, rng: RandomSource | None = None) -> Vec3:
    """A vector with each component uniform between ``low`` and ``high``."""
    src = _source(rng)
    return Vec3(src.uniform(low, high), src.uniform(low, high), src.uniform(low, high))


def random_unit_vec3(rng: RandomSource | None = None) -> Vec3:
    """A uniformly distributed unit vector, by rejection sampling in the unit ball."""
    while True:
        v = random_vec3_in(-1.0, 1.0, rng)
        length_sq = v.length_squared()
        if 1e-160 < length_sq <= 1.0:
            return v.normalized()


def random_vec3_in_unit_disk(rng: RandomSource | None = None) -> Vec3:
    """A random point in the unit disk of the xy plane."""
    src = _source(rng)
    while True:
        v = Vec3(src.uniform(-1.0, 1.0), src.uniform(-1.0, 1.0), 0.0)
        if v.length_squared() <= 1.0:
            return v


def random_vec3_on_hemisphere(normal: Vec3, rng: RandomSource | None = None) -> Vec3:
    """A random unit vector in the hemisphere around ``normal``."""
    v = random_unit_vec3(rng)
    return v if v.dot(normal) > 0.0 else -v


def reflect(v: Vec3, n: Vec3) -> Vec3:
    """Mirror ``v`` about the surface with unit normal ``n``."""
    return v - 2.0 * v.dot(n) * n


def refract(uv: Vec3, n: Vec3, etai_over_etat: float) -> Vec3:
    """Refract unit vector ``uv`` through a surface with unit normal ``n``."""
    cos_theta = min((-uv).dot(n), 1.0)
    r_out_perp = etai_over_etat * (uv + cos_theta * n)
    r_out_parallel = -math.sqrt(abs(1.0 - r_out_perp.length_squared())) * n
    return r_out_perp + r_out_parallel