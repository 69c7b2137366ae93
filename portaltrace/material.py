"""Surface materials deciding how rays scatter."""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from dataclasses import InitVar, dataclass, field
from typing import TYPE_CHECKING, Optional

from .color import Color
from .ray import Ray
from .vec3 import RandomSource, _source, random_unit_vec3, reflect, refract

if TYPE_CHECKING:
    from .hittable import HitRecord
    from .vec3 import Vec3

WHITE = Color(1.0, 1.0, 1.0)


class Material(ABC):
    """How light interacts with a surface."""

    @abstractmethod
    def scatter(self, ray_in: Ray, hit_record: HitRecord) -> tuple[Color, Ray] | None:
        """Return the attenuation and scattered ray, or None if absorbed."""


@dataclass
class Lambertian(Material):
    """Ideal diffuse surface."""

    albedo: Color
    rng: Optional[RandomSource] = field(default=None, repr=False, compare=False)

    def scatter(self, ray_in: Ray, hit_record: HitRecord) -> tuple[Color, Ray] | None:
        direction = hit_record.normal + random_unit_vec3(self.rng)
        if direction.near_zero():
            direction = hit_record.normal
        return self.albedo, Ray(hit_record.p, direction)


@dataclass
class Metal(Material):
    """Reflective surface; ``fuzz`` is capped at 1."""

    albedo: Color
    fuzz: float
    rng: Optional[RandomSource] = field(default=None, repr=False, compare=False)

    def __post_init__(self) -> None:
        self.fuzz = min(self.fuzz, 1.0)

    def scatter(self, ray_in: Ray, hit_record: HitRecord) -> tuple[Color, Ray] | None:
        reflected = reflect(ray_in.direction, hit_record.normal).normalized()
        scattered = Ray(hit_record.p, reflected + self.fuzz * random_unit_vec3(self.rng))
        if scattered.direction.dot(hit_record.normal) > 0.0:
            return self.albedo, scattered
        return None


def reflectance(cosine: float, refraction_index: float) -> float:
    """Schlick's approximation of reflectance."""
    r0 = ((1.0 - refraction_index) / (1.0 + refraction_index)) ** 2
    return r0 + (1.0 - r0) * (1.0 - cosine) ** 5


def _angles(unit_direction: Vec3, normal: Vec3) -> tuple[float, float]:
    cos_theta = -min(unit_direction.dot(normal), 1.0)
    sin_theta = math.sqrt(max(1.0 - cos_theta * cos_theta, 0.0))
    return cos_theta, sin_theta


@dataclass
class Dielectric(Material):
    """Transparent surface that refracts or reflects."""

    refraction_index: float
    rng: Optional[RandomSource] = field(default=None, repr=False, compare=False)

    def scatter(self, ray_in: Ray, hit_record: HitRecord) -> tuple[Color, Ray] | None:
        ri = 1.0 / self.refraction_index if hit_record.front_face else self.refraction_index
        unit_direction = ray_in.direction.normalized()
        cos_theta, sin_theta = _angles(unit_direction, hit_record.normal)
        cannot_refract = ri * sin_theta > 1.0
        if cannot_refract or reflectance(cos_theta, ri) > _source(self.rng).random():
            direction = reflect(unit_direction, hit_record.normal)
        else:
            direction = refract(unit_direction, hit_record.normal, ri)
        return WHITE, Ray(hit_record.p, direction)


@dataclass(frozen=True)
class Portal(Material):
    """Entering rays pass through; leaving rays reappear at the target position."""

    albedo: Color
    portal_position: Vec3
    target_position: Vec3

    @classmethod
    def pair(
        cls, albedo_a: Color, albedo_b: Color, pos_a: Vec3, pos_b: Vec3
    ) -> tuple[Portal, Portal]:
        """Two portals leading into each other."""
        return cls(albedo_a, pos_a, pos_b), cls(albedo_b, pos_b, pos_a)

    def scatter(self, ray_in: Ray, hit_record: HitRecord) -> tuple[Color, Ray] | None:
        if hit_record.front_face:
            return WHITE, Ray(hit_record.p, ray_in.direction)
        origin = self.target_position + (hit_record.p - self.portal_position)
        return self.albedo, Ray(origin, ray_in.direction)


@dataclass(frozen=True)
class Black(Material):
    """Absorbs every ray."""

    def scatter(self, ray_in: Ray, hit_record: HitRecord) -> tuple[Color, Ray] | None:
        return None


def _blend_exponent(blend: float) -> float:
    blend = min(max(blend, 0.0), 1.0 - 1e-5)
    return 2.0 * blend if blend < 0.5 else 0.5 / (1.0 - blend)


_BLEND = 0.9


@dataclass(frozen=True)
class BlackHoleLayer(Material):
    """One refracting shell of a layered black-hole lens."""

    radius: InitVar[float]
    layer_count: InitVar[float]
    pre_mult: float = field(init=False)

    def __post_init__(self, radius: float, layer_count: float) -> None:
        pre_mult = max(radius - 1.4, 0.0001) ** -0.5 / layer_count * 2.8
        if not math.isfinite(pre_mult):
            raise ValueError(
                f"invalid pre_mult {pre_mult} from radius={radius}, layer_count={layer_count}"
            )
        object.__setattr__(self, "pre_mult", pre_mult)

    def _layer_weight(self, ray_in: Ray, normal: Vec3) -> float:
        f = abs(ray_in.direction.normalized().dot(normal))
        if _BLEND != 0.5:
            f = f ** _blend_exponent(_BLEND)
        f = 1.0 - f
        weight = 1.0 - (f - 0.91) / 0.09 if f > 0.91 else 1.0
        return max(weight, 0.0)

    def scatter(self, ray_in: Ray, hit_record: HitRecord) -> tuple[Color, Ray] | None:
        weight = self._layer_weight(ray_in, hit_record.normal)
        ri = (self.pre_mult * weight) ** 1.74 * 22.0 + 1.0
        if hit_record.front_face:
            ri = 1.0 / ri

        unit_direction = ray_in.direction.normalized()
        _, sin_theta = _angles(unit_direction, hit_record.normal)
        if ri * sin_theta > 1.0:
            direction = reflect(unit_direction, hit_record.normal)
        else:
            direction = refract(unit_direction, hit_record.normal, ri)
        return WHITE, Ray(hit_record.p, direction)