"""Hit records, the hittable interface, lists of objects and spheres."""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Iterable, Iterator

from .ray import Ray
from .vec3 import Vec3

if TYPE_CHECKING:
    from .material import Material


@dataclass(frozen=True)
class HitRecord:
    """Where and how a ray met a surface."""

    t: float
    p: Vec3
    mat: Material
    normal: Vec3
    front_face: bool

    @classmethod
    def from_ray(
        cls, t: float, p: Vec3, mat: Material, outward_normal: Vec3, ray: Ray
    ) -> HitRecord:
        """Build a record whose normal always opposes the incoming ray."""
        front_face = ray.direction.dot(outward_normal) < 0.0
        normal = outward_normal if front_face else -outward_normal
        return cls(t=t, p=p, mat=mat, normal=normal, front_face=front_face)


class Hittable(ABC):
    """Something a ray can hit."""

    @abstractmethod
    def hit(self, ray: Ray, t_min: float, t_max: float) -> HitRecord | None:
        """Return the nearest hit with ``t_min <= t < t_max``, or None."""


class HittableList(Hittable):
    """A collection of objects; a hit returns the closest one."""

    def __init__(self, objects: Iterable[Hittable] = ()) -> None:
        self.objects: list[Hittable] = list(objects)

    def __len__(self) -> int:
        return len(self.objects)

    def __iter__(self) -> Iterator[Hittable]:
        return iter(self.objects)

    def __repr__(self) -> str:
        return f"HittableList({self.objects!r})"

    def append(self, obj: Hittable) -> None:
        self.objects.append(obj)

    def clear(self) -> None:
        self.objects.clear()

    def hit(self, ray: Ray, t_min: float, t_max: float) -> HitRecord | None:
        closest: HitRecord | None = None
        for obj in self.objects:
            record = obj.hit(ray, t_min, t_max)
            if record is not None:
                t_max = record.t
                closest = record
        return closest


@dataclass
class Sphere(Hittable):
    """A sphere; a negative radius is treated as zero."""

    center: Vec3
    radius: float
    mat: Material = field(repr=False)

    def __post_init__(self) -> None:
        self.radius = max(self.radius, 0.0)

    def hit(self, ray: Ray, t_min: float, t_max: float) -> HitRecord | None:
        oc = self.center - ray.origin
        a = ray.direction.length_squared()
        h = oc.dot(ray.direction)
        c = oc.length_squared() - self.radius * self.radius

        discriminant = h * h - a * c
        if discriminant < 0.0:
            return None

        sqrt_d = math.sqrt(discriminant)
        root = (h - sqrt_d) / a
        if not t_min <= root < t_max:
            root = (h + sqrt_d) / a
            if not t_min <= root < t_max:
                return None

        p = ray.at(root)
        return HitRecord.from_ray(
            root, p, self.mat, (p - self.center) / self.radius, ray
        )