import math
import random

import pytest

from portaltrace.color import Color
from portaltrace.hittable import HitRecord
from portaltrace.material import (
    Black,
    BlackHoleLayer,
    Dielectric,
    Lambertian,
    Metal,
    Portal,
    reflectance,
)
from portaltrace.ray import Ray
from portaltrace.vec3 import Vec3, reflect

UP = Vec3(0.0, 1.0, 0.0)
DOWN = Vec3(0.0, -1.0, 0.0)
WHITE = Color(1.0, 1.0, 1.0)


def close(a, b, tol=1e-9):
    return all(math.isclose(p, q, abs_tol=tol) for p, q in zip(a, b))


def hit_with(mat, ray, p=Vec3(), outward=UP):
    return HitRecord.from_ray(1.0, p, mat, outward, ray)


def test_lambertian_scatters_from_hit_point():
    albedo = Color(0.2, 0.4, 0.6)
    mat = Lambertian(albedo, rng=random.Random(1))
    p = Vec3(1.0, 2.0, 3.0)
    ray = Ray(Vec3(1.0, 5.0, 3.0), DOWN)
    for _ in range(50):
        attenuation, scattered = mat.scatter(ray, hit_with(mat, ray, p))
        assert attenuation == albedo
        assert scattered.origin == p
        assert scattered.direction.dot(UP) >= 0.0


def test_metal_fuzz_is_capped():
    assert Metal(WHITE, 5.0).fuzz == 1.0
    assert Metal(WHITE, 0.3).fuzz == 0.3


def test_metal_mirror_reflection():
    mat = Metal(Color(0.8, 0.8, 0.8), 0.0)
    ray = Ray(Vec3(0.0, 5.0, 0.0), Vec3(1.0, -1.0, 0.0))
    attenuation, scattered = mat.scatter(ray, hit_with(mat, ray))
    assert attenuation == mat.albedo
    assert close(scattered.direction, reflect(ray.direction, UP).normalized())


def test_metal_absorbs_when_reflection_goes_inward():
    mat = Metal(WHITE, 0.0)
    ray = Ray(Vec3(), UP)
    record = HitRecord(t=1.0, p=Vec3(), mat=mat, normal=UP, front_face=True)
    assert mat.scatter(ray, record) is None


def test_reflectance_bounds():
    assert reflectance(1.0, 1.0) == 0.0
    assert math.isclose(reflectance(0.0, 1.5), 1.0)
    assert reflectance(0.2, 1.5) > reflectance(0.9, 1.5)


def test_dielectric_index_one_passes_straight():
    mat = Dielectric(1.0, rng=random.Random(0))
    ray = Ray(Vec3(0.0, 5.0, 0.0), DOWN)
    attenuation, scattered = mat.scatter(ray, hit_with(mat, ray))
    assert attenuation == WHITE
    assert close(scattered.direction, DOWN)


def test_dielectric_total_internal_reflection():
    mat = Dielectric(1.5, rng=random.Random(0))
    ray = Ray(Vec3(), Vec3(1.0, 0.1, 0.0))
    record = hit_with(mat, ray)
    assert record.front_face is False
    attenuation, scattered = mat.scatter(ray, record)
    unit = ray.direction.normalized()
    assert attenuation == WHITE
    assert close(scattered.direction, reflect(unit, record.normal))
    assert scattered.direction.y < 0.0


def test_portal_pair_links_positions():
    a_pos, b_pos = Vec3(-4.0, 1.0, 0.0), Vec3(4.0, 1.0, 0.0)
    a, b = Portal.pair(Color(1.0, 0.5, 0.5), Color(0.5, 0.5, 1.0), a_pos, b_pos)
    assert (a.portal_position, a.target_position) == (a_pos, b_pos)
    assert (b.portal_position, b.target_position) == (b_pos, a_pos)


def test_portal_front_face_passes_through():
    portal = Portal(Color(1.0, 0.5, 0.5), Vec3(), Vec3(10.0, 0.0, 0.0))
    ray = Ray(Vec3(0.0, 5.0, 0.0), DOWN)
    p = Vec3(0.0, 1.0, 0.0)
    attenuation, scattered = portal.scatter(ray, hit_with(portal, ray, p))
    assert attenuation == WHITE
    assert scattered == Ray(p, DOWN)


def test_portal_back_face_teleports():
    portal = Portal(Color(1.0, 0.5, 0.5), Vec3(), Vec3(10.0, 0.0, 0.0))
    ray = Ray(Vec3(), UP)
    p = Vec3(0.0, 1.0, 0.0)
    attenuation, scattered = portal.scatter(ray, hit_with(portal, ray, p))
    assert attenuation == portal.albedo
    assert scattered.origin == portal.target_position + p
    assert scattered.direction == UP


def test_black_absorbs():
    mat = Black()
    ray = Ray(Vec3(0.0, 5.0, 0.0), DOWN)
    assert mat.scatter(ray, hit_with(mat, ray)) is None


def test_black_hole_layer_rejects_zero_layers():
    with pytest.raises(ZeroDivisionError):
        BlackHoleLayer(2.0, 0.0)


def test_black_hole_pre_mult_decreases_with_radius():
    inner = BlackHoleLayer(1.5, 64.0)
    outer = BlackHoleLayer(10.0, 64.0)
    assert math.isfinite(inner.pre_mult)
    assert inner.pre_mult > outer.pre_mult > 0.0


def test_black_hole_normal_incidence_unchanged():
    mat = BlackHoleLayer(3.0, 64.0)
    ray = Ray(Vec3(0.0, 5.0, 0.0), Vec3(0.0, -2.0, 0.0))
    attenuation, scattered = mat.scatter(ray, hit_with(mat, ray))
    assert attenuation == WHITE
    assert close(scattered.direction, DOWN)


def test_black_hole_oblique_direction_is_finite_unit():
    mat = BlackHoleLayer(1.41, 64.0)
    ray = Ray(Vec3(), Vec3(1.0, 0.05, 0.3))
    _, scattered = mat.scatter(ray, hit_with(mat, ray))
    assert all(math.isfinite(c) for c in scattered.direction)
    assert math.isclose(scattered.direction.length(), 1.0, rel_tol=1e-6)