import random

from PIL import Image

from portaltrace.color import Color
from portaltrace.hittable import HittableList, Sphere
from portaltrace.material import Black, BlackHoleLayer, Dielectric, Lambertian, Portal
from portaltrace.ray import Ray
from portaltrace.scene import add_blackhole, create_world, main
from portaltrace.vec3 import Vec3


def test_add_blackhole_layers_and_core():
    world = HittableList()
    position = Vec3(1.0, 2.0, 3.0)
    add_blackhole(position, world)
    spheres = list(world)
    assert len(spheres) == 65
    assert all(s.center == position for s in spheres)
    assert all(isinstance(s.mat, BlackHoleLayer) for s in spheres[:-1])
    assert isinstance(spheres[-1].mat, Black)
    radii = [s.radius for s in spheres[:-1]]
    assert radii == sorted(radii)
    assert len(set(radii)) == len(radii)
    assert spheres[-1].radius < radii[0]


def test_add_blackhole_appends_to_existing_world():
    world = HittableList([Sphere(Vec3(), 1.0, Black())])
    before = len(world)
    add_blackhole(Vec3(), world)
    fresh = HittableList()
    add_blackhole(Vec3(), fresh)
    assert len(world) == before + len(fresh)


def test_create_world_is_deterministic_for_a_seed():
    first = create_world(random.Random(0))
    second = create_world(random.Random(0))
    assert [(s.center, s.radius) for s in first] == [(s.center, s.radius) for s in second]


def test_create_world_ground_sphere_first():
    ground = next(iter(create_world(random.Random(3))))
    assert ground.center == Vec3(0.0, -1000.0, 0.0)
    assert ground.radius == 1000.0
    assert isinstance(ground.mat, Lambertian)
    assert ground.mat.albedo == Color(0.5, 0.5, 0.5)


def test_create_world_small_spheres_keep_clear_of_portal():
    world = create_world(random.Random(5))
    small = [s for s in world if s.radius == 0.2]
    assert small
    assert all((s.center - Vec3(4.0, 0.2, 0.0)).length() > 0.9 for s in small)


def test_create_world_has_glass_sphere_and_portal_pair():
    world = list(create_world(random.Random(1)))
    glass = [s for s in world if s.center == Vec3(0.0, 1.0, 0.0)]
    assert len(glass) == 1
    assert isinstance(glass[0].mat, Dielectric)
    assert glass[0].mat.refraction_index == 1.5

    portals = [s.mat for s in world if isinstance(s.mat, Portal)]
    assert len(portals) == 2
    left, right = portals
    assert left.portal_position == right.target_position
    assert right.portal_position == left.target_position


def test_create_world_ends_with_black_hole_core():
    world = list(create_world(random.Random(2)))
    core = world[-1]
    assert isinstance(core.mat, Black)
    assert core.center == Vec3(8.0, 1.0, 0.0)


def test_create_world_hit_from_above_lands_on_something():
    world = create_world(random.Random(0))
    ray = Ray(Vec3(0.0, 10.0, 0.0), Vec3(0.0, -1.0, 0.0))
    record = world.hit(ray, 0.001, float("inf"))
    assert record.p.y > 0.0
    assert isinstance(record.mat, Dielectric)


def test_main_writes_image(tmp_path):
    path = tmp_path / "out.png"
    status = main(
        ["--width", "8", "--samples", "1", "--max-depth", "2", "--output", str(path)]
    )
    assert status == 0
    with Image.open(path) as image:
        assert image.size[0] == 8
        assert image.size[1] >= 1
        assert image.mode == "RGB"