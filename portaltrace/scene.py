"""The demo scene: random spheres, a pair of portals and a black hole."""

from __future__ import annotations

import argparse
import logging
import random
from typing import Sequence

from .camera import Camera, CameraSettings, ImageSettings, QualitySettings
from .color import Color
from .hittable import HittableList, Sphere
from .material import Black, BlackHoleLayer, Dielectric, Lambertian, Metal, Portal
from .vec3 import RandomSource, Vec3

LAYER_COUNT = 64


def add_blackhole(position: Vec3, world: HittableList) -> None:
    """Add nested refracting shells and an absorbing core at ``position``."""
    for layer_index in range(LAYER_COUNT):
        radius = (layer_index / (LAYER_COUNT / 4.25)) ** 2.5 + 1.0
        world.append(
            Sphere(position, radius / 40.0, BlackHoleLayer(radius, float(LAYER_COUNT)))
        )
    world.append(Sphere(position, 0.01, Black()))


def create_world(rng: RandomSource) -> HittableList:
    """Build the full demo scene, drawing its random layout from ``rng``."""
    world = HittableList()
    world.append(
        Sphere(Vec3(0.0, -1000.0, 0.0), 1000.0, Lambertian(Color(0.5, 0.5, 0.5)))
    )

    keep_clear = Vec3(4.0, 0.2, 0.0)
    for a in range(-11, 11):
        for b in range(-11, 11):
            choose_material = rng.random()
            center = Vec3(a + 0.9 * rng.random(), 0.2, b + 0.9 * rng.random())
            if (center - keep_clear).length() <= 0.9:
                continue
            if choose_material < 0.8:
                albedo = Color(
                    rng.random() * rng.random(),
                    rng.random() * rng.random(),
                    rng.random() * rng.random(),
                )
                world.append(Sphere(center, 0.2, Lambertian(albedo)))
            elif choose_material < 0.95:
                albedo = Color(
                    0.5 * (1.0 + rng.random()),
                    0.5 * (1.0 + rng.random()),
                    0.5 * (1.0 + rng.random()),
                )
                fuzz = 0.5 * rng.random()
                world.append(Sphere(center, 0.2, Metal(albedo, fuzz)))
            else:
                world.append(Sphere(center, 0.2, Dielectric(1.5)))

    world.append(Sphere(Vec3(0.0, 1.0, 0.0), 1.0, Dielectric(1.5)))

    left_portal, right_portal = Portal.pair(
        Color(1.0, 0.5, 0.5),
        Color(0.5, 0.5, 1.0),
        Vec3(-4.0, 1.0, 0.0),
        Vec3(4.0, 1.0, 0.0),
    )
    world.append(Sphere(Vec3(-8.0, 1.0, 0.0), 1.0, Lambertian(Color(0.2, 0.8, 0.4))))
    world.append(Sphere(Vec3(-4.0, 1.0, 0.0), 1.0, left_portal))
    world.append(Sphere(Vec3(4.0, 1.0, 0.0), 1.0, right_portal))

    add_blackhole(Vec3(8.0, 1.0, 0.0), world)
    return world


def _parse_args(argv: Sequence[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Render the portal and black-hole scene.")
    parser.add_argument("-o", "--output", default="image.png", help="output image path")
    parser.add_argument("--width", type=int, default=1200, help="image width in pixels")
    parser.add_argument("--samples", type=int, default=500, help="samples per pixel")
    parser.add_argument("--max-depth", type=int, default=400, help="maximum ray bounces")
    parser.add_argument("--seed", type=int, default=0, help="seed for the scene layout")
    parser.add_argument("-v", "--verbose", action="store_true", help="log progress")
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    """Render the demo scene to an image file."""
    args = _parse_args(argv)
    logging.basicConfig(level=logging.INFO if args.verbose else logging.WARNING)

    camera = Camera(
        ImageSettings(image_width=args.width, aspect_ratio=16.0 / 9.0),
        QualitySettings(samples_per_pixel=args.samples, max_depth=args.max_depth),
        CameraSettings(
            vfov=20.0,
            focus_dist=10.0,
            defocus_angle=0.6,
            camera_center=Vec3(15.0, 2.0, 3.0),
            camera_lookat=Vec3(0.0, 0.0, 0.0),
            camera_vup=Vec3(0.0, 1.0, 0.0),
        ),
    )
    world = create_world(random.Random(args.seed))
    camera.render_image(world).save(args.output)
    return 0