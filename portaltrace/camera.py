"""Camera set-up and rendering of a world to PPM text or an image."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import TextIO

from PIL import Image

from .color import Color, color_to_rgb, write_color
from .hittable import Hittable
from .ray import Ray
from .vec3 import RandomSource, Vec3, _source, random_vec3_in_unit_disk

logger = logging.getLogger(__name__)

_SKY_BOTTOM = Color(1.0, 1.0, 1.0)
_SKY_TOP = Color(0.5, 0.7, 1.0)
_T_MIN = 0.001


@dataclass(frozen=True)
class ImageSettings:
    """Output image width and the width-to-height ratio."""

    image_width: int
    aspect_ratio: float

    def __post_init__(self) -> None:
        if self.image_width < 1:
            raise ValueError(f"image_width must be positive, got {self.image_width}")
        if self.aspect_ratio <= 0.0:
            raise ValueError(f"aspect_ratio must be positive, got {self.aspect_ratio}")


@dataclass(frozen=True)
class QualitySettings:
    """Samples taken per pixel and the maximum number of bounces."""

    samples_per_pixel: int
    max_depth: int

    def __post_init__(self) -> None:
        if self.samples_per_pixel < 1:
            raise ValueError(
                f"samples_per_pixel must be positive, got {self.samples_per_pixel}"
            )
        if self.max_depth < 0:
            raise ValueError(f"max_depth must not be negative, got {self.max_depth}")


@dataclass(frozen=True)
class CameraSettings:
    """Field of view in degrees, focus, lens aperture angle and placement."""

    vfov: float
    focus_dist: float
    defocus_angle: float
    camera_center: Vec3
    camera_lookat: Vec3
    camera_vup: Vec3


def ray_color(ray: Ray, world: Hittable, depth: int) -> Color:
    """The colour seen along ``ray``, following at most ``depth`` bounces."""
    throughput = Color(1.0, 1.0, 1.0)
    for _ in range(depth):
        record = world.hit(ray, _T_MIN, math.inf)
        if record is None:
            unit_direction = ray.direction.normalized()
            t = 0.5 * (unit_direction.y + 1.0)
            return throughput * ((1.0 - t) * _SKY_BOTTOM + t * _SKY_TOP)
        scattered = record.mat.scatter(ray, record)
        if scattered is None:
            return Color()
        attenuation, ray = scattered
        throughput = throughput * attenuation
    return Color()


class Camera:
    """A thin-lens camera producing jittered rays through each pixel."""

    def __init__(
        self,
        image_settings: ImageSettings,
        quality_settings: QualitySettings,
        camera_settings: CameraSettings,
        rng: RandomSource | None = None,
    ) -> None:
        self.rng = rng
        self.image_width = image_settings.image_width
        self.image_height = int(
            max(image_settings.image_width / image_settings.aspect_ratio, 1.0)
        )
        self.samples_per_pixel = quality_settings.samples_per_pixel
        self.max_depth = quality_settings.max_depth
        self.center = camera_settings.camera_center
        self.defocus_angle = camera_settings.defocus_angle

        focus_dist = camera_settings.focus_dist
        viewport_height = 2.0 * focus_dist * math.tan(math.radians(camera_settings.vfov) / 2.0)
        viewport_width = viewport_height * (self.image_width / self.image_height)

        w = (camera_settings.camera_center - camera_settings.camera_lookat).normalized()
        u = camera_settings.camera_vup.cross(w).normalized()
        v = w.cross(u)

        viewport_u = viewport_width * u
        viewport_v = -viewport_height * v
        self.pixel_delta_u = viewport_u / self.image_width
        self.pixel_delta_v = viewport_v / self.image_height
        upper_left = self.center - focus_dist * w - viewport_u / 2.0 - viewport_v / 2.0
        self.pixel00_loc = upper_left + 0.5 * (self.pixel_delta_u + self.pixel_delta_v)

        defocus_radius = math.tan(math.radians(self.defocus_angle / 2.0)) * focus_dist
        self.defocus_disk_u = u * defocus_radius
        self.defocus_disk_v = v * defocus_radius

    def get_ray(self, x: int, y: int) -> Ray:
        """A ray through a random point of pixel (x, y), from a point on the lens."""
        src = _source(self.rng)
        offset_x = src.uniform(-0.5, 0.5)
        offset_y = src.uniform(-0.5, 0.5)
        sample_center = (
            self.pixel00_loc
            + (x + offset_x) * self.pixel_delta_u
            + (y + offset_y) * self.pixel_delta_v
        )
        if self.defocus_angle != 0.0:
            p = random_vec3_in_unit_disk(self.rng)
            origin = self.center + p.x * self.defocus_disk_u + p.y * self.defocus_disk_v
        else:
            origin = self.center
        return Ray(origin, sample_center - origin)

    def _pixel_color(self, x: int, y: int, world: Hittable, clamp: bool) -> Color:
        total = Color()
        for _ in range(self.samples_per_pixel):
            color = ray_color(self.get_ray(x, y), world, self.max_depth)
            if clamp:
                color = Color(max(color.x, 0.0), max(color.y, 0.0), max(color.z, 0.0))
            total = total + color
        return total / self.samples_per_pixel

    def pixel_color(self, x: int, y: int, world: Hittable) -> Color:
        """The averaged linear colour of pixel (x, y)."""
        return self._pixel_color(x, y, world, clamp=False)

    def render_ppm(self, file: TextIO, world: Hittable) -> None:
        """Render ``world`` as a plain-text PPM image into ``file``."""
        file.write(f"P3\n{self.image_width} {self.image_height}\n255\n")
        for y in range(self.image_height):
            logger.info("Scanlines remaining: %d", self.image_height - y)
            for x in range(self.image_width):
                write_color(file, self.pixel_color(x, y, world))
        logger.info("Done.")

    def render_image(self, world: Hittable) -> Image.Image:
        """Render ``world`` into an RGB image."""
        image = Image.new("RGB", (self.image_width, self.image_height))
        pixels = []
        for y in range(self.image_height):
            logger.info("Scanlines remaining: %d", self.image_height - y)
            pixels.extend(
                color_to_rgb(self._pixel_color(x, y, world, clamp=True))
                for x in range(self.image_width)
            )
        image.putdata(pixels)
        logger.info("Done.")
        return image