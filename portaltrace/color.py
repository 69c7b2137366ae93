"""Colour conversion and output."""

from __future__ import annotations

import math
from typing import TextIO

from .vec3 import Vec3

Color = Vec3


def linear_to_gamma(linear_component: float) -> float:
    """Gamma-2 encode a linear component; negatives map to zero."""
    return math.sqrt(max(linear_component, 0.0))


def _to_byte(component: float) -> int:
    return int(256.0 * min(max(linear_to_gamma(component), 0.0), 0.999))


def color_to_rgb(color: Color) -> tuple[int, int, int]:
    """Convert a linear colour to gamma-encoded 8-bit RGB."""
    return _to_byte(color.x), _to_byte(color.y), _to_byte(color.z)


def write_color(file: TextIO, pixel_color: Color) -> None:
    """Write a pixel as a plain PPM ``r g b`` line."""
    r, g, b = color_to_rgb(pixel_color)
    file.write(f"{r} {g} {b}\n")