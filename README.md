# portaltrace

portaltrace is a small Monte Carlo path tracer. It renders scenes built from
spheres. These materials are available in `portaltrace.material`:

- `Lambertian(albedo)`: a diffuse surface.
- `Metal(albedo, fuzz)`: a reflective surface. `fuzz` blurs the reflection and is capped at 1.
- `Dielectric(refraction_index)`: a glass-like surface. It refracts or reflects, with the
  reflection chance given by Schlick's approximation (`reflectance`).
- `Portal`: a ray that enters the sphere passes through unchanged. A ray that leaves it
  reappears at the same offset around the target position. It is tinted with the
  portal's albedo. `Portal.pair(...)` builds two portals that lead into each other.
- `BlackHoleLayer(radius, layer_count)` and `Black()`: nested refracting shells around an
  absorbing core. Together they bend light the way a black hole does.

## Installation

```
pip install .
```

The package needs Pillow to write images.

## Rendering the demo scene

```
portaltrace
```

This command builds the demo scene and saves the render as `image.png`. The scene has
a ground sphere, a field of small random spheres, a large glass sphere, a green
diffuse sphere, a portal pair and a black hole. The command takes these options:

| Option | Default | Meaning |
| --- | --- | --- |
| `-o`, `--output` | `image.png` | output image path; Pillow picks the format from the extension |
| `--width` | `1200` | image width in pixels (the aspect ratio is 16:9) |
| `--samples` | `500` | samples per pixel |
| `--max-depth` | `400` | maximum number of ray bounces |
| `--seed` | `0` | seed for the random layout of the scene |
| `-v`, `--verbose` | off | log progress (remaining scanlines) |

The seed fixes only the layout of the scene. Pixel sampling and scattering draw from
Python's global `random` module, so two renders differ slightly in noise. The default
settings take a long time to render. For a quick preview, try
`portaltrace --width 200 --samples 10 --max-depth 20`.

## Using the library

```python
import random

from portaltrace.vec3 import Vec3
from portaltrace.hittable import HittableList, Sphere
from portaltrace.material import Lambertian, Metal, Dielectric, Portal
from portaltrace.camera import Camera, ImageSettings, QualitySettings, CameraSettings

world = HittableList()
world.append(Sphere(Vec3(0.0, -1000.0, 0.0), 1000.0, Lambertian(Vec3(0.5, 0.5, 0.5))))
world.append(Sphere(Vec3(0.0, 1.0, 0.0), 1.0, Dielectric(1.5)))
world.append(Sphere(Vec3(4.0, 1.0, 0.0), 1.0, Metal(Vec3(0.7, 0.6, 0.5), 0.0)))

left, right = Portal.pair(
    Vec3(1.0, 0.5, 0.5), Vec3(0.5, 0.5, 1.0),
    Vec3(-4.0, 1.0, 0.0), Vec3(-8.0, 1.0, 0.0),
)
world.append(Sphere(Vec3(-4.0, 1.0, 0.0), 1.0, left))
world.append(Sphere(Vec3(-8.0, 1.0, 0.0), 1.0, right))

camera = Camera(
    ImageSettings(image_width=200, aspect_ratio=16 / 9),
    QualitySettings(samples_per_pixel=20, max_depth=10),
    CameraSettings(
        vfov=20.0,
        focus_dist=10.0,
        defocus_angle=0.6,
        camera_center=Vec3(13.0, 2.0, 3.0),
        camera_lookat=Vec3(0.0, 0.0, 0.0),
        camera_vup=Vec3(0.0, 1.0, 0.0),
    ),
    rng=random.Random(1),
)

camera.render_image(world).save("small.png")

with open("small.ppm", "w") as fh:
    camera.render_ppm(fh, world)
```

- `render_image` returns an RGB Pillow image.
- `render_ppm` writes a plain-text PPM (P3) image to any text stream.
- `Camera.get_ray(x, y)` returns a jittered ray through a pixel.
- `Camera.pixel_color(x, y, world)` returns the averaged linear colour of one pixel.
- `camera.ray_color(ray, world, depth)` traces a single ray.

`Camera`, `Lambertian`, `Metal` and `Dielectric` take an optional `rng`. It can be any
object with `random()` and `uniform(a, b)`, such as `random.Random`. With no `rng` they
use the `random` module. The settings classes raise `ValueError` for:

- a non-positive image width or aspect ratio,
- fewer than one sample per pixel,
- a negative maximum depth.

Other modules:

- `portaltrace.vec3`: the immutable `Vec3` type and random vector helpers, plus
  `reflect` and `refract`.
- `portaltrace.ray`: `Ray`.
- `portaltrace.color`: gamma conversion, with `color_to_rgb` and `write_color`.
- `portaltrace.hittable`: `HitRecord`, the `Hittable` base class, `HittableList` and
  `Sphere`.

To build the demo scene yourself, call `portaltrace.scene.create_world(random.Random(0))`.
To add a black hole to your own `HittableList`, call
`portaltrace.scene.add_blackhole(position, world)`.

## Limitations

- Spheres are the only shapes.
- There is no acceleration structure.
- Rendering runs in a single process in pure Python, so large images with many samples
  are slow.

## Tests

```
pip install ".[test]"
pytest
```