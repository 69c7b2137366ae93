"""A small path tracer with spheres, portals and a refracting black hole."""

__version__ = "0.1.0"
__all__ = ["vec3", "ray", "color", "hittable", "material", "camera", "scene"]