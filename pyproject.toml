[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "portaltrace"
version = "0.1.0"
description = "A small path tracer with spheres, portals and a refracting black hole"
requires-python = ">=3.10"
dependencies = [
    "pillow",
]
keywords = ["ray tracing", "path tracing", "rendering", "graphics", "portal", "black hole"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Education",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Graphics :: 3D Rendering",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
portaltrace = "portaltrace.scene:main"

[tool.hatch.build.targets.wheel]
packages = ["portaltrace"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
