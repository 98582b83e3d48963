[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "locality"
version = "0.1.0"
description = "Plain and blocked 2D arrays, a PPM rotate/flip tool and a CPU timer for studying memory locality"
requires-python = ">=3.10"
dependencies = []
keywords = ["ppm", "image", "rotation", "flip", "locality", "blocked-array", "2d-array", "cpu-time"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Graphics :: Graphics Conversion",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
ppmtrans = "locality.ppmtrans:main"

[tool.hatch.build.targets.wheel]
packages = ["locality"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
