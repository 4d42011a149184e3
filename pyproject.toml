[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "mcblocks"
version = "0.1.0"
description = "Building blocks for Monte Carlo particle transport: CSG geometry with BVH cell lookup and ray tracing, Ducru Doppler weights, a Padé matrix exponential, point kinetics and fission yields."
requires-python = ">=3.10"
dependencies = [
    "numpy",
]
keywords = ["monte-carlo", "geometry", "csg", "bvh", "point-kinetics", "doppler", "nuclear"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Science/Research",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Physics",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["mcblocks"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
