[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "slosh"
version = "0.1.0"
description = "Building blocks for a two-dimensional free-surface flow solver on a staggered grid"
requires-python = ">=3.10"
keywords = ["cfd", "navier-stokes", "free surface", "sloshing", "marker and cell", "vtk"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Science/Research",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Physics",
]
dependencies = [
    "numpy",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["slosh"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
