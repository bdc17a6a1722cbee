[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "polytri"
version = "0.1.0"
description = "Sweep-line constrained Delaunay triangulation of simple polygons with holes and Steiner points"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "triangulation",
    "delaunay",
    "constrained delaunay",
    "polygon",
    "geometry",
    "mesh",
    "sweep-line",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Mathematics",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
polytri = "polytri.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["polytri"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
