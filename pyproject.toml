[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "lptools"
version = "0.1.0"
description = "Parse, normalise and solve small linear programs with the simplex method"
requires-python = ">=3.10"
dependencies = []
keywords = ["linear programming", "simplex", "optimization", "operations research"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Education",
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

[tool.hatch.build.targets.wheel]
packages = ["lptools"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
