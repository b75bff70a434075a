[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "trophic"
version = "0.1.0"
description = "Load, inspect and simulate trophic networks of interacting species"
requires-python = ">=3.10"
dependencies = []
keywords = ["ecology", "food-web", "trophic", "graph", "simulation", "graphviz"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Science/Research",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
trophic = "trophic.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["trophic"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
