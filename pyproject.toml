[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "planetgen"
version = "0.3.1"
description = "Procedural planet generation: continents, altitude, rainfall, temperature and biomes on a spherical world grid."
requires-python = ">=3.10"
dependencies = []
keywords = ["procedural generation", "perlin noise", "world generation", "biomes", "simulation"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Games/Entertainment :: Simulation",
]

[project.optional-dependencies]
test = ["pytest", "hypothesis"]

[tool.hatch.build.targets.wheel]
packages = ["planetgen"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
