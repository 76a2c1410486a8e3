[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "isotown"
version = "0.1.0"
description = "Simulation core for an isometric town-building game: tile chunks, A* pathfinding, entity steering, timelines and pointer gestures"
requires-python = ">=3.10"
dependencies = []
keywords = ["game", "simulation", "pathfinding", "a-star", "isometric", "tiles", "steering"]
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
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["isotown"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
