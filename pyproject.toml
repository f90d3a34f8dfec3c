[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "octagon"
version = "0.1.0"
description = "Tournament organiser toolkit for Smash Ultimate brackets: seeding conflicts, rating biases and a local player cache"
requires-python = ">=3.10"
keywords = ["tournament", "bracket", "seeding", "double-elimination", "smash"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment",
]
dependencies = [
    "python-dotenv",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
octagon = "octagon.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["octagon"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
