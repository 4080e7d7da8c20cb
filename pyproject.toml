[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "towerdefense"
version = "1.0.0"
description = "A grid-based tower defense game with bullet, splash and slow towers"
requires-python = ">=3.10"
keywords = ["game", "tower defense", "pygame", "strategy"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment :: Real Time Strategy",
]
dependencies = [
    "pygame",
    "numpy",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
towerdefense = "towerdefense.game:main"

[tool.hatch.build.targets.wheel]
packages = ["towerdefense"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
