[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "dungeon_escape"
version = "1.0.0"
description = "A short dungeon-crawling adventure game with rooms, combat, a boss fight and leaderboards."
requires-python = ">=3.10"
keywords = ["game", "dungeon", "adventure", "pygame", "leaderboard"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: X11 Applications",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment :: Role-Playing",
]
dependencies = [
    "pygame",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
dungeon-escape = "dungeon_escape.app:main"

[tool.hatch.build.targets.wheel]
packages = ["dungeon_escape"]

[tool.pytest.ini_options]
addopts = "-ra"
