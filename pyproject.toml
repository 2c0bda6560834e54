[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "dominion"
version = "0.1.0"
description = "The Dominion deck-building card game: seeded game state, action card effects, a buying bot, a scripted two-player match and an interactive console."
requires-python = ">=3.10"
dependencies = []
keywords = ["dominion", "card game", "deck-building", "simulation", "lehmer", "random"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment :: Board Games",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
dominion-playdom = "dominion.playdom:main"
dominion-player = "dominion.player:main"

[tool.hatch.build.targets.wheel]
packages = ["dominion"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
