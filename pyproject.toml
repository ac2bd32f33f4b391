[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "tilemapedit"
version = "0.1.0"
description = "A modal, keyboard-driven terminal editor for rectangular tile maps"
requires-python = ">=3.11"
dependencies = []
keywords = ["tilemap", "map-editor", "terminal", "curses", "level-editor", "game-development"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console :: Curses",
    "Intended Audience :: Developers",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
tilemapedit = "tilemapedit.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["tilemapedit"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]

[tool.ruff]
line-length = 100
target-version = "py311"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.11"
warn_unused_ignores = true
