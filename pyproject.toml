[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "groveengine"
version = "0.1.0"
description = "A small top-down 2D role-playing game engine with a playable demo world"
requires-python = ">=3.10"
keywords = ["game", "engine", "2d", "rpg", "pygame", "sprites", "animation"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment :: Role-Playing",
    "Topic :: Software Development :: Libraries :: pygame",
]
dependencies = [
    "pygame",
    "filelock",
    "numpy",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
groveengine = "groveengine.cli:main"
groveengine-launcher = "groveengine.cli:launcher"

[tool.hatch.build.targets.wheel]
packages = ["groveengine"]

[tool.hatch.build.targets.sdist]
include = ["groveengine", "tests"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 88
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
ignore_missing_imports = true
