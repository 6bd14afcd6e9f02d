[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "skyharbor"
version = "0.1.0"
description = "Frame-by-frame simulation logic for small vehicle and platformer games: flight physics, entity-component stores and tile collision."
requires-python = ">=3.10"
dependencies = []
keywords = [
    "game",
    "simulation",
    "entity-component-system",
    "ecs",
    "physics",
    "platformer",
    "flight",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment :: Simulation",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["skyharbor"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
