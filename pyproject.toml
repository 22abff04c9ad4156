[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "spriteforge"
version = "0.1.0"
description = "Core of a small 2D game engine: transforms, cameras, scenes, input, events, animation, collision and render batching"
requires-python = ">=3.10"
dependencies = [
    "numpy",
]
keywords = ["game", "engine", "2d", "sprites", "collision", "scenes", "camera", "animation"]
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
    "Topic :: Games/Entertainment",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["spriteforge"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
