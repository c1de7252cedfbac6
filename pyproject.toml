[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "gridsnake"
version = "0.1.0"
description = "A grid-based snake arcade game with obstacles, bullets, shields and invincibility"
requires-python = ">=3.10"
dependencies = []
keywords = ["snake", "game", "arcade", "grid", "tkinter"]
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
    "Topic :: Games/Entertainment :: Arcade",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
gridsnake = "gridsnake.app:main"

[tool.hatch.build.targets.wheel]
packages = ["gridsnake"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]

[tool.ruff]
line-length = 100
target-version = "py310"
