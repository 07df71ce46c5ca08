[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "blueprint"
version = "0.1.0"
description = "A small scene-driven 2D game framework on pygame: JSON scene files, shared texture resources, a scrolling camera and tile sprites."
requires-python = ">=3.10"
keywords = ["game", "2d", "scenes", "platformer", "pygame", "textures", "camera", "sprites"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment :: Side-Scrolling/Arcade Games",
    "Topic :: Software Development :: Libraries :: pygame",
]
dependencies = [
    "pygame",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["blueprint"]

[tool.pytest.ini_options]
addopts = "-ra"
