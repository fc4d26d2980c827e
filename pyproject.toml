[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "arenanet"
version = "0.1.0"
description = "A small networked top-down arena game with a fixed-step simulation, UDP client and server, and a software renderer."
requires-python = ">=3.10"
keywords = ["game", "arena", "multiplayer", "udp", "simulation", "software-renderer"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: End Users/Desktop",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment :: Arcade",
]
dependencies = [
    "numpy",
    "pygame",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
arenanet = "arenanet.app:main"

[tool.hatch.build.targets.wheel]
packages = ["arenanet"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
