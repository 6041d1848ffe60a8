[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "gridskirmish"
version = "0.1.0"
description = "A small turn-based tactics game on a square grid: infantry, medics and snipers take turns to move, attack and act."
requires-python = ">=3.10"
dependencies = [
    "pygame",
]
keywords = ["game", "tactics", "turn-based", "strategy", "grid", "pygame"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: X11 Applications",
    "Environment :: MacOS X",
    "Environment :: Win32 (MS Windows)",
    "Intended Audience :: End Users/Desktop",
    "Natural Language :: English",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment :: Turn Based Strategy",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
gridskirmish = "gridskirmish.app:main"

[tool.hatch.build.targets.wheel]
packages = ["gridskirmish"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
