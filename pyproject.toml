[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "flagbits"
version = "2.9.3"
description = "Typed sets of named bit flags with set operations, iteration and a text format."
requires-python = ">=3.10"
dependencies = []
keywords = ["bit", "bitmask", "bitflags", "flags"]
classifiers = [
    "Development Status :: 5 - Production/Stable",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["flagbits"]

[tool.hatch.build.targets.sdist]
include = ["flagbits", "tests", "pyproject.toml"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
