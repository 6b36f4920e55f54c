[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "orlafs"
version = "0.1.0"
description = "File system operations tool that reports every result as JSON"
requires-python = ">=3.10"
keywords = ["filesystem", "files", "json", "cli", "tool"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Filesystems",
    "Topic :: Utilities",
]
dependencies = []

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
orlafs = "orlafs.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["orlafs"]

[tool.pytest.ini_options]
addopts = "-ra"
