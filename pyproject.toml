[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "ps2kit"
version = "0.1.0"
description = "Read and write PlayStation 2 save icons (ICN) and icon.sys metadata, and size save folders"
requires-python = ">=3.10"
dependencies = [
    "pillow",
]
keywords = ["ps2", "playstation", "icn", "icon.sys", "save", "wavefront", "obj"]
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
    "Topic :: File Formats",
    "Topic :: Games/Entertainment",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["ps2kit"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
