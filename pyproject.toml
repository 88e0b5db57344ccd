[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "kiwistore"
version = "0.1.0"
description = "Building blocks of a Redis-compatible key-value storage engine: key encoding, value formats, hashing, slot routing and background tasks"
requires-python = ">=3.10"
dependencies = []
keywords = ["redis", "storage", "key-value", "murmur3", "crc16", "encoding"]
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
    "Topic :: Database :: Database Engines/Servers",
]

[project.optional-dependencies]
test = ["pytest", "pytest-asyncio"]

[tool.hatch.build.targets.wheel]
packages = ["kiwistore"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
