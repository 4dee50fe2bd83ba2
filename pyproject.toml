[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "fogpack"
version = "0.1.0"
description = "Encoding, timestamps and validators for the fog-pack binary data format"
requires-python = ">=3.10"
dependencies = []
keywords = ["serialization", "binary", "msgpack", "timestamp", "tai", "validation"]
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
    "Topic :: Software Development :: Libraries :: Python Modules",
    "Topic :: File Formats",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["fogpack"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
