[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "rdpcore"
version = "0.1.0"
description = "Reality Display Processor per-worker state and colour combiner model"
requires-python = ">=3.10"
dependencies = []
keywords = ["emulator", "rdp", "display processor", "color combiner", "chroma key"]
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
    "Topic :: System :: Emulators",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["rdpcore"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
