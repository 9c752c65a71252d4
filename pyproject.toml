[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "slotring"
version = "0.1.0"
description = "Fixed-capacity slot storage with stable keys and a single-producer single-consumer ring buffer"
requires-python = ">=3.10"
dependencies = []
keywords = ["slab", "storage", "ring-buffer", "queue", "spsc", "stable-keys"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Libraries",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["slotring"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
