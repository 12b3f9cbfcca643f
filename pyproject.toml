[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "panpcs"
version = "0.1.0"
description = "Building blocks for a personal cloud storage (PCS/pan) client: error types, request signing, expiring caches and response parsers."
requires-python = ">=3.10"
dependencies = []
keywords = [
    "pcs",
    "netdisk",
    "cloud-storage",
    "signature",
    "cache",
    "rapid-upload",
    "offline-download",
]
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
    "Topic :: Internet :: WWW/HTTP",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
panpcs-ndk-gcc = "panpcs.ndkbuild:main"

[tool.hatch.build.targets.wheel]
packages = ["panpcs"]

[tool.hatch.build.targets.sdist]
include = ["panpcs", "tests", "pyproject.toml"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
