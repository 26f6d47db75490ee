[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "olmresolve"
version = "0.1.0"
description = "Operator bundle dependency resolution building blocks and a commit message checker for git histories"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "operators",
    "bundles",
    "dependency-resolution",
    "semver",
    "git",
    "commit-lint",
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
    "Topic :: Software Development :: Libraries :: Python Modules",
    "Topic :: Software Development :: Version Control :: Git",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
commitchecker = "olmresolve.commitchecker.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["olmresolve"]

[tool.hatch.build.targets.sdist]
include = ["olmresolve", "tests"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
