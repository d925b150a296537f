[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "uclc"
version = "0.1.0"
description = "Building blocks of a small C compiler: tokens, operators, C types, struct layout, symbol tables and x86 data/label assembly output."
requires-python = ">=3.10"
dependencies = []
keywords = [
    "c",
    "compiler",
    "type-system",
    "symbol-table",
    "x86",
    "assembly",
    "gas",
    "masm",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Compilers",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["uclc"]

[tool.hatch.build.targets.sdist]
include = ["uclc", "tests", "README.md", "pyproject.toml"]

[tool.pytest.ini_options]
addopts = "-ra"
