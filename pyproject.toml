[build-system]
requires = ["setuptools>=61.0"]
build-backend = "setuptools.build_meta"

[project]
name = "cobrac"
version = "0.1.0"
description = "A tiny compiler for a toy language that emits x86-64 NASM assembly"
requires-python = ">=3.10"
dependencies = []
keywords = ["compiler", "assembly", "nasm", "x86-64", "toy-language"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Operating System :: POSIX :: Linux",
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

[project.scripts]
cobrac = "cobrac.cli:main"

[tool.setuptools.packages.find]
include = ["cobrac*"]

[tool.pytest.ini_options]
addopts = "-ra"
