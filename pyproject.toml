[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "gkgraph"
version = "0.1.0"
description = "CSR sparse graphs with METIS/IJV file I/O, frequent itemsets, an integer hash table and GNU-style option parsing"
requires-python = ">=3.10"
dependencies = []
keywords = ["graph", "sparse", "csr", "metis", "itemsets", "getopt", "hash-table"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Science/Research",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Mathematics",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["gkgraph"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
