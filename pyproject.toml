[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "boundls"
version = "0.1.0"
description = "Building blocks for bound-constrained least squares: BLAS-style vector kernels, CGLS, sparse matrices and Harwell-Boeing file I/O."
requires-python = ">=3.10"
dependencies = []
keywords = [
    "least-squares",
    "cgls",
    "conjugate-gradient",
    "sparse-matrix",
    "harwell-boeing",
    "blas",
]
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
packages = ["boundls"]

[tool.hatch.build.targets.sdist]
include = ["boundls", "tests", "pyproject.toml", "README.md"]

[tool.pytest.ini_options]
addopts = "-ra"
