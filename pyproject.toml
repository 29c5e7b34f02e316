[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "revad"
version = "0.1.0"
description = "Reverse-mode automatic differentiation over scalar, vector and matrix expressions"
requires-python = ">=3.10"
dependencies = [
    "numpy",
]
keywords = [
    "automatic differentiation",
    "reverse mode",
    "autodiff",
    "gradient",
    "adjoint",
    "log-density",
]
classifiers = [
    "Development Status :: 3 - Alpha",
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
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["revad"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
