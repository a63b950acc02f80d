[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "pricenet"
version = "0.1.0"
description = "A small dense neural network for predicting closing prices from tabular CSV data"
requires-python = ">=3.10"
dependencies = []
keywords = ["neural-network", "regression", "time-series", "price-prediction", "machine-learning"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Science/Research",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Scientific/Engineering :: Artificial Intelligence",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
pricenet = "pricenet.pipeline:main"

[tool.hatch.build.targets.wheel]
packages = ["pricenet"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
