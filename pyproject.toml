[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "geoview"
version = "0.1.0"
description = "Geographic map model: coordinates, web-mercator tiles, tile layer URLs, item tree, camera animation and flight telemetry helpers"
requires-python = ">=3.10"
dependencies = []
keywords = ["gis", "map", "tiles", "geography", "quadkey", "camera", "telemetry"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: GIS",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["geoview"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
