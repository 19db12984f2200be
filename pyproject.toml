[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "millipede"
version = "0.8.0"
description = "Building blocks of an NTRIP caster: bit fields, HTTP auth, GELF records, endpoints, IP prefix quotas, auth files, YAML configuration and static file serving"
requires-python = ">=3.10"
dependencies = [
    "pyyaml",
]
keywords = ["ntrip", "caster", "gnss", "rtcm", "gelf", "configuration"]
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
    "Topic :: Internet",
    "Topic :: Scientific/Engineering :: GIS",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["millipede"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
