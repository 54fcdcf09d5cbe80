[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "px4-control"
version = "0.1.0"
description = "Setpoint types, component registration and vehicle control helpers for PX4 flight controllers over topic-based publish/subscribe"
requires-python = ">=3.10"
dependencies = []
keywords = ["px4", "drone", "uav", "setpoint", "vtol", "flight-control"]
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
    "Topic :: Scientific/Engineering :: Interface Engine/Protocol Translator",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["px4_control"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
