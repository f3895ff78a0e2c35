[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "overlog"
version = "0.1.0"
description = "Terminal-based tool for overlaying telemetry data onto video files"
requires-python = ">=3.10"
keywords = ["telemetry", "video", "gps", "ffmpeg", "overlay", "gpx"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Video",
]
dependencies = [
    "pillow",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
overlog = "overlog.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["overlog"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
