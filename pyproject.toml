[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "corplayer"
version = "0.1.0"
description = "Playback state, playlist metadata and an SQLite track library for a music player"
requires-python = ">=3.10"
dependencies = []
keywords = ["music", "player", "playlist", "audio", "sqlite", "metadata"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Sound/Audio :: Players",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["corplayer"]

[tool.pytest.ini_options]
addopts = "-ra"
