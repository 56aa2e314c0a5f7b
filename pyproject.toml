[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "chatcore"
version = "0.1.0"
description = "Core pieces of a command-line chat client: CLI states, an application lifecycle runner and logging pushed over ZeroMQ"
requires-python = ">=3.10"
keywords = ["chat", "cli", "logging", "zeromq", "state machine"]
classifiers = [
    "Development Status :: 2 - Pre-Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Communications :: Chat",
    "Topic :: System :: Logging",
]
dependencies = [
    "pyzmq",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
chatcore = "chatcore.cli:main"
chatcore-log-viewer = "chatcore.log_viewer:main"

[tool.hatch.build.targets.wheel]
packages = ["chatcore"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
