[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "credenta"
version = "0.1.0"
description = "File-backed user and group credential store with role bitmasks, attributes, password policies and password hashing"
requires-python = ">=3.10"
dependencies = [
    "pynacl",
]
keywords = [
    "authentication",
    "credentials",
    "users",
    "groups",
    "roles",
    "password",
    "argon2",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: System Administrators",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Security",
    "Topic :: System :: Systems Administration :: Authentication/Directory",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["credenta"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
