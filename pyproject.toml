[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "cshell"
version = "1.0.0"
description = "A small interactive shell with built-in file, text, calculator, date and to-do commands"
requires-python = ">=3.10"
dependencies = []
keywords = ["shell", "command-line", "interpreter", "coreutils", "pipeline"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Shells",
    "Topic :: Utilities",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
cshell = "cshell.shell:main"
cshell-terminal = "cshell.launcher:main"

[tool.hatch.build.targets.wheel]
packages = ["cshell"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
