[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "jswitch"
version = "0.1.0"
description = "A command-line tool to manage and switch between multiple JDK installations"
requires-python = ">=3.10"
keywords = ["java", "jdk", "java-home", "version-manager", "temurin", "adoptium"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Build Tools",
]
dependencies = [
    "requests",
    "termcolor",
]

[project.optional-dependencies]
test = [
    "pytest",
    "responses",
]

[project.scripts]
jsh = "jswitch.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["jswitch"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
