[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "kokos"
version = "0.1.0"
description = "A small Lisp-like language: lexer, object model, collector and tree-walking evaluator"
requires-python = ">=3.10"
dependencies = []
keywords = ["lisp", "interpreter", "lexer", "macros", "garbage-collector"]
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
    "Topic :: Software Development :: Interpreters",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["kokos"]

[tool.pytest.ini_options]
addopts = "-ra"
