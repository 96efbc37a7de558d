[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "chromalex"
version = "0.1.0"
description = "Regex-driven state-machine lexers producing typed token streams for syntax highlighting"
requires-python = ">=3.10"
keywords = ["lexer", "tokenizer", "syntax highlighting", "regex", "tokens"]
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
    "Topic :: Text Processing :: Filters",
    "Topic :: Software Development :: Libraries :: Python Modules",
]
dependencies = [
    "regex",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["chromalex"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
