[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "mdquill"
version = "0.1.0"
description = "Markdown editing engine: documents, cursors, list and blockquote editing, auto-pairing and inline markup toggles"
requires-python = ">=3.10"
dependencies = []
keywords = ["markdown", "editor", "text", "writing", "lists"]
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
    "Topic :: Text Editors",
    "Topic :: Text Processing :: Markup :: Markdown",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["mdquill"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
