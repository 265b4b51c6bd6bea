[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "sclls"
version = "0.0.1"
description = "A small language server that finds sphinx-needs requirement IDs in documentation sources"
requires-python = ">=3.10"
dependencies = []
keywords = ["lsp", "language-server", "sphinx-needs", "requirements", "docs-as-code"]
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
    "Topic :: Software Development :: Documentation",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
sclls = "sclls.server:main"

[tool.hatch.build.targets.wheel]
packages = ["sclls"]

[tool.pytest.ini_options]
addopts = "-ra"
