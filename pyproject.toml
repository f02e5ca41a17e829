[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "forcekit"
version = "0.1.0"
description = "A force multiplier for parallel AI development: spin up and tear down per-feature sessions"
requires-python = ">=3.11"
dependencies = []
keywords = ["worktree", "sessions", "development", "automation", "scripts"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Build Tools",
]

[project.optional-dependencies]
test = ["pytest", "hypothesis"]

[project.scripts]
force = "forcekit.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["forcekit"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py311"

[tool.mypy]
python_version = "3.11"
strict = true
