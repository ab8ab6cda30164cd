[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "nexuslink"
version = "0.1.0"
description = "Component symbol registries, dependency metadata and a minimal JSON codec"
requires-python = ">=3.10"
dependencies = []
keywords = ["symbols", "linking", "metadata", "dependencies", "json", "components"]
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
    "Topic :: Software Development :: Libraries",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
nexuslink-demo = "nexuslink.demo:main"

[tool.hatch.build.targets.wheel]
packages = ["nexuslink"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
