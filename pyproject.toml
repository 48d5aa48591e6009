[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "uptimewatch"
version = "0.1.0"
description = "Periodically check websites, record their status in SQLite and serve a status page."
requires-python = ">=3.10"
dependencies = []
keywords = ["uptime", "monitoring", "http", "status-page", "sqlite"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Environment :: Web Environment",
    "Intended Audience :: System Administrators",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Networking :: Monitoring",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
uptimewatch = "uptimewatch.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["uptimewatch"]

[tool.pytest.ini_options]
addopts = "-ra"
