[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "mariapp"
version = "0.1.0"
description = "Typed result sets, prepared statements, transactions and SQL time values for MariaDB-style clients"
requires-python = ">=3.10"
dependencies = []
keywords = ["mariadb", "mysql", "database", "sql", "result-set", "transaction", "prepared-statement"]
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
    "Topic :: Database",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["mariapp"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
