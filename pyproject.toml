[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "dcv"
version = "0.1.0"
description = "Docker and Docker Compose inspection toolkit: listings of containers, projects, images, networks and volumes, log streaming, and key and command building blocks"
requires-python = ">=3.11"
dependencies = []
keywords = ["docker", "docker-compose", "containers", "dind", "logs"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Intended Audience :: System Administrators",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Systems Administration",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["dcv"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]

[tool.ruff]
line-length = 100
target-version = "py311"

[tool.mypy]
python_version = "3.11"
strict = true
