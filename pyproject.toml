[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "qanda"
version = "0.1.0"
description = "A small question-and-answer web service with an in-memory store"
requires-python = ">=3.10"
keywords = ["questions", "answers", "rest", "http", "starlette", "asgi"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Web Environment",
    "Framework :: AsyncIO",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Internet :: WWW/HTTP :: HTTP Servers",
]
dependencies = [
    "starlette",
    "uvicorn",
    "httpx",
]

[project.optional-dependencies]
test = [
    "pytest",
    "httpx",
]

[project.scripts]
qanda = "qanda.app:main"

[tool.hatch.build.targets.wheel]
packages = ["qanda"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
