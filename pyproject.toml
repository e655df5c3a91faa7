[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "uacodec"
version = "0.1.0"
description = "Binary encoding and decoding of OPC UA built-in data types"
requires-python = ">=3.10"
dependencies = []
keywords = ["opcua", "opc-ua", "binary", "codec", "node-id", "serialization"]
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
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["uacodec"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
