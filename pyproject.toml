[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "egtsproto"
version = "0.1.0"
description = "Encoding and decoding of EGTS telematics packets and subrecords, with receiver settings and storage connectors"
requires-python = ">=3.10"
keywords = ["egts", "telematics", "gnss", "navigation", "protocol", "tracking"]
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
    "Topic :: Communications",
    "Topic :: Software Development :: Libraries :: Python Modules",
]
dependencies = [
    "pyyaml",
    "redis",
    "pymysql",
    "pika",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["egtsproto"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]
