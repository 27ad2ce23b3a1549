[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "lorastack"
version = "0.1.0"
description = "LoRaWAN end-device building blocks: compact float encodings, tick arithmetic, a job scheduler, radio parameter sets, regional constants and US-like channel plans"
requires-python = ">=3.10"
dependencies = []
keywords = ["lorawan", "lora", "iot", "radio", "scheduler", "channel-plan"]
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

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["lorastack"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
