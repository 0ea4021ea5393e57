[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "smzsync"
version = "0.1.0"
description = "Item and progress synchronisation for SMZ3 multiplayer: 65816 code emission, sync strategies and the player wire format"
requires-python = ">=3.10"
dependencies = []
keywords = ["snes", "smz3", "65816", "assembler", "multiplayer", "sync"]
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
    "Topic :: Games/Entertainment",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["smzsync"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "I", "B", "UP"]
