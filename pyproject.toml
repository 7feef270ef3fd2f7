[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "umachine"
version = "0.1.0"
description = "A Universal Machine emulator with encoders and a writer for small test programs"
requires-python = ">=3.10"
dependencies = []
keywords = ["universal machine", "emulator", "virtual machine", "bytecode"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Emulators",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
umachine-labwrite = "umachine.labwrite:main"

[tool.hatch.build.targets.wheel]
packages = ["umachine"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
