[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "pitchmidi"
version = "0.1.0"
description = "Fixed-point FFT pitch detection that turns audio into MIDI notes"
requires-python = ">=3.10"
dependencies = []
keywords = ["pitch detection", "fft", "fixed point", "midi", "audio", "usb descriptors"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Multimedia :: Sound/Audio :: Analysis",
    "Topic :: Multimedia :: Sound/Audio :: MIDI",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
pitchmidi = "pitchmidi.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["pitchmidi"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
