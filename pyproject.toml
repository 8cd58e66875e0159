[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "xvtools"
version = "0.1.0"
description = "Binary layout helpers for a small RISC-V teaching kernel, a shell command parser, a free-list heap allocator and an echo command."
requires-python = ">=3.10"
dependencies = []
keywords = [
    "shell",
    "parser",
    "elf",
    "virtio",
    "risc-v",
    "sv39",
    "malloc",
    "teaching",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Utilities",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
xv-echo = "xvtools.echo:main"

[tool.hatch.build.targets.wheel]
packages = ["xvtools"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 88
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
