[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "snipframe"
version = "0.2.0"
description = "A desktop screenshot tool: select a region of the screen, then copy it to the clipboard or save it to a file"
requires-python = ">=3.10"
keywords = ["screenshot", "screen-capture", "capture", "clipboard"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: X11 Applications",
    "Environment :: MacOS X",
    "Environment :: Win32 (MS Windows)",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Graphics :: Capture :: Screen Capture",
]
dependencies = [
    "pillow",
    "pygame",
]

[project.optional-dependencies]
test = [
    "pytest",
    "pillow",
    "pygame",
]

[project.scripts]
snipframe = "snipframe.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["snipframe"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
