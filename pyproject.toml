[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "picolab"
version = "0.1.0"
description = "Pure-Python e-paper image buffers, BMP loading, sensor fusion, UART handshake and control helpers for small embedded projects"
requires-python = ">=3.10"
dependencies = []
keywords = ["e-paper", "bmp", "madgwick", "imu", "ahrs", "embedded", "uart", "pwm"]
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
    "Topic :: Software Development :: Embedded Systems",
    "Topic :: Multimedia :: Graphics",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["picolab"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
