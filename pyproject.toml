[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "icxrustc"
version = "0.1.0"
description = "Intel-style command-line wrapper around the Rust compiler"
requires-python = ">=3.10"
dependencies = []
keywords = ["rustc", "compiler", "wrapper", "msvc", "icx", "build"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: POSIX :: Linux",
    "Operating System :: Microsoft :: Windows",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Build Tools",
    "Topic :: Software Development :: Compilers",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
icx-rustc = "icxrustc.main:main"

[tool.hatch.build.targets.wheel]
packages = ["icxrustc"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
