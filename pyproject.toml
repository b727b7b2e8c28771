[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "imgpatch"
version = "0.1.0"
description = "Small tools for patching binary images: same-length byte replacement and trailing-zero trimming"
requires-python = ">=3.10"
dependencies = []
keywords = ["binary", "patch", "sed", "image", "truncate", "block-device"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Intended Audience :: System Administrators",
    "Operating System :: POSIX",
    "Operating System :: POSIX :: Linux",
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
bxhsed = "imgpatch.bxhsed:main"
shrink = "imgpatch.shrink:main"

[tool.hatch.build.targets.wheel]
packages = ["imgpatch"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
