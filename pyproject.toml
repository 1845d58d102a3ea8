[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "dvrouter"
version = "0.1.0"
description = "IPv4 network addressing and router interface configuration, with compiler identification from predefined macros"
requires-python = ">=3.10"
dependencies = []
keywords = ["ipv4", "cidr", "network", "router", "configuration", "compiler", "macros"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: System Administrators",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Networking",
    "Topic :: Software Development :: Build Tools",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["dvrouter"]

[tool.pytest.ini_options]
addopts = "-ra"
