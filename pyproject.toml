[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "pizarra"
version = "0.1.0"
description = "A Linda-style tuple space over synchronous TCP links, with a few concurrency building blocks"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "linda",
    "tuple space",
    "blackboard",
    "concurrency",
    "monitor",
    "bounded queue",
    "sockets",
]
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
    "Topic :: System :: Distributed Computing",
    "Topic :: Education",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
pizarra-linda = "pizarra.linda_server:main"
pizarra-storage = "pizarra.storage_server:main"
pizarra-admin = "pizarra.clients:admin_main"
pizarra-simple = "pizarra.clients:simple_main"
pizarra-load = "pizarra.clients:load_main"
pizarra-interactive = "pizarra.clients:interactive_main"
pizarra-bench = "pizarra.clients:bench_main"
pizarra-vowels-server = "pizarra.vowels:server_main"
pizarra-vowels-client = "pizarra.vowels:client_main"
pizarra-greeters = "pizarra.greeter:main"
pizarra-queue-demo = "pizarra.bounded_queue:main"

[tool.hatch.build.targets.wheel]
packages = ["pizarra"]

[tool.pytest.ini_options]
addopts = "-ra"
