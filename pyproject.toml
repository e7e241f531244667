[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "aptosclient"
version = "0.1.0"
description = "BCS encoding, addresses, type tags, transactions, authenticators and multisig payload builders for the Aptos blockchain"
requires-python = ">=3.10"
dependencies = []
keywords = ["aptos", "bcs", "blockchain", "move", "transactions", "multisig"]
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
    "Topic :: Software Development :: Libraries",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["aptosclient"]

[tool.pytest.ini_options]
addopts = "-ra"
