[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "paygate"
version = "0.1.0"
description = "Payment gateway with rate-based bank selection, transaction tracking and simulated bank back ends"
requires-python = ">=3.10"
keywords = ["payments", "gateway", "acquiring", "rates", "asgi", "starlette"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Framework :: AsyncIO",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Internet :: WWW/HTTP :: HTTP Servers",
    "Topic :: Office/Business :: Financial",
]
dependencies = [
    "starlette>=0.27",
    "httpx>=0.24",
    "uvicorn>=0.22",
]

[project.optional-dependencies]
test = [
    "pytest>=7.0",
    "pytest-asyncio>=0.21",
]

[project.scripts]
paygate-gateway = "paygate.gateway_app:main"
paygate-rates = "paygate.rates_app:main"

[tool.hatch.build.targets.wheel]
packages = ["paygate"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
