[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "unikorncore"
version = "0.1.0"
description = "Building blocks for cloud resource services: OAuth2-style HTTP errors, JSON responses, CORS middleware, OpenAPI models and route lookup, retries, caching and a word trie."
requires-python = ">=3.10"
dependencies = []
keywords = [
    "openapi",
    "oauth2",
    "cors",
    "http",
    "middleware",
    "retry",
    "cache",
    "trie",
    "kubernetes",
]
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
    "Topic :: Software Development :: Libraries :: Application Frameworks",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["unikorncore"]

[tool.pytest.ini_options]
addopts = "-ra"
