"""Building blocks for cloud resource services: HTTP errors, responses, CORS, OpenAPI models and utilities."""

__version__ = "0.1.0"