"""Shared OpenAPI models and route lookup in a specification."""