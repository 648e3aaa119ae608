"""
Application package initializer.

``main`` assembles the FastAPI application from the layers below it:
``api`` (routes and request handling), ``services`` (business logic),
``repositories`` (SQL) and ``core`` (configuration, logging, database
handle, middleware).
"""

from .main import app  # noqa: F401
