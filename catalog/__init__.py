"""Catalog domain model and use cases."""

__version__ = "1.0.0"
