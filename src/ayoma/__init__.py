"""Ayoma: a small social network backed by a JSON-file datastore."""

__version__ = "1.0.0"
