"""Loyalty points service parts: models, SQLite storage, token store, config, logging and middleware."""

__version__ = "0.1.0"