"""Unit test configuration.

Unit tests never build the FastAPI app; they exercise domain services,
application handlers and adapters directly.
"""
