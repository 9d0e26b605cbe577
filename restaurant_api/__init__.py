"""Restaurant API - contract-driven CRUD service for restaurants."""

__version__ = "1.0.0"
