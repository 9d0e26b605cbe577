"""HTTP-facing helpers for the Restaurant API."""

from restaurant_api.api.error_handlers import register_error_handlers

__all__ = ["register_error_handlers"]
