"""Data models for the Restaurant API."""

from restaurant_api.models.restaurant import (
    ErrorMessage,
    Restaurant,
    RestaurantCreate,
    RestaurantUpdate,
)

__all__ = ["ErrorMessage", "Restaurant", "RestaurantCreate", "RestaurantUpdate"]
