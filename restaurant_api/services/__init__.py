"""Services for the Restaurant API."""

from restaurant_api.services.restaurant_service import RestaurantService
from restaurant_api.services.restaurant_store import (
    NOT_FOUND,
    RestaurantStore,
    seed_restaurants,
)

__all__ = ["NOT_FOUND", "RestaurantService", "RestaurantStore", "seed_restaurants"]
