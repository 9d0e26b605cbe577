"""In-memory record store for restaurants."""

import logging
import threading
import uuid
from collections.abc import Callable, Iterable

from restaurant_api.errors import RestaurantNotFoundError
from restaurant_api.models import Restaurant

logger = logging.getLogger(__name__)

NOT_FOUND = -1
MAX_ID_ATTEMPTS = 5

SEED_RESTAURANTS = (
    {
        "id": "4Oj9hUC-EwrYdn9uOYeui",
        "name": "Puerto Viejo",
        "cuisine": "dominican",
        "hasTakeout": True,
    },
    {
        "id": "8NBUuV1hY1mUEomWxnws1",
        "name": "Sadas",
        "cuisine": "japanese",
        "hasTakeout": True,
    },
)


def generate_restaurant_id() -> str:
    """Generate a unique restaurant identifier.

    Returns:
        UUID-based restaurant ID
    """
    return str(uuid.uuid4())


def seed_restaurants() -> list[Restaurant]:
    """Build the restaurants every fresh store starts with."""
    return [Restaurant.model_validate(data) for data in SEED_RESTAURANTS]


class RestaurantStore:
    """Ordered, process-local collection of restaurants.

    Records keep insertion order. Each public method holds the store lock
    for its whole search-then-mutate sequence, so callers on different
    threads never observe a half-applied change.
    """

    def __init__(
        self,
        restaurants: Iterable[Restaurant] = (),
        id_factory: Callable[[], str] = generate_restaurant_id,
    ) -> None:
        self._restaurants: list[Restaurant] = list(restaurants)
        self._id_factory = id_factory
        self._lock = threading.Lock()

    @classmethod
    def with_seed_data(cls, **kwargs) -> "RestaurantStore":
        """Create a store holding the seed restaurants."""
        return cls(seed_restaurants(), **kwargs)

    def __len__(self) -> int:
        with self._lock:
            return len(self._restaurants)

    def _find_index(self, restaurant_id: str) -> int:
        for index, restaurant in enumerate(self._restaurants):
            if restaurant.id == restaurant_id:
                return index
        return NOT_FOUND

    def find_index(self, restaurant_id: str) -> int:
        """Position of the restaurant, or NOT_FOUND when absent."""
        with self._lock:
            return self._find_index(restaurant_id)

    def all(self) -> list[Restaurant]:
        """Every restaurant in insertion order."""
        with self._lock:
            return list(self._restaurants)

    def get(self, restaurant_id: str) -> Restaurant:
        """Get a restaurant by ID.

        Raises:
            RestaurantNotFoundError: If no restaurant has this ID
        """
        with self._lock:
            index = self._find_index(restaurant_id)
            if index == NOT_FOUND:
                raise RestaurantNotFoundError(restaurant_id)
            return self._restaurants[index]

    def add(self, fields: dict) -> Restaurant:
        """Assign a fresh ID to the given fields and append the restaurant.

        Args:
            fields: Restaurant fields keyed by attribute name, without an ID

        Returns:
            The stored restaurant
        """
        with self._lock:
            restaurant_id = self._new_id()
            restaurant = Restaurant.model_validate({**fields, "id": restaurant_id})
            self._restaurants.append(restaurant)
        logger.info(f"Created restaurant {restaurant.id}")
        return restaurant

    def _new_id(self) -> str:
        for _ in range(MAX_ID_ATTEMPTS):
            restaurant_id = self._id_factory()
            if self._find_index(restaurant_id) == NOT_FOUND:
                return restaurant_id
            logger.error(f"Generated restaurant id {restaurant_id} already exists")
        raise RuntimeError(
            f"Could not generate a unique restaurant id after {MAX_ID_ATTEMPTS} attempts"
        )

    def update(self, restaurant_id: str, changes: dict) -> Restaurant:
        """Shallow-merge changes over an existing restaurant.

        Fields absent from ``changes`` keep their current values. The ID
        never changes.

        Raises:
            RestaurantNotFoundError: If no restaurant has this ID
        """
        with self._lock:
            index = self._find_index(restaurant_id)
            if index == NOT_FOUND:
                raise RestaurantNotFoundError(restaurant_id)
            current = self._restaurants[index]
            merged = {**current.model_dump(), **changes, "id": current.id}
            updated = Restaurant.model_validate(merged)
            self._restaurants[index] = updated
        logger.info(f"Updated restaurant {restaurant_id}")
        return updated

    def remove(self, restaurant_id: str) -> Restaurant:
        """Remove exactly one restaurant, keeping all others in order.

        Raises:
            RestaurantNotFoundError: If no restaurant has this ID
        """
        with self._lock:
            index = self._find_index(restaurant_id)
            if index == NOT_FOUND:
                raise RestaurantNotFoundError(restaurant_id)
            removed = self._restaurants.pop(index)
        logger.info(f"Deleted restaurant {restaurant_id}")
        return removed
