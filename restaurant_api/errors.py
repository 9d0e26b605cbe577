"""Error hierarchy for the Restaurant API.

Every error raised inside a request carries the HTTP status it maps to and
renders as ``{"message": ...}``. ``ContractError`` is only raised while the
app is being built and never reaches a client.
"""

from restaurant_api.models import ErrorMessage


class RestaurantApiError(Exception):
    """Base exception for all Restaurant API errors."""

    def __init__(self, message: str, http_status: int = 500):
        super().__init__(message)
        self.message = message
        self.http_status = http_status

    def to_response(self) -> dict:
        """Convert to the error payload sent to clients."""
        return ErrorMessage(message=self.message).model_dump()


class RestaurantNotFoundError(RestaurantApiError):
    """No restaurant with the requested id exists in the store."""

    def __init__(self, restaurant_id: str):
        super().__init__(f"Restaurant with id '{restaurant_id}' not found", 404)
        self.restaurant_id = restaurant_id


class ContractError(RestaurantApiError):
    """The API contract is malformed or names an operation with no handler."""

    def __init__(self, message: str):
        super().__init__(message, 500)
