"""Restaurant operations invoked by the contract dispatcher."""

import logging

from fastapi import status

from restaurant_api.contract import Handler, OperationReply, OperationRequest
from restaurant_api.errors import RestaurantNotFoundError
from restaurant_api.models import RestaurantCreate, RestaurantUpdate
from restaurant_api.services.restaurant_store import RestaurantStore

logger = logging.getLogger(__name__)


class RestaurantService:
    """List, get, create, update and delete restaurants in a store.

    None of the operations awaits between looking a record up and changing
    it, so handlers running on one event loop cannot interleave.
    """

    def __init__(self, store: RestaurantStore) -> None:
        """Initialize the service.

        Args:
            store: Store the operations read and mutate
        """
        self.store = store

    def operations(self) -> dict[str, Handler]:
        """Map each contract operationId to the method implementing it."""
        return {
            "getRestaurants": self.list_restaurants,
            "getRestaurant": self.get_restaurant,
            "addRestaurant": self.add_restaurant,
            "updateRestaurant": self.update_restaurant,
            "replaceRestaurant": self.update_restaurant,
            "deleteRestaurant": self.delete_restaurant,
        }

    async def list_restaurants(
        self, _request: OperationRequest, reply: OperationReply
    ) -> None:
        reply.send(self.store.all())

    async def get_restaurant(
        self, request: OperationRequest, reply: OperationReply
    ) -> None:
        restaurant_id = request.params["id"]
        try:
            reply.send(self.store.get(restaurant_id))
        except RestaurantNotFoundError as e:
            self._not_found(reply, e)

    async def add_restaurant(
        self, request: OperationRequest, reply: OperationReply
    ) -> None:
        body: RestaurantCreate = request.body
        restaurant = self.store.add(body.model_dump())
        reply.code(status.HTTP_201_CREATED).send(restaurant)

    async def update_restaurant(
        self, request: OperationRequest, reply: OperationReply
    ) -> None:
        restaurant_id = request.params["id"]
        body: RestaurantUpdate = request.body
        try:
            self.store.update(restaurant_id, body.changes())
        except RestaurantNotFoundError as e:
            self._not_found(reply, e)
            return
        reply.code(status.HTTP_204_NO_CONTENT).send()

    async def delete_restaurant(
        self, request: OperationRequest, reply: OperationReply
    ) -> None:
        restaurant_id = request.params["id"]
        try:
            self.store.remove(restaurant_id)
        except RestaurantNotFoundError as e:
            self._not_found(reply, e)
            return
        reply.code(status.HTTP_204_NO_CONTENT).send()

    @staticmethod
    def _not_found(reply: OperationReply, error: RestaurantNotFoundError) -> None:
        logger.warning(error.message)
        reply.code(error.http_status).send(error.to_response())
