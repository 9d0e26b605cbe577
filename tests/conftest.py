"""Shared fixtures: a fresh store, app and async HTTP client per test."""

import pytest
from httpx import ASGITransport, AsyncClient

from restaurant_api.config import Config
from restaurant_api.server import create_app
from restaurant_api.services import RestaurantService, RestaurantStore


@pytest.fixture
def config():
    """Default settings, ignoring any local .env file."""
    return Config(_env_file=None)


@pytest.fixture
def store():
    """A store holding only the seed restaurants."""
    return RestaurantStore.with_seed_data()


@pytest.fixture
def service(store):
    return RestaurantService(store)


@pytest.fixture
def app(config, store):
    return create_app(config, store=store)


@pytest.fixture
async def client(app):
    """HTTP client talking to the app in-process."""
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c
