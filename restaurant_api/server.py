"""FastAPI server exposing the restaurant contract."""

import logging
import sys
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from restaurant_api.api import register_error_handlers
from restaurant_api.config import Config, get_config, setup_logging
from restaurant_api.contract import Handler, bind_contract, load_contract
from restaurant_api.errors import ContractError
from restaurant_api.models import RestaurantCreate, RestaurantUpdate
from restaurant_api.services import RestaurantService, RestaurantStore

logger = logging.getLogger(__name__)

# Component schema name in the contract -> model validating request bodies
SCHEMA_MODELS = {
    "NewRestaurant": RestaurantCreate,
    "RestaurantPatch": RestaurantUpdate,
}


def create_app(
    config: Config | None = None,
    store: RestaurantStore | None = None,
    handlers: dict[str, Handler] | None = None,
) -> FastAPI:
    """Build the application and bind the contract to its operations.

    Args:
        config: Settings to use (defaults to the global config)
        store: Store to serve (defaults to a fresh, optionally seeded store)
        handlers: operationId to handler table (defaults to the
            RestaurantService operations over ``store``)

    Raises:
        ContractError: If the contract cannot be loaded or bound
    """
    config = config or get_config()
    if store is None:
        store = RestaurantStore.with_seed_data() if config.load_seed_data else RestaurantStore()
    if handlers is None:
        handlers = RestaurantService(store).operations()

    @asynccontextmanager
    async def lifespan(_app: FastAPI):
        """Application lifespan manager."""
        logger.info(
            f"Starting Restaurant API on {config.server_host}:{config.server_port}"
        )
        logger.info(f"Serving {len(store)} restaurants")
        yield
        logger.info("Shutting down Restaurant API")

    app = FastAPI(
        title="Restaurant API",
        description="CRUD API for restaurants",
        version="1.0.0",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_error_handlers(app)

    @app.get("/health", include_in_schema=False)
    async def health_check():
        """Health check endpoint for monitoring."""
        return {"status": "healthy", "service": "restaurant-api"}

    contract = load_contract(config.contract_path)
    bind_contract(app, contract, handlers, SCHEMA_MODELS)

    app.state.store = store
    return app


def run_server() -> None:
    """Run the FastAPI server using uvicorn.

    This is the main entry point for the server. A contract that cannot be
    bound ends the process with exit code 1 before uvicorn starts. Failure
    to bind the listening socket is logged by uvicorn, which then exits
    with code 1 itself.
    """

    # Setup logging
    setup_logging()

    # Get config
    config = get_config()

    try:
        app = create_app(config)
    except ContractError as e:
        logger.error(f"Failed to load API contract: {e.message}")
        sys.exit(1)

    uvicorn.run(
        app,
        host=config.server_host,
        port=config.server_port,
        log_level=config.log_level.lower(),
    )


if __name__ == "__main__":
    run_server()
