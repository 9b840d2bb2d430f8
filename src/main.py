"""Main application entry point for the food catalogue service.

This module provides the FastAPI application factory and configuration
for running the service locally or in production.
"""

import logging
import os

from fastapi import FastAPI

from food_catalogue_service.discovery.base_discovery import ServiceDiscovery
from food_catalogue_service.discovery.consul_discovery import ConsulServiceDiscovery
from food_catalogue_service.discovery.static_discovery import StaticServiceDiscovery
from food_catalogue_service.handlers.catalogue_api import create_app
from food_catalogue_service.observability import configure_logging, setup_observability
from food_catalogue_service.repositories.dynamodb import get_dynamodb_resource
from food_catalogue_service.repositories.menu_item_repository import MenuItemRepository
from food_catalogue_service.services.catalogue_service import CatalogueService
from food_catalogue_service.services.restaurant_directory_client import (
    DEFAULT_SERVICE_NAME,
    RestaurantDirectoryClient,
)

logger = logging.getLogger(__name__)


def create_service_discovery() -> ServiceDiscovery:
    """Create the service discovery backend from environment variables.

    Returns:
        Consul-backed discovery by default, static discovery when
        DISCOVERY_BACKEND is "static"

    Raises:
        ValueError: If the backend is unknown or static instances are missing
    """
    backend = os.getenv("DISCOVERY_BACKEND", "consul").lower()

    if backend == "consul":
        consul_url = os.getenv("CONSUL_HTTP_ADDR", "http://localhost:8500")
        logger.info(f"Using Consul service discovery at {consul_url}")
        return ConsulServiceDiscovery(consul_url=consul_url)

    if backend == "static":
        instances = os.getenv("STATIC_SERVICE_INSTANCES", "")
        if not instances:
            raise ValueError("STATIC_SERVICE_INSTANCES must be set when DISCOVERY_BACKEND=static")
        logger.info(f"Using static service discovery: {instances}")
        return StaticServiceDiscovery.from_string(instances)

    raise ValueError(f"Unknown DISCOVERY_BACKEND: {backend}")


def create_application() -> FastAPI:
    """Create and configure the FastAPI application with all dependencies.

    This factory function:
    1. Configures logging
    2. Creates the DynamoDB resource and menu item repository
    3. Creates service discovery and the restaurant directory client
    4. Creates the catalogue service
    5. Creates the FastAPI app
    6. Sets up observability when enabled

    Returns:
        Configured FastAPI application instance
    """
    log_level = os.getenv("LOG_LEVEL", "INFO")
    configure_logging(log_level)

    logger.info("Initializing food catalogue service...")

    dynamodb_resource = get_dynamodb_resource()
    items_table = os.getenv("DYNAMODB_MENU_ITEMS_TABLE", "food-catalogue-items")
    menu_item_repository = MenuItemRepository(
        dynamodb_resource=dynamodb_resource, table_name=items_table
    )

    logger.info(f"Repository configured - menu items: {items_table}")

    directory_service_name = os.getenv("DIRECTORY_SERVICE_NAME", DEFAULT_SERVICE_NAME)
    directory_timeout = float(os.getenv("DIRECTORY_TIMEOUT_SECONDS", "2.0"))
    directory_client = RestaurantDirectoryClient(
        discovery=create_service_discovery(),
        service_name=directory_service_name,
        timeout_seconds=directory_timeout,
    )

    logger.info(
        f"Directory client configured - service: {directory_service_name}, "
        f"timeout: {directory_timeout}s"
    )

    concurrent_fetch = os.getenv("PAGE_FETCH_CONCURRENT", "true").lower() == "true"
    catalogue_service = CatalogueService(
        menu_item_repository=menu_item_repository,
        directory_client=directory_client,
        concurrent_fetch=concurrent_fetch,
    )

    app = create_app(catalogue_service=catalogue_service)

    if os.getenv("OTEL_ENABLED", "false").lower() == "true":
        setup_observability(app, service_name="food-catalogue")

    logger.info("Food catalogue service initialized successfully")

    return app


# Create the FastAPI application instance (only when not in test mode)
# This prevents the app from being created during test collection
if os.getenv("ENVIRONMENT") != "test":  # noqa: SIM108
    app = create_application()
else:
    app = FastAPI()


if __name__ == "__main__":
    """Run the application with uvicorn when executed directly."""
    import uvicorn

    port = int(os.getenv("PORT", "8001"))
    host = os.getenv("HOST", "0.0.0.0")

    logger.info(f"Starting development server on {host}:{port}")

    uvicorn.run(
        "main:app",
        host=host,
        port=port,
        reload=True,
        log_level=os.getenv("LOG_LEVEL", "info").lower(),
    )
