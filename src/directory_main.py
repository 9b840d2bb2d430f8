"""Main application entry point for the restaurant directory service.

The directory registers itself with Consul on startup so the food catalogue
service can find it by name, and deregisters on shutdown.
"""

import logging
import os
import socket
import uuid
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from food_catalogue_service.discovery.base_discovery import ServiceInstance
from food_catalogue_service.discovery.consul_discovery import ConsulServiceDiscovery
from food_catalogue_service.handlers.directory_api import create_directory_app
from food_catalogue_service.observability import configure_logging, setup_observability
from food_catalogue_service.repositories.dynamodb import get_dynamodb_resource
from food_catalogue_service.repositories.restaurant_repository import RestaurantRepository
from food_catalogue_service.services.directory_service import DirectoryService

logger = logging.getLogger(__name__)


def create_registration_lifespan(
    discovery: ConsulServiceDiscovery,
    instance: ServiceInstance,
    service_id: str,
):
    """Build a FastAPI lifespan that keeps this instance registered in Consul.

    Args:
        discovery: Consul client used for registration
        instance: The address this instance is reachable at
        service_id: Unique Consul id for this instance

    Returns:
        Lifespan context manager factory for FastAPI
    """

    @asynccontextmanager
    async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
        await discovery.register(
            instance,
            service_id=service_id,
            health_check_url=f"{instance.base_url}/health",
        )
        try:
            yield
        finally:
            await discovery.deregister(service_id)

    return lifespan


def create_directory_application() -> FastAPI:
    """Create and configure the restaurant directory application.

    Returns:
        Configured FastAPI application instance
    """
    log_level = os.getenv("LOG_LEVEL", "INFO")
    configure_logging(log_level)

    logger.info("Initializing restaurant directory service...")

    dynamodb_resource = get_dynamodb_resource()
    restaurants_table = os.getenv("DYNAMODB_RESTAURANTS_TABLE", "restaurant-directory")
    restaurant_repository = RestaurantRepository(
        dynamodb_resource=dynamodb_resource, table_name=restaurants_table
    )
    directory_service = DirectoryService(restaurant_repository=restaurant_repository)

    logger.info(f"Repository configured - restaurants: {restaurants_table}")

    lifespan = None
    if os.getenv("REGISTER_WITH_CONSUL", "true").lower() == "true":
        service_name = os.getenv("SERVICE_NAME", "restaurant-directory")
        instance = ServiceInstance(
            service_name=service_name,
            host=os.getenv("ADVERTISED_HOST", socket.gethostname()),
            port=int(os.getenv("PORT", "8002")),
        )
        discovery = ConsulServiceDiscovery(
            consul_url=os.getenv("CONSUL_HTTP_ADDR", "http://localhost:8500")
        )
        service_id = f"{service_name}-{uuid.uuid4().hex[:8]}"
        lifespan = create_registration_lifespan(discovery, instance, service_id)
        logger.info(f"Will register {service_id} at {instance.base_url}")
    else:
        logger.warning("REGISTER_WITH_CONSUL disabled - catalogue service must use static discovery")

    app = create_directory_app(directory_service=directory_service, lifespan=lifespan)

    if os.getenv("OTEL_ENABLED", "false").lower() == "true":
        setup_observability(app, service_name="restaurant-directory")

    logger.info("Restaurant directory service initialized successfully")

    return app


if os.getenv("ENVIRONMENT") != "test":  # noqa: SIM108
    app = create_directory_application()
else:
    app = FastAPI()


if __name__ == "__main__":
    """Run the application with uvicorn when executed directly."""
    import uvicorn

    port = int(os.getenv("PORT", "8002"))
    host = os.getenv("HOST", "0.0.0.0")

    logger.info(f"Starting development server on {host}:{port}")

    uvicorn.run(
        "directory_main:app",
        host=host,
        port=port,
        reload=True,
        log_level=os.getenv("LOG_LEVEL", "info").lower(),
    )
