"""FastAPI application for the restaurant directory service."""

import logging
from collections.abc import Callable
from contextlib import AbstractAsyncContextManager

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel

from food_catalogue_service.handlers.error_handlers import register_error_handlers
from food_catalogue_service.models.restaurant_models import RestaurantMetadata
from food_catalogue_service.services.directory_service import DirectoryService

logger = logging.getLogger(__name__)


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str


def create_directory_app(
    directory_service: DirectoryService,
    lifespan: Callable[[FastAPI], AbstractAsyncContextManager[None]] | None = None,
) -> FastAPI:
    """Create and configure the restaurant directory FastAPI application.

    Args:
        directory_service: Service owning restaurant metadata
        lifespan: Optional lifespan context, e.g. for service registration

    Returns:
        Configured FastAPI application
    """
    app = FastAPI(
        title="Restaurant Directory Service",
        description="Restaurant metadata: add, list and fetch by id",
        version="1.0.0",
        lifespan=lifespan,
    )

    app.state.directory_service = directory_service
    register_error_handlers(app)

    @app.get("/health", response_model=HealthResponse, tags=["Health"])
    async def health_check() -> HealthResponse:
        """Health check endpoint, also polled by Consul."""
        return HealthResponse(status="healthy")

    @app.post(
        "/restaurants",
        response_model=RestaurantMetadata,
        status_code=201,
        tags=["Restaurants"],
    )
    async def add_restaurant(restaurant: RestaurantMetadata) -> RestaurantMetadata:
        """Add a restaurant to the directory."""
        saved: RestaurantMetadata = await app.state.directory_service.add_restaurant(restaurant)
        return saved

    @app.get("/restaurants", response_model=list[RestaurantMetadata], tags=["Restaurants"])
    async def list_restaurants() -> list[RestaurantMetadata]:
        """List all restaurants."""
        restaurants: list[RestaurantMetadata] = await app.state.directory_service.list_restaurants()
        return restaurants

    @app.get(
        "/restaurants/{restaurant_id}",
        response_model=RestaurantMetadata,
        tags=["Restaurants"],
    )
    async def fetch_restaurant(restaurant_id: int) -> RestaurantMetadata:
        """Fetch a restaurant by id.

        Raises:
            HTTPException: 404 if the restaurant does not exist
        """
        restaurant = await app.state.directory_service.fetch_restaurant(restaurant_id)
        if restaurant is None:
            raise HTTPException(status_code=404, detail=f"Restaurant {restaurant_id} not found")
        return restaurant

    return app
