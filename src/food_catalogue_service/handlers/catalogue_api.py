"""FastAPI application for the food catalogue service."""

import logging

from fastapi import FastAPI
from pydantic import BaseModel

from food_catalogue_service.handlers.error_handlers import register_error_handlers
from food_catalogue_service.models.catalogue_models import CataloguePage
from food_catalogue_service.models.menu_models import MenuItem
from food_catalogue_service.services.catalogue_service import CatalogueService

logger = logging.getLogger(__name__)


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str


def create_app(catalogue_service: CatalogueService) -> FastAPI:
    """Create and configure the food catalogue FastAPI application.

    Args:
        catalogue_service: Service for menu items and catalogue pages

    Returns:
        Configured FastAPI application
    """
    app = FastAPI(
        title="Food Catalogue Service",
        description="Menu items per restaurant and composed restaurant catalogue pages",
        version="1.0.0",
    )

    app.state.catalogue_service = catalogue_service
    register_error_handlers(app)

    @app.get("/health", response_model=HealthResponse, tags=["Health"])
    async def health_check() -> HealthResponse:
        """Health check endpoint."""
        return HealthResponse(status="healthy")

    @app.post(
        "/food-catalogue/items",
        response_model=MenuItem,
        status_code=201,
        tags=["Menu Items"],
    )
    async def add_menu_item(item: MenuItem) -> MenuItem:
        """Add a menu item to a restaurant's catalogue.

        Args:
            item: The menu item; ``id`` is generated when omitted

        Returns:
            The stored menu item
        """
        saved: MenuItem = await app.state.catalogue_service.add_menu_item(item)
        return saved

    @app.get("/food-catalogue/items", response_model=list[MenuItem], tags=["Menu Items"])
    async def list_menu_items() -> list[MenuItem]:
        """List all menu items."""
        items: list[MenuItem] = await app.state.catalogue_service.list_menu_items()
        return items

    @app.get(
        "/food-catalogue/restaurants/{restaurant_id}",
        response_model=CataloguePage,
        tags=["Catalogue"],
    )
    async def get_catalogue_page(restaurant_id: int) -> CataloguePage:
        """Get a restaurant's catalogue page: its menu items and its metadata.

        Args:
            restaurant_id: The restaurant to build the page for

        Returns:
            The composed catalogue page
        """
        logger.info(f"Catalogue page requested for restaurant {restaurant_id}")
        page: CataloguePage = await app.state.catalogue_service.build_catalogue_page(restaurant_id)
        return page

    return app
