"""Directory service for managing restaurant metadata."""

import logging

from food_catalogue_service.models.restaurant_models import RestaurantMetadata
from food_catalogue_service.repositories.restaurant_repository import RestaurantRepository

logger = logging.getLogger(__name__)


class DirectoryService:
    """Service owning restaurant metadata.

    Other services only see this data through the directory's HTTP API.
    """

    def __init__(self, restaurant_repository: RestaurantRepository) -> None:
        """Initialize the DirectoryService.

        Args:
            restaurant_repository: Repository for restaurant metadata
        """
        self.restaurant_repository = restaurant_repository

    async def add_restaurant(self, restaurant: RestaurantMetadata) -> RestaurantMetadata:
        """Add or replace a restaurant.

        Args:
            restaurant: The restaurant metadata to store

        Returns:
            The stored restaurant metadata
        """
        saved = self.restaurant_repository.save(restaurant)
        logger.info(f"Added restaurant {saved.id}: {saved.name}")
        return saved

    async def list_restaurants(self) -> list[RestaurantMetadata]:
        """List all restaurants, empty list if none exist."""
        return self.restaurant_repository.find_all()

    async def fetch_restaurant(self, restaurant_id: int) -> RestaurantMetadata | None:
        """Get a restaurant by id.

        Args:
            restaurant_id: The restaurant ID

        Returns:
            RestaurantMetadata if found, None otherwise
        """
        return self.restaurant_repository.find_by_id(restaurant_id)
