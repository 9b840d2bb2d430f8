"""Catalogue service for assembling restaurant catalogue pages."""

import asyncio
import logging
import time
from typing import Any

from food_catalogue_service.exceptions import CatalogueServiceError, InvalidRestaurantIdError
from food_catalogue_service.models.catalogue_models import CataloguePage
from food_catalogue_service.models.menu_models import MenuItem
from food_catalogue_service.models.restaurant_models import RestaurantMetadata
from food_catalogue_service.observability import traced
from food_catalogue_service.observability.metrics import record_page_failure, record_page_success
from food_catalogue_service.repositories.menu_item_repository import MenuItemRepository
from food_catalogue_service.services.restaurant_directory_client import RestaurantDirectoryClient

logger = logging.getLogger(__name__)


class CatalogueService:
    """Service for menu items and the catalogue pages built from them.

    A catalogue page combines the menu items stored locally for a restaurant
    with that restaurant's metadata, fetched fresh from the directory service
    on every request. A page is only returned when both sources succeed.
    """

    def __init__(
        self,
        menu_item_repository: MenuItemRepository,
        directory_client: RestaurantDirectoryClient,
        concurrent_fetch: bool = True,
    ) -> None:
        """Initialize the CatalogueService.

        Args:
            menu_item_repository: Repository for menu items
            directory_client: Client for the restaurant directory service
            concurrent_fetch: Query the store and the directory at the same time
        """
        self.menu_item_repository = menu_item_repository
        self.directory_client = directory_client
        self.concurrent_fetch = concurrent_fetch

    async def add_menu_item(self, item: MenuItem) -> MenuItem:
        """Persist a new menu item.

        Args:
            item: The menu item to add; an id is assigned if it has none

        Returns:
            The stored menu item
        """
        saved = await asyncio.to_thread(self.menu_item_repository.save, item)
        logger.info(f"Added menu item {saved.id} for restaurant {saved.restaurant_id}")
        return saved

    async def list_menu_items(self) -> list[MenuItem]:
        """List every menu item across all restaurants."""
        return await asyncio.to_thread(self.menu_item_repository.find_all)

    @traced("build_catalogue_page")
    async def build_catalogue_page(self, restaurant_id: Any) -> CataloguePage:
        """Build the catalogue page for a restaurant.

        This method orchestrates the page flow:
        1. Validate the restaurant id before any I/O
        2. Fetch the restaurant's menu items from the store
        3. Fetch the restaurant's metadata from the directory service
        4. Merge both into a CataloguePage

        Steps 2 and 3 are independent and run concurrently unless
        ``concurrent_fetch`` is off. An empty item list is a valid page.

        Args:
            restaurant_id: The restaurant to build the page for

        Returns:
            CataloguePage with the restaurant's items and metadata

        Raises:
            InvalidRestaurantIdError: If the id is not a positive integer
            StoreUnavailableError: If the menu item store cannot be read
            PageAssemblyError: If the directory lookup fails (not found,
                unavailable, timed out or undecodable)
        """
        if not isinstance(restaurant_id, int) or isinstance(restaurant_id, bool) or restaurant_id <= 0:
            raise InvalidRestaurantIdError(restaurant_id)

        started = time.perf_counter()
        try:
            if self.concurrent_fetch:
                items, restaurant = await self._fetch_concurrently(restaurant_id)
            else:
                items = await self._fetch_menu_items(restaurant_id)
                restaurant = await self.directory_client.fetch_restaurant(restaurant_id)
        except CatalogueServiceError as e:
            logger.warning(f"Cannot build catalogue page for restaurant {restaurant_id}: {e.code}")
            record_page_failure(e.code, time.perf_counter() - started)
            raise

        record_page_success(len(items), time.perf_counter() - started)
        return CataloguePage(food_items=items, restaurant=restaurant)

    async def _fetch_menu_items(self, restaurant_id: int) -> list[MenuItem]:
        # boto3 is blocking, keep it off the event loop
        return await asyncio.to_thread(self.menu_item_repository.find_by_restaurant_id, restaurant_id)

    async def _fetch_concurrently(
        self, restaurant_id: int
    ) -> tuple[list[MenuItem], RestaurantMetadata]:
        """Run the store query and the directory lookup side by side.

        A failed store read cancels the pending directory call. A failed
        directory call lets the local store read finish, discards its result
        and raises the directory error.
        """
        items_task = asyncio.create_task(self._fetch_menu_items(restaurant_id))
        restaurant_task = asyncio.create_task(self.directory_client.fetch_restaurant(restaurant_id))

        try:
            await asyncio.wait({items_task, restaurant_task}, return_when=asyncio.FIRST_EXCEPTION)

            if items_task.done() and items_task.exception() is not None:
                raise items_task.exception()  # type: ignore[misc]

            restaurant = await restaurant_task
            items = await items_task
        finally:
            if not restaurant_task.done():
                restaurant_task.cancel()
            # Retrieve both outcomes, including the one not raised
            await asyncio.gather(restaurant_task, items_task, return_exceptions=True)

        return items, restaurant
