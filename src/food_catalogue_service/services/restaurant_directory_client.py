"""Client for looking up restaurants in the restaurant directory service."""

import asyncio
import logging
import time

import httpx
from pydantic import ValidationError

from food_catalogue_service.discovery.base_discovery import ServiceDiscovery
from food_catalogue_service.exceptions import (
    CatalogueServiceError,
    DirectoryDecodeError,
    DirectoryTimeoutError,
    RestaurantNotFoundError,
    ServiceUnavailableError,
)
from food_catalogue_service.models.restaurant_models import RestaurantMetadata
from food_catalogue_service.observability import traced
from food_catalogue_service.observability.metrics import record_directory_lookup

logger = logging.getLogger(__name__)

DEFAULT_SERVICE_NAME = "restaurant-directory"


class RestaurantDirectoryClient:
    """HTTP client for fetching restaurant metadata from the directory service.

    The directory is never addressed directly: every lookup first resolves the
    logical service name through service discovery, then issues a single GET
    bounded by ``timeout_seconds``. There is no retry; retry or circuit
    breaking belongs in a wrapper around this client.
    """

    def __init__(
        self,
        discovery: ServiceDiscovery,
        service_name: str = DEFAULT_SERVICE_NAME,
        timeout_seconds: float = 2.0,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the directory client.

        Args:
            discovery: Service discovery used to locate directory instances
            service_name: Logical name the directory registers under
            timeout_seconds: Upper bound on a single lookup, in seconds
            http_client: Optional shared HTTP client; a short-lived one is used per call otherwise
        """
        self.discovery = discovery
        self.service_name = service_name
        self.timeout_seconds = timeout_seconds
        self.http_client = http_client

    @traced("fetch_restaurant")
    async def fetch_restaurant(self, restaurant_id: int) -> RestaurantMetadata:
        """Fetch metadata for a restaurant from the directory service.

        Args:
            restaurant_id: The restaurant to look up

        Returns:
            RestaurantMetadata for the restaurant

        Raises:
            ServiceUnavailableError: No healthy instance, connection failure or 5xx
            DirectoryTimeoutError: The lookup exceeded ``timeout_seconds``
            RestaurantNotFoundError: The directory has no such restaurant
            DirectoryDecodeError: The response body is not valid restaurant metadata
        """
        started = time.perf_counter()
        try:
            restaurant = await self._fetch(restaurant_id)
        except CatalogueServiceError as e:
            record_directory_lookup(e.code, time.perf_counter() - started)
            raise

        record_directory_lookup("success", time.perf_counter() - started)
        return restaurant

    async def _fetch(self, restaurant_id: int) -> RestaurantMetadata:
        instance = await self.discovery.resolve(self.service_name)
        url = f"{instance.base_url}/restaurants/{restaurant_id}"

        try:
            response = await asyncio.wait_for(self._get(url), timeout=self.timeout_seconds)
        except (TimeoutError, httpx.TimeoutException) as e:
            logger.error(f"Directory lookup for restaurant {restaurant_id} timed out at {url}")
            raise DirectoryTimeoutError(restaurant_id, self.timeout_seconds) from e
        except httpx.RequestError as e:
            logger.error(f"Directory lookup for restaurant {restaurant_id} failed at {url}: {e}")
            raise ServiceUnavailableError(self.service_name, str(e)) from e

        if response.status_code == 404:
            logger.info(f"Restaurant {restaurant_id} not found in directory")
            raise RestaurantNotFoundError(restaurant_id)

        if not response.is_success:
            logger.error(
                f"Directory returned {response.status_code} for restaurant {restaurant_id}"
            )
            raise ServiceUnavailableError(
                self.service_name, f"unexpected status {response.status_code}"
            )

        try:
            return RestaurantMetadata.model_validate_json(response.content)
        except ValidationError as e:
            logger.error(f"Invalid directory response for restaurant {restaurant_id}: {e}")
            raise DirectoryDecodeError(restaurant_id, str(e)) from e

    async def _get(self, url: str) -> httpx.Response:
        if self.http_client is not None:
            return await self.http_client.get(url, timeout=self.timeout_seconds)

        async with httpx.AsyncClient(timeout=self.timeout_seconds) as client:
            return await client.get(url)
