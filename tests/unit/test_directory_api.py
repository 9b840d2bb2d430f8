"""Unit tests for the restaurant directory FastAPI endpoints."""

from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient

from food_catalogue_service.exceptions import StoreUnavailableError
from food_catalogue_service.handlers.directory_api import create_directory_app
from food_catalogue_service.models.restaurant_models import RestaurantMetadata
from food_catalogue_service.services.directory_service import DirectoryService


@pytest.mark.unit
class TestDirectoryEndpoints:
    """Test suite for restaurant directory endpoints."""

    @pytest.fixture
    def client(self) -> TestClient:
        """Create a test client with a mocked directory service."""
        app = create_directory_app(directory_service=MagicMock(spec=DirectoryService))
        return TestClient(app)

    def test_health_check(self, client: TestClient) -> None:
        """Test health check endpoint returns 200."""
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "healthy"}

    def test_add_restaurant(self, client: TestClient, spice_route_payload: dict) -> None:
        """Test adding a restaurant."""
        client.app.state.directory_service.add_restaurant = AsyncMock(
            side_effect=lambda restaurant: restaurant
        )

        response = client.post("/restaurants", json=spice_route_payload)

        assert response.status_code == 201
        assert response.json() == spice_route_payload

    def test_add_restaurant_invalid(self, client: TestClient) -> None:
        """Test that a restaurant without a name is rejected."""
        response = client.post("/restaurants", json={"id": 7})

        assert response.status_code == 422

    def test_list_restaurants(self, client: TestClient, spice_route: RestaurantMetadata) -> None:
        """Test listing restaurants."""
        client.app.state.directory_service.list_restaurants = AsyncMock(return_value=[spice_route])

        response = client.get("/restaurants")

        assert response.status_code == 200
        assert [r["name"] for r in response.json()] == ["Spice Route"]

    def test_fetch_restaurant(
        self, client: TestClient, spice_route: RestaurantMetadata, spice_route_payload: dict
    ) -> None:
        """Test fetching a restaurant by id."""
        client.app.state.directory_service.fetch_restaurant = AsyncMock(return_value=spice_route)

        response = client.get("/restaurants/7")

        assert response.status_code == 200
        assert response.json() == spice_route_payload
        client.app.state.directory_service.fetch_restaurant.assert_awaited_once_with(7)

    def test_fetch_restaurant_not_found(self, client: TestClient) -> None:
        """Test that a missing restaurant returns 404."""
        client.app.state.directory_service.fetch_restaurant = AsyncMock(return_value=None)

        response = client.get("/restaurants/99")

        assert response.status_code == 404

    def test_fetch_restaurant_non_integer_id(self, client: TestClient) -> None:
        """Test that a non-numeric id returns the 400 validation body."""
        client.app.state.directory_service.fetch_restaurant = AsyncMock()

        response = client.get("/restaurants/abc")

        assert response.status_code == 400
        assert response.json()["code"] == "VALIDATION_ERROR"
        client.app.state.directory_service.fetch_restaurant.assert_not_called()

    def test_fetch_restaurant_store_unavailable(self, client: TestClient) -> None:
        """Test that a store outage returns 503, not 404."""
        client.app.state.directory_service.fetch_restaurant = AsyncMock(
            side_effect=StoreUnavailableError("find_by_id", "refused")
        )

        response = client.get("/restaurants/7")

        assert response.status_code == 503
