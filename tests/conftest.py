"""Shared pytest fixtures and configuration for all tests."""

import os
from decimal import Decimal

import pytest

# Entry points skip building the real application in test mode
os.environ.setdefault("ENVIRONMENT", "test")

from food_catalogue_service.models.menu_models import MenuItem  # noqa: E402
from food_catalogue_service.models.restaurant_models import RestaurantMetadata  # noqa: E402


@pytest.fixture
def restaurant_id() -> int:
    """Fixture providing a standard test restaurant ID."""
    return 7


@pytest.fixture
def spice_route() -> RestaurantMetadata:
    """Fixture providing the directory entry for restaurant 7."""
    return RestaurantMetadata(
        id=7,
        name="Spice Route",
        address="12 Residency Road",
        city="Bengaluru",
        description="North Indian classics",
    )


@pytest.fixture
def spice_route_items() -> list[MenuItem]:
    """Fixture providing the menu items stored for restaurant 7."""
    return [
        MenuItem(
            id="1",
            name="Paneer Tikka",
            description="Chargrilled cottage cheese",
            is_veg=True,
            price=Decimal("180.00"),
            restaurant_id=7,
            quantity=0,
        ),
        MenuItem(
            id="2",
            name="Chicken Biryani",
            description="Dum cooked basmati rice with chicken",
            is_veg=False,
            price=Decimal("250.00"),
            restaurant_id=7,
            quantity=3,
        ),
    ]


@pytest.fixture
def spice_route_payload() -> dict:
    """Fixture providing the directory's JSON body for restaurant 7."""
    return {
        "id": 7,
        "name": "Spice Route",
        "address": "12 Residency Road",
        "city": "Bengaluru",
        "description": "North Indian classics",
    }
