"""Catalogue page model returned by the food catalogue service."""

from pydantic import BaseModel, Field

from food_catalogue_service.models.menu_models import MenuItem
from food_catalogue_service.models.restaurant_models import RestaurantMetadata


class CataloguePage(BaseModel):
    """A restaurant's menu items together with the restaurant's metadata.

    Built per request and never persisted or cached. ``food_items`` keeps the
    order the store returned them in.
    """

    food_items: list[MenuItem] = Field(default_factory=list, description="Menu items of the restaurant")
    restaurant: RestaurantMetadata = Field(..., description="Restaurant the items belong to")
