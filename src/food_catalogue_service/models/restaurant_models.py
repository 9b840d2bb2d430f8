"""Restaurant metadata model.

Restaurant metadata is owned by the restaurant directory service. The food
catalogue service only ever reads it over HTTP and never keeps a copy.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class RestaurantMetadata(BaseModel):
    """Restaurant metadata as published by the restaurant directory."""

    # The directory may add descriptive fields the catalogue does not know about
    model_config = ConfigDict(extra="ignore")

    id: int = Field(..., description="Restaurant identifier", gt=0)
    name: str = Field(..., description="Restaurant name", min_length=1)
    address: str | None = Field(None, description="Street address")
    city: str | None = Field(None, description="City")
    description: str | None = Field(None, description="Restaurant description")

    def to_dynamodb_item(self) -> dict[str, Any]:
        """Convert to DynamoDB item format.

        Returns:
            dict: DynamoDB-compatible representation
        """
        item: dict[str, Any] = {"id": self.id, "name": self.name}

        for field in ("address", "city", "description"):
            value = getattr(self, field)
            if value is not None:
                item[field] = value

        return item

    @classmethod
    def from_dynamodb_item(cls, item: dict[str, Any]) -> "RestaurantMetadata":
        """Create RestaurantMetadata from DynamoDB item.

        Args:
            item: DynamoDB item dictionary

        Returns:
            RestaurantMetadata: Parsed model instance
        """
        return cls(
            id=int(item["id"]),
            name=item["name"],
            address=item.get("address"),
            city=item.get("city"),
            description=item.get("description"),
        )
