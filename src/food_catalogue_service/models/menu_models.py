"""Menu item model.

Menu items are owned by the food catalogue service and stored in DynamoDB
with ``id`` as partition key and a ``restaurant_id-index`` GSI.
"""

from decimal import Decimal
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

PRICE_QUANTUM = Decimal("0.01")


class MenuItem(BaseModel):
    """Menu item model."""

    model_config = ConfigDict(json_encoders={Decimal: str})

    id: str | None = Field(None, description="Unique identifier, assigned by the store on save")
    name: str = Field(..., description="Item name", min_length=1)
    description: str | None = Field(None, description="Item description")
    is_veg: bool = Field(default=False, description="Whether the item is vegetarian")
    price: Decimal = Field(
        ..., description="Item price", ge=0, max_digits=10, decimal_places=2
    )
    restaurant_id: int = Field(..., description="Restaurant this item belongs to", gt=0)
    quantity: int = Field(default=0, description="Quantity on hand", ge=0)

    @field_validator("price")
    @classmethod
    def normalize_price(cls, v: Decimal) -> Decimal:
        """Store every price with exactly two fractional digits."""
        return v.quantize(PRICE_QUANTUM)

    @field_validator("quantity", mode="before")
    @classmethod
    def default_quantity(cls, v: Any) -> Any:
        """Treat an unset quantity as zero."""
        return 0 if v is None else v

    def to_dynamodb_item(self) -> dict[str, Any]:
        """Convert to DynamoDB item format.

        Returns:
            dict: DynamoDB-compatible representation
        """
        if self.id is None:
            raise ValueError("MenuItem must have an id before it is stored")

        item: dict[str, Any] = {
            "id": self.id,
            "name": self.name,
            "is_veg": self.is_veg,
            "price": self.price,
            "restaurant_id": self.restaurant_id,
            "quantity": self.quantity,
        }

        if self.description is not None:
            item["description"] = self.description

        return item

    @classmethod
    def from_dynamodb_item(cls, item: dict[str, Any]) -> "MenuItem":
        """Create MenuItem from DynamoDB item.

        DynamoDB returns every number as ``Decimal``, so integer fields are
        converted back explicitly.

        Args:
            item: DynamoDB item dictionary

        Returns:
            MenuItem: Parsed model instance
        """
        return cls(
            id=item["id"],
            name=item["name"],
            description=item.get("description"),
            is_veg=item.get("is_veg", False),
            price=Decimal(str(item["price"])),
            restaurant_id=int(item["restaurant_id"]),
            quantity=int(item.get("quantity", 0)),
        )
