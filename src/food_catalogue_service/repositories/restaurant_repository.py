"""DynamoDB repository for restaurant metadata owned by the directory service."""

import logging
from typing import Any

from botocore.exceptions import BotoCoreError, ClientError
from mypy_boto3_dynamodb.service_resource import DynamoDBServiceResource, Table

from food_catalogue_service.exceptions import InvalidStoredRecordError, StoreUnavailableError
from food_catalogue_service.models.restaurant_models import RestaurantMetadata

logger = logging.getLogger(__name__)


def _decode(item: dict[str, Any], operation: str) -> RestaurantMetadata:
    try:
        return RestaurantMetadata.from_dynamodb_item(item)
    except (KeyError, TypeError, ValueError) as e:
        logger.error(f"Malformed restaurant returned by {operation}: {e}")
        raise InvalidStoredRecordError(operation, str(e)) from e


class RestaurantRepository:
    """Repository for restaurant metadata, keyed by numeric ``id``."""

    def __init__(self, dynamodb_resource: DynamoDBServiceResource, table_name: str) -> None:
        """Initialize repository.

        Args:
            dynamodb_resource: Boto3 DynamoDB resource
            table_name: Name of the DynamoDB table
        """
        self.dynamodb = dynamodb_resource
        self.table_name = table_name
        self.table: Table = dynamodb_resource.Table(table_name)

    def save(self, restaurant: RestaurantMetadata) -> RestaurantMetadata:
        """Save or update restaurant metadata."""
        try:
            self.table.put_item(Item=restaurant.to_dynamodb_item())
        except (ClientError, BotoCoreError) as e:
            logger.error(f"Failed to save restaurant {restaurant.id}: {e}")
            raise StoreUnavailableError("save", str(e)) from e

        return restaurant

    def find_by_id(self, restaurant_id: int) -> RestaurantMetadata | None:
        """Retrieve restaurant metadata by id.

        Returns:
            RestaurantMetadata if found, None otherwise
        """
        try:
            response = self.table.get_item(Key={"id": restaurant_id})
        except (ClientError, BotoCoreError) as e:
            logger.error(f"Failed to get restaurant {restaurant_id}: {e}")
            raise StoreUnavailableError("find_by_id", str(e)) from e

        if "Item" not in response:
            return None

        return _decode(response["Item"], "find_by_id")

    def find_all(self) -> list[RestaurantMetadata]:
        """List every restaurant, following scan pagination."""
        restaurants: list[RestaurantMetadata] = []
        scan_kwargs: dict = {}

        try:
            while True:
                response = self.table.scan(**scan_kwargs)
                restaurants.extend(_decode(item, "find_all") for item in response.get("Items", []))
                if "LastEvaluatedKey" not in response:
                    break
                scan_kwargs["ExclusiveStartKey"] = response["LastEvaluatedKey"]
        except (ClientError, BotoCoreError) as e:
            logger.error(f"Failed to list restaurants: {e}")
            raise StoreUnavailableError("find_all", str(e)) from e

        return restaurants
