"""DynamoDB repository for menu items.

Unlike a lookup that may legitimately miss, a storage failure here means the
catalogue cannot answer at all, so botocore errors are raised as
``StoreUnavailableError`` instead of being mapped to empty results.
"""

import logging
import uuid
from typing import Any

from botocore.exceptions import BotoCoreError, ClientError
from mypy_boto3_dynamodb.service_resource import DynamoDBServiceResource, Table

from food_catalogue_service.exceptions import InvalidStoredRecordError, StoreUnavailableError
from food_catalogue_service.models.menu_models import MenuItem

logger = logging.getLogger(__name__)

RESTAURANT_INDEX = "restaurant_id-index"


class MenuItemRepository:
    """Repository for menu item CRUD operations.

    Manages menu item records in DynamoDB with ``id`` as partition key and a
    Global Secondary Index on ``restaurant_id``.
    """

    def __init__(self, dynamodb_resource: DynamoDBServiceResource, table_name: str) -> None:
        """Initialize repository.

        Args:
            dynamodb_resource: Boto3 DynamoDB resource
            table_name: Name of the DynamoDB table
        """
        self.dynamodb = dynamodb_resource
        self.table_name = table_name
        self.table: Table = dynamodb_resource.Table(table_name)

    def save(self, item: MenuItem) -> MenuItem:
        """Save or update a menu item, assigning an id when absent.

        Args:
            item: MenuItem to save

        Returns:
            MenuItem: The stored item, including its id

        Raises:
            StoreUnavailableError: If DynamoDB cannot be reached
        """
        if item.id is None:
            item = item.model_copy(update={"id": uuid.uuid4().hex})

        try:
            self.table.put_item(Item=item.to_dynamodb_item())
        except (ClientError, BotoCoreError) as e:
            logger.error(f"Failed to save menu item {item.id}: {e}")
            raise StoreUnavailableError("save", str(e)) from e

        return item

    def get(self, item_id: str) -> MenuItem | None:
        """Retrieve a menu item by id.

        Args:
            item_id: Menu item identifier

        Returns:
            MenuItem if found, None otherwise
        """
        try:
            response = self.table.get_item(Key={"id": item_id})
        except (ClientError, BotoCoreError) as e:
            logger.error(f"Failed to get menu item {item_id}: {e}")
            raise StoreUnavailableError("get", str(e)) from e

        if "Item" not in response:
            return None

        return self._decode([response["Item"]], "get")[0]

    def find_all(self) -> list[MenuItem]:
        """List every menu item in the table.

        Returns:
            list: List of MenuItem objects (empty list if none found)
        """
        try:
            items = self._collect_pages(self.table.scan)
        except (ClientError, BotoCoreError) as e:
            logger.error(f"Failed to list menu items: {e}")
            raise StoreUnavailableError("find_all", str(e)) from e

        return self._decode(items, "find_all")

    def find_by_restaurant_id(self, restaurant_id: int) -> list[MenuItem]:
        """List all menu items owned by a restaurant.

        Uses a Global Secondary Index on restaurant_id.

        Args:
            restaurant_id: Restaurant identifier

        Returns:
            list: List of MenuItem objects in query order (empty list if none found)

        Raises:
            StoreUnavailableError: If DynamoDB cannot be reached
            InvalidStoredRecordError: If a stored row is malformed
        """
        try:
            items = self._collect_pages(
                self.table.query,
                IndexName=RESTAURANT_INDEX,
                KeyConditionExpression="restaurant_id = :rid",
                ExpressionAttributeValues={":rid": restaurant_id},
            )
        except (ClientError, BotoCoreError) as e:
            logger.error(f"Failed to query menu items for restaurant {restaurant_id}: {e}")
            raise StoreUnavailableError("find_by_restaurant_id", str(e)) from e

        logger.debug(f"Found {len(items)} menu items for restaurant {restaurant_id}")
        return self._decode(items, "find_by_restaurant_id")

    @staticmethod
    def _decode(items: list[dict[str, Any]], operation: str) -> list[MenuItem]:
        """Convert stored rows to models, raising a store error for malformed rows."""
        try:
            return [MenuItem.from_dynamodb_item(item) for item in items]
        except (KeyError, TypeError, ValueError, ArithmeticError) as e:
            logger.error(f"Malformed menu item returned by {operation}: {e}")
            raise InvalidStoredRecordError(operation, str(e)) from e

    @staticmethod
    def _collect_pages(operation: Any, **kwargs: Any) -> list[dict[str, Any]]:
        """Run a scan or query, following LastEvaluatedKey until exhausted."""
        items: list[dict[str, Any]] = []

        while True:
            response = operation(**kwargs)
            items.extend(response.get("Items", []))

            last_key = response.get("LastEvaluatedKey")
            if not last_key:
                return items
            kwargs["ExclusiveStartKey"] = last_key
