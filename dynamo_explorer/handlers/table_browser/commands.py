"""
Table Browser Write API

This module provides the write side of the explorer session layer:
- Creating or replacing an item from the item editor (dict or JSON text)
- Deleting the selected item by its primary key, optionally only if it still exists
- Creating tables with a partition key and optional sort key

Input is validated before any request is sent; DynamoDB errors are mapped to
explorer exceptions by the gateway.
"""

import logging
from typing import Any, Dict, Optional

from ...config import ExplorerConfig
from ...config.constants import (
    BILLING_MODE_PAY_PER_REQUEST,
    BILLING_MODE_PROVISIONED,
    KEY_ATTRIBUTE_TYPES,
)
from ...core import StoreGateway, create_store_gateway
from ...exceptions import ConflictError, ItemNotFoundError, ValidationError
from ...models import KeyAttribute, KeySchema
from ...utils import json_to_item, missing_key_attributes, validate_table_name

logger = logging.getLogger(__name__)


class TableBrowserWriteApi:
    """
    Write-only API for item and table mutations.

    Item writes are unconditional: PutItem replaces an existing item with the
    same key. DeleteItem on a missing key succeeds silently unless the caller
    asks for ``must_exist``.
    """

    def __init__(self, config: ExplorerConfig, gateway: Optional[StoreGateway] = None):
        """Initialize write API with configuration."""
        self.config = config
        self.gateway = gateway or create_store_gateway(config)

    def put_item(
        self,
        table_name: str,
        item: Dict[str, Any],
        schema: Optional[KeySchema] = None
    ) -> Dict[str, Any]:
        """
        Create or replace an item.

        DynamoDB Operation: PutItem

        Args:
            table_name: Target table
            item: Full item with Decimal numbers
            schema: Key schema of the table; when given, the key attributes
                must be present in the item

        Returns:
            The item as written

        Raises:
            ValidationError: Item is empty or lacks key attributes
        """
        if not item:
            raise ValidationError("Item cannot be empty")
        if schema is not None:
            missing = missing_key_attributes(item, schema.key_attribute_names)
            if missing:
                raise ValidationError(
                    f"Item is missing key attributes: {', '.join(missing)}",
                    errors={name: "required" for name in missing},
                )

        self.gateway.put_item(table_name, item)
        return item

    def put_item_json(
        self,
        table_name: str,
        text: str,
        schema: Optional[KeySchema] = None
    ) -> Dict[str, Any]:
        """Parse item editor JSON and write it with ``put_item``."""
        return self.put_item(table_name, json_to_item(text), schema)

    def delete_item(
        self,
        table_name: str,
        item: Dict[str, Any],
        schema: KeySchema,
        must_exist: bool = False
    ) -> Dict[str, Any]:
        """
        Delete the item identified by the key attributes of ``item``.

        DynamoDB Operation: DeleteItem

        Args:
            table_name: Target table
            item: The selected item (only its key attributes are sent)
            schema: Key schema of the table
            must_exist: Fail instead of succeeding silently when the item is
                already gone, e.g. deleted from another session

        Returns:
            The key that was deleted

        Raises:
            ValidationError: The item does not carry its full primary key
            ItemNotFoundError: ``must_exist`` is set and no item has this key
        """
        missing = missing_key_attributes(item, schema.key_attribute_names)
        if missing:
            raise ValidationError(
                f"Cannot delete item without key attributes: {', '.join(missing)}",
                errors={name: "required" for name in missing},
            )

        key = schema.extract_key(item)
        if not must_exist:
            self.gateway.delete_item(table_name, key)
            return key

        try:
            self.gateway.delete_item(
                table_name,
                key,
                condition_expression="attribute_exists(#pk)",
                expression_attribute_names={"#pk": schema.partition_key.name},
            )
        except ConflictError as e:
            logger.info(f"Item to delete is gone from {table_name}: {key}")
            raise ItemNotFoundError(table_name, key, original_error=e).at("DeleteItem") from e
        return key

    def create_table(
        self,
        table_name: str,
        partition_key_name: str,
        partition_key_type: str = "S",
        sort_key_name: Optional[str] = None,
        sort_key_type: str = "S",
        billing_mode: str = BILLING_MODE_PAY_PER_REQUEST,
        read_capacity: int = 5,
        write_capacity: int = 5
    ) -> None:
        """
        Create a table.

        DynamoDB Operation: CreateTable (the table starts in CREATING status)

        Args:
            table_name: Name of the new table
            partition_key_name: Partition key attribute
            partition_key_type: S, N or B
            sort_key_name: Optional sort key attribute
            sort_key_type: S, N or B
            billing_mode: PAY_PER_REQUEST or PROVISIONED
            read_capacity: Read capacity units (PROVISIONED only)
            write_capacity: Write capacity units (PROVISIONED only)

        Raises:
            ValidationError: Invalid name, key type, billing mode or capacity
            ConflictError: A table with that name already exists
        """
        validate_table_name(table_name)

        errors: Dict[str, str] = {}
        if not partition_key_name:
            errors['partition_key_name'] = "required"
        if partition_key_type not in KEY_ATTRIBUTE_TYPES:
            errors['partition_key_type'] = f"must be one of {', '.join(KEY_ATTRIBUTE_TYPES)}"
        if sort_key_name and sort_key_type not in KEY_ATTRIBUTE_TYPES:
            errors['sort_key_type'] = f"must be one of {', '.join(KEY_ATTRIBUTE_TYPES)}"
        if sort_key_name and sort_key_name == partition_key_name:
            errors['sort_key_name'] = "must differ from the partition key"
        if billing_mode not in (BILLING_MODE_PAY_PER_REQUEST, BILLING_MODE_PROVISIONED):
            errors['billing_mode'] = f"must be {BILLING_MODE_PAY_PER_REQUEST} or {BILLING_MODE_PROVISIONED}"
        elif billing_mode == BILLING_MODE_PROVISIONED and (read_capacity <= 0 or write_capacity <= 0):
            errors['capacity'] = "read and write capacity must be positive"
        if errors:
            logger.warning(f"Rejected definition for table {table_name}: {errors}")
            raise ValidationError(f"Invalid table definition for '{table_name}'", errors=errors)

        partition_key = KeyAttribute(name=partition_key_name, type=partition_key_type)
        sort_key = KeyAttribute(name=sort_key_name, type=sort_key_type) if sort_key_name else None
        self.gateway.create_table(
            table_name,
            partition_key,
            sort_key,
            billing_mode=billing_mode,
            read_capacity=read_capacity,
            write_capacity=write_capacity,
        )
