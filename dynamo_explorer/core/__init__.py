"""
Core infrastructure components for DynamoDB operations.

- StoreGateway: Thin, region-scoped wrapper over boto3 DynamoDB operations
- Factory function for creating gateways
- ClientError to explorer exception mapping
"""

from .store_gateway import StoreGateway, create_store_gateway, map_dynamodb_error

__all__ = [
    "StoreGateway",
    "create_store_gateway",
    "map_dynamodb_error",
]
