"""
Thin DynamoDB Store Gateway

This module wraps the handful of boto3 DynamoDB operations the explorer needs:

- list_tables / describe_table  - catalog browsing
- read_page                     - the single paginated read primitive; a Scan
                                  when no key condition is given, a Query
                                  otherwise
- get_item / put_item / delete_item / create_table - single-item writes and
                                  table creation

Each gateway is scoped to one region (or one local endpoint). Errors coming
back from boto3 are mapped to the explorer's exception hierarchy so callers
never have to inspect ClientError codes.
"""

import logging
from decimal import DecimalException
from typing import Any, Dict, List, Optional

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from ..config import ExplorerConfig
from ..config.constants import BILLING_MODE_PAY_PER_REQUEST, BILLING_MODE_PROVISIONED
from ..exceptions import (
    ConflictError,
    ConnectionError,
    ExplorerError,
    RetryableError,
    TableNotFoundError,
    ValidationError,
)
from ..models import KeyAttribute, Page, TableDescription

logger = logging.getLogger(__name__)


def map_dynamodb_error(
    error: ClientError,
    operation: str,
    table_name: Optional[str] = None,
    resource_id: Optional[str] = None,
    index_name: Optional[str] = None
) -> ExplorerError:
    """Map DynamoDB ClientError to explorer exceptions.

    The returned error records ``operation``, ``table_name`` and
    ``index_name`` as attributes (see ``ExplorerError.at``).

    Args:
        error: The boto3 ClientError
        operation: The operation that failed (e.g., "Scan", "PutItem")
        table_name: The DynamoDB table name, when the call targets a table
        resource_id: Optional resource identifier (item key, new table name)
        index_name: Secondary index the request read, if any

    Returns:
        Appropriate explorer exception
    """
    error_code = error.response.get('Error', {}).get('Code', 'Unknown')
    error_message = error.response.get('Error', {}).get('Message', str(error))

    mapped = _map_error_code(error, error_code, error_message, table_name, resource_id)
    if resource_id and not isinstance(mapped, ConflictError):
        mapped.context.setdefault('resource_id', resource_id)
    return mapped.at(operation, table_name, index_name)


def _map_error_code(
    error: ClientError,
    error_code: str,
    error_message: str,
    table_name: Optional[str],
    resource_id: Optional[str]
) -> ExplorerError:
    if error_code == 'ConditionalCheckFailedException':
        return ConflictError(f"Conditional check failed - {error_message}", resource_id, original_error=error)

    elif error_code == 'ResourceNotFoundException':
        if table_name:
            return TableNotFoundError(table_name, original_error=error)
        return ConnectionError(f"Resource not found - {error_message}", original_error=error)

    elif error_code == 'ResourceInUseException':
        return ConflictError(f"Resource in use - {error_message}", resource_id or table_name, original_error=error)

    elif error_code in ['ValidationException', 'SerializationException']:
        return ValidationError(f"Validation failed - {error_message}", original_error=error)

    elif error_code == 'ItemCollectionSizeLimitExceededException':
        return ValidationError(f"Item collection size limit exceeded - {error_message}", original_error=error)

    elif error_code == 'LimitExceededException':
        return ValidationError(f"DynamoDB limit exceeded - {error_message}", original_error=error)

    elif error_code in [
        'ProvisionedThroughputExceededException', 'RequestLimitExceeded',
        'ThrottlingException', 'TooManyRequestsException'
    ]:
        return RetryableError(f"Throttling - {error_message}", original_error=error)

    elif error_code in ['InternalServerError', 'ServiceUnavailable', 'ServiceUnavailableException']:
        return RetryableError(f"Service unavailable - {error_message}", original_error=error)

    elif error_code in ['RequestTimeoutException', 'RequestExpiredException']:
        return RetryableError(f"Request timeout - {error_message}", original_error=error)

    elif error_code in [
        'UnrecognizedClientException', 'AccessDeniedException',
        'InvalidSignatureException', 'IncompleteSignatureException',
        'MissingAuthenticationTokenException'
    ]:
        return ConnectionError(f"Authentication/authorization failed - {error_message}", original_error=error)

    elif error_code in ['ExpiredTokenException', 'TokenRefreshRequiredException']:
        return ConnectionError(f"Token expired - {error_message}", original_error=error)

    logger.warning(f"Unknown DynamoDB error code '{error_code}' mapped to ConnectionError")
    return ConnectionError(f"DynamoDB operation failed - {error_message}", original_error=error)


def _request_failed(
    error: BotoCoreError,
    operation: str,
    table_name: Optional[str] = None,
    index_name: Optional[str] = None
) -> ExplorerError:
    """Wrap a transport-level botocore failure (endpoint, credentials, timeout)."""
    return ConnectionError(f"Request failed: {error}", error).at(operation, table_name, index_name)


class StoreGateway:
    """
    Region-scoped gateway over boto3 DynamoDB.

    The boto3 resource is created lazily on first use, so constructing a
    gateway (for example one per region during discovery) costs nothing until
    a request is made.
    """

    def __init__(self, config: ExplorerConfig):
        """Initialize store gateway.

        Args:
            config: Explorer configuration (region, endpoint, credentials)
        """
        self.config = config
        self.region_name = config.region_name
        self._dynamodb = None
        self._tables: Dict[str, Any] = {}

    @property
    def dynamodb(self):
        """Lazy initialization of DynamoDB resource."""
        if self._dynamodb is None:
            try:
                session = boto3.Session(
                    aws_access_key_id=self.config.aws_access_key_id,
                    aws_secret_access_key=self.config.aws_secret_access_key,
                    aws_session_token=self.config.aws_session_token,
                    region_name=self.config.region_name,
                    profile_name=self.config.profile_name
                )

                dynamodb_config = {
                    'region_name': self.config.region_name
                }

                if self.config.endpoint_url:
                    dynamodb_config['endpoint_url'] = self.config.endpoint_url

                boto_config = Config(
                    retries={'max_attempts': self.config.retries},
                    max_pool_connections=self.config.max_pool_connections,
                    read_timeout=self.config.timeout_seconds,
                    connect_timeout=self.config.timeout_seconds
                )
                dynamodb_config['config'] = boto_config

                self._dynamodb = session.resource('dynamodb', **dynamodb_config)
            except Exception as e:
                logger.error(f"Failed to create DynamoDB resource for {self.region_name}: {e}")
                raise ConnectionError(f"Failed to connect to DynamoDB: {e}", e) from e
        return self._dynamodb

    @property
    def client(self):
        """Low-level client sharing the resource's session."""
        return self.dynamodb.meta.client

    def table(self, table_name: str):
        """Get (and cache) the boto3 Table resource for ``table_name``."""
        if table_name not in self._tables:
            try:
                self._tables[table_name] = self.dynamodb.Table(table_name)
            except ConnectionError:
                raise
            except Exception as e:
                logger.error(f"Failed to access table '{table_name}': {e}")
                raise ConnectionError(f"Failed to access table '{table_name}': {e}", e) from e
        return self._tables[table_name]

    def list_tables(self, limit: Optional[int] = None) -> List[str]:
        """
        List table names in the gateway's region.

        Args:
            limit: When given, request a single page of at most ``limit``
                names. When omitted, page through the whole listing.

        Returns:
            Table names in the order DynamoDB returns them
        """
        try:
            if limit is not None:
                response = self.client.list_tables(Limit=limit)
                return list(response.get('TableNames', []))

            tables: List[str] = []
            paginator = self.client.get_paginator('list_tables')
            for page in paginator.paginate():
                tables.extend(page.get('TableNames', []))
            return tables
        except ClientError as e:
            raise map_dynamodb_error(e, "ListTables") from e
        except BotoCoreError as e:
            raise _request_failed(e, "ListTables") from e

    def describe_table(self, table_name: str) -> TableDescription:
        """Describe a table and build its key schema."""
        try:
            response = self.client.describe_table(TableName=table_name)
        except ClientError as e:
            raise map_dynamodb_error(e, "DescribeTable", table_name) from e
        except BotoCoreError as e:
            raise _request_failed(e, "DescribeTable", table_name) from e
        return TableDescription.from_describe_response(response)

    def read_page(
        self,
        table_name: str,
        limit: int,
        index_name: Optional[str] = None,
        key_condition: Optional[str] = None,
        filter_expression: Optional[str] = None,
        expression_attribute_names: Optional[Dict[str, str]] = None,
        expression_attribute_values: Optional[Dict[str, Any]] = None,
        cursor: Optional[Dict[str, Any]] = None
    ) -> Page:
        """
        Read one page from a table or index.

        Issues a Query when ``key_condition`` is given and a Scan otherwise.
        Placeholders in ``key_condition`` and ``filter_expression`` are resolved
        from the two expression attribute maps.

        Args:
            table_name: Table to read
            limit: Maximum number of items DynamoDB evaluates for this page
            index_name: Optional secondary index to read instead of the table
            key_condition: KeyConditionExpression for a Query
            filter_expression: FilterExpression applied after reading
            expression_attribute_names: Name placeholders
            expression_attribute_values: Value placeholders
            cursor: ExclusiveStartKey from the previous page

        Returns:
            Page with items, next cursor and counts

        Raises:
            ValidationError: DynamoDB rejected the request, or a value could
                not be serialized (unsupported type, number out of range)
            ExplorerError: Any other failure, see ``map_dynamodb_error``
        """
        kwargs: Dict[str, Any] = {'Limit': limit}
        if index_name:
            kwargs['IndexName'] = index_name
        if key_condition:
            kwargs['KeyConditionExpression'] = key_condition
        if filter_expression:
            kwargs['FilterExpression'] = filter_expression
        if expression_attribute_names:
            kwargs['ExpressionAttributeNames'] = expression_attribute_names
        if expression_attribute_values:
            kwargs['ExpressionAttributeValues'] = expression_attribute_values
        if cursor:
            kwargs['ExclusiveStartKey'] = cursor

        operation = "Query" if key_condition else "Scan"
        try:
            table = self.table(table_name)
            if key_condition:
                response = table.query(**kwargs)
            else:
                response = table.scan(**kwargs)
        except ClientError as e:
            raise map_dynamodb_error(e, operation, table_name, index_name=index_name) from e
        except BotoCoreError as e:
            raise _request_failed(e, operation, table_name, index_name) from e
        # Raised by the boto3 serializer before anything is sent
        except (DecimalException, TypeError) as e:
            raise ValidationError(
                f"Cannot serialize request values: {e!r}", original_error=e
            ).at(operation, table_name, index_name) from e

        items = response.get('Items', [])
        return Page(
            items=items,
            cursor=response.get('LastEvaluatedKey'),
            count=response.get('Count', len(items)),
            scanned_count=response.get('ScannedCount', len(items)),
        )

    def get_item(self, table_name: str, key: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """Get a single item by primary key, or None when absent."""
        try:
            response = self.table(table_name).get_item(Key=key)
        except ClientError as e:
            raise map_dynamodb_error(e, "GetItem", table_name) from e
        except BotoCoreError as e:
            raise _request_failed(e, "GetItem", table_name) from e
        return response.get('Item')

    def put_item(self, table_name: str, item: Dict[str, Any]) -> None:
        """Create or replace an item."""
        try:
            self.table(table_name).put_item(Item=item)
            logger.info(f"Put item in {table_name}")
        except ClientError as e:
            raise map_dynamodb_error(e, "PutItem", table_name) from e
        except BotoCoreError as e:
            raise _request_failed(e, "PutItem", table_name) from e

    def delete_item(
        self,
        table_name: str,
        key: Dict[str, Any],
        condition_expression: Optional[str] = None,
        expression_attribute_names: Optional[Dict[str, str]] = None
    ) -> None:
        """Delete an item by primary key.

        A failed ``condition_expression`` raises ConflictError.
        """
        kwargs: Dict[str, Any] = {'Key': key}
        if condition_expression:
            kwargs['ConditionExpression'] = condition_expression
        if expression_attribute_names:
            kwargs['ExpressionAttributeNames'] = expression_attribute_names

        try:
            self.table(table_name).delete_item(**kwargs)
            logger.info(f"Deleted item from {table_name}: {key}")
        except ClientError as e:
            raise map_dynamodb_error(e, "DeleteItem", table_name, str(key)) from e
        except BotoCoreError as e:
            raise _request_failed(e, "DeleteItem", table_name) from e

    def create_table(
        self,
        table_name: str,
        partition_key: KeyAttribute,
        sort_key: Optional[KeyAttribute] = None,
        billing_mode: str = BILLING_MODE_PAY_PER_REQUEST,
        read_capacity: int = 5,
        write_capacity: int = 5
    ) -> None:
        """
        Create a table with a partition key and an optional sort key.

        Args:
            table_name: Name of the new table
            partition_key: Partition key attribute and type
            sort_key: Optional sort key attribute and type
            billing_mode: PAY_PER_REQUEST or PROVISIONED
            read_capacity: Read capacity units (PROVISIONED only)
            write_capacity: Write capacity units (PROVISIONED only)
        """
        key_schema = [{'AttributeName': partition_key.name, 'KeyType': 'HASH'}]
        attribute_definitions = [{'AttributeName': partition_key.name, 'AttributeType': partition_key.type}]
        if sort_key is not None:
            key_schema.append({'AttributeName': sort_key.name, 'KeyType': 'RANGE'})
            attribute_definitions.append({'AttributeName': sort_key.name, 'AttributeType': sort_key.type})

        kwargs: Dict[str, Any] = {
            'TableName': table_name,
            'KeySchema': key_schema,
            'AttributeDefinitions': attribute_definitions,
        }
        if billing_mode == BILLING_MODE_PAY_PER_REQUEST:
            kwargs['BillingMode'] = BILLING_MODE_PAY_PER_REQUEST
        else:
            kwargs['BillingMode'] = BILLING_MODE_PROVISIONED
            kwargs['ProvisionedThroughput'] = {
                'ReadCapacityUnits': read_capacity,
                'WriteCapacityUnits': write_capacity,
            }

        try:
            self.client.create_table(**kwargs)
            logger.info(f"Created table {table_name} in {self.region_name}")
        except ClientError as e:
            raise map_dynamodb_error(e, "CreateTable", None, table_name) from e
        except BotoCoreError as e:
            raise _request_failed(e, "CreateTable") from e


def create_store_gateway(config: ExplorerConfig, region_name: Optional[str] = None) -> StoreGateway:
    """
    Factory function to create a StoreGateway.

    Args:
        config: Explorer configuration
        region_name: Optional region overriding the configured one

    Returns:
        Configured StoreGateway instance
    """
    if region_name and region_name != config.region_name:
        config = config.for_region(region_name)
    return StoreGateway(config)
