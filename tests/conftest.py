"""
Test configuration and fixtures for dynamo-explorer.

Provides configuration fixtures, an in-memory page reader for executor tests
and moto-backed DynamoDB tables for integration tests.
"""

from decimal import Decimal
from typing import Any, Dict, List, Optional

import boto3
import pytest
from moto import mock_aws

from dynamo_explorer import ExplorerConfig, StoreGateway
from dynamo_explorer.models import Page


@pytest.fixture
def explorer_config():
    """Explorer configuration for mocked testing."""
    return ExplorerConfig(
        aws_access_key_id="test_key",
        aws_secret_access_key="test_secret",
        aws_session_token=None,
        profile_name=None,
        region_name="us-east-1",
        endpoint_url=None,  # Use default AWS endpoint for moto
    )


@pytest.fixture
def local_config():
    """Explorer configuration pointing at a local endpoint."""
    return ExplorerConfig(
        aws_access_key_id="local",
        aws_secret_access_key="local",
        profile_name=None,
        region_name="us-east-1",
        endpoint_url="http://localhost:8000",
    )


class FakePageReader:
    """In-memory page reader over a list of items.

    ``matches`` plays the role of the server-side filter: every item counts
    as scanned, only matching items are returned. Cursors are offsets wrapped
    in a dict like a LastEvaluatedKey.
    """

    def __init__(self, items: List[Dict[str, Any]], matches=None, on_read=None):
        self.items = items
        self.matches = matches or (lambda item: True)
        self.on_read = on_read
        self.calls: List[Optional[Dict[str, Any]]] = []

    def __call__(self, cursor: Optional[Dict[str, Any]], limit: int) -> Page:
        self.calls.append(cursor)
        start = cursor['offset'] if cursor else 0
        chunk = self.items[start:start + limit]
        end = start + len(chunk)
        matched = [item for item in chunk if self.matches(item)]
        if self.on_read is not None:
            self.on_read(len(self.calls))
        return Page(
            items=matched,
            cursor={'offset': end} if end < len(self.items) else None,
            count=len(matched),
            scanned_count=len(chunk),
        )


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def numbered_items():
    """Twenty items with ids 0..19; even ids are 'active'."""
    return [
        {'id': f"item-{i:02d}", 'n': Decimal(i), 'status': 'active' if i % 2 == 0 else 'inactive'}
        for i in range(20)
    ]


@pytest.fixture
def fake_clock():
    return FakeClock()


@pytest.fixture
def mock_dynamodb_resource():
    """Mock DynamoDB resource."""
    with mock_aws():
        yield boto3.resource('dynamodb', region_name='us-east-1')


@pytest.fixture
def orders_table(mock_dynamodb_resource):
    """Create an orders table with a GSI on customer_id and an LSI on created_at."""
    table = mock_dynamodb_resource.create_table(
        TableName='orders',
        KeySchema=[
            {'AttributeName': 'order_id', 'KeyType': 'HASH'},
            {'AttributeName': 'line', 'KeyType': 'RANGE'}
        ],
        AttributeDefinitions=[
            {'AttributeName': 'order_id', 'AttributeType': 'S'},
            {'AttributeName': 'line', 'AttributeType': 'N'},
            {'AttributeName': 'customer_id', 'AttributeType': 'S'},
            {'AttributeName': 'created_at', 'AttributeType': 'S'}
        ],
        GlobalSecondaryIndexes=[
            {
                'IndexName': 'CustomerIndex',
                'KeySchema': [
                    {'AttributeName': 'customer_id', 'KeyType': 'HASH'},
                    {'AttributeName': 'created_at', 'KeyType': 'RANGE'}
                ],
                'Projection': {'ProjectionType': 'ALL'}
            }
        ],
        LocalSecondaryIndexes=[
            {
                'IndexName': 'CreatedAtIndex',
                'KeySchema': [
                    {'AttributeName': 'order_id', 'KeyType': 'HASH'},
                    {'AttributeName': 'created_at', 'KeyType': 'RANGE'}
                ],
                'Projection': {'ProjectionType': 'ALL'}
            }
        ],
        BillingMode='PAY_PER_REQUEST'
    )

    with table.batch_writer() as batch:
        for i in range(30):
            batch.put_item(Item={
                'order_id': f"order-{i // 3:02d}",
                'line': Decimal(i % 3),
                'customer_id': f"customer-{i % 5}",
                'created_at': f"2024-01-{i + 1:02d}",
                'amount': Decimal(i * 10),
                'status': 'shipped' if i % 2 == 0 else 'pending',
            })
    return table


@pytest.fixture
def gateway(explorer_config, mock_dynamodb_resource):
    """Store gateway talking to the mocked DynamoDB."""
    return StoreGateway(explorer_config)


@pytest.fixture
def page_reader_factory():
    """Factory for in-memory page readers."""
    return FakePageReader
