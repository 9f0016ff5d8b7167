"""
Handler Layer for dynamo-explorer

This module contains the application layer handlers that a session layer (a
terminal UI, a CLI) drives. Reads and writes are split following the Command
Query Responsibility Segregation (CQRS) pattern.

The handler layer:
- Coordinates between the filter compiler, the read planner and the executors
- Validates item and table input before any request is sent
- Owns no session state: ScanSessions are passed back in explicitly

Architecture:
handlers/ (this layer) -> execution/ + planning/ -> core/ (infrastructure) -> DynamoDB
handlers/ (this layer) <- models/ (value objects)
"""

from .table_browser.queries import TableBrowserReadApi
from .table_browser.commands import TableBrowserWriteApi

__all__ = [
    'TableBrowserReadApi',
    'TableBrowserWriteApi',
]
