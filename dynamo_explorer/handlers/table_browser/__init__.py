"""
Table Browser CQRS APIs

This module provides separate read and write APIs for browsing tables,
following Command Query Responsibility Segregation (CQRS) principles.

Read API:
- Table listing and description
- Filtered browsing via Query (key lookup) or continuous Scan
- Resumable sessions with explicit ScanSession hand-back
- Region discovery

Write API:
- Item put from dict or editor JSON, with key validation
- Item delete by primary key
- Table creation

Usage:
    from .queries import TableBrowserReadApi
    from .commands import TableBrowserWriteApi

    read_api = TableBrowserReadApi(config)
    write_api = TableBrowserWriteApi(config)
"""

from .queries import TableBrowserReadApi
from .commands import TableBrowserWriteApi

__all__ = [
    "TableBrowserReadApi",
    "TableBrowserWriteApi",
]
