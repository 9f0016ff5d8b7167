# Base exception class
from .base import ExplorerError

# Domain-specific exceptions
from .domain_exceptions import (
    ValidationError,
    ItemNotFoundError,
    NotFoundError,
    TableNotFoundError,
    ConflictError,
    ConnectionError,
    RetryableError,
)

__all__ = [
    # Base exception
    "ExplorerError",

    # Domain exceptions (alphabetically ordered)
    "ConflictError",
    "ConnectionError",
    "ItemNotFoundError",
    "NotFoundError",
    "RetryableError",
    "TableNotFoundError",
    "ValidationError",
]
