"""
Domain-Specific Exceptions for dynamo-explorer

Every error raised by the gateway, the browser APIs and the item utilities
extends ExplorerError. The filter compiler and the read planner never raise;
they degrade to "condition ignored" and "full scan" respectively.

Organized by category:
1. Input Validation Errors
2. Resource Not Found Errors
3. Conflict Errors
4. Infrastructure and Retry Errors
"""

from typing import Any, Dict, Optional

from .base import ExplorerError


# =============================================================================
# Input Validation Errors
# =============================================================================

class ValidationError(ExplorerError):
    """Raised when input or a request is rejected.

    Used for:
    - Item JSON that is not an object
    - Missing or mistyped key attributes on writes
    - DynamoDB ValidationException (bad expression, type mismatch on key)
    """

    def __init__(self, message: str, errors: Optional[Dict[str, Any]] = None, original_error: Optional[Exception] = None):
        """Initialize validation error.

        Args:
            message: Human-readable error message
            errors: Dictionary of field-level validation errors
            original_error: The original exception that caused this error
        """
        self.errors = errors or {}
        context = {}
        if self.errors:
            context['validation_errors'] = self.errors
        super().__init__(message, original_error, context)


# =============================================================================
# Resource Not Found Errors
# =============================================================================

class NotFoundError(ExplorerError):
    """Raised when a DynamoDB resource (table, item) is not found."""

    def __init__(self, message: str, resource_type: Optional[str] = None, resource_name: Optional[str] = None, original_error: Optional[Exception] = None):
        """Initialize not found error.

        Args:
            message: Human-readable error message
            resource_type: Type of resource not found ('table' or 'item')
            resource_name: Name of the resource not found
            original_error: The original exception that caused this error
        """
        self.resource_type = resource_type
        self.resource_name = resource_name
        context = {}
        if resource_type:
            context['resource_type'] = resource_type
        if resource_name:
            context['resource_name'] = resource_name
        super().__init__(message, original_error, context)


class TableNotFoundError(NotFoundError):
    """Raised when the requested table does not exist in the connected region."""

    def __init__(self, table_name: str, original_error: Optional[Exception] = None):
        self.table_name = table_name
        super().__init__(
            f"Table '{table_name}' not found",
            resource_type='table',
            resource_name=table_name,
            original_error=original_error,
        )


class ItemNotFoundError(NotFoundError):
    """Raised when the item a key points at is no longer in the table.

    Used for:
    - Reloading an item (``get_item(..., required=True)``)
    - Deleting with ``must_exist`` after another session removed the item
    """

    def __init__(self, table_name: str, key: Dict[str, Any], original_error: Optional[Exception] = None):
        self.table_name = table_name
        self.key = key
        super().__init__(
            f"No item with key {key} in table '{table_name}'",
            resource_type='item',
            original_error=original_error,
        )


# =============================================================================
# Conflict Errors
# =============================================================================

class ConflictError(ExplorerError):
    """Raised when a conditional write fails or a resource already exists.

    Used for:
    - ConditionalCheckFailedException from DynamoDB
    - CreateTable on an existing table (ResourceInUseException)
    """

    def __init__(self, message: str, resource_id: Optional[str] = None, original_error: Optional[Exception] = None):
        self.resource_id = resource_id
        context = {}
        if resource_id:
            context['resource_id'] = resource_id
        super().__init__(message, original_error, context)


# =============================================================================
# Infrastructure and Retry Errors
# =============================================================================

class ConnectionError(ExplorerError):
    """Raised when talking to DynamoDB fails.

    Used for:
    - Network connectivity issues
    - Authentication/authorization failures
    - Invalid endpoint configurations
    """

    def __init__(self, message: str, original_error: Optional[Exception] = None, context: Optional[Dict[str, Any]] = None):
        super().__init__(message, original_error, context)


class RetryableError(ExplorerError):
    """Raised when an operation fails for a temporary reason (throttling, service hiccup)."""

    def __init__(self, message: str, retry_after_seconds: Optional[int] = None, original_error: Optional[Exception] = None):
        """Initialize retryable error.

        Args:
            message: Human-readable error message
            retry_after_seconds: Suggested retry delay in seconds
            original_error: The original exception that caused this error
        """
        self.retry_after_seconds = retry_after_seconds
        context = {}
        if retry_after_seconds:
            context['retry_after_seconds'] = retry_after_seconds
        super().__init__(message, original_error, context)
