from typing import Any, Dict, Optional


class ExplorerError(Exception):
    """Base exception for all dynamo-explorer errors.

    Errors raised while serving a DynamoDB request also record where it
    failed: the operation (Scan, Query, PutItem, ...), the table and the
    index. The browser reads these attributes to decide what to show, for
    example dropping a cached schema when the table has gone away.

    Attributes:
        message: Human-readable error message
        original_error: The exception that caused this error (if any)
        context: Extra details, such as field-level validation errors
        operation: DynamoDB operation that failed, if known
        table_name: Table the operation targeted, if any
        index_name: Secondary index the operation targeted, if any
    """

    operation: Optional[str] = None
    table_name: Optional[str] = None
    index_name: Optional[str] = None

    def __init__(self, message: str, original_error: Optional[Exception] = None, context: Optional[Dict[str, Any]] = None):
        self.message = message
        self.original_error = original_error
        self.context = dict(context or {})
        super().__init__(message)

    def at(
        self,
        operation: str,
        table_name: Optional[str] = None,
        index_name: Optional[str] = None
    ) -> 'ExplorerError':
        """Record the request this error belongs to and return the error.

        A table name already set by the subclass (TableNotFoundError,
        ItemNotFoundError) is kept when ``table_name`` is None.
        """
        self.operation = operation
        if table_name is not None:
            self.table_name = table_name
        if index_name is not None:
            self.index_name = index_name
        return self

    @property
    def location(self) -> Optional[str]:
        """``Query on orders (index CustomerIndex)``, or None outside a request."""
        if self.operation is None:
            return None
        text = self.operation
        if self.table_name:
            text += f" on {self.table_name}"
        if self.index_name:
            text += f" (index {self.index_name})"
        return text

    def __str__(self) -> str:
        error_str = self.message
        if self.location:
            error_str = f"{self.location}: {error_str}"
        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            error_str += f" (Context: {context_str})"
        return error_str

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(message={self.message!r}, operation={self.operation!r}, "
            f"table_name={self.table_name!r}, index_name={self.index_name!r})"
        )
