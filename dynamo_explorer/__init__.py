from .config import ExplorerConfig, configure_logging
from .exceptions import (
    ConflictError,
    ConnectionError,
    ExplorerError,
    ItemNotFoundError,
    NotFoundError,
    RetryableError,
    TableNotFoundError,
    ValidationError,
)
from .models import (
    # Filters and plans
    FilterCondition,
    OperatorKind,
    CompiledExpression,
    FullScan,
    KeyLookup,
    # Table metadata
    KeySchema,
    TableDescription,
    # Scan results
    Page,
    ScanResult,
    ScanSession,
    RegionProbeResult,
    TableMatch,
)
from .planning import compile_filters, plan_read, summarize_filters
from .core import (
    StoreGateway,
    create_store_gateway,
)
from .execution import ContinuousScanExecutor, discover_regions
from .utils import fuzzy_find
from .handlers.table_browser import (
    # Table Browser CQRS APIs
    TableBrowserReadApi,
    TableBrowserWriteApi,
)

__version__ = "1.0.0"
__all__ = [
    # Configuration
    "ExplorerConfig",
    "configure_logging",
    # Exceptions
    "ExplorerError",
    "ValidationError",
    "NotFoundError",
    "TableNotFoundError",
    "ItemNotFoundError",
    "ConflictError",
    "ConnectionError",
    "RetryableError",
    # Models
    "FilterCondition",
    "OperatorKind",
    "CompiledExpression",
    "FullScan",
    "KeyLookup",
    "KeySchema",
    "TableDescription",
    "Page",
    "ScanResult",
    "ScanSession",
    "RegionProbeResult",
    "TableMatch",
    # Planning
    "compile_filters",
    "plan_read",
    "summarize_filters",
    # Infrastructure
    "StoreGateway",
    "create_store_gateway",
    # Execution
    "ContinuousScanExecutor",
    "discover_regions",
    "fuzzy_find",
    # Handlers
    "TableBrowserReadApi",
    "TableBrowserWriteApi",
]
