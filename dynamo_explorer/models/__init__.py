# Filter conditions
from .filters import FilterCondition, OperatorKind

# Key schema and table metadata
from .schema import (
    IndexKind,
    KeyAttribute,
    KeySchema,
    SecondaryIndex,
    TableDescription,
)

# Compiled expressions and read plans
from .plans import (
    CompiledClause,
    CompiledExpression,
    FullScan,
    KeyLookup,
    QueryPlan,
)

# Pages, scan results and sessions
from .scan import Page, PaginationCursor, ScanResult, ScanSession

# Region discovery and the table finder
from .regions import RegionProbeResult, TableMatch

__all__ = [
    "FilterCondition",
    "OperatorKind",

    "IndexKind",
    "KeyAttribute",
    "KeySchema",
    "SecondaryIndex",
    "TableDescription",

    "CompiledClause",
    "CompiledExpression",
    "FullScan",
    "KeyLookup",
    "QueryPlan",

    "Page",
    "PaginationCursor",
    "ScanResult",
    "ScanSession",

    "RegionProbeResult",
    "TableMatch",
]
