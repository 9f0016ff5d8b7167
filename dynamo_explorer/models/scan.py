"""
Scan Results and Sessions

Page        - one DynamoDB Scan/Query response
ScanResult  - outcome of a single continuous scan invocation
ScanSession - accumulation across invocations, owned by the caller and passed
              back in explicitly on every resume
"""

from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from .plans import FullScan, KeyLookup

PaginationCursor = Optional[Dict[str, Any]]


class Page(BaseModel):
    """A single page returned by the store."""

    items: List[Dict[str, Any]] = Field(default_factory=list)
    cursor: PaginationCursor = Field(None, description="LastEvaluatedKey; None when exhausted")
    count: int = Field(0, description="Items returned after server-side filtering")
    scanned_count: int = Field(0, description="Items read before server-side filtering")

    model_config = ConfigDict(frozen=True)

    @property
    def has_more(self) -> bool:
        return self.cursor is not None


class ScanResult(BaseModel):
    """Outcome of one continuous scan invocation."""

    items: List[Dict[str, Any]] = Field(default_factory=list)
    cursor: PaginationCursor = None
    total_scanned: int = 0
    timed_out: bool = False

    model_config = ConfigDict(frozen=True)

    @property
    def has_more(self) -> bool:
        return self.cursor is not None


class ScanSession(BaseModel):
    """Rows accumulated for the current table view and filter.

    Never mutated in place: every invocation returns a new session. A new
    filter or table switch discards the session instead of resuming it.
    """

    items: List[Dict[str, Any]] = Field(default_factory=list)
    total_scanned: int = 0
    cursor: PaginationCursor = None
    target_count: int = 0
    timed_out: bool = False

    # What the session is reading, so it can be resumed on its own
    table_name: Optional[str] = None
    plan: Optional[Union[KeyLookup, FullScan]] = None

    model_config = ConfigDict(frozen=True)

    @property
    def has_more(self) -> bool:
        return self.cursor is not None

    @property
    def awaiting_decision(self) -> bool:
        """True when the operator should be asked whether to continue scanning."""
        return self.timed_out and self.has_more

    def absorb(self, result: ScanResult, target_count: int) -> 'ScanSession':
        """Return a new session with ``result`` appended to this one."""
        return self.model_copy(update={
            'items': [*self.items, *result.items],
            'total_scanned': self.total_scanned + result.total_scanned,
            'cursor': result.cursor,
            'target_count': target_count,
            'timed_out': result.timed_out,
        })

    def status_message(self) -> str:
        parts = [f"Found {len(self.items)} items", f"(scanned {self.total_scanned} records)"]
        if self.timed_out:
            parts.append("- Timeout reached")
        if self.has_more:
            parts.append("- More data available")
        return " ".join(parts)
