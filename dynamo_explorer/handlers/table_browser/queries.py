"""
Table Browser Read API

This module provides the read side of the explorer session layer:
- Table listing and description, and the fuzzy table finder
- Browsing a table with optional filter conditions
- Resuming a filtered browse from the previous ScanSession
- Plain page-by-page navigation of an unfiltered browse
- Region discovery at connect time

Filtered reads go through the filter compiler, the read planner and the
continuous scan executor. Unfiltered reads are a single fixed page operation.
"""

import logging
import threading
from typing import Any, Dict, Iterable, List, Optional

from ...config import AWS_REGIONS, ExplorerConfig
from ...core import StoreGateway, create_store_gateway
from ...exceptions import ItemNotFoundError, ValidationError
from ...execution import ContinuousScanExecutor, discover_regions, reader_for_plan, sort_probe_results
from ...models import (
    FilterCondition,
    FullScan,
    KeySchema,
    RegionProbeResult,
    ScanSession,
    TableDescription,
    TableMatch,
)
from ...planning import compile_filters, describe_plan, plan_read
from ...utils import fuzzy_find

logger = logging.getLogger(__name__)


class TableBrowserReadApi:
    """
    Read-only API for browsing DynamoDB tables.

    Sessions returned by ``browse`` carry the table name, the read plan and
    the cursor, so ``continue_scan`` and ``next_page`` need nothing else.
    A new filter or a table switch starts over with ``browse``.
    """

    def __init__(
        self,
        config: ExplorerConfig,
        gateway: Optional[StoreGateway] = None,
        executor: Optional[ContinuousScanExecutor] = None
    ):
        """Initialize read API with configuration."""
        self.config = config
        self.gateway = gateway or create_store_gateway(config)
        self.executor = executor or ContinuousScanExecutor.from_config(config)

    def list_tables(self, pattern: Optional[str] = None) -> List[str]:
        """
        List the tables of the configured region.

        Args:
            pattern: Optional table finder text; only matching names are
                returned, best match first

        Returns:
            Table names, sorted by name when no pattern is given
        """
        if pattern:
            return [match.name for match in self.find_tables(pattern)]
        return sorted(self.gateway.list_tables())

    def find_tables(self, pattern: str) -> List[TableMatch]:
        """Rank the region's tables against ``pattern`` (see ``fuzzy_find``)."""
        return fuzzy_find(pattern, sorted(self.gateway.list_tables()))

    def describe_table(self, table_name: str) -> TableDescription:
        return self.gateway.describe_table(table_name)

    def browse(
        self,
        table_name: str,
        conditions: Iterable[FilterCondition] = (),
        schema: Optional[KeySchema] = None,
        page_size: Optional[int] = None,
        cancel_event: Optional[threading.Event] = None
    ) -> ScanSession:
        """
        Start browsing a table.

        Without usable conditions this reads a single page of ``page_size``
        items. With conditions the filter is compiled and planned, and the
        continuous scan executor accumulates ``page_size`` matching items or
        as many as the time budget allows.

        Args:
            table_name: Table to browse
            conditions: Filter conditions from the filter builder
            schema: Key schema of the table; described on demand when a
                filter is present and no schema is given
            page_size: Number of rows wanted (config default if None)
            cancel_event: Optional event checked between pages

        Returns:
            New ScanSession for this table and filter

        Raises:
            ValidationError: If page_size is not positive
            ExplorerError: If a page read fails
        """
        size = self._page_size(page_size)
        compiled = compile_filters(list(conditions))

        if compiled is None:
            page = self.gateway.read_page(table_name, limit=size)
            logger.debug(f"Read {page.count} items from {table_name}")
            return ScanSession(
                items=page.items,
                total_scanned=page.scanned_count,
                cursor=page.cursor,
                target_count=size,
                table_name=table_name,
                plan=FullScan(filter=None),
            )

        if schema is None:
            schema = self.gateway.describe_table(table_name).key_schema

        plan = plan_read(compiled, schema)
        logger.info(f"Browsing {table_name}: {describe_plan(plan)}")
        reader = reader_for_plan(self.gateway, table_name, plan)
        session = self.executor.start_session(reader, size, cancel_event=cancel_event)
        return session.model_copy(update={'table_name': table_name, 'plan': plan})

    def continue_scan(
        self,
        session: ScanSession,
        page_size: Optional[int] = None,
        cancel_event: Optional[threading.Event] = None
    ) -> ScanSession:
        """
        Resume a browse from its cursor and append up to ``page_size`` items.

        Used both for "load more" and for "continue scanning" after the time
        budget ran out. A session without a cursor is returned unchanged.
        """
        if not session.has_more:
            return session
        self._require_source(session)

        reader = reader_for_plan(self.gateway, session.table_name, session.plan)
        return self.executor.continue_session(
            session, reader, self._page_size(page_size), cancel_event=cancel_event
        )

    def next_page(self, session: ScanSession, page_size: Optional[int] = None) -> ScanSession:
        """
        Replace the rows of an unfiltered browse with the following page.

        Args:
            session: Session returned by ``browse`` or ``next_page``
            page_size: Page size (config default if None)

        Returns:
            Session holding only the next page's rows; the session itself
            when there is no next page

        Raises:
            ValidationError: If the session is not an unfiltered browse
        """
        if not session.has_more:
            return session
        self._require_source(session)
        if not isinstance(session.plan, FullScan) or session.plan.filter is not None:
            raise ValidationError("next_page is only available for unfiltered browsing")

        size = self._page_size(page_size)
        page = self.gateway.read_page(session.table_name, limit=size, cursor=session.cursor)
        return session.model_copy(update={
            'items': page.items,
            'total_scanned': page.scanned_count,
            'cursor': page.cursor,
            'target_count': size,
            'timed_out': False,
        })

    def get_item(
        self,
        table_name: str,
        key: Dict[str, Any],
        required: bool = False
    ) -> Optional[Dict[str, Any]]:
        """
        Fetch the latest version of an item, e.g. before editing it.

        Returns None for a missing item unless ``required`` is set, in which
        case ItemNotFoundError is raised.
        """
        item = self.gateway.get_item(table_name, key)
        if item is None and required:
            raise ItemNotFoundError(table_name, key).at("GetItem")
        return item

    def discover_regions(
        self,
        catalog: Iterable[str] = AWS_REGIONS,
        concurrency_limit: Optional[int] = None
    ) -> List[RegionProbeResult]:
        """Find the regions that host tables, ordered by region identifier."""
        return sort_probe_results(discover_regions(self.config, catalog, concurrency_limit))

    def _page_size(self, page_size: Optional[int]) -> int:
        size = self.config.page_size if page_size is None else page_size
        if size <= 0:
            raise ValidationError(f"Page size must be positive, got {size}")
        return size

    @staticmethod
    def _require_source(session: ScanSession) -> None:
        if session.table_name is None or session.plan is None:
            raise ValidationError("Session does not record the table and plan it was read with")
