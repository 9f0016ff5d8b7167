"""
Continuous Scan Executor

A filtered Scan may have to read a large part of a table before it finds a
screenful of matches, because DynamoDB applies the filter after reading. The
executor keeps pulling pages until one of these happens:

1. enough matching items have been accumulated (success),
2. the table is exhausted (success),
3. the time budget expires or the caller cancels (``timed_out=True``).

Outcome 3 is not an error: the result carries the partial accumulation and the
cursor to resume from. A failed page read is an error and aborts the whole
invocation without a partial result.

The executor holds no state between invocations. Resuming means passing the
cursor (or the ScanSession) back in; the session layer concatenates items and
sums scanned counts. Pages are read strictly one after another, and
cancellation is only checked between pages, so a page that is in flight when
the caller cancels is still added to the result.
"""

import logging
import threading
import time
from typing import Callable, List, Optional

from ..config import ExplorerConfig
from ..config.constants import DEFAULT_SCAN_BATCH_SIZE, DEFAULT_SCAN_TIME_BUDGET_SECONDS
from ..exceptions import ExplorerError
from ..models import PaginationCursor, ScanResult, ScanSession
from .readers import PageReader

logger = logging.getLogger(__name__)


class ContinuousScanExecutor:
    """
    Time-boxed, resumable accumulation loop over a page reader.

    The batch size sent with every page request is independent of the number
    of rows the caller wants to display: most records of a filtered scan are
    discarded server-side, so a larger batch saves round-trips.
    """

    def __init__(
        self,
        batch_size: int = DEFAULT_SCAN_BATCH_SIZE,
        time_budget: float = DEFAULT_SCAN_TIME_BUDGET_SECONDS,
        clock: Callable[[], float] = time.monotonic
    ):
        """Initialize the executor.

        Args:
            batch_size: Limit sent with every page request
            time_budget: Default time budget of one invocation, in seconds
            clock: Monotonic clock returning seconds
        """
        self.batch_size = batch_size
        self.time_budget = time_budget
        self._clock = clock

    @classmethod
    def from_config(cls, config: ExplorerConfig) -> 'ContinuousScanExecutor':
        return cls(batch_size=config.scan_batch_size, time_budget=config.scan_time_budget_seconds)

    def run(
        self,
        reader: PageReader,
        target: int,
        cursor: PaginationCursor = None,
        time_budget: Optional[float] = None,
        cancel_event: Optional[threading.Event] = None
    ) -> ScanResult:
        """
        Accumulate at least ``target`` items, or as many as the budget allows.

        Args:
            reader: Page reader bound to a table and plan
            target: Number of matching items wanted
            cursor: Cursor to start from (None starts at the beginning)
            time_budget: Seconds allowed for this invocation (executor default if None)
            cancel_event: Optional event checked between pages

        Returns:
            ScanResult with the accumulated items of this invocation only

        Raises:
            ExplorerError: If a page read fails
        """
        budget = self.time_budget if time_budget is None else time_budget
        deadline = self._clock() + budget

        items: List[dict] = []
        total_scanned = 0
        pages = 0

        while True:
            if self._clock() >= deadline or (cancel_event is not None and cancel_event.is_set()):
                logger.info(
                    f"Continuous scan stopped after {pages} pages: {len(items)} items found, "
                    f"{total_scanned} scanned, more data: {cursor is not None}"
                )
                return ScanResult(items=items, cursor=cursor, total_scanned=total_scanned, timed_out=True)

            try:
                page = reader(cursor, self.batch_size)
            except ExplorerError as e:
                logger.error(f"Continuous scan aborted on page {pages + 1}: {e}")
                raise

            pages += 1
            items.extend(page.items)
            total_scanned += page.scanned_count
            cursor = page.cursor
            logger.debug(
                f"Page {pages}: {page.count} matching of {page.scanned_count} scanned "
                f"(accumulated {len(items)}/{target})"
            )

            if len(items) >= target or cursor is None:
                return ScanResult(items=items, cursor=cursor, total_scanned=total_scanned, timed_out=False)

    def start_session(
        self,
        reader: PageReader,
        target: int,
        time_budget: Optional[float] = None,
        cancel_event: Optional[threading.Event] = None
    ) -> ScanSession:
        """Run the first invocation of a logical scan and wrap it in a session."""
        result = self.run(reader, target, None, time_budget, cancel_event)
        return ScanSession().absorb(result, target)

    def continue_session(
        self,
        session: ScanSession,
        reader: PageReader,
        page_size: int,
        time_budget: Optional[float] = None,
        cancel_event: Optional[threading.Event] = None
    ) -> ScanSession:
        """
        Resume a session from its cursor, asking for ``page_size`` more items.

        Args:
            session: Session returned by the previous invocation
            reader: Reader for the same table and plan
            page_size: Additional items wanted
            time_budget: Seconds allowed for this invocation
            cancel_event: Optional event checked between pages

        Returns:
            New session with this invocation's items appended
        """
        if not session.has_more:
            return session
        target = len(session.items) + page_size
        result = self.run(reader, target, session.cursor, time_budget, cancel_event)
        return session.absorb(result, target)
