"""
Region Discovery Fan-Out

Finds the regions that host DynamoDB tables by probing every region of the
catalog with a single bounded ListTables call.

- A ThreadPoolExecutor of ``concurrency_limit`` workers bounds the number of
  probes in flight.
- Each probe pushes its result onto a thread-safe queue; a single aggregator
  drains the queue once every probe has finished.
- A failing probe (unreachable endpoint, opt-in region, missing permission)
  contributes nothing and never aborts discovery.

The listing cap makes a probe a "does this region have anything" check, not an
exhaustive listing. Result order follows completion order; use
``sort_probe_results`` for a stable order.
"""

import logging
import queue
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, Iterable, List, Optional

from ..config import AWS_REGIONS, LOCAL_REGION_ID, ExplorerConfig
from ..core import StoreGateway, create_store_gateway
from ..exceptions import ValidationError
from ..models import RegionProbeResult

logger = logging.getLogger(__name__)

GatewayFactory = Callable[[ExplorerConfig, Optional[str]], StoreGateway]


def probe_region(
    config: ExplorerConfig,
    region_id: str,
    table_limit: int,
    gateway_factory: GatewayFactory = create_store_gateway
) -> Optional[RegionProbeResult]:
    """
    List up to ``table_limit`` tables in one region.

    Returns:
        RegionProbeResult when the region reported at least one table,
        None when it reported none or the probe failed
    """
    try:
        gateway = gateway_factory(config, region_id)
        table_names = gateway.list_tables(limit=table_limit)
    except Exception as e:
        logger.debug(f"Probe of region {region_id} failed: {e}")
        return None

    if not table_names:
        return None
    return RegionProbeResult(region_id=region_id, table_count=len(table_names), table_names=table_names)


def discover_regions(
    config: ExplorerConfig,
    catalog: Iterable[str] = AWS_REGIONS,
    concurrency_limit: Optional[int] = None,
    table_limit: Optional[int] = None,
    gateway_factory: GatewayFactory = create_store_gateway
) -> List[RegionProbeResult]:
    """
    Probe every region of the catalog and return those hosting tables.

    When the configuration points at a local endpoint, the fan-out is skipped
    and a single ``local`` result listing every table is returned; failures
    of that single listing propagate.

    Args:
        config: Base configuration (credentials, timeouts); the region is
            replaced per probe
        catalog: Region identifiers to probe
        concurrency_limit: Maximum probes in flight (config default if None)
        table_limit: Table names requested per probe (config default if None)
        gateway_factory: Builds a region-scoped gateway

    Returns:
        One RegionProbeResult per region with at least one table, in
        completion order

    Raises:
        ValidationError: If concurrency_limit is not positive
    """
    if config.is_local:
        gateway = gateway_factory(config, None)
        table_names = gateway.list_tables()
        logger.info(f"Local endpoint {config.endpoint_url} has {len(table_names)} tables")
        return [RegionProbeResult(region_id=LOCAL_REGION_ID, table_count=len(table_names), table_names=table_names)]

    limit = config.discovery_concurrency if concurrency_limit is None else concurrency_limit
    if limit <= 0:
        raise ValidationError("concurrency_limit must be > 0")
    per_probe = config.discovery_table_limit if table_limit is None else table_limit

    regions = list(catalog)
    results: "queue.Queue[RegionProbeResult]" = queue.Queue()

    def probe_into_queue(region_id: str) -> None:
        result = probe_region(config, region_id, per_probe, gateway_factory)
        if result is not None:
            results.put(result)

    logger.info(f"Probing {len(regions)} regions with {limit} concurrent probes")
    with ThreadPoolExecutor(max_workers=limit, thread_name_prefix="region-probe") as pool:
        for region_id in regions:
            pool.submit(probe_into_queue, region_id)
    # Leaving the with-block waits for every probe.

    discovered: List[RegionProbeResult] = []
    while True:
        try:
            discovered.append(results.get_nowait())
        except queue.Empty:
            break

    if discovered:
        logger.info(f"Found tables in {len(discovered)} of {len(regions)} regions")
    else:
        logger.warning("No tables found in any region")
    return discovered


def sort_probe_results(results: Iterable[RegionProbeResult]) -> List[RegionProbeResult]:
    """Order probe results by region identifier."""
    return sorted(results, key=lambda result: result.region_id)
