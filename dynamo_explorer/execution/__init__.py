"""
Read execution: page readers, the continuous scan executor and region discovery.
"""

from .continuous_scan import ContinuousScanExecutor
from .discovery import discover_regions, probe_region, sort_probe_results
from .readers import PageReader, query_reader, reader_for_plan, scan_reader

__all__ = [
    "ContinuousScanExecutor",
    "PageReader",
    "discover_regions",
    "probe_region",
    "query_reader",
    "reader_for_plan",
    "scan_reader",
    "sort_probe_results",
]
