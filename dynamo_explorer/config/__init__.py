from .config import ExplorerConfig, configure_logging
from .constants import AWS_REGIONS, LOCAL_REGION_ID

__all__ = [
    "AWS_REGIONS",
    "ExplorerConfig",
    "LOCAL_REGION_ID",
    "configure_logging",
]
