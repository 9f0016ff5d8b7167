import logging
import os
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, field_validator

from .constants import (
    DEFAULT_DISCOVERY_CONCURRENCY,
    DEFAULT_DISCOVERY_TABLE_LIMIT,
    DEFAULT_PAGE_SIZE,
    DEFAULT_SCAN_BATCH_SIZE,
    DEFAULT_SCAN_TIME_BUDGET_SECONDS,
    MAX_PAGE_SIZE,
)

# Load environment variables from .env file if it exists
load_dotenv()


class ExplorerConfig(BaseModel):
    """Configuration for the DynamoDB connection and the browsing session."""

    aws_access_key_id: Optional[str] = Field(
        default_factory=lambda: os.getenv("AWS_ACCESS_KEY_ID"),
        description="AWS access key ID"
    )

    aws_secret_access_key: Optional[str] = Field(
        default_factory=lambda: os.getenv("AWS_SECRET_ACCESS_KEY"),
        description="AWS secret access key"
    )

    aws_session_token: Optional[str] = Field(
        default_factory=lambda: os.getenv("AWS_SESSION_TOKEN"),
        description="AWS session token for temporary credentials"
    )

    profile_name: Optional[str] = Field(
        default_factory=lambda: os.getenv("AWS_PROFILE"),
        description="Named profile from the shared AWS config"
    )

    region_name: str = Field(
        default_factory=lambda: os.getenv("AWS_REGION", "us-east-1"),
        description="AWS region name"
    )

    endpoint_url: Optional[str] = Field(
        default_factory=lambda: os.getenv("DYNAMODB_ENDPOINT_URL"),
        description="DynamoDB endpoint URL (for DynamoDB Local)"
    )

    # Connection settings
    max_pool_connections: int = Field(
        default=50,
        description="Maximum number of connections in the connection pool"
    )

    retries: int = Field(
        default=3,
        description="Number of retry attempts for failed requests"
    )

    timeout_seconds: float = Field(
        default=30.0,
        description="Request timeout in seconds"
    )

    # Logging settings
    enable_debug_logging: bool = Field(
        default_factory=lambda: os.getenv("DYNAMODB_DEBUG_LOGGING", "false").lower() == "true",
        description="Enable debug logging for DynamoDB operations"
    )

    # Browsing settings
    page_size: int = Field(
        default=DEFAULT_PAGE_SIZE,
        description="Number of rows requested per displayed page"
    )

    scan_batch_size: int = Field(
        default=DEFAULT_SCAN_BATCH_SIZE,
        description="Limit sent with every page read of a continuous scan"
    )

    scan_time_budget_seconds: float = Field(
        default=DEFAULT_SCAN_TIME_BUDGET_SECONDS,
        description="Time budget of a single continuous scan invocation"
    )

    # Region discovery settings
    discovery_concurrency: int = Field(
        default=DEFAULT_DISCOVERY_CONCURRENCY,
        description="Maximum number of region probes in flight"
    )

    discovery_table_limit: int = Field(
        default=DEFAULT_DISCOVERY_TABLE_LIMIT,
        description="Table names requested by each region probe"
    )

    @field_validator('region_name')
    @classmethod
    def validate_region(cls, v):
        """Validate AWS region name."""
        if not v:
            raise ValueError("AWS region name is required")
        return v

    @field_validator('page_size')
    @classmethod
    def validate_page_size(cls, v):
        if v < 1 or v > MAX_PAGE_SIZE:
            raise ValueError(f"Page size must be between 1 and {MAX_PAGE_SIZE}")
        return v

    @field_validator('scan_batch_size', 'discovery_concurrency', 'discovery_table_limit')
    @classmethod
    def validate_positive(cls, v, info):
        if v < 1:
            raise ValueError(f"{info.field_name} must be a positive integer")
        return v

    @field_validator('scan_time_budget_seconds')
    @classmethod
    def validate_time_budget(cls, v):
        if v <= 0:
            raise ValueError("Scan time budget must be greater than zero")
        return v

    @property
    def is_local(self) -> bool:
        """True when connected to a DynamoDB Local style endpoint."""
        return bool(self.endpoint_url)

    def for_region(self, region_name: str) -> 'ExplorerConfig':
        """Return a copy of this configuration scoped to another region.

        Args:
            region_name: Target AWS region

        Returns:
            New ExplorerConfig sharing credentials and connection settings
        """
        return self.model_copy(update={'region_name': region_name})

    @classmethod
    def from_env(cls) -> 'ExplorerConfig':
        """Create configuration from environment variables.

        Returns:
            ExplorerConfig instance
        """
        return cls()

    @classmethod
    def for_local_development(cls, endpoint_url: str = "http://localhost:8000") -> 'ExplorerConfig':
        """Create configuration for DynamoDB Local.

        Args:
            endpoint_url: Endpoint of the local DynamoDB instance

        Returns:
            ExplorerConfig instance configured for local development
        """
        return cls(
            aws_access_key_id="local",
            aws_secret_access_key="local",
            region_name="us-east-1",
            endpoint_url=endpoint_url,
            enable_debug_logging=True
        )

    model_config = ConfigDict(
        validate_assignment=True,
        use_enum_values=True
    )


def configure_logging(config: ExplorerConfig) -> None:
    """Raise the package logger to DEBUG when debug logging is enabled."""
    package_logger = logging.getLogger("dynamo_explorer")
    if config.enable_debug_logging:
        package_logger.setLevel(logging.DEBUG)
    else:
        package_logger.setLevel(logging.INFO)
