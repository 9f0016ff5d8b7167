import logging
import os
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from dynamo_explorer.config import ExplorerConfig, configure_logging


class TestExplorerConfig:
    """Test cases for ExplorerConfig."""

    def test_default_config(self):
        """Test default configuration values."""
        with patch.dict(os.environ, {"AWS_REGION": "us-west-2"}):
            config = ExplorerConfig()

            assert config.region_name == "us-west-2"
            assert config.max_pool_connections == 50
            assert config.retries == 3
            assert config.timeout_seconds == 30.0
            assert config.page_size == 500
            assert config.scan_batch_size == 500
            assert config.scan_time_budget_seconds == 180.0
            assert config.discovery_concurrency == 10
            assert config.discovery_table_limit == 100

    def test_config_from_env_vars(self):
        """Test configuration from environment variables."""
        env_vars = {
            "AWS_ACCESS_KEY_ID": "test_key",
            "AWS_SECRET_ACCESS_KEY": "test_secret",
            "AWS_SESSION_TOKEN": "token",
            "AWS_PROFILE": "dev",
            "AWS_REGION": "eu-west-1",
            "DYNAMODB_ENDPOINT_URL": "http://localhost:8000",
            "DYNAMODB_DEBUG_LOGGING": "true",
        }

        with patch.dict(os.environ, env_vars):
            config = ExplorerConfig.from_env()

            assert config.aws_access_key_id == "test_key"
            assert config.aws_secret_access_key == "test_secret"
            assert config.aws_session_token == "token"
            assert config.profile_name == "dev"
            assert config.region_name == "eu-west-1"
            assert config.endpoint_url == "http://localhost:8000"
            assert config.enable_debug_logging is True
            assert config.is_local

    def test_local_development_config(self):
        """Test local development configuration."""
        config = ExplorerConfig.for_local_development("http://localhost:4566")

        assert config.endpoint_url == "http://localhost:4566"
        assert config.aws_access_key_id == "local"
        assert config.enable_debug_logging is True
        assert config.is_local

    def test_for_region_copies_settings(self, explorer_config):
        """Test region scoping keeps credentials and leaves the original untouched."""
        scoped = explorer_config.for_region("ap-south-1")

        assert scoped.region_name == "ap-south-1"
        assert scoped.aws_access_key_id == explorer_config.aws_access_key_id
        assert explorer_config.region_name == "us-east-1"

    def test_not_local_without_endpoint(self, explorer_config):
        assert not explorer_config.is_local

    def test_empty_region_rejected(self):
        with pytest.raises(ValidationError, match="AWS region name is required"):
            ExplorerConfig(region_name="")

    @pytest.mark.parametrize("page_size", [0, 1001])
    def test_page_size_range(self, page_size):
        with pytest.raises(ValidationError, match="Page size must be between 1 and 1000"):
            ExplorerConfig(region_name="us-east-1", page_size=page_size)

    @pytest.mark.parametrize("field", ["scan_batch_size", "discovery_concurrency", "discovery_table_limit"])
    def test_positive_integers(self, field):
        with pytest.raises(ValidationError, match=f"{field} must be a positive integer"):
            ExplorerConfig(region_name="us-east-1", **{field: 0})

    def test_time_budget_must_be_positive(self):
        with pytest.raises(ValidationError, match="Scan time budget must be greater than zero"):
            ExplorerConfig(region_name="us-east-1", scan_time_budget_seconds=0)

    def test_validate_assignment(self, explorer_config):
        with pytest.raises(ValidationError):
            explorer_config.page_size = 5000


class TestConfigureLogging:
    """Test package log level selection."""

    def test_debug_logging(self):
        configure_logging(ExplorerConfig(region_name="us-east-1", enable_debug_logging=True))

        assert logging.getLogger("dynamo_explorer").level == logging.DEBUG

    def test_default_logging(self):
        configure_logging(ExplorerConfig(region_name="us-east-1", enable_debug_logging=False))

        assert logging.getLogger("dynamo_explorer").level == logging.INFO
