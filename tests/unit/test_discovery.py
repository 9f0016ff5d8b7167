"""
Unit tests for region discovery.

Gateways are replaced by mocks built by a fake gateway factory, so no probe
leaves the process.
"""

import threading
import time
from unittest.mock import Mock

import pytest

from dynamo_explorer.config import AWS_REGIONS, LOCAL_REGION_ID
from dynamo_explorer.exceptions import ConnectionError, ValidationError
from dynamo_explorer.execution import discover_regions, probe_region, sort_probe_results
from dynamo_explorer.models import RegionProbeResult


def make_factory(tables_by_region, failing=()):
    """Gateway factory returning mocks that list ``tables_by_region[region]``."""
    requested = []

    def factory(config, region_name=None):
        requested.append(region_name)
        gateway = Mock()
        if region_name in failing:
            gateway.list_tables.side_effect = ConnectionError(f"{region_name} unreachable")
        else:
            gateway.list_tables.return_value = list(tables_by_region.get(region_name, []))
        return gateway

    factory.requested = requested
    return factory


class TestProbeRegion:
    """Test a single region probe."""

    def test_region_with_tables(self, explorer_config):
        factory = make_factory({'eu-west-1': ['a', 'b']})

        result = probe_region(explorer_config, 'eu-west-1', 100, factory)

        assert result == RegionProbeResult(region_id='eu-west-1', table_count=2, table_names=['a', 'b'])

    def test_empty_region_contributes_nothing(self, explorer_config):
        assert probe_region(explorer_config, 'eu-west-1', 100, make_factory({})) is None

    def test_failure_contributes_nothing(self, explorer_config):
        factory = make_factory({}, failing={'eu-west-1'})

        assert probe_region(explorer_config, 'eu-west-1', 100, factory) is None

    def test_listing_is_capped(self, explorer_config):
        gateway = Mock()
        gateway.list_tables.return_value = ['t']

        probe_region(explorer_config, 'us-east-1', 100, lambda config, region: gateway)

        gateway.list_tables.assert_called_once_with(limit=100)


class TestDiscoverRegions:
    """Test the bounded fan-out over the region catalog."""

    def test_failing_regions_are_absorbed(self, explorer_config):
        failing = set(AWS_REGIONS[:5])
        tables = {region: [f"{region}-table"] for region in AWS_REGIONS[5:8]}
        factory = make_factory(tables, failing=failing)

        results = discover_regions(explorer_config, gateway_factory=factory)

        assert {r.region_id for r in results} == set(AWS_REGIONS[5:8])
        assert sorted(factory.requested) == sorted(AWS_REGIONS)

    def test_every_region_probed_once(self, explorer_config):
        factory = make_factory({})

        results = discover_regions(explorer_config, gateway_factory=factory)

        assert results == []
        assert len(factory.requested) == len(AWS_REGIONS) == 28

    def test_concurrency_limit_is_respected(self, explorer_config):
        lock = threading.Lock()
        state = {'in_flight': 0, 'peak': 0}

        def slow_listing(limit=None):
            with lock:
                state['in_flight'] += 1
                state['peak'] = max(state['peak'], state['in_flight'])
            time.sleep(0.01)
            with lock:
                state['in_flight'] -= 1
            return ['t']

        def factory(config, region_name=None):
            gateway = Mock()
            gateway.list_tables.side_effect = slow_listing
            return gateway

        results = discover_regions(explorer_config, concurrency_limit=3, gateway_factory=factory)

        assert len(results) == len(AWS_REGIONS)
        assert 1 <= state['peak'] <= 3

    def test_custom_catalog_and_table_limit(self, explorer_config):
        gateway = Mock()
        gateway.list_tables.return_value = ['t']

        results = discover_regions(
            explorer_config,
            catalog=['us-east-1', 'eu-west-1'],
            table_limit=5,
            gateway_factory=lambda config, region: gateway,
        )

        assert len(results) == 2
        gateway.list_tables.assert_called_with(limit=5)

    @pytest.mark.parametrize("limit", [0, -1])
    def test_invalid_concurrency_limit(self, explorer_config, limit):
        with pytest.raises(ValidationError):
            discover_regions(explorer_config, concurrency_limit=limit, gateway_factory=make_factory({}))

    def test_results_sorted_by_region(self, explorer_config):
        factory = make_factory({'us-west-2': ['a'], 'ap-south-1': ['b'], 'eu-west-1': ['c']})

        results = sort_probe_results(discover_regions(explorer_config, gateway_factory=factory))

        assert [r.region_id for r in results] == ['ap-south-1', 'eu-west-1', 'us-west-2']


class TestLocalDiscovery:
    """Test discovery against a local endpoint."""

    def test_local_endpoint_skips_fan_out(self, local_config):
        factory = make_factory({None: ['orders', 'users']})

        results = discover_regions(local_config, gateway_factory=factory)

        assert results == [RegionProbeResult(region_id=LOCAL_REGION_ID, table_count=2, table_names=['orders', 'users'])]
        assert factory.requested == [None]

    def test_local_listing_failure_propagates(self, local_config):
        factory = make_factory({}, failing={None})

        with pytest.raises(ConnectionError):
            discover_regions(local_config, gateway_factory=factory)
