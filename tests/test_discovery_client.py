"""Tests for discovery/client.py.

Tests for account values, validation and discovery cycles of the
Prometheus discovery client.
"""

import json
import math
from datetime import datetime, timezone
from unittest.mock import MagicMock

import httpx
import pydantic
import pytest
import respx
from promprobe.config.target import PrometheusTargetConf
from promprobe.core.errors import ConfigurationError
from promprobe.discovery.client import PrometheusDiscoveryClient
from promprobe.discovery.mapper import EntityMapper
from promprobe.discovery.models import DiscoveryFailure, DiscoverySuccess
from promprobe.providers.models import Sample
from promprobe.providers.prometheus import (
    RESPONSE_TIME_QUERY,
    PrometheusQueryClient,
    PrometheusQueryError,
)
from promprobe.registration import PROBE_CATEGORY, TARGET_ID_FIELD, TARGET_TYPE
from promprobe.sdk.models import AccountValue, CommodityType, ErrorSeverity

FIXED_NOW = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


def _client(target_conf, samples=None, error=None, **kwargs):
    query_client = MagicMock()
    if error is not None:
        query_client.query.side_effect = error
    else:
        query_client.query.return_value = samples or []
    return PrometheusDiscoveryClient(
        target_conf, query_client, clock=lambda: FIXED_NOW, **kwargs
    )


class TestConstruction:
    def test_default_query_client(self, target_conf):
        client = PrometheusDiscoveryClient(target_conf)

        assert isinstance(client.query_client, PrometheusQueryClient)
        assert client.query_client.base_url == "http://prometheus:9090"
        assert client.query == RESPONSE_TIME_QUERY

    def test_from_conf_file(self, tmp_path):
        conf = tmp_path / "target.json"
        conf.write_text(json.dumps({"address": "http://prom:9090"}))

        client = PrometheusDiscoveryClient.from_conf_file(conf, timeout=5.0)

        assert client.target_conf.address == "http://prom:9090"
        assert client.query_client._timeout == 5.0

    def test_from_conf_file_missing(self, tmp_path):
        with pytest.raises(ConfigurationError):
            PrometheusDiscoveryClient.from_conf_file(tmp_path / "missing.json")

    def test_from_conf_file_empty_address(self, tmp_path):
        conf = tmp_path / "target.json"
        conf.write_text(json.dumps({"address": ""}))

        with pytest.raises(ConfigurationError):
            PrometheusDiscoveryClient.from_conf_file(conf)


class TestGetAccountValues:
    def test_single_account_value(self, target_conf):
        info = _client(target_conf).get_account_values()

        assert info.probe_category == PROBE_CATEGORY
        assert info.target_type == TARGET_TYPE
        assert info.target_identifier_field == TARGET_ID_FIELD
        assert len(info.account_values) == 1
        assert info.account_values[0].key == TARGET_ID_FIELD
        assert info.account_values[0].string_value == "http://prometheus:9090"

    def test_does_not_query(self, target_conf):
        client = _client(target_conf)

        client.get_account_values()

        client.query_client.query.assert_not_called()

    def test_fresh_values_each_call(self, target_conf):
        client = _client(target_conf)

        first = client.get_account_values()
        second = client.get_account_values()

        assert first == second
        assert first.account_values[0] is not second.account_values[0]


class TestValidate:
    def test_always_empty(self, target_conf):
        client = _client(target_conf)
        values = client.get_account_values().account_values

        response = client.validate(values)

        assert response.errors == []
        client.query_client.query.assert_not_called()

    def test_accepts_empty_account_values(self, target_conf):
        assert _client(target_conf).validate([]).errors == []


class TestDiscover:
    """Discovery cycle outcomes."""

    def test_two_samples(self, target_conf, two_samples):
        client = _client(target_conf, samples=two_samples)

        response = client.discover(client.get_account_values().account_values)

        assert response.errors == []
        assert len(response.entities) == 2
        for entity, used in zip(response.entities, [12.5, 7.0]):
            assert len(entity.sells) == 1
            assert entity.sells[0].commodity_type == CommodityType.RESPONSE_TIME
            assert entity.sells[0].capacity == 100.0
            assert entity.sells[0].used == used

    def test_queries_fixed_expression_at_now(self, target_conf):
        client = _client(target_conf)

        client.discover([])

        client.query_client.query.assert_called_once_with(RESPONSE_TIME_QUERY, FIXED_NOW)

    def test_empty_vector_is_not_an_error(self, target_conf):
        response = _client(target_conf, samples=[]).discover([])

        assert response.entities == []
        assert response.errors == []

    def test_query_failure(self, target_conf):
        client = _client(target_conf, error=PrometheusQueryError("connection refused"))

        response = client.discover([])

        assert response.entities == []
        assert len(response.errors) == 1
        assert response.errors[0].severity == ErrorSeverity.CRITICAL
        assert "connection refused" in response.errors[0].description

    def test_partial_success(self, target_conf):
        samples = [
            Sample(labels={"page": "/a"}, value="1"),
            Sample(labels={"page": "/b"}, value="bad"),
            Sample(labels={"page": "/c"}, value="3"),
        ]
        on_failure = MagicMock()
        client = _client(target_conf, samples=samples, mapper=EntityMapper(on_failure=on_failure))

        response = client.discover([])

        assert response.errors == []
        assert len(response.entities) + on_failure.call_count == len(samples)
        assert [e.sells[0].used for e in response.entities] == [1.0, 3.0]

    def test_discover_result_variants(self, target_conf, two_samples):
        ok = _client(target_conf, samples=two_samples).discover_result([])
        failed = _client(target_conf, error=PrometheusQueryError("down")).discover_result([])

        assert isinstance(ok, DiscoverySuccess)
        assert len(ok.entities) == 2
        assert isinstance(failed, DiscoveryFailure)
        assert failed.errors[0].description == "down"

    def test_no_state_between_cycles(self, target_conf, two_samples):
        client = _client(target_conf, samples=two_samples)

        first = client.discover([])
        second = client.discover([])

        assert first == second

    def test_uses_injected_logger(self, target_conf):
        logger = MagicMock()
        client = _client(target_conf, error=PrometheusQueryError("down"), logger=logger)

        client.discover([AccountValue(key=TARGET_ID_FIELD, string_value="x")])

        events = [c.args[0] for c in logger.info.call_args_list]
        assert "discovery_started" in events
        logger.error.assert_called_once()
        assert logger.error.call_args.args[0] == "discovery_query_failed"


class TestDiscoverEndToEnd:
    """Discovery against a mocked Prometheus HTTP API."""

    @respx.mock
    def test_vector_over_http(self, target_conf):
        respx.get(url__startswith="http://prometheus:9090/api/v1/query").mock(
            return_value=httpx.Response(
                200,
                json={
                    "status": "success",
                    "data": {
                        "resultType": "vector",
                        "result": [
                            {"metric": {"page": "/home"}, "value": [1714564800, "12.5"]},
                            {"metric": {"page": "/cart"}, "value": [1714564800, "7"]},
                        ],
                    },
                },
            )
        )
        client = PrometheusDiscoveryClient(target_conf, clock=lambda: FIXED_NOW)

        response = client.discover([])

        assert [e.id for e in response.entities] == ['{page="/home"}', '{page="/cart"}']
        assert [e.sells[0].used for e in response.entities] == [12.5, 7.0]

    @respx.mock
    def test_connection_refused_over_http(self, target_conf):
        respx.get(url__startswith="http://prometheus:9090/api/v1/query").mock(
            side_effect=httpx.ConnectError("connection refused")
        )
        client = PrometheusDiscoveryClient(target_conf)

        response = client.discover([])

        assert response.entities == []
        assert len(response.errors) == 1
        assert response.errors[0].severity == ErrorSeverity.CRITICAL
        assert "connection refused" in response.errors[0].description

    @pytest.mark.parametrize(
        "data",
        ["oops", {"resultType": "vector", "result": ["x"]}],
    )
    @respx.mock
    def test_malformed_body_over_http(self, target_conf, data):
        respx.get(url__startswith="http://prometheus:9090/api/v1/query").mock(
            return_value=httpx.Response(200, json={"status": "success", "data": data})
        )
        client = PrometheusDiscoveryClient(target_conf)

        response = client.discover([])

        assert response.entities == []
        assert len(response.errors) == 1
        assert response.errors[0].severity == ErrorSeverity.CRITICAL
        assert "Malformed" in response.errors[0].description

    @respx.mock
    def test_nan_sample_is_reported(self, target_conf):
        respx.get(url__startswith="http://prometheus:9090/api/v1/query").mock(
            return_value=httpx.Response(
                200,
                json={
                    "status": "success",
                    "data": {
                        "resultType": "vector",
                        "result": [{"metric": {"page": "/x"}, "value": [1714564800, "NaN"]}],
                    },
                },
            )
        )
        client = PrometheusDiscoveryClient(target_conf)

        response = client.discover([])

        assert response.errors == []
        assert len(response.entities) == 1
        assert math.isnan(response.entities[0].sells[0].used)


class TestDiscoveryModels:
    def test_failure_requires_errors(self):
        with pytest.raises(ValueError):
            DiscoveryFailure([])

    def test_success_response_has_no_errors(self):
        response = DiscoverySuccess([]).to_response()

        assert response.entities == []
        assert response.errors == []

    def test_critical_failure_response(self):
        response = DiscoveryFailure.critical("boom").to_response()

        assert response.entities == []
        assert response.errors[0].severity == ErrorSeverity.CRITICAL


def test_target_conf_is_frozen(target_conf):
    with pytest.raises(pydantic.ValidationError):
        target_conf.address = "http://other:9090"  # type: ignore[misc]

    assert isinstance(target_conf, PrometheusTargetConf)
