"""
Discovery client for the Prometheus probe.

Answers the three calls the orchestration server makes on a probe:
account values, target validation and discovery.
"""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Callable, Protocol, Sequence

from promprobe.config.target import PrometheusTargetConf, load_target_conf
from promprobe.core.errors import ProviderError
from promprobe.discovery.mapper import EntityMapper
from promprobe.discovery.models import DiscoveryFailure, DiscoveryResult, DiscoverySuccess
from promprobe.logging import get_component_logger
from promprobe.providers.models import Sample
from promprobe.providers.prometheus import RESPONSE_TIME_QUERY, PrometheusQueryClient
from promprobe.registration import PROBE_CATEGORY, TARGET_ID_FIELD, TARGET_TYPE
from promprobe.sdk.models import (
    AccountValue,
    DiscoveryResponse,
    TargetInfo,
    ValidationResponse,
)


class QueryClient(Protocol):
    """Instant query capability; failures are raised as ProviderError."""

    def query(self, expression: str, time: datetime | None = None) -> list[Sample]:
        ...


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class PrometheusDiscoveryClient:
    """Discovery client for a single Prometheus target."""

    def __init__(
        self,
        target_conf: PrometheusTargetConf,
        query_client: QueryClient | None = None,
        *,
        mapper: EntityMapper | None = None,
        query: str = RESPONSE_TIME_QUERY,
        clock: Callable[[], datetime] = _utcnow,
        logger: Any = None,
    ) -> None:
        self.target_conf = target_conf
        self.query_client = query_client or PrometheusQueryClient(target_conf.address)
        self.query = query
        self._clock = clock
        self._log = logger or get_component_logger(
            __name__, "discovery_client", target=target_conf.address
        )
        self.mapper = mapper or EntityMapper(logger=self._log.bind(component="entity_mapper"))

    @classmethod
    def from_conf_file(
        cls,
        conf_path: str | Path,
        *,
        timeout: float | None = None,
        **kwargs: Any,
    ) -> "PrometheusDiscoveryClient":
        """
        Create a client from a target configuration file.

        Raises:
            ConfigurationError: If the configuration is missing or invalid
        """
        target_conf = load_target_conf(conf_path)
        query_client = PrometheusQueryClient(target_conf.address, timeout=timeout)
        return cls(target_conf, query_client, **kwargs)

    def get_account_values(self) -> TargetInfo:
        """Describe the target so the server can register it."""
        account_values = [
            AccountValue(key=TARGET_ID_FIELD, string_value=self.target_conf.address),
        ]
        return TargetInfo(
            probe_category=PROBE_CATEGORY,
            target_type=TARGET_TYPE,
            target_identifier_field=TARGET_ID_FIELD,
            account_values=account_values,
        )

    def validate(self, account_values: Sequence[AccountValue]) -> ValidationResponse:
        """Validate the target. Always succeeds."""
        self._log.info("validation_started", account_values=_dump(account_values))
        response = ValidationResponse()
        self._log.info("validation_completed", errors=len(response.errors))
        return response

    def discover(self, account_values: Sequence[AccountValue]) -> DiscoveryResponse:
        """
        Discover the target topology.

        Query failures are reported inside the response as a single
        CRITICAL error; this method does not raise for them.
        """
        return self.discover_result(account_values).to_response()

    def discover_result(self, account_values: Sequence[AccountValue]) -> DiscoveryResult:
        """Run one discovery cycle and return its tagged outcome."""
        self._log.info("discovery_started", account_values=_dump(account_values))

        try:
            samples = self.query_client.query(self.query, self._clock())
        except ProviderError as e:
            self._log.error("discovery_query_failed", error=str(e))
            return DiscoveryFailure.critical(str(e))

        entities = self.mapper.map(samples)
        self._log.info(
            "discovery_completed",
            samples=len(samples),
            entities=len(entities),
        )
        return DiscoverySuccess(entities)


def _dump(account_values: Sequence[AccountValue]) -> list[dict[str, Any]]:
    return [av.model_dump(by_alias=True) for av in account_values]
