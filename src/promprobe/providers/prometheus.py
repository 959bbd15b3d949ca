"""
Prometheus instant-query client.

Runs one blocking query against the Prometheus HTTP API and returns the
instant vector as a list of samples.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

import httpx

from promprobe.core.errors import ProviderError
from promprobe.logging import get_component_logger
from promprobe.providers.models import Sample

DEFAULT_USER_AGENT = "promprobe/0.1.0"

# Page response time in milliseconds, from the browser navigation timing exporter
RESPONSE_TIME_QUERY = (
    "(navigation_timing_response_end_seconds-navigation_timing_request_start_seconds)*1000"
)


class PrometheusQueryError(ProviderError):
    """Raised when a Prometheus query cannot be completed."""


class PrometheusQueryClient:
    """Prometheus instant query client."""

    name = "prometheus"

    def __init__(
        self,
        url: str,
        *,
        timeout: float | None = None,
        username: str | None = None,
        password: str | None = None,
        bearer_token: str | None = None,
        user_agent: str = DEFAULT_USER_AGENT,
        transport: httpx.BaseTransport | None = None,
        logger: Any = None,
    ) -> None:
        """
        Initialize the query client.

        Args:
            url: Prometheus server URL
            timeout: Request deadline in seconds, None for no client-side limit
            username: Optional HTTP basic auth username
            password: Optional HTTP basic auth password
            bearer_token: Optional bearer token
            user_agent: User agent string
            transport: Optional httpx transport, mainly for tests
            logger: structlog logger, defaults to one bound to this component
        """
        self._base_url = url.rstrip("/")
        self._timeout = timeout
        self._auth = (username, password) if username and password else None
        self._headers = {"User-Agent": user_agent}
        if bearer_token:
            self._headers["Authorization"] = f"Bearer {bearer_token}"
        self._transport = transport
        self._log = logger or get_component_logger(__name__, "prometheus_query_client")

    @property
    def base_url(self) -> str:
        return self._base_url

    def query(self, expression: str, time: datetime | None = None) -> list[Sample]:
        """
        Execute an instant query.

        Args:
            expression: PromQL expression
            time: Evaluation time (defaults to now on the server)

        Returns:
            Samples of the resulting instant vector, in server order

        Raises:
            PrometheusQueryError: On any transport, HTTP or evaluation failure
        """
        params: dict[str, Any] = {"query": expression}
        if time is not None:
            params["time"] = time.timestamp()

        self._log.debug("prometheus_query", expression=expression, time=params.get("time"))
        data = self._request("/api/v1/query", params)
        return self._parse_vector(data)

    def _request(self, path: str, params: dict[str, Any]) -> dict[str, Any]:
        url = f"{self._base_url}{path}"
        try:
            with httpx.Client(
                timeout=self._timeout,
                auth=self._auth,
                transport=self._transport,
            ) as client:
                resp = client.get(url, params=params, headers=self._headers)
                resp.raise_for_status()
                data = resp.json()
        except httpx.HTTPError as exc:
            raise PrometheusQueryError(str(exc), {"url": url}) from exc
        except ValueError as exc:
            raise PrometheusQueryError(f"Invalid JSON from Prometheus: {exc}", {"url": url}) from exc

        if not isinstance(data, dict) or data.get("status") != "success":
            error = data.get("error", "Unknown error") if isinstance(data, dict) else data
            raise PrometheusQueryError(f"Prometheus API error: {error}", {"url": url})
        return data

    def _parse_vector(self, data: dict[str, Any]) -> list[Sample]:
        result = data.get("data")
        if not isinstance(result, dict):
            raise PrometheusQueryError(
                f"Malformed Prometheus response: data is {type(result).__name__}"
            )
        result_type = result.get("resultType")
        if result_type != "vector":
            raise PrometheusQueryError(f"Expected vector result, got {result_type}")

        series_list = result.get("result") or []
        if not isinstance(series_list, list):
            raise PrometheusQueryError(
                f"Malformed Prometheus response: result is {type(series_list).__name__}"
            )

        # Values are passed through unconverted; malformed ones are
        # rejected per sample by the entity mapper.
        samples = []
        for series in series_list:
            if not isinstance(series, dict):
                raise PrometheusQueryError(f"Malformed vector sample: {series!r}")
            labels = series.get("metric") or {}
            if not isinstance(labels, dict):
                raise PrometheusQueryError(f"Malformed vector sample labels: {labels!r}")
            value = series.get("value")
            if not isinstance(value, list):
                value = []
            timestamp, raw = (value + [None, None])[:2]
            samples.append(
                Sample(
                    labels=labels,
                    value=raw,
                    timestamp=_timestamp(timestamp),
                )
            )
        return samples


def _timestamp(value: Any) -> float | None:
    try:
        return float(value)
    except (TypeError, ValueError):
        return None
