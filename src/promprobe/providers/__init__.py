"""Metrics backend providers."""

from .models import Sample, labelset_string
from .prometheus import (
    RESPONSE_TIME_QUERY,
    PrometheusQueryClient,
    PrometheusQueryError,
)

__all__ = [
    "Sample",
    "labelset_string",
    "RESPONSE_TIME_QUERY",
    "PrometheusQueryClient",
    "PrometheusQueryError",
]
