"""
Topology discovery for Prometheus targets.

Queries Prometheus for page response times and reports each returned
series as an APPLICATION entity.
"""

from .client import PrometheusDiscoveryClient
from .mapper import DEFAULT_MAPPING, EntityMapper, MappingConstants, MapResult
from .models import DiscoveryFailure, DiscoveryResult, DiscoverySuccess

__all__ = [
    'PrometheusDiscoveryClient',
    'EntityMapper',
    'MappingConstants',
    'MapResult',
    'DEFAULT_MAPPING',
    'DiscoverySuccess',
    'DiscoveryFailure',
    'DiscoveryResult',
]
