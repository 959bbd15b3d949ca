"""
Topology model shared with the orchestration server.
"""

from .builders import CommodityBuilder, EntityBuilder
from .models import (
    AccountDefEntry,
    AccountValue,
    ApplicationData,
    CommodityBought,
    CommodityDTO,
    CommodityType,
    DiscoveryResponse,
    EntityDTO,
    EntityProperty,
    EntityType,
    ErrorDTO,
    ErrorSeverity,
    TargetInfo,
    TemplateCommodity,
    TemplateDTO,
    ValidationResponse,
)

__all__ = [
    'CommodityBuilder',
    'EntityBuilder',
    'AccountDefEntry',
    'AccountValue',
    'ApplicationData',
    'CommodityBought',
    'CommodityDTO',
    'CommodityType',
    'DiscoveryResponse',
    'EntityDTO',
    'EntityProperty',
    'EntityType',
    'ErrorDTO',
    'ErrorSeverity',
    'TargetInfo',
    'TemplateCommodity',
    'TemplateDTO',
    'ValidationResponse',
]
