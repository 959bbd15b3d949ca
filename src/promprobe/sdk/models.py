"""
Topology DTOs exchanged with the orchestration server.

Field names are snake_case in Python and serialize to the server's
camelCase schema with ``model_dump(by_alias=True)``.
"""

from __future__ import annotations

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class EntityType(str, Enum):
    """Kinds of topology entities."""
    APPLICATION = "APPLICATION"
    VIRTUAL_MACHINE = "VIRTUAL_MACHINE"
    CONTAINER = "CONTAINER"


class CommodityType(str, Enum):
    """Commodity kinds an entity can sell or buy."""
    RESPONSE_TIME = "RESPONSE_TIME"
    TRANSACTION = "TRANSACTION"
    APPLICATION = "APPLICATION"
    VCPU = "VCPU"
    VMEM = "VMEM"


class ErrorSeverity(str, Enum):
    """Severity of an error reported in a response."""
    CRITICAL = "CRITICAL"
    WARNING = "WARNING"
    INFO = "INFO"


class _DTO(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        use_enum_values=True,
    )


class CommodityDTO(_DTO):
    """A typed resource with capacity and current usage."""

    commodity_type: CommodityType
    key: Optional[str] = None
    capacity: Optional[float] = None
    used: Optional[float] = None


class CommodityBought(_DTO):
    """Commodities bought from a single provider entity."""

    provider_id: str
    provider_type: Optional[EntityType] = None
    bought: List[CommodityDTO] = Field(default_factory=list)


class ApplicationData(_DTO):
    type: Optional[str] = None
    ip_address: Optional[str] = None


class EntityProperty(_DTO):
    namespace: str
    name: str
    value: str


class EntityDTO(_DTO):
    """A discovered topology node."""

    entity_type: EntityType
    id: str
    display_name: str
    sells: List[CommodityDTO] = Field(default_factory=list)
    buys: List[CommodityBought] = Field(default_factory=list)
    application_data: Optional[ApplicationData] = None
    properties: List[EntityProperty] = Field(default_factory=list)


class AccountValue(_DTO):
    key: str
    string_value: str


class TargetInfo(_DTO):
    """Identifies a target to the orchestration server."""

    probe_category: str
    target_type: str
    target_identifier_field: str
    account_values: List[AccountValue] = Field(default_factory=list)


class ErrorDTO(_DTO):
    severity: ErrorSeverity
    description: str


class ValidationResponse(_DTO):
    errors: List[ErrorDTO] = Field(default_factory=list)


class DiscoveryResponse(_DTO):
    """
    Result of one discovery cycle.

    A response carries either entities or errors, never both.
    """

    entities: List[EntityDTO] = Field(default_factory=list)
    errors: List[ErrorDTO] = Field(default_factory=list)


class AccountDefEntry(_DTO):
    """One field the server asks for when a target is added."""

    name: str
    display_name: str
    description: str
    verification_regex: str = ".*"
    is_target_display_name: bool = False
    mandatory: bool = True


class TemplateCommodity(_DTO):
    commodity_type: CommodityType
    key: Optional[str] = None


class TemplateDTO(_DTO):
    """Supply chain node describing one entity type the probe discovers."""

    template_class: EntityType
    template_type: str = "BASE"
    template_priority: int = 0
    commodity_sold: List[TemplateCommodity] = Field(default_factory=list)
