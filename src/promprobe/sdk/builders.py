"""
Builders for commodity and entity DTOs.

Builders record the first problem they see and report it from
``create()``, so a chain of calls never fails half way through.
"""

from __future__ import annotations

from typing import Iterable

from promprobe.core.errors import EntityBuildError
from promprobe.sdk.models import (
    ApplicationData,
    CommodityBought,
    CommodityDTO,
    CommodityType,
    EntityDTO,
    EntityProperty,
    EntityType,
)


def _check_amount(name: str, value: float) -> float:
    # NaN and infinities are valid Prometheus sample values and are kept
    try:
        return float(value)
    except (TypeError, ValueError) as e:
        raise EntityBuildError(f"{name} is not a number: {value!r}") from e


class CommodityBuilder:
    """Builds a CommodityDTO."""

    def __init__(self, commodity_type: CommodityType) -> None:
        self._commodity_type = commodity_type
        self._key: str | None = None
        self._capacity: float | None = None
        self._used: float | None = None
        self._err: EntityBuildError | None = None

    def key(self, key: str) -> "CommodityBuilder":
        self._key = key
        return self

    def capacity(self, capacity: float) -> "CommodityBuilder":
        if self._err is None:
            try:
                self._capacity = _check_amount("capacity", capacity)
            except EntityBuildError as e:
                self._err = e
        return self

    def used(self, used: float) -> "CommodityBuilder":
        if self._err is None:
            try:
                self._used = _check_amount("used", used)
            except EntityBuildError as e:
                self._err = e
        return self

    def create(self) -> CommodityDTO:
        if self._err is not None:
            raise self._err
        if not isinstance(self._commodity_type, CommodityType):
            raise EntityBuildError(f"unknown commodity type: {self._commodity_type!r}")
        return CommodityDTO(
            commodity_type=self._commodity_type,
            key=self._key,
            capacity=self._capacity,
            used=self._used,
        )


class EntityBuilder:
    """
    Builds an EntityDTO.

    Bought commodities must follow a ``provider()`` call naming the entity
    they are bought from.
    """

    def __init__(self, entity_type: EntityType, entity_id: str) -> None:
        self._entity_type = entity_type
        self._id = entity_id
        self._display_name: str | None = None
        self._sells: list[CommodityDTO] = []
        self._buys: list[CommodityBought] = []
        self._current_provider: CommodityBought | None = None
        self._application_data: ApplicationData | None = None
        self._properties: list[EntityProperty] = []
        self._err: EntityBuildError | None = None

    def _fail(self, message: str) -> None:
        if self._err is None:
            self._err = EntityBuildError(message, {"entity_id": self._id})

    def display_name(self, name: str) -> "EntityBuilder":
        self._display_name = name
        return self

    def sells_commodity(self, commodity: CommodityDTO | None) -> "EntityBuilder":
        if commodity is None:
            self._fail("sold commodity is missing")
        else:
            self._sells.append(commodity)
        return self

    def provider(self, provider_type: EntityType, provider_id: str) -> "EntityBuilder":
        if not provider_id:
            self._fail("provider id is empty")
            return self
        self._current_provider = CommodityBought(provider_id=provider_id, provider_type=provider_type)
        self._buys.append(self._current_provider)
        return self

    def buys_commodities(self, commodities: Iterable[CommodityDTO]) -> "EntityBuilder":
        if self._current_provider is None:
            self._fail("bought commodities need a provider")
            return self
        self._current_provider.bought.extend(commodities)
        return self

    def application_data(self, data: ApplicationData) -> "EntityBuilder":
        self._application_data = data
        return self

    def with_property(self, prop: EntityProperty) -> "EntityBuilder":
        self._properties.append(prop)
        return self

    def create(self) -> EntityDTO:
        if not self._id:
            self._fail("entity id is empty")
        if self._err is not None:
            raise self._err
        return EntityDTO(
            entity_type=self._entity_type,
            id=self._id,
            display_name=self._display_name or self._id,
            sells=self._sells,
            buys=self._buys,
            application_data=self._application_data,
            properties=self._properties,
        )
