"""
Entity mapper.

Turns the samples of a response-time query into APPLICATION entities.
Each sample is mapped on its own; a sample that cannot be mapped is
logged, reported and left out of the result.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Iterable

from promprobe.logging import get_component_logger
from promprobe.providers.models import Sample, labelset_string
from promprobe.registration import IP_ADDRESS_PROPERTY, PROPERTY_NAMESPACE
from promprobe.sdk.builders import CommodityBuilder, EntityBuilder
from promprobe.sdk.models import (
    ApplicationData,
    CommodityType,
    EntityDTO,
    EntityProperty,
    EntityType,
)

FailureCallback = Callable[[Sample, Exception], None]


@dataclass(frozen=True)
class MappingConstants:
    """Fixed values stamped on every mapped entity."""

    entity_type: EntityType = EntityType.APPLICATION
    commodity_type: CommodityType = CommodityType.RESPONSE_TIME
    capacity: float = 100.0
    app_type: str = "webdriver"
    # Placeholder until addresses are resolved per target
    ip_address: str = "10.10.174.90"
    property_namespace: str = PROPERTY_NAMESPACE
    property_name: str = IP_ADDRESS_PROPERTY


DEFAULT_MAPPING = MappingConstants()


@dataclass
class MappingFailure:
    sample: Sample
    error: Exception


@dataclass
class MapResult:
    """Entities built from a vector plus the samples that were dropped."""

    entities: list[EntityDTO] = field(default_factory=list)
    failures: list[MappingFailure] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.entities) + len(self.failures)


class EntityMapper:
    """Maps query samples to topology entities."""

    def __init__(
        self,
        constants: MappingConstants = DEFAULT_MAPPING,
        *,
        on_failure: FailureCallback | None = None,
        logger: Any = None,
    ) -> None:
        self.constants = constants
        self._on_failure = on_failure
        self._log = logger or get_component_logger(__name__, "entity_mapper")

    def map(self, samples: Iterable[Sample]) -> list[EntityDTO]:
        """Map samples to entities, dropping the ones that fail."""
        return self.map_with_failures(samples).entities

    def map_with_failures(self, samples: Iterable[Sample]) -> MapResult:
        """
        Map samples to entities and keep track of dropped samples.

        Never raises for a bad sample; the failure is logged, passed to
        ``on_failure`` and recorded in the result.
        """
        result = MapResult()
        for sample in samples:
            try:
                result.entities.append(self.build_entity(sample))
            except Exception as e:
                self._log.error(
                    "entity_build_failed",
                    labels=dict(sample.labels),
                    value=repr(sample.value),
                    error=str(e),
                    error_type=type(e).__name__,
                )
                result.failures.append(MappingFailure(sample=sample, error=e))
                if self._on_failure is not None:
                    self._on_failure(sample, e)

        self._log.debug(
            "samples_mapped",
            entities=len(result.entities),
            dropped=len(result.failures),
        )
        return result

    def build_entity(self, sample: Sample) -> EntityDTO:
        """
        Build the entity for a single sample.

        Raises:
            EntityBuildError: If the sample value or labels are unusable
        """
        c = self.constants
        commodity = (
            CommodityBuilder(c.commodity_type)
            .capacity(c.capacity)
            .used(sample.value)
            .create()
        )

        name = labelset_string(sample.labels)
        return (
            EntityBuilder(c.entity_type, name)
            .display_name(name)
            .sells_commodity(commodity)
            .application_data(ApplicationData(type=c.app_type, ip_address=c.ip_address))
            .with_property(
                EntityProperty(
                    namespace=c.property_namespace,
                    name=c.property_name,
                    value=c.ip_address,
                )
            )
            .create()
        )

