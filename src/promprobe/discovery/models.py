"""
Outcome models for a discovery cycle.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union

from promprobe.sdk.models import DiscoveryResponse, EntityDTO, ErrorDTO, ErrorSeverity


@dataclass(frozen=True)
class DiscoverySuccess:
    """Cycle outcome when the query succeeded; entities may be empty."""

    entities: list[EntityDTO] = field(default_factory=list)

    def to_response(self) -> DiscoveryResponse:
        return DiscoveryResponse(entities=list(self.entities))


@dataclass(frozen=True)
class DiscoveryFailure:
    """Cycle outcome when the query failed."""

    errors: list[ErrorDTO]

    def __post_init__(self) -> None:
        if not self.errors:
            raise ValueError("DiscoveryFailure needs at least one error")

    @classmethod
    def critical(cls, description: str) -> "DiscoveryFailure":
        return cls([ErrorDTO(severity=ErrorSeverity.CRITICAL, description=description)])

    def to_response(self) -> DiscoveryResponse:
        return DiscoveryResponse(errors=list(self.errors))


DiscoveryResult = Union[DiscoverySuccess, DiscoveryFailure]
