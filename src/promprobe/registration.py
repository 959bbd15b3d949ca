"""
Registration details the probe announces to the orchestration server.
"""

from __future__ import annotations

from promprobe.sdk.models import (
    AccountDefEntry,
    CommodityType,
    EntityType,
    TemplateCommodity,
    TemplateDTO,
)

PROBE_CATEGORY = "Cloud Native"
TARGET_TYPE = "Prometheus"
TARGET_ID_FIELD = "targetIdentifier"

PROPERTY_NAMESPACE = "DEFAULT"
IP_ADDRESS_PROPERTY = "IP"


def account_definition() -> list[AccountDefEntry]:
    """Fields required to add a Prometheus target."""
    return [
        AccountDefEntry(
            name=TARGET_ID_FIELD,
            display_name="Address",
            description="URL of the Prometheus server",
            verification_regex=r"^https?://.+",
            is_target_display_name=True,
            mandatory=True,
        ),
    ]


def supply_chain() -> list[TemplateDTO]:
    """Entity types and commodities this probe discovers."""
    return [
        TemplateDTO(
            template_class=EntityType.APPLICATION,
            template_type="BASE",
            template_priority=0,
            commodity_sold=[TemplateCommodity(commodity_type=CommodityType.RESPONSE_TIME)],
        ),
    ]
