"""
Target configuration loading.

The target file is JSON or YAML and must name the Prometheus server:

    {"address": "http://prometheus:9090"}
"""

from __future__ import annotations

from pathlib import Path

import structlog
import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from promprobe.core.errors import ConfigurationError

logger = structlog.get_logger()


class PrometheusTargetConf(BaseModel):
    """Validated, immutable description of a Prometheus target."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    address: str = Field(..., description="Prometheus server URL")

    @field_validator("address")
    @classmethod
    def _check_address(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("address must not be empty")
        if not value.startswith(("http://", "https://")):
            raise ValueError(f"address must be an http(s) URL: {value}")
        return value.rstrip("/")


def load_target_conf(path: str | Path) -> PrometheusTargetConf:
    """
    Load a target configuration file.

    Args:
        path: Path to a JSON or YAML file

    Returns:
        Validated PrometheusTargetConf

    Raises:
        ConfigurationError: If the file is missing, unparsable or invalid
    """
    conf_path = Path(path)
    if not conf_path.is_file():
        raise ConfigurationError("Target configuration file not found", {"path": str(conf_path)})

    try:
        with open(conf_path) as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        raise ConfigurationError(
            f"Failed to read target configuration: {e}", {"path": str(conf_path)}
        ) from e

    if not isinstance(data, dict):
        raise ConfigurationError("Target configuration must be a mapping", {"path": str(conf_path)})

    try:
        conf = PrometheusTargetConf.model_validate(data)
    except ValidationError as e:
        errors = "; ".join(err["msg"] for err in e.errors())
        raise ConfigurationError(
            f"Invalid target configuration: {errors}", {"path": str(conf_path)}
        ) from e

    logger.info("loaded_target_conf", path=str(conf_path), address=conf.address)
    return conf
