"""
Probe settings read from the environment.
"""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class ProbeSettings(BaseSettings):
    """Runtime settings for the probe process."""

    model_config = SettingsConfigDict(
        env_prefix="PROMPROBE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Target configuration file
    conf_path: str = "target.json"

    # Logging
    log_level: str = "INFO"

    # Deadline for the Prometheus query; None leaves it to the caller
    query_timeout: float | None = None


@lru_cache
def get_settings() -> ProbeSettings:
    """Get cached settings instance."""
    return ProbeSettings()
