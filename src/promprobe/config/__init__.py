"""
Configuration for promprobe.

Target configuration describes the metrics backend to discover; probe
settings control logging and query behaviour from the environment.
"""

from promprobe.config.settings import ProbeSettings, get_settings
from promprobe.config.target import PrometheusTargetConf, load_target_conf

__all__ = [
    "PrometheusTargetConf",
    "load_target_conf",
    "ProbeSettings",
    "get_settings",
]
