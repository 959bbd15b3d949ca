"""Core utilities shared across promprobe modules."""

from promprobe.core.errors import (
    ConfigurationError,
    EntityBuildError,
    ExitCode,
    ProbeError,
    ProviderError,
    main_with_error_handling,
)

__all__ = [
    "ExitCode",
    "ProbeError",
    "ConfigurationError",
    "ProviderError",
    "EntityBuildError",
    "main_with_error_handling",
]
