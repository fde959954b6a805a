"""Settings loading and validation."""

from settings.config import (
    CONFIG_FILENAME,
    ConfigError,
    ResolverConfig,
    load_config,
)

__all__ = [
    "CONFIG_FILENAME",
    "ConfigError",
    "ResolverConfig",
    "load_config",
]
