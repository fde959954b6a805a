from __future__ import annotations

from pathlib import Path
from typing import Any, Literal

import tomllib
from pydantic import BaseModel, ConfigDict, Field, field_validator

from scan.files import CONFIG_SUFFIXES

CONFIG_FILENAME = "tf-module-resolve.toml"

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR"]


class ResolverConfig(BaseModel):
    """Configuration for module resolution."""

    model_config = ConfigDict(extra="forbid")

    suffixes: list[str] = Field(
        default_factory=lambda: list(CONFIG_SUFFIXES),
        description="File name suffixes collected as module configuration files",
    )
    strict: bool = Field(
        default=False,
        description=(
            "Fail the whole resolution when a nested submodule fails to load "
            "instead of logging a warning"
        ),
    )
    log_level: LogLevel = Field(
        default="WARNING",
        description="Log level for diagnostics written to stderr",
    )

    @field_validator("suffixes", mode="before")
    @classmethod
    def validate_suffixes(cls, v: Any) -> Any:
        """Validate that suffixes is a non-empty list of dotted suffixes.

        Note: this runs in `mode="before"` so we can report a clear error
        message using the raw TOML values.
        """

        if not isinstance(v, list) or not v:
            msg = "suffixes must be a non-empty list of file name suffixes"
            raise ValueError(msg)

        for suffix in v:
            if not isinstance(suffix, str) or not suffix.startswith("."):
                msg = f"Invalid suffix {suffix!r}: suffixes must start with '.'"
                raise ValueError(msg)

        return v

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.upper()
        return v


class ConfigError(Exception):
    """Raised when config file exists but cannot be parsed."""


def default_config_path(cwd: Path | None = None) -> Path:
    """Return the settings file looked up when none is given explicitly."""
    return (cwd or Path.cwd()) / CONFIG_FILENAME


def load_config(config_path: Path | None = None) -> ResolverConfig:
    """Load configuration from a TOML settings file if it exists.

    An explicitly named file that does not exist is an error; when no path
    is given, a missing default file yields the default configuration.
    """
    explicit = config_path is not None
    if config_path is None:
        config_path = default_config_path()

    if not config_path.is_file():
        if explicit:
            msg = f"Config file not found: {config_path}"
            raise ConfigError(msg)
        return ResolverConfig()

    try:
        with config_path.open("rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        msg = f"Invalid TOML in {config_path}: {e}"
        raise ConfigError(msg) from e
    except OSError as e:
        msg = f"Cannot read {config_path}: {e}"
        raise ConfigError(msg) from e

    try:
        return ResolverConfig.model_validate(data)
    except Exception as e:
        msg = f"Invalid config in {config_path}: {e}"
        raise ConfigError(msg) from e


__all__ = [
    "CONFIG_FILENAME",
    "ConfigError",
    "ResolverConfig",
    "default_config_path",
    "load_config",
]
