"""Resolution result models.

These records are the stable output contract of the resolver: the JSON
document rendered by :mod:`contract.output` mirrors their fields.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

# Caller label recorded for module calls declared by the root module.
ROOT_CALLER = "(root)"


class ModuleRecord(BaseModel):
    """A module directory and the configuration files directly inside it."""

    model_config = ConfigDict(frozen=True)

    name: str | None = Field(
        default=None,
        description="Module call name (None for the root module)",
    )
    source: str | None = Field(
        default=None,
        description="Module call source as declared (None for the root module)",
    )
    resolved_path: str = Field(description="Absolute canonical module directory")
    files: list[str] = Field(
        default_factory=list,
        description="Absolute configuration file paths, sorted by file name",
    )


class RemoteModuleReference(BaseModel):
    """A module call whose source is not a local relative path."""

    model_config = ConfigDict(frozen=True)

    name: str
    source: str
    version: str | None = None
    called_from: str = Field(
        default=ROOT_CALLER,
        description="Name of the declaring module, or '(root)'",
    )


class ResolutionResult(BaseModel):
    """Root module, local modules in discovery order, and remote calls."""

    model_config = ConfigDict(frozen=True)

    root_module: ModuleRecord
    local_modules: list[ModuleRecord] = Field(default_factory=list)
    remote_modules: list[RemoteModuleReference] = Field(default_factory=list)


__all__ = [
    "ROOT_CALLER",
    "ModuleRecord",
    "RemoteModuleReference",
    "ResolutionResult",
]
