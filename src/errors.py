"""Exception hierarchy for tf-module-resolve."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path


class TfModuleResolveError(Exception):
    """Base exception for all tf-module-resolve errors."""


class ResolutionError(TfModuleResolveError):
    """Raised when module resolution cannot produce a result."""


class RootPathError(ResolutionError):
    """Raised when the root directory cannot be canonicalized or listed."""


class ModuleParseError(ResolutionError):
    """Raised when a visited directory's configuration reports diagnostics."""

    def __init__(self, directory: Path, diagnostics: Sequence[str]) -> None:
        self.directory = directory
        self.diagnostics = tuple(diagnostics)
        details = "; ".join(self.diagnostics)
        super().__init__(f"failed to load module {directory}: {details}")


class FileListError(TfModuleResolveError):
    """Raised when a directory's configuration files cannot be listed."""

    def __init__(self, directory: Path, cause: OSError) -> None:
        self.directory = directory
        self.cause = cause
        reason = cause.strerror or str(cause)
        super().__init__(f"cannot read {directory}: {reason}")


class ChangedPathsError(TfModuleResolveError):
    """Raised when the changed-path list cannot be read."""


__all__ = [
    "ChangedPathsError",
    "FileListError",
    "ModuleParseError",
    "ResolutionError",
    "RootPathError",
    "TfModuleResolveError",
]
