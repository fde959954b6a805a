"""Stable output contract surface for tf-module-resolve.

Treat these exports as the authoritative shape of a resolution result.
"""

from contract.models import (
    ROOT_CALLER,
    ModuleRecord,
    RemoteModuleReference,
    ResolutionResult,
)
from contract.output import render_json, to_payload

__all__ = [
    "ROOT_CALLER",
    "ModuleRecord",
    "RemoteModuleReference",
    "ResolutionResult",
    "render_json",
    "to_payload",
]
