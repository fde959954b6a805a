"""JSON rendering for resolution results."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import orjson

if TYPE_CHECKING:
    from contract.models import ModuleRecord, RemoteModuleReference, ResolutionResult


def _module_payload(record: ModuleRecord) -> dict[str, Any]:
    payload: dict[str, Any] = {}
    if record.name is not None:
        payload["name"] = record.name
    if record.source is not None:
        payload["source"] = record.source
    payload["resolved_path"] = record.resolved_path
    payload["files"] = list(record.files)
    return payload


def _remote_payload(reference: RemoteModuleReference) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "name": reference.name,
        "source": reference.source,
    }
    if reference.version:
        payload["version"] = reference.version
    payload["called_from"] = reference.called_from
    return payload


def to_payload(result: ResolutionResult) -> dict[str, Any]:
    """Convert a result to the output document, omitting empty optional keys."""
    return {
        "root_module": _module_payload(result.root_module),
        "local_modules": [_module_payload(m) for m in result.local_modules],
        "remote_modules": [_remote_payload(r) for r in result.remote_modules],
    }


def render_json(result: ResolutionResult) -> bytes:
    """Render a result as indented JSON with a trailing newline.

    Key order follows the output contract rather than being sorted.
    """
    opts = orjson.OPT_INDENT_2 | orjson.OPT_APPEND_NEWLINE
    return orjson.dumps(to_payload(result), option=opts)


__all__ = ["render_json", "to_payload"]
