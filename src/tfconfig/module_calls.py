"""Module call extraction from a Terraform configuration directory.

Reads the ``.tf`` (native HCL) and ``.tf.json`` files of one directory and
returns the ``module`` blocks they declare. Problems are reported as
diagnostics on the returned :class:`TerraformModule` rather than raised, so a
caller can decide whether they are fatal.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import hcl2
import orjson

from errors import FileListError
from scan.files import list_config_files

HCL_SUFFIX = ".tf"
JSON_SUFFIX = ".tf.json"


@dataclass(frozen=True)
class ModuleCall:
    """A single ``module "<name>" { ... }`` declaration."""

    name: str
    source: str
    version: str | None = None


@dataclass(frozen=True)
class Diagnostic:
    path: Path
    message: str

    def __str__(self) -> str:
        return f"{self.path}: {self.message}"


@dataclass
class TerraformModule:
    """Module calls and diagnostics loaded from one directory."""

    path: Path
    module_calls: list[ModuleCall] = field(default_factory=list)
    diagnostics: list[Diagnostic] = field(default_factory=list)

    @property
    def has_errors(self) -> bool:
        return bool(self.diagnostics)


def _is_ignored_file(name: str) -> bool:
    """Return True for hidden files and editor backup/lock files."""
    return (
        name.startswith(".")
        or name.endswith("~")
        or (name.startswith("#") and name.endswith("#"))
    )


def _is_override_file(name: str) -> bool:
    stem = name.removesuffix(JSON_SUFFIX).removesuffix(HCL_SUFFIX)
    return stem == "override" or stem.endswith("_override")


def _unquote(value: str) -> str:
    if len(value) >= 2 and value[0] == '"' and value[-1] == '"':
        return value[1:-1]
    return value


def _is_metadata_key(key: str) -> bool:
    """Return True for parser bookkeeping keys such as ``__start_line__``."""
    return key.startswith("__") and key.endswith("__")


def _read_hcl_blocks(path: Path) -> list[tuple[str, Any]]:
    with path.open(encoding="utf-8") as handle:
        data = hcl2.load(handle)

    modules = data.get("module", [])
    if isinstance(modules, dict):
        modules = [modules]

    blocks: list[tuple[str, Any]] = []
    for block in modules:
        for label, body in block.items():
            name = _unquote(str(label))
            if _is_metadata_key(name):
                continue
            blocks.append((name, body))
    return blocks


def _read_json_blocks(path: Path) -> list[tuple[str, Any]]:
    data = orjson.loads(path.read_bytes())
    if not isinstance(data, dict):
        msg = "root of a JSON configuration file must be an object"
        raise ValueError(msg)

    modules = data.get("module", {})
    groups = modules if isinstance(modules, list) else [modules]

    blocks: list[tuple[str, Any]] = []
    for group in groups:
        if not isinstance(group, dict):
            msg = "module declarations must be objects keyed by module name"
            raise ValueError(msg)
        for label, body in group.items():
            # A name may map to a list of bodies; each one is a declaration.
            bodies = body if isinstance(body, list) else [body]
            blocks.extend((label, item) for item in bodies)
    return blocks


def _read_blocks(path: Path) -> list[tuple[str, Any]]:
    if path.name.endswith(JSON_SUFFIX):
        return _read_json_blocks(path)
    return _read_hcl_blocks(path)


def _string_attribute(body: dict[str, Any], key: str) -> str | None:
    value = body.get(key)
    if isinstance(value, str):
        return _unquote(value)
    return None


def _collect_calls(
    module: TerraformModule,
    path: Path,
    blocks: list[tuple[str, Any]],
    calls: dict[str, ModuleCall],
    *,
    override: bool,
) -> None:
    for name, body in blocks:
        if not isinstance(body, dict):
            module.diagnostics.append(
                Diagnostic(path, f"module {name!r} must be a block")
            )
            continue

        raw_source = body.get("source")
        if raw_source is not None and not isinstance(raw_source, str):
            module.diagnostics.append(
                Diagnostic(path, f"module {name!r} has a non-string source")
            )
            continue

        source = _string_attribute(body, "source")
        version = _string_attribute(body, "version")

        if override:
            base = calls.get(name)
            if base is None:
                module.diagnostics.append(
                    Diagnostic(path, f"missing base module call for override {name!r}")
                )
                continue
            calls[name] = ModuleCall(
                name=name,
                source=source if source is not None else base.source,
                version=version if version is not None else base.version,
            )
            continue

        if name in calls:
            module.diagnostics.append(
                Diagnostic(path, f"duplicate module call {name!r}")
            )
            continue

        calls[name] = ModuleCall(name=name, source=source or "", version=version)


def load_module(directory: Path) -> TerraformModule:
    """Load the module calls declared in a Terraform configuration directory.

    Primary files are read first, then override files (``override.tf``,
    ``*_override.tf`` and their JSON forms), each group in lexicographic
    file name order. Calls keep their declaration order; an override only
    replaces the ``source``/``version`` of an existing call.

    Args:
        directory: Module directory to load

    Returns:
        TerraformModule holding module calls in declaration order and any
        diagnostics encountered while reading.
    """
    module = TerraformModule(path=directory)

    try:
        files = list_config_files(directory, (HCL_SUFFIX, JSON_SUFFIX))
    except FileListError as exc:
        module.diagnostics.append(Diagnostic(directory, str(exc)))
        return module

    files = [path for path in files if not _is_ignored_file(path.name)]
    primary = [path for path in files if not _is_override_file(path.name)]
    overrides = [path for path in files if _is_override_file(path.name)]

    calls: dict[str, ModuleCall] = {}
    for group, is_override in ((primary, False), (overrides, True)):
        for path in group:
            try:
                blocks = _read_blocks(path)
            except (OSError, UnicodeDecodeError) as exc:
                module.diagnostics.append(Diagnostic(path, f"cannot read file: {exc}"))
                continue
            except Exception as exc:
                module.diagnostics.append(
                    Diagnostic(path, f"invalid configuration syntax: {exc}")
                )
                continue
            _collect_calls(module, path, blocks, calls, override=is_override)

    module.module_calls = list(calls.values())
    return module


__all__ = ["Diagnostic", "ModuleCall", "TerraformModule", "load_module"]
