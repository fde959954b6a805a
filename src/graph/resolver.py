"""Local module graph resolution."""

from __future__ import annotations

import logging
from pathlib import Path

from contract.models import (
    ROOT_CALLER,
    ModuleRecord,
    RemoteModuleReference,
    ResolutionResult,
)
from errors import FileListError, ModuleParseError, ResolutionError, RootPathError
from scan.files import list_config_files
from settings.config import ResolverConfig
from tfconfig.module_calls import ModuleCall, load_module
from tfconfig.sources import is_local_source

logger = logging.getLogger(__name__)


class _ResolveContext:
    """Mutable state for one resolution run."""

    def __init__(self, config: ResolverConfig) -> None:
        self.config = config
        self.visited: set[Path] = set()
        self.recorded: set[Path] = set()
        self.local_modules: list[ModuleRecord] = []
        self.remote_modules: list[RemoteModuleReference] = []


def _resolve_local_call(
    directory: Path,
    call: ModuleCall,
    ctx: _ResolveContext,
) -> None:
    """Record a local module call and descend into it."""
    try:
        resolved_path = (directory / call.source).resolve()
    except (OSError, RuntimeError) as exc:
        logger.warning("cannot resolve %s from %s: %s", call.source, directory, exc)
        return

    if resolved_path in ctx.recorded:
        logger.debug("module %s already recorded at %s", call.name, resolved_path)
        return

    try:
        files = list_config_files(resolved_path, ctx.config.suffixes)
    except FileListError as exc:
        logger.warning("%s", exc)
        return

    ctx.recorded.add(resolved_path)
    ctx.local_modules.append(
        ModuleRecord(
            name=call.name,
            source=call.source,
            resolved_path=str(resolved_path),
            files=[str(path) for path in files],
        )
    )

    try:
        _visit(resolved_path, call.name, ctx)
    except ResolutionError as exc:
        if ctx.config.strict:
            raise
        logger.warning("failed to analyze %s: %s", resolved_path, exc)


def _visit(directory: Path, caller: str, ctx: _ResolveContext) -> None:
    """Process the module calls declared in one directory, depth first."""
    if directory in ctx.visited:
        return
    ctx.visited.add(directory)

    logger.debug("visiting %s (called from %s)", directory, caller)

    module = load_module(directory)
    if module.has_errors:
        raise ModuleParseError(directory, [str(d) for d in module.diagnostics])

    for call in module.module_calls:
        if is_local_source(call.source):
            _resolve_local_call(directory, call, ctx)
        else:
            ctx.remote_modules.append(
                RemoteModuleReference(
                    name=call.name,
                    source=call.source,
                    version=call.version,
                    called_from=caller,
                )
            )


def analyze(
    root_dir: str | Path,
    *,
    config: ResolverConfig | None = None,
) -> ResolutionResult:
    """Resolve a root module and every local module it reaches.

    Local module calls (``./`` or ``../`` sources) are followed depth first.
    Each canonical directory is analyzed at most once, which breaks cycles.
    Remote module calls are recorded with the name of the declaring module.

    Args:
        root_dir: Root configuration directory
        config: Optional resolver configuration

    Returns:
        ResolutionResult with the root module, local modules in discovery
        order and remote module references in declaration order.

    Raises:
        RootPathError: If the root directory cannot be canonicalized or listed.
        ModuleParseError: If the root module reports configuration errors, or
            a nested module does and ``config.strict`` is set.
    """
    if config is None:
        config = ResolverConfig()

    try:
        root_path = Path(root_dir).expanduser().resolve(strict=True)
    except (OSError, RuntimeError) as exc:
        msg = f"failed to get absolute path of {root_dir}: {exc}"
        raise RootPathError(msg) from exc

    try:
        root_files = list_config_files(root_path, config.suffixes)
    except FileListError as exc:
        msg = f"failed to list configuration files in root: {exc}"
        raise RootPathError(msg) from exc

    root_module = ModuleRecord(
        resolved_path=str(root_path),
        files=[str(path) for path in root_files],
    )

    ctx = _ResolveContext(config)
    _visit(root_path, ROOT_CALLER, ctx)

    return ResolutionResult(
        root_module=root_module,
        local_modules=ctx.local_modules,
        remote_modules=ctx.remote_modules,
    )


__all__ = ["_ResolveContext", "_visit", "analyze"]
