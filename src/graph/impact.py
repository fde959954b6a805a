"""Change impact filtering over a resolution result."""

from __future__ import annotations

import os
from typing import TYPE_CHECKING

from utils import to_absolute_path

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from contract.models import ModuleRecord, ResolutionResult


def is_under(file_path: str, dir_path: str) -> bool:
    """Return True when file_path is dir_path itself or lies inside it.

    The comparison is lexical; neither path needs to exist.

    Examples:
        >>> is_under("/a/b/c", "/a/b/c")
        True
        >>> is_under("/a/b/c/d/file.tf", "/a/b/c")
        True
        >>> is_under("/a/b/file.tf", "/a/b/c")
        False
    """
    try:
        rel = os.path.relpath(file_path, dir_path)
    except ValueError:
        # Different drives on Windows.
        return False
    return rel != os.pardir and not rel.startswith(os.pardir + os.sep)


def _modules(result: ResolutionResult) -> list[ModuleRecord]:
    return [result.root_module, *result.local_modules]


def _unique_files(records: Iterable[ModuleRecord]) -> list[str]:
    seen: set[str] = set()
    files: list[str] = []
    for record in records:
        for file_path in record.files:
            if file_path not in seen:
                seen.add(file_path)
                files.append(file_path)
    return files


def collect_all_files(result: ResolutionResult) -> list[str]:
    """Return root files then local module files, first occurrence kept."""
    return _unique_files(_modules(result))


def is_affected(changed_paths: Iterable[str], result: ResolutionResult) -> bool:
    """Check whether any changed path lies in the root or a local module.

    Relative changed paths are resolved against the current working
    directory.
    """
    module_paths = [record.resolved_path for record in _modules(result)]
    for changed in changed_paths:
        abs_path = to_absolute_path(changed)
        if any(is_under(abs_path, module_path) for module_path in module_paths):
            return True
    return False


def filter_related_files(
    all_files: Sequence[str],
    changed_paths: Iterable[str],
    result: ResolutionResult,
) -> list[str]:
    """Return the files of every module touched by the changed paths.

    Args:
        all_files: Full file list, as returned by collect_all_files; kept
            for call-site symmetry, the output is built from the records
        changed_paths: Changed file paths, absolute or relative to the
            current working directory
        result: Resolution result to filter

    Returns:
        Files of the affected root module followed by files of affected
        local modules in discovery order, without duplicates.
    """
    changed_abs_paths = {to_absolute_path(changed) for changed in changed_paths}

    affected = [
        record
        for record in _modules(result)
        if any(is_under(path, record.resolved_path) for path in changed_abs_paths)
    ]

    return _unique_files(affected)


__all__ = [
    "collect_all_files",
    "filter_related_files",
    "is_affected",
    "is_under",
]
