"""Configuration file listing for a single module directory."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from errors import FileListError

if TYPE_CHECKING:
    from collections.abc import Iterable

CONFIG_SUFFIXES: tuple[str, ...] = (".tf", ".tf.json")


def has_config_suffix(name: str, suffixes: Iterable[str] = CONFIG_SUFFIXES) -> bool:
    """Return True when a file name ends with one of the configuration suffixes."""
    return any(name.endswith(suffix) for suffix in suffixes)


def list_config_files(
    directory: Path,
    suffixes: Iterable[str] = CONFIG_SUFFIXES,
) -> list[Path]:
    """List the configuration files directly inside a directory.

    Args:
        directory: Directory to list (not searched recursively)
        suffixes: File name suffixes that mark a configuration file

    Returns:
        Absolute paths of matching regular files, sorted lexicographically
        by file name for deterministic ordering.

    Raises:
        FileListError: If the directory cannot be listed.
    """
    suffixes = tuple(suffixes)
    base = Path(directory).absolute()

    try:
        entries = list(base.iterdir())
    except OSError as exc:
        raise FileListError(base, exc) from exc

    matched_files = [
        entry
        for entry in entries
        if has_config_suffix(entry.name, suffixes) and not entry.is_dir()
    ]

    matched_files.sort(key=lambda p: p.name)

    return matched_files


__all__ = ["CONFIG_SUFFIXES", "has_config_suffix", "list_config_files"]
