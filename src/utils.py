"""Shared utilities for changed-path input."""

from __future__ import annotations

import os
from typing import TYPE_CHECKING

from errors import ChangedPathsError

if TYPE_CHECKING:
    from pathlib import Path
    from typing import TextIO


def to_absolute_path(path: str | Path) -> str:
    """Make a changed file path absolute against the working directory.

    Symlinks in the containing directories are resolved so that the result
    compares with canonical module paths; the final component is kept as
    given, since a changed file may itself be a symlink or may no longer
    exist.

    Examples:
        >>> to_absolute_path("/a/b/../c/main.tf")
        '/a/c/main.tf'
    """
    abs_path = os.path.abspath(path)
    parent, name = os.path.split(abs_path)
    return os.path.join(os.path.realpath(parent), name)


def read_changed_paths(stream: TextIO) -> list[str]:
    """Read newline-delimited changed paths, dropping blank lines.

    Raises:
        ChangedPathsError: If the stream cannot be read or decoded.
    """
    paths: list[str] = []
    try:
        for raw_line in stream:
            line = raw_line.strip()
            if line:
                paths.append(line)
    except (OSError, UnicodeDecodeError) as exc:
        msg = f"cannot read changed paths: {exc}"
        raise ChangedPathsError(msg) from exc
    return paths
