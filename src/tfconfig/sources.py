"""Module source classification."""

from __future__ import annotations

LOCAL_SOURCE_PREFIXES: tuple[str, ...] = ("./", "../")


def is_local_source(source: str) -> bool:
    """Return True when a module source is a relative filesystem path.

    Only ``./`` and ``../`` prefixes count as local. Registry addresses,
    ``git::``/``s3::`` locators, host-qualified registry paths, bare names and
    absolute paths are all treated as remote.

    Examples:
        >>> is_local_source("./modules/vpc")
        True
        >>> is_local_source("../../shared")
        True
        >>> is_local_source("terraform-aws-modules/eks/aws")
        False
        >>> is_local_source("git::https://example.com/repo.git")
        False
    """
    return source.startswith(LOCAL_SOURCE_PREFIXES)


__all__ = ["LOCAL_SOURCE_PREFIXES", "is_local_source"]
