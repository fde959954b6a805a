"""Command-line interface for tf-module-resolve."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING

from contract.output import render_json
from errors import ChangedPathsError, ResolutionError
from graph.impact import collect_all_files, filter_related_files, is_affected
from graph.resolver import analyze
from settings.config import ConfigError, load_config
from utils import read_changed_paths

if TYPE_CHECKING:
    from contract.models import ResolutionResult

EXIT_AFFECTED = 0
EXIT_NOT_AFFECTED = 1
EXIT_ERROR = 2

_EPILOG = """
Examples:
  tf-module-resolve /path/to/terraform
  tf-module-resolve --files-only /path/to/terraform
  git diff --name-only | tf-module-resolve --files-only --filter-stdin /path/to/terraform
  git diff --name-only | tf-module-resolve --affected /path/to/terraform && terraform plan
"""


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tf-module-resolve",
        description=(
            "Resolve the configuration files of a Terraform root module and "
            "its local submodules."
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=_EPILOG,
    )
    parser.add_argument("directory", help="Root module directory")
    parser.add_argument(
        "--files-only",
        action="store_true",
        help="Output only file paths, one per line",
    )
    parser.add_argument(
        "--filter-stdin",
        action="store_true",
        help=(
            "Filter output to files of modules touched by the paths on stdin "
            "(use with --files-only)"
        ),
    )
    parser.add_argument(
        "--affected",
        action="store_true",
        help=(
            "Check if the module is affected by changed files from stdin "
            "(exit 0=affected, 1=not affected)"
        ),
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Settings file (default: ./tf-module-resolve.toml when present)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    return parser


def configure_logging(level: str) -> None:
    """Configure stderr logging as ``LEVEL: message`` lines."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(levelname)s: %(message)s",
        stream=sys.stderr,
    )


def _read_stdin() -> list[str] | None:
    try:
        return read_changed_paths(sys.stdin)
    except ChangedPathsError as exc:
        sys.stderr.write(f"Error reading stdin: {exc}\n")
        return None


def _handle_affected(result: ResolutionResult) -> int:
    changed_paths = _read_stdin()
    if changed_paths is None:
        return EXIT_ERROR
    if is_affected(changed_paths, result):
        return EXIT_AFFECTED
    return EXIT_NOT_AFFECTED


def _handle_files_only(result: ResolutionResult, *, filter_stdin: bool) -> int:
    files = collect_all_files(result)

    if filter_stdin:
        changed_paths = _read_stdin()
        if changed_paths is None:
            return EXIT_ERROR
        files = filter_related_files(files, changed_paths, result)

    for file_path in files:
        sys.stdout.write(f"{file_path}\n")
    return EXIT_AFFECTED


def _handle_json(result: ResolutionResult) -> int:
    sys.stdout.write(render_json(result).decode("utf-8"))
    return EXIT_AFFECTED


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    config_path = Path(args.config).expanduser() if args.config else None
    try:
        config = load_config(config_path)
    except ConfigError as exc:
        sys.stderr.write(f"Error: {exc}\n")
        return EXIT_ERROR

    configure_logging("DEBUG" if args.verbose else config.log_level)

    try:
        result = analyze(args.directory, config=config)
    except ResolutionError as exc:
        sys.stderr.write(f"Error: {exc}\n")
        return EXIT_ERROR

    if args.affected:
        return _handle_affected(result)

    if args.files_only:
        return _handle_files_only(result, filter_stdin=args.filter_stdin)

    return _handle_json(result)


if __name__ == "__main__":
    raise SystemExit(main())
