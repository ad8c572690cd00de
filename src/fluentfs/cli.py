"""CLI entry point for fluentfs — I/O boundary only."""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence
from typing import Any

from fluentfs import FluentFsError
from fluentfs.fileset import FileSet
from fluentfs.matcher import FileSystemUtility, MatchOptions, PathMatcher
from fluentfs.paths import Directory


class _DirectiveAction(argparse.Action):
    """Record builder calls in command-line order on ``namespace.directives``."""

    def __call__(
        self,
        parser: argparse.ArgumentParser,
        namespace: argparse.Namespace,
        values: str | Sequence[Any] | None,
        option_string: str | None = None,
    ) -> None:
        directives = list(getattr(namespace, "directives", None) or [])
        directives.append((self.const, values))
        setattr(namespace, "directives", directives)


def build_parser() -> argparse.ArgumentParser:
    """Build and return the CLI argument parser.

    Returns:
        argparse.ArgumentParser: Configured parser for the ``fluentfs`` command.
    """
    parser = argparse.ArgumentParser(
        prog="fluentfs",
        description="resolve a file set from ordered include and exclude directives",
    )
    parser.set_defaults(directives=[])

    # directives, replayed in the order given
    parser.add_argument(
        "-i",
        "--include",
        action=_DirectiveAction,
        const="include",
        metavar="PATH",
        help="Include a path or wildcard pattern (e.g. 'src\\*.py')",
    )
    parser.add_argument(
        "-x",
        "--exclude",
        action=_DirectiveAction,
        const="exclude",
        metavar="PATH",
        help="Exclude a path or wildcard pattern",
    )
    parser.add_argument(
        "-I",
        "--include-dir",
        action=_DirectiveAction,
        const="include_dir",
        metavar="DIR",
        help="Start a directory include, narrowed by --recurse and --filter",
    )
    parser.add_argument(
        "-X",
        "--exclude-dir",
        action=_DirectiveAction,
        const="exclude_dir",
        metavar="DIR",
        help="Start a directory exclude, narrowed by --recurse and --filter",
    )
    parser.add_argument(
        "-r",
        "--recurse",
        action=_DirectiveAction,
        const="recurse",
        nargs=0,
        help="Search all subdirectories of the current directory directive",
    )
    parser.add_argument(
        "-f",
        "--filter",
        action=_DirectiveAction,
        const="filter",
        metavar="PATTERN",
        help="Apply a file name filter (e.g. '*.dll') to the current directory directive",
    )

    parser.add_argument(
        "--gitignore",
        action="store_true",
        help="Skip entries matched by .gitignore in the searched directory",
    )
    parser.add_argument(
        "--copy-to",
        type=str,
        default=None,
        dest="copy_to",
        metavar="DIR",
        help="Copy every resolved file into DIR",
    )
    parser.add_argument(
        "--continue-on-error",
        action="store_true",
        dest="continue_on_error",
        help="Log copy failures and keep going",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log resolution details to stderr",
    )
    return parser


def build_fileset(args: argparse.Namespace) -> FileSet:
    """Replay parsed directives onto a new ``FileSet``.

    Args:
        args: Parsed CLI namespace.

    Returns:
        FileSet: The configured file set.

    Raises:
        FluentFsError: If a directive sequence is malformed.
    """
    options = MatchOptions(respect_gitignore=args.gitignore)
    fileset = FileSet(PathMatcher(FileSystemUtility(options)))
    for kind, value in args.directives:
        if kind == "include":
            fileset.include(value)
        elif kind == "exclude":
            fileset.exclude(value)
        elif kind == "include_dir":
            fileset.include(Directory(value))
        elif kind == "exclude_dir":
            fileset.exclude(Directory(value))
        elif kind == "recurse":
            fileset.recurse_all_subdirectories()
        elif kind == "filter":
            fileset.filter(value)
    return fileset


def run_fileset(argv: list[str] | None = None) -> str:
    """Run fluentfs with provided CLI args and return the resolved listing.

    Args:
        argv: Command-line argument list without program name. If ``None``,
            uses process arguments via ``argparse`` defaults.

    Returns:
        str: Resolved paths, one per line.

    Raises:
        FluentFsError: On malformed directives or filesystem failures.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    return _run_with_args(args)


def _run_with_args(args: argparse.Namespace) -> str:
    """Resolve, optionally copy, and render for parsed arguments.

    Args:
        args: Parsed CLI namespace.

    Returns:
        str: Rendered output.

    Raises:
        FluentFsError: On malformed directives or filesystem failures.
    """
    if args.continue_on_error and args.copy_to is None:
        raise FluentFsError("--continue-on-error requires --copy-to")

    fileset = build_fileset(args)
    files = fileset.files

    if args.copy_to is not None:
        copier = fileset.copy
        if args.continue_on_error:
            copier = copier.continue_on_error
        copier.to(args.copy_to)

    return "\n".join(files)


def main() -> None:
    """Run the CLI entry point with process arguments.

    Exits with code 1 on user-facing errors.
    """
    parser = build_parser()
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(name)s: %(levelname)s: %(message)s",
    )

    try:
        output = _run_with_args(args)
    except FluentFsError as exc:
        sys.stderr.write(f"fluentfs: {exc}\n")
        sys.exit(1)

    if output:
        sys.stdout.write(output + "\n")
