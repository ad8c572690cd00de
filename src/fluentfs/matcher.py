"""Directive classification and wildcard expansion against the filesystem.

Directives use a single backslash as path separator, ``*`` as the wildcard
marker and the ``\\**\\`` segment as the recursive-descent marker. Forward
slashes are accepted as separators too, so native POSIX paths work.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from fnmatch import fnmatch
from pathlib import Path
from typing import Final, Protocol

from pathspec import GitIgnoreSpec

from fluentfs import FileAccessError

logger = logging.getLogger(__name__)

SEPARATOR: Final[str] = "\\"
WILDCARD: Final[str] = "*"
RECURSIVE_MARKER: Final[str] = "\\**\\"


@dataclass(frozen=True, slots=True)
class LiteralPath:
    """A directive naming exactly one path."""

    path: str


@dataclass(frozen=True, slots=True)
class WildcardPattern:
    """A directive that must be expanded against the filesystem."""

    pattern: str


Directive = LiteralPath | WildcardPattern


def classify(directive: str) -> Directive:
    """Classify a directive string as literal or wildcard.

    Args:
        directive: Raw include or exclude entry.

    Returns:
        Directive: ``WildcardPattern`` when the text contains ``*``,
        otherwise ``LiteralPath``.
    """
    if WILDCARD in directive:
        return WildcardPattern(directive)
    return LiteralPath(directive)


@dataclass(frozen=True, slots=True)
class MatchOptions:
    """Options controlling wildcard enumeration.

    Attributes:
        respect_gitignore: Skip entries matched by a ``.gitignore`` found in
            the base directory of the pattern.
    """

    respect_gitignore: bool = False


@dataclass(frozen=True, slots=True)
class SearchSpec:
    """A wildcard pattern split into its search components.

    Attributes:
        base: Directory to search, in native separators. Empty means the
            current directory.
        file_filter: ``fnmatch`` pattern applied to file names.
        recursive: Whether subdirectories are searched transitively.
    """

    base: str
    file_filter: str
    recursive: bool


class FileEnumerator(Protocol):
    """Protocol for the filesystem enumeration collaborator.

    Implementations return an empty list, never ``None``, when nothing
    matches or the base directory does not exist.
    """

    def get_all_files_matching(self, pattern: str) -> list[str]: ...


def split_pattern(pattern: str) -> SearchSpec:
    """Split a wildcard directive into base directory and file filter.

    With a recursive marker the text before the first marker is the base
    and everything after it is the filter. Otherwise the last segment is
    the filter and the rest is the base.

    Args:
        pattern: Wildcard directive.

    Returns:
        SearchSpec: Components of the search.
    """
    normalized = pattern.replace("/", SEPARATOR)
    marker_at = normalized.find(RECURSIVE_MARKER)
    if marker_at >= 0:
        base = normalized[:marker_at] if marker_at > 0 else SEPARATOR
        file_filter = normalized[marker_at + len(RECURSIVE_MARKER) :]
        recursive = True
    else:
        head, sep, file_filter = normalized.rpartition(SEPARATOR)
        base = head or sep
        recursive = False
    return SearchSpec(
        base=base.replace(SEPARATOR, os.sep),
        file_filter=file_filter,
        recursive=recursive,
    )


def _to_posix(rel_path: str) -> str:
    return rel_path.replace(os.sep, "/")


def load_ignore_spec(directory: Path) -> GitIgnoreSpec | None:
    """Load ``.gitignore`` patterns from *directory*.

    Args:
        directory: Base directory of a wildcard search.

    Returns:
        A compiled spec when a ``.gitignore`` exists and is readable,
        otherwise ``None``.
    """
    gitignore_path = directory / ".gitignore"
    try:
        lines = gitignore_path.read_text(encoding="utf-8").splitlines()
    except OSError:
        logger.debug("No readable .gitignore: %s", gitignore_path)
        return None
    return GitIgnoreSpec.from_lines(lines)


class FileSystemUtility:
    """Enumerate files matching a wildcard directive on the local disk.

    Results are deterministic: names within a directory are sorted, and a
    directory's files are listed before its subdirectories are visited.
    Symlinked directories are not descended into.
    """

    def __init__(self, options: MatchOptions | None = None) -> None:
        self._options: MatchOptions = options or MatchOptions()

    def get_all_files_matching(self, pattern: str) -> list[str]:
        """Return all files matching *pattern*.

        Args:
            pattern: Wildcard directive, e.g. ``dir\\*.dll`` or
                ``dir\\**\\*.dll``.

        Returns:
            list[str]: Matching file paths, joined onto the base as written.
            Empty when nothing matches or the base directory is missing.

        Raises:
            FileAccessError: If a directory cannot be read for any reason
                other than not existing.
        """
        spec = split_pattern(pattern)
        root = spec.base or os.curdir
        ignore_spec = (
            load_ignore_spec(Path(root)) if self._options.respect_gitignore else None
        )

        result: list[str] = []
        # Stack of directories relative to root; "" is root itself.
        stack: list[str] = [""]

        while stack:
            rel_dir = stack.pop()
            current = os.path.join(root, rel_dir) if rel_dir else root

            try:
                raw_entries = list(os.scandir(current))
            except (FileNotFoundError, NotADirectoryError):
                logger.debug("Directory not found: %s", current)
                continue
            except OSError as exc:
                raise FileAccessError(f"cannot list '{current}': {exc}") from exc

            raw_entries.sort(key=lambda e: e.name)
            child_dirs: list[str] = []

            for dir_entry in raw_entries:
                rel_path = os.path.join(rel_dir, dir_entry.name) if rel_dir else dir_entry.name
                try:
                    is_dir = dir_entry.is_dir(follow_symlinks=False)
                    is_file = not is_dir and dir_entry.is_file()
                except OSError as exc:
                    raise FileAccessError(f"cannot stat '{dir_entry.path}': {exc}") from exc

                if ignore_spec is not None:
                    key = _to_posix(rel_path) + ("/" if is_dir else "")
                    if ignore_spec.match_file(key):
                        continue

                if is_dir:
                    if spec.recursive:
                        child_dirs.append(rel_path)
                elif is_file and fnmatch(dir_entry.name, spec.file_filter):
                    result.append(os.path.join(spec.base, rel_path))

            # Push children in reverse so first-alphabetical is popped first
            for child in reversed(child_dirs):
                stack.append(child)

        return result


class PathMatcher:
    """Expand a directive into the concrete paths it currently denotes."""

    def __init__(self, enumerator: FileEnumerator | None = None) -> None:
        self._enumerator: FileEnumerator = enumerator or FileSystemUtility()

    def expand(self, pattern: str) -> list[str]:
        """Expand *pattern* into concrete paths.

        Literal paths are returned unchanged without checking existence.
        A wildcard with no matches yields an empty list.

        Args:
            pattern: Include or exclude directive.

        Returns:
            list[str]: Concrete paths in enumeration order.

        Raises:
            FileAccessError: Propagated from the enumerator.
        """
        directive = classify(pattern)
        if isinstance(directive, LiteralPath):
            return [directive.path]
        matches = list(self._enumerator.get_all_files_matching(directive.pattern))
        logger.debug("Expanded %s to %d file(s)", directive.pattern, len(matches))
        return matches
