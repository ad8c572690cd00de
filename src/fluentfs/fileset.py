"""FileSet: fluent include/exclude builder and its resolution engine.

Directives are strings, either literal paths or wildcard patterns. A
directory passed to ``include`` or ``exclude`` opens a pending directive
that ``recurse_all_subdirectories`` and ``filter`` extend; any other
builder call, or reading ``files``, commits it.

A ``FileSet`` holds no locks. Mutating one instance from several threads
requires external synchronisation.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum

from fluentfs import DirectiveError
from fluentfs.fs import Failable, FileSystemWrapper
from fluentfs.matcher import RECURSIVE_MARKER, SEPARATOR, PathMatcher
from fluentfs.operations import CopyFile
from fluentfs.paths import Directory, File

logger = logging.getLogger(__name__)


def _comparison_key(path: str) -> str:
    """Spell *path* with native separators so literal and expanded forms compare equal."""
    return path.replace("/", SEPARATOR).replace(SEPARATOR, os.sep)


class Mode(Enum):
    INCLUDE = "include"
    EXCLUDE = "exclude"


@dataclass(frozen=True, slots=True)
class PendingDirective:
    """A directory-mode directive not yet committed.

    Attributes:
        mode: Which sequence the directive will be committed to.
        text: Accumulated directive text.
    """

    mode: Mode
    text: str

    def extend(self, suffix: str) -> PendingDirective:
        return PendingDirective(self.mode, self.text + suffix)


class FileSet:
    """A named collection of files built from include and exclude rules.

    Example::

        fs = (
            FileSet()
            .include(Directory(r"c:\\origin"))
            .recurse_all_subdirectories()
            .filter("*.dll")
            .exclude(r"c:\\origin\\legacy.dll")
        )
        fs.files
        fs.copy.to(r"c:\\temp")
    """

    def __init__(self, matcher: PathMatcher | None = None) -> None:
        self.inclusions: list[str] = []
        self.exclusions: list[str] = []
        # None while idle.
        self.pending: PendingDirective | None = None
        self._matcher: PathMatcher = matcher or PathMatcher()

    def include(self, path: str | os.PathLike[str] | File | Directory) -> FileSet:
        """Include a path, or start a directory-mode include.

        Args:
            path: A literal path or wildcard pattern, or a ``Directory``
                to be narrowed by ``filter``.

        Returns:
            FileSet: ``self`` for chaining.
        """
        return self._add(Mode.INCLUDE, path)

    def exclude(self, path: str | os.PathLike[str] | File | Directory) -> FileSet:
        """Exclude a path, or start a directory-mode exclude.

        Args:
            path: A literal path or wildcard pattern, or a ``Directory``
                to be narrowed by ``filter``.

        Returns:
            FileSet: ``self`` for chaining.
        """
        return self._add(Mode.EXCLUDE, path)

    def recurse_all_subdirectories(self) -> FileSet:
        """Make the pending directory directive search all subdirectories.

        Raises:
            DirectiveError: If no directory-mode directive is pending.
        """
        self.pending = self._require_pending("recurse_all_subdirectories").extend(
            RECURSIVE_MARKER
        )
        return self

    def filter(self, pattern: str) -> FileSet:
        """Append a file name filter (e.g. ``*.cs``) and commit the directive.

        Raises:
            DirectiveError: If no directory-mode directive is pending.
        """
        pending = self._require_pending("filter")
        # A recursive marker already ends with a separator.
        separator = "" if pending.text.endswith(RECURSIVE_MARKER) else SEPARATOR
        self.pending = pending.extend(separator + pattern)
        self.process_pendings()
        return self

    def process_pendings(self) -> None:
        """Commit the pending directive, excludes before includes.

        A pending directive with empty text is dropped.
        """
        pending = self.pending
        if pending is None:
            return
        self.pending = None
        if not pending.text:
            return
        if pending.mode is Mode.EXCLUDE:
            self.exclusions.append(pending.text)
        else:
            self.inclusions.append(pending.text)
        logger.debug("Committed %s directive %s", pending.mode.value, pending.text)

    @property
    def files(self) -> tuple[str, ...]:
        """Resolve the set against the filesystem.

        Recomputed on every read. Each excluded path removes at most one
        matching occurrence from the included list. Paths are compared
        with ``\\`` and ``/`` treated as the same separator; the returned
        strings keep their original spelling.

        Raises:
            FileAccessError: If enumeration fails.
        """
        self.process_pendings()
        files = self._expand_all(self.inclusions)
        keys = [_comparison_key(path) for path in files]
        for exclusion in self._expand_all(self.exclusions):
            key = _comparison_key(exclusion)
            if key in keys:
                index = keys.index(key)
                del keys[index]
                del files[index]
        return tuple(files)

    @property
    def copy(self) -> CopyFileset:
        """Start a bulk copy of the resolved files."""
        self.process_pendings()
        return CopyFileset(self)

    def __iter__(self) -> Iterator[str]:
        return iter(self.files)

    def _expand_all(self, directives: list[str]) -> list[str]:
        expanded: list[str] = []
        for directive in directives:
            expanded.extend(self._matcher.expand(directive))
        return expanded

    def _add(self, mode: Mode, path: str | os.PathLike[str] | File | Directory) -> FileSet:
        self.process_pendings()
        if isinstance(path, Directory):
            self.pending = PendingDirective(mode, path.path)
            return self
        target = self.exclusions if mode is Mode.EXCLUDE else self.inclusions
        target.append(os.fspath(path))
        return self

    def _require_pending(self, operation: str) -> PendingDirective:
        if self.pending is None:
            raise DirectiveError(
                f"{operation}() needs a pending directory; "
                "call include(Directory(...)) or exclude(Directory(...)) first"
            )
        return self.pending


class CopyFileset(Failable):
    """Copies every resolved file of a ``FileSet`` into one directory."""

    def __init__(self, fileset: FileSet, fs: FileSystemWrapper | None = None) -> None:
        self._fileset = fileset
        self._fs: FileSystemWrapper = fs or FileSystemWrapper()

    def to(self, destination: str | os.PathLike[str]) -> list[str]:
        """Copy each resolved file into *destination*.

        Returns:
            list[str]: The source paths that were processed.
        """
        target = os.fspath(destination)
        sources = list(self._fileset.files)
        logger.debug("Copying %d file(s) to %s", len(sources), target)
        for source in sources:
            op = CopyFile(source, self._fs)
            op.on_error = self.on_error
            op.to_directory(target)
        return sources
