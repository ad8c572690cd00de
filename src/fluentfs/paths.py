"""File and directory value types used as builder arguments."""

from __future__ import annotations

import os
from dataclasses import dataclass

from fluentfs.fs import FileSystemWrapper, OnError, run_failable
from fluentfs.matcher import SEPARATOR, WILDCARD, PathMatcher
from fluentfs.operations import CopyFile, MoveFile, RenameFile


@dataclass(frozen=True, slots=True)
class File:
    """A single file path.

    Passed to ``FileSet.include`` it is a literal directive. The ``copy``,
    ``move`` and ``rename`` properties each start a fresh operation.
    """

    path: str

    def __str__(self) -> str:
        return self.path

    def __fspath__(self) -> str:
        return self.path

    @property
    def copy(self) -> CopyFile:
        return CopyFile(self.path)

    @property
    def move(self) -> MoveFile:
        return MoveFile(self.path)

    @property
    def rename(self) -> RenameFile:
        return RenameFile(self.path)


@dataclass(frozen=True, slots=True)
class Directory:
    """A directory path.

    Passed to ``FileSet.include`` or ``FileSet.exclude`` it starts a
    directory-mode directive that ``filter`` and
    ``recurse_all_subdirectories`` extend.
    """

    path: str

    def __str__(self) -> str:
        return self.path

    def __fspath__(self) -> str:
        return self.path

    def sub_folder(self, name: str) -> Directory:
        return Directory(os.path.join(self.path, name))

    def file(self, name: str) -> File:
        return File(os.path.join(self.path, name))

    def files(self, pattern: str = WILDCARD, matcher: PathMatcher | None = None) -> list[str]:
        """List files directly in this directory whose names match *pattern*.

        Args:
            pattern: ``fnmatch`` file name filter. Defaults to every file.
            matcher: Matcher to expand with. Defaults to the local disk.

        Returns:
            list[str]: Matching file paths, sorted by name. A pattern
            without ``*`` is returned as a literal path.
        """
        active = matcher or PathMatcher()
        return active.expand(self.path + SEPARATOR + pattern)

    def create(self, on_error: OnError = OnError.FAIL) -> None:
        """Create the directory and any missing parents."""
        run_failable(on_error, FileSystemWrapper().create_directory, self.path)

    def delete(self, on_error: OnError = OnError.FAIL) -> None:
        """Delete the directory and everything under it."""
        run_failable(on_error, FileSystemWrapper().delete_directory, self.path)
