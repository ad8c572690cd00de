"""Single-file copy, move and rename operations."""

from __future__ import annotations

import logging
import os

from fluentfs import FileAccessError
from fluentfs.fs import Failable, FileSystemWrapper, run_failable
from fluentfs.tokens import TokenReplacer, TokenWith

logger = logging.getLogger(__name__)


def resolve_destination(source: str, destination: str) -> str:
    """Return the full target path for copying or moving *source*.

    A destination without a file extension is treated as a directory and
    the source file name is kept; otherwise it is the full target path.

    Args:
        source: Source file path.
        destination: Target directory or file path.

    Returns:
        str: Target file path.
    """
    if not os.path.splitext(destination)[1]:
        return os.path.join(destination, os.path.basename(source))
    return destination


class CopyFile(Failable):
    """Copies one file."""

    def __init__(self, source: str, fs: FileSystemWrapper | None = None) -> None:
        self._source = source
        self._fs: FileSystemWrapper = fs or FileSystemWrapper()

    def to(self, destination: str | os.PathLike[str]) -> None:
        target = resolve_destination(self._source, os.fspath(destination))
        logger.debug("Copying %s -> %s", self._source, target)
        run_failable(self.on_error, self._fs.copy, self._source, target)

    def to_directory(self, directory: str | os.PathLike[str]) -> None:
        """Copy into *directory* keeping the file name, whatever its extension."""
        target = os.path.join(os.fspath(directory), os.path.basename(self._source))
        logger.debug("Copying %s -> %s", self._source, target)
        run_failable(self.on_error, self._fs.copy, self._source, target)

    def replace_token(self, token: str) -> TokenWith:
        """Start a token replacement over the source file's text.

        Raises:
            FileAccessError: If the source file cannot be read.
        """
        try:
            text = self._fs.read_all_text(self._source)
        except OSError as exc:
            raise FileAccessError(f"cannot read '{self._source}': {exc}") from exc
        replacer = TokenReplacer(text, self._fs)
        replacer.on_error = self.on_error
        return replacer.replace_token(token)


class MoveFile(Failable):
    """Moves one file."""

    def __init__(self, source: str, fs: FileSystemWrapper | None = None) -> None:
        self._source = source
        self._fs: FileSystemWrapper = fs or FileSystemWrapper()

    def to(self, destination: str | os.PathLike[str]) -> None:
        target = resolve_destination(self._source, os.fspath(destination))
        logger.debug("Moving %s -> %s", self._source, target)
        run_failable(self.on_error, self._fs.move, self._source, target)


class RenameFile(Failable):
    """Renames one file in place; the new name must not contain a directory."""

    def __init__(self, source: str, fs: FileSystemWrapper | None = None) -> None:
        self._source = source
        self._fs: FileSystemWrapper = fs or FileSystemWrapper()

    def to(self, new_name: str) -> None:
        target = os.path.join(os.path.dirname(self._source), new_name)
        logger.debug("Renaming %s -> %s", self._source, target)
        run_failable(self.on_error, self._fs.rename, self._source, target)
