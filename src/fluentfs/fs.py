"""Filesystem primitives and continue-on-error execution."""

from __future__ import annotations

import logging
import os
import shutil
from collections.abc import Callable
from enum import Enum
from typing import Any, TypeVar

from fluentfs import FileAccessError

logger = logging.getLogger(__name__)


class OnError(Enum):
    """What to do when a filesystem action fails."""

    FAIL = "fail"
    CONTINUE = "continue"


def run_failable(on_error: OnError, action: Callable[..., Any], *args: Any) -> None:
    """Run a filesystem action under the given error mode.

    Args:
        on_error: ``FAIL`` re-raises, ``CONTINUE`` logs and returns.
        action: Callable performing the I/O.
        *args: Positional arguments for *action*.

    Raises:
        FileAccessError: If *action* raises ``OSError`` and *on_error* is
            ``OnError.FAIL``.
    """
    try:
        action(*args)
    except OSError as exc:
        if on_error is OnError.CONTINUE:
            logger.warning("Continuing after error: %s", exc)
            return
        raise FileAccessError(str(exc)) from exc


_F = TypeVar("_F", bound="Failable")


class Failable:
    """Mixin giving an operation a switchable error mode."""

    on_error: OnError = OnError.FAIL

    @property
    def continue_on_error(self: _F) -> _F:
        """Log failures and keep going instead of raising."""
        self.on_error = OnError.CONTINUE
        return self

    @property
    def fail_on_error(self: _F) -> _F:
        """Raise ``FileAccessError`` on failure (the default)."""
        self.on_error = OnError.FAIL
        return self


class FileSystemWrapper:
    """Thin seam over ``os`` and ``shutil`` so operations can be faked in tests."""

    def copy(self, source: str, destination: str) -> None:
        shutil.copy2(source, destination)

    def move(self, source: str, destination: str) -> None:
        shutil.move(source, destination)

    def rename(self, source: str, destination: str) -> None:
        os.rename(source, destination)

    def read_all_text(self, path: str) -> str:
        with open(path, encoding="utf-8") as f:
            return f.read()

    def write_all_text(self, path: str, text: str) -> None:
        with open(path, "w", encoding="utf-8", newline="") as f:
            f.write(text)

    def create_directory(self, path: str) -> None:
        os.makedirs(path, exist_ok=True)

    def delete_directory(self, path: str) -> None:
        shutil.rmtree(path)
