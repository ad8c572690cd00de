"""Token replacement: ``@token@`` placeholders substituted in file text."""

from __future__ import annotations

import logging
import os

from fluentfs.fs import Failable, FileSystemWrapper, run_failable

logger = logging.getLogger(__name__)

TOKEN_DELIMITER = "@"


class TokenReplacer(Failable):
    """Accumulates replacements over a file's text before writing it out."""

    def __init__(self, text: str, fs: FileSystemWrapper | None = None) -> None:
        self.text: str = text
        self.token: str = ""
        self._fs: FileSystemWrapper = fs or FileSystemWrapper()

    def replace_token(self, token: str) -> TokenWith:
        """Select the token to replace next.

        Tokens in the text are surrounded by ``@`` signs, so
        ``replace_token("name")`` targets every ``@name@``.
        """
        self.token = token
        return TokenWith(self)

    def to(self, destination: str | os.PathLike[str]) -> None:
        """Write the replaced text to *destination*."""
        run_failable(self.on_error, self._fs.write_all_text, os.fspath(destination), self.text)


class TokenWith:
    """Second half of ``replace_token(...).with_value(...)``."""

    def __init__(self, replacer: TokenReplacer) -> None:
        self._replacer = replacer

    def with_value(self, value: str) -> TokenReplacer:
        replacer = self._replacer
        placeholder = f"{TOKEN_DELIMITER}{replacer.token}{TOKEN_DELIMITER}"
        logger.debug("Replacing %s", placeholder)
        replacer.text = replacer.text.replace(placeholder, value)
        return replacer
