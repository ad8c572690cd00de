"""fluentfs — fluent file sets resolved from include and exclude directives."""

__version__ = "0.1.0"


class FluentFsError(Exception):
    """Base class for all errors raised by fluentfs."""


class FileAccessError(FluentFsError):
    """Underlying filesystem access failed.

    Raised for permission problems, device errors and other ``OSError``
    conditions met while enumerating or copying files. The original
    ``OSError`` is always chained as ``__cause__``.
    """


class DirectiveError(FluentFsError):
    """A builder call had no directive to act on.

    Raised when ``filter`` or ``recurse_all_subdirectories`` is called
    without a pending directory-mode include or exclude.
    """
