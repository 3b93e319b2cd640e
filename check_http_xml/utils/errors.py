"""Error taxonomy for the check.

Every exception carries the ``Status`` the check exits with when it
escapes to the command line entry point.
"""

from .status import Status


class CheckError(Exception):
    """Base class for errors that end a check with a fixed status."""

    status = Status.UNKNOWN


class ConfigError(CheckError):
    """Invalid configuration, detected before any network call."""


class PathSyntaxError(ConfigError):
    """Malformed path expression."""


class RangeSyntaxError(ConfigError):
    """Malformed threshold range."""


class FetchError(CheckError):
    """Transport failure, TLS failure, timeout or non-2xx response."""

    status = Status.CRITICAL


class ContentTypeMismatch(CheckError):
    """The server answered, but not with the expected representation."""


class DocumentParseError(CheckError):
    """Response body could not be parsed into a document tree."""
