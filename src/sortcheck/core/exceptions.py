"""Exception hierarchy for sortcheck.

Ordering violations, unsupported patterns and inapplicable constructs are
reported as Diagnostic values, not exceptions. The classes below cover
everything that aborts a run instead.
"""

from __future__ import annotations


class SortCheckError(Exception):
    """Base exception for sortcheck.

    All sortcheck specific exceptions inherit from this class.
    """

    pass


class UsageError(SortCheckError):
    """A checker was invoked with a non-empty argument list.

    Checkers accept no options. This signals caller misuse, not an
    ordering defect, and is raised before any analysis happens.

    Attributes:
        args_text: The rejected argument text as written by the caller.

    """

    def __init__(self, message: str, args_text: str | None = None) -> None:
        """Initialize UsageError.

        Args:
            message: Human-readable error message.
            args_text: The rejected argument text.

        """
        super().__init__(message)
        self.args_text = args_text


class ConfigError(SortCheckError):
    """Configuration file could not be read or failed validation."""

    pass


class SourceParseError(SortCheckError):
    """Source text could not be tokenized or parsed.

    Attributes:
        filename: Name of the file being parsed.
        line: 1-based line of the failure, if known.

    """

    def __init__(self, message: str, filename: str, line: int | None = None) -> None:
        """Initialize SourceParseError.

        Args:
            message: Human-readable error message.
            filename: Name of the file being parsed.
            line: 1-based line of the failure, if known.

        """
        super().__init__(message)
        self.filename = filename
        self.line = line
