"""Exception classes for Pincel.

Provides standardized exceptions for error handling throughout Pincel.
"""

from __future__ import annotations


class PincelError(Exception):
    """Base exception for all Pincel errors.

    Subclass this for specific error categories.
    """

    pass


class InvalidPatternError(PincelError):
    """Error when a highlighting rule cannot be registered.

    Raised when a matcher fails to compile, is empty, or when an
    interpolating region uses the same text for both inner markers.
    Pattern tables are usually hand-written, so this is recoverable:
    the registry is left exactly as it was before the failed call.
    """

    def __init__(self, rule: str, pattern: str, message: str) -> None:
        """Initialize pattern error.

        Args:
            rule: Name of the rule being registered (e.g., "comment")
            pattern: The offending pattern text
            message: Description of the problem
        """
        self.rule = rule
        self.pattern = pattern
        self.message = message
        super().__init__(f"Rule '{rule}' ({pattern!r}): {message}")


class ConfigError(PincelError):
    """Error when an engine configuration value is out of range."""

    pass


class LineOutOfRangeError(PincelError, IndexError):
    """Error when an edit references a line the document does not have.

    Queries never raise this; they return an empty result instead,
    because a renderer may run slightly ahead of an edit.
    """

    def __init__(self, line: int, line_count: int) -> None:
        """Initialize line error.

        Args:
            line: The requested line index (0-indexed)
            line_count: Number of lines currently in the document
        """
        self.line = line
        self.line_count = line_count
        super().__init__(f"line {line} out of range (document has {line_count} lines)")


class InvariantError(PincelError):
    """Internal tokenizer consistency failure.

    Only raised when the engine runs with ``strict=True``. Otherwise the
    inconsistent atom is skipped and a warning is logged.
    """

    def __init__(self, message: str, line: int | None = None) -> None:
        self.line = line
        location = f" (line {line})" if line is not None else ""
        super().__init__(f"{message}{location}")
