"""Exception classes for runmark.

Malformed markup never raises: unmatched, crossing or over-nested markers
fall back to literal text. These exceptions cover misuse of the API and
internal consistency failures.
"""

from __future__ import annotations


class RunmarkError(Exception):
    """Base exception for all runmark errors."""

    pass


class ParseError(RunmarkError):
    """Internal parser invariant violated.

    Raised when link text recursion goes past the configured bound, which
    only happens when a caller drives the parser with inconsistent state.
    """

    def __init__(self, message: str, position: int | None = None) -> None:
        """Initialize parse error with an optional source offset.

        Args:
            message: Error description
            position: Character offset in the source string (0-indexed)
        """
        self.message = message
        self.position = position
        location = f"offset {position}: " if position is not None else ""
        super().__init__(f"{location}{message}")


class ConfigError(RunmarkError):
    """Invalid parse configuration value."""

    def __init__(self, field: str, message: str) -> None:
        self.field = field
        super().__init__(f"Config '{field}': {message}")


class StyleResolutionError(RunmarkError):
    """A style resolver returned something the parser cannot use."""

    def __init__(self, method: str, message: str) -> None:
        """Initialize style resolution error.

        Args:
            method: Name of the resolver method that misbehaved
            message: Description of the problem
        """
        self.method = method
        super().__init__(f"{method}: {message}")
