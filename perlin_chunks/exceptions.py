# perlin_chunks/exceptions.py

"""
Exception hierarchy for the chunked noise generator.

Every failure in this package is a programming or configuration defect, never
a transient condition, so nothing here is meant to be retried. Each exception
carries an optional ``details`` dict with the offending values.
"""

from typing import Any


class PerlinChunksError(Exception):
    """Base exception for all errors raised by perlin_chunks."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize base exception with message and optional context.

        Args:
            message: Human-readable error message
            details: Optional dictionary of additional context for debugging
        """
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        """Return string representation including details."""
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class ConfigurationError(PerlinChunksError, ValueError):
    """Raised when the generator is configured with impossible parameters."""

    def __init__(
        self,
        message: str,
        setting: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize configuration error.

        Args:
            message: Error message
            setting: Name of the setting that failed validation
            details: Additional context
        """
        details = details or {}
        if setting:
            details["setting"] = setting
        super().__init__(message, details)


class DimensionMismatchError(PerlinChunksError, ValueError):
    """Raised when two vectors of different dimension are combined."""

    def __init__(self, left: int, right: int, details: dict[str, Any] | None = None) -> None:
        details = details or {}
        details["left"] = left
        details["right"] = right
        super().__init__(f"Vector dimensions do not match: {left} != {right}", details)
