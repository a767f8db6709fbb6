"""
Unified Result types and error hierarchy for kirit.

This module provides:
1. Result[T, E] type for explicit error handling
2. Domain-specific exception hierarchy

Usage:
    from kirit.core.result import Ok, Err, Result, NotFoundError

    def find_todo(todos, token) -> Result[int, NotFoundError]:
        if not todos:
            return Err(NotFoundError("Todo not found"))
        return Ok(0)

    result = find_todo(todos, "1")
    if result.is_ok():
        print(result.value)
    else:
        print(result.error)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")
E = TypeVar("E", bound=Exception)


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """Represents a successful result containing a value."""

    value: T

    def is_ok(self) -> bool:
        return True

    def is_err(self) -> bool:
        return False

    def unwrap(self) -> T:
        """Return the contained value."""
        return self.value


@dataclass(frozen=True, slots=True)
class Err(Generic[E]):
    """Represents a failed result containing an error."""

    error: E

    def is_ok(self) -> bool:
        return False

    def is_err(self) -> bool:
        return True

    def unwrap(self) -> T:
        """Raise the contained error."""
        raise self.error


# Type alias for Result
Result = Ok[T] | Err[E]


# ---------------------------------------------------------------------------
# Domain-specific error hierarchy
# ---------------------------------------------------------------------------


class KiritError(Exception):
    """Base exception for all kirit errors.

    All custom exceptions should inherit from this class to enable
    consistent error handling across the codebase.
    """

    def __init__(self, message: str, *, context: dict | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def __str__(self) -> str:
        if self.context:
            ctx_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            return f"{self.message} [{ctx_str}]"
        return self.message


class ValidationError(KiritError):
    """Raised for input validation failures.

    Examples:
    - Empty note, todo or idea text
    - Unparseable or ambiguous position
    - Unknown priority or sort key
    """

    pass


class NotFoundError(KiritError):
    """Raised when a position or id prefix matches no record."""

    pass


class StorageReadError(KiritError):
    """Raised (as an Err value) when a collection file cannot be parsed.

    Never shown to the user: RecordStore.load() turns it into an empty list.
    """

    pass


class StorageWriteError(KiritError):
    """Raised when a collection file cannot be written."""

    pass


class ConfigurationError(KiritError):
    """Raised for configuration issues.

    Examples:
    - Config file parse errors
    - Config root is not a mapping
    """

    pass


__all__ = [
    # Result types
    "Ok",
    "Err",
    "Result",
    # Error hierarchy
    "KiritError",
    "ValidationError",
    "NotFoundError",
    "StorageReadError",
    "StorageWriteError",
    "ConfigurationError",
]
