"""
Centralized error formatting for the CLI.

Maps kirit exceptions to a stable error code and severity so every command
reports failures the same way.
"""

from __future__ import annotations

import traceback
from dataclasses import dataclass
from enum import Enum, auto
from typing import Any

from rich.markup import escape

from kirit.core.result import (
    ConfigurationError,
    KiritError,
    NotFoundError,
    StorageReadError,
    StorageWriteError,
    ValidationError,
)


class ErrorSeverity(Enum):
    """Severity levels for error display."""

    INFO = auto()
    WARNING = auto()
    ERROR = auto()
    CRITICAL = auto()


@dataclass(frozen=True, slots=True)
class FormattedError:
    """A formatted error ready for display."""

    message: str
    severity: ErrorSeverity
    code: str
    details: dict[str, Any]
    traceback: str | None = None


def _error_code(exc: Exception) -> str:
    """Derive an error code from exception type."""
    if isinstance(exc, ValidationError):
        return "VALIDATION_ERROR"
    if isinstance(exc, NotFoundError):
        return "NOT_FOUND"
    if isinstance(exc, StorageWriteError):
        return "STORAGE_WRITE_ERROR"
    if isinstance(exc, StorageReadError):
        return "STORAGE_READ_ERROR"
    if isinstance(exc, ConfigurationError):
        return "CONFIG_ERROR"
    if isinstance(exc, KiritError):
        return "KIRIT_ERROR"
    if isinstance(exc, PermissionError):
        return "PERMISSION_DENIED"
    return "UNEXPECTED_ERROR"


def _severity(exc: Exception) -> ErrorSeverity:
    """Determine severity based on exception type."""
    if isinstance(exc, (ValidationError, NotFoundError)):
        return ErrorSeverity.WARNING
    if isinstance(exc, (StorageWriteError, PermissionError)):
        return ErrorSeverity.CRITICAL
    return ErrorSeverity.ERROR


def format_error(
    exc: Exception,
    *,
    include_traceback: bool = False,
) -> FormattedError:
    """Format an exception into a structured error.

    Args:
        exc: The exception to format
        include_traceback: Whether to include full traceback (for debugging)

    Returns:
        FormattedError ready for display
    """
    details: dict[str, Any] = {}
    message = str(exc)
    if isinstance(exc, KiritError):
        details = exc.context.copy()
        message = exc.message

    if isinstance(exc, OSError):
        if exc.filename:
            details["path"] = str(exc.filename)
        if exc.errno:
            details["errno"] = exc.errno

    tb = None
    if include_traceback:
        tb = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))

    return FormattedError(
        message=message,
        severity=_severity(exc),
        code=_error_code(exc),
        details=details,
        traceback=tb,
    )


def format_for_cli(error: FormattedError) -> str:
    """Format error for CLI display with Rich markup."""
    color_map = {
        ErrorSeverity.INFO: "blue",
        ErrorSeverity.WARNING: "yellow",
        ErrorSeverity.ERROR: "red",
        ErrorSeverity.CRITICAL: "bold red",
    }
    color = color_map.get(error.severity, "red")

    parts = [f"[{color}]✖ {escape(error.message)}[/{color}] [dim]({error.code})[/dim]"]

    if error.details:
        detail_lines = [f"  [dim]{k}: {escape(str(v))}[/dim]" for k, v in error.details.items()]
        parts.append("\n".join(detail_lines))

    if error.traceback:
        parts.append(f"\n[dim]{escape(error.traceback)}[/dim]")

    return "\n".join(parts)


__all__ = [
    "ErrorSeverity",
    "FormattedError",
    "format_error",
    "format_for_cli",
]
