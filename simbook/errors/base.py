"""Base error classes and error codes for simbook.

Contains ErrorCode enum, SimbookError base class, and ConfigurationError.
All simbook-specific exceptions inherit from SimbookError.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any


class ErrorCode(StrEnum):
    """Standard error codes for simbook errors.

    These codes can be used to programmatically identify error types
    and are included in CLI error output.
    """

    # Configuration errors (CFG_*)
    CFG_INVALID = "CFG_INVALID"

    # Record store errors (STORE_*)
    STORE_UNAVAILABLE = "STORE_UNAVAILABLE"
    STORE_NOT_PROVISIONED = "STORE_NOT_PROVISIONED"
    STORE_QUERY_FAILED = "STORE_QUERY_FAILED"

    # Store identity errors (IDENT_*)
    IDENT_MISSING = "IDENT_MISSING"

    # Capacity cache errors (CACHE_*)
    CACHE_READ_FAILED = "CACHE_READ_FAILED"
    CACHE_WRITE_FAILED = "CACHE_WRITE_FAILED"

    # Generic errors
    UNKNOWN = "UNKNOWN"


class SimbookError(Exception):
    """Base exception for all simbook errors.

    Attributes:
        message: Human-readable error message.
        code: Machine-readable error code from ErrorCode enum.
        details: Optional additional context about the error.
        cause: Optional original exception that caused this error.
    """

    default_message: str = "An error occurred"
    default_code: ErrorCode = ErrorCode.UNKNOWN

    def __init__(
        self,
        message: str | None = None,
        *,
        code: ErrorCode | None = None,
        details: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message or self.default_message)
        self.message = message or self.default_message
        self.code = code or self.default_code
        self.details = details or {}
        self.cause = cause
        self.__cause__ = cause


# Configuration Errors


class ConfigurationError(SimbookError):
    """Raised for configuration and settings issues."""

    default_message = "Configuration error"
    default_code = ErrorCode.CFG_INVALID

    def __init__(
        self,
        message: str | None = None,
        *,
        config_key: str | None = None,
        config_path: str | None = None,
        code: ErrorCode | None = None,
        details: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        details = details or {}
        if config_key:
            details["config_key"] = config_key
        if config_path:
            details["config_path"] = config_path
        super().__init__(message, code=code, details=details, cause=cause)
