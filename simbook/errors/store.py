"""Record store, store identity and capacity cache error classes."""

from __future__ import annotations

from typing import Any

from simbook.errors.base import ErrorCode, SimbookError

# Record Store Errors


class StoreError(SimbookError):
    """Raised when the record store cannot be opened or queried.

    Rejected inserts and deletes are not errors; they are reported
    through return values.
    """

    default_message = "Record store unavailable"
    default_code = ErrorCode.STORE_UNAVAILABLE

    def __init__(
        self,
        message: str | None = None,
        *,
        store_path: str | None = None,
        code: ErrorCode | None = None,
        details: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        details = details or {}
        if store_path:
            details["store_path"] = store_path
        super().__init__(message, code=code, details=details, cause=cause)


class StoreIdentityError(SimbookError):
    """Raised when the attached store reports no usable identity."""

    default_message = "Store identity unavailable"
    default_code = ErrorCode.IDENT_MISSING


# Capacity Cache Errors


class CacheError(SimbookError):
    """Raised when the persistent capacity cache cannot be read or written."""

    default_message = "Capacity cache error"
    default_code = ErrorCode.CACHE_READ_FAILED

    def __init__(
        self,
        message: str | None = None,
        *,
        cache_path: str | None = None,
        code: ErrorCode | None = None,
        details: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        details = details or {}
        if cache_path:
            details["cache_path"] = cache_path
        super().__init__(message, code=code, details=details, cause=cause)
