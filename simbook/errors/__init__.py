"""Unified exception hierarchy for simbook.

All simbook-specific exceptions inherit from SimbookError, enabling consistent
handling in the CLI and in library callers.

Exception Hierarchy:
    SimbookError (base)
    +-- ConfigurationError - Configuration and settings issues
    +-- StoreError - Record store cannot be opened or queried
    +-- StoreIdentityError - Attached store reports no identity
    +-- CacheError - Capacity cache cannot be read or written

Rejected inserts, failed deletes and a failed capacity discovery are NOT
errors. They are reported through return values (False, 0).

Usage:
    from simbook.errors import StoreError

    try:
        store = SQLiteSimStore(path)
    except StoreError as e:
        logger.error("Store error: %s (code: %s)", e.message, e.code)
"""

# --- base ---
from simbook.errors.base import (
    ConfigurationError,
    ErrorCode,
    SimbookError,
)

# --- convenience factories ---
from simbook.errors.factories import (
    cache_unreadable,
    cache_write_failed,
    identity_missing,
    store_not_provisioned,
    store_unavailable,
)

# --- store & cache ---
from simbook.errors.store import (
    CacheError,
    StoreError,
    StoreIdentityError,
)

__all__ = [
    # Error codes
    "ErrorCode",
    # Base exception
    "SimbookError",
    # Configuration errors
    "ConfigurationError",
    # Store errors
    "StoreError",
    "StoreIdentityError",
    # Cache errors
    "CacheError",
    # Convenience functions
    "store_not_provisioned",
    "store_unavailable",
    "identity_missing",
    "cache_unreadable",
    "cache_write_failed",
]
