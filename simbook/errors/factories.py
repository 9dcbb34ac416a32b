"""Convenience factory functions for common error scenarios."""

from __future__ import annotations

from simbook.errors.base import ErrorCode
from simbook.errors.store import CacheError, StoreError, StoreIdentityError


def store_not_provisioned(store_path: str, cause: Exception | None = None) -> StoreError:
    """Create a StoreError for a database that holds no SIM card."""
    return StoreError(
        f"No provisioned SIM card at: {store_path}",
        store_path=store_path,
        code=ErrorCode.STORE_NOT_PROVISIONED,
        cause=cause,
    )


def store_unavailable(store_path: str, cause: Exception | None = None) -> StoreError:
    """Create a StoreError for a card database that cannot be opened."""
    return StoreError(
        f"Cannot open SIM card store at: {store_path}",
        store_path=store_path,
        cause=cause,
    )


def identity_missing(source: str | None = None) -> StoreIdentityError:
    """Create a StoreIdentityError for a store that reports no serial."""
    details = {"source": source} if source else None
    return StoreIdentityError(
        "Attached store did not report an identity; refusing to key the capacity cache",
        details=details,
    )


def cache_unreadable(cache_path: str, cause: Exception | None = None) -> CacheError:
    """Create a CacheError for a cache file that cannot be read or parsed."""
    return CacheError(
        f"Cannot read capacity cache at: {cache_path}",
        cache_path=cache_path,
        code=ErrorCode.CACHE_READ_FAILED,
        cause=cause,
    )


def cache_write_failed(cache_path: str, cause: Exception | None = None) -> CacheError:
    """Create a CacheError for a failed cache write."""
    return CacheError(
        f"Cannot write capacity cache at: {cache_path}",
        cache_path=cache_path,
        code=ErrorCode.CACHE_WRITE_FAILED,
        cause=cause,
    )
