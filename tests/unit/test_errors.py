"""Tests for the simbook exception hierarchy."""

import pytest

from simbook.errors import (
    CacheError,
    ConfigurationError,
    ErrorCode,
    SimbookError,
    StoreError,
    StoreIdentityError,
    cache_unreadable,
    cache_write_failed,
    identity_missing,
    store_not_provisioned,
    store_unavailable,
)


class TestHierarchy:
    """All errors derive from SimbookError."""

    @pytest.mark.parametrize(
        "error_class", [ConfigurationError, StoreError, StoreIdentityError, CacheError]
    )
    def test_subclass(self, error_class):
        assert issubclass(error_class, SimbookError)

    def test_default_message_and_code(self):
        error = StoreIdentityError()
        assert error.message == "Store identity unavailable"
        assert error.code == ErrorCode.IDENT_MISSING
        assert str(error) == "Store identity unavailable"


class TestSimbookError:
    """Tests for base error behavior."""

    def test_cause_is_chained(self):
        cause = OSError("disk gone")
        error = SimbookError("boom", cause=cause)
        assert error.__cause__ is cause

    def test_store_path_in_details(self):
        error = StoreError("no card", store_path="/x.db")
        assert error.details == {"store_path": "/x.db"}
        assert error.code == ErrorCode.STORE_UNAVAILABLE

    def test_code_override(self):
        error = StoreError("q", code=ErrorCode.STORE_QUERY_FAILED)
        assert error.code == ErrorCode.STORE_QUERY_FAILED
        assert error.message == "q"

    def test_configuration_error_details(self):
        error = ConfigurationError(config_key="store.db_path", config_path="/c.json")
        assert error.details == {"config_key": "store.db_path", "config_path": "/c.json"}


class TestFactories:
    """Tests for convenience factories."""

    def test_store_not_provisioned(self):
        error = store_not_provisioned("/sim.db")
        assert error.code == ErrorCode.STORE_NOT_PROVISIONED
        assert "/sim.db" in error.message

    def test_store_unavailable(self):
        cause = RuntimeError("locked")
        error = store_unavailable("/sim.db", cause=cause)
        assert error.code == ErrorCode.STORE_UNAVAILABLE
        assert error.cause is cause

    def test_identity_missing(self):
        error = identity_missing("FakeSource")
        assert isinstance(error, StoreIdentityError)
        assert error.details == {"source": "FakeSource"}

    def test_cache_errors(self):
        assert cache_unreadable("/c.json").code == ErrorCode.CACHE_READ_FAILED
        assert cache_write_failed("/c.json").code == ErrorCode.CACHE_WRITE_FAILED
        assert cache_write_failed("/c.json").details == {"cache_path": "/c.json"}
