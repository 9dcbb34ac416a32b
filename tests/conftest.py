"""Pytest configuration for simbook tests.

Provides provisioned SIM card databases and capacity caches under tmp_path,
and resets process-wide state (config singleton, latency tracker) between
tests.
"""

from pathlib import Path

import pytest

from simbook.cache import JsonCapacityCache, MemoryCapacityCache
from simbook.config import reset_config
from simbook.store import SQLiteSimStore
from simbook.utils.latency_tracker import get_tracker
from tests.helpers import DEFAULT_IDENTITY, FakeRecordStore


@pytest.fixture(autouse=True)
def _reset_global_state():
    """Isolate the config singleton and latency records per test."""
    reset_config()
    get_tracker().reset()
    yield
    reset_config()
    get_tracker().reset()


@pytest.fixture
def sim_path(tmp_path: Path) -> Path:
    return tmp_path / "sim.db"


@pytest.fixture
def sim_store(sim_path: Path):
    """A provisioned card accepting names up to 14 characters, 10 slots."""
    store = SQLiteSimStore.provision(
        sim_path, DEFAULT_IDENTITY, name_limit=14, capacity=10
    )
    yield store
    store.close()


@pytest.fixture
def fake_store() -> FakeRecordStore:
    """A fake card accepting names up to 15 characters."""
    return FakeRecordStore(name_limit=15)


@pytest.fixture
def memory_cache() -> MemoryCapacityCache:
    return MemoryCapacityCache()


@pytest.fixture
def json_cache(tmp_path: Path) -> JsonCapacityCache:
    return JsonCapacityCache(tmp_path / "capacity.json")
