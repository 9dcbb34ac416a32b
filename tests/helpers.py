"""Shared test helpers and fakes."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from simbook.errors import cache_unreadable, cache_write_failed

DEFAULT_IDENTITY = "8944100000000000001"

# --- Record Store Fakes ---


class FakeRecordStore:
    """In-memory SIM record store that records every call.

    Names longer than ``name_limit`` are rejected. ``name_limit=None``
    accepts any name, ``name_limit=0`` rejects everything.
    """

    def __init__(
        self,
        name_limit: int | None = None,
        identity: str | None = DEFAULT_IDENTITY,
    ) -> None:
        self.name_limit = name_limit
        self.identity = identity
        self.rows: list[dict[str, Any]] = []
        self.inserts: list[dict[str, str]] = []
        self.deletes: list[dict[str, str]] = []
        self.queries = 0
        self._next_id = 1

    @property
    def calls(self) -> int:
        return self.queries + len(self.inserts) + len(self.deletes)

    def get_store_identity(self) -> str | None:
        return self.identity

    def query(
        self, columns: Sequence[str], order_by: str | None = None
    ) -> list[Mapping[str, Any]]:
        self.queries += 1
        rows = [{c: row[c] for c in columns} for row in self.rows]
        if order_by is not None:
            rows.sort(key=lambda r: r[order_by])
        return rows

    def insert(self, values: Mapping[str, str]) -> str | None:
        self.inserts.append(dict(values))
        if self.name_limit is not None and len(values["tag"]) > self.name_limit:
            return None
        self.rows.append({"_id": self._next_id, **values})
        self._next_id += 1
        return "content://icc/adn/0"

    def delete(self, where: Mapping[str, str]) -> int:
        self.deletes.append(dict(where))
        keep = [r for r in self.rows if any(r[k] != v for k, v in where.items())]
        removed = len(self.rows) - len(keep)
        self.rows = keep
        return removed


class IdentityOnlySource:
    """Identity source independent of the record store."""

    def __init__(self, identity: str | None) -> None:
        self.identity = identity

    def get_store_identity(self) -> str | None:
        return self.identity


# --- Cache Fakes ---


class BrokenCapacityCache:
    """Capacity cache whose reads and/or writes fail."""

    def __init__(self, fail_reads: bool = True, fail_writes: bool = True) -> None:
        self.fail_reads = fail_reads
        self.fail_writes = fail_writes
        self.data: dict[str, int] = {}

    def get(self, key: str) -> int | None:
        if self.fail_reads:
            raise cache_unreadable("broken://cache")
        return self.data.get(key)

    def put(self, key: str, value: int) -> None:
        if self.fail_writes:
            raise cache_write_failed("broken://cache")
        self.data[key] = value
