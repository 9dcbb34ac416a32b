"""SIM phonebook interfaces.

The record store, the capacity cache and the store identity source are
external collaborators. Everything in simbook codes against these protocols.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable

# Raw column names used by the SIM ADN provider
COLUMN_ID = "_id"
COLUMN_NAME = "tag"
COLUMN_NUMBER = "number"


@dataclass(frozen=True)
class Contact:
    """A phonebook entry.

    Attributes:
        id: Store-assigned identifier, None for records not yet created.
        name: Display name.
        number: Phone number as stored.
    """

    id: str | None
    name: str
    number: str


class RecordStore(Protocol):
    """Raw query/insert/delete transport of a SIM phonebook.

    Rejections carry no diagnostic: insert returns None, delete returns 0.
    """

    def query(
        self, columns: Sequence[str], order_by: str | None = None
    ) -> list[Mapping[str, Any]]:
        """Return every row, projected to ``columns``.

        Args:
            columns: Column names to return.
            order_by: Optional column to sort ascending by.

        Returns:
            Rows as mappings keyed by column name. Empty if there are none.
        """
        ...

    def insert(self, values: Mapping[str, str]) -> str | None:
        """Insert a row.

        Returns:
            An acknowledgement identifier on success, None on any rejection.
        """
        ...

    def delete(self, where: Mapping[str, str]) -> int:
        """Delete rows whose columns equal every value in ``where``.

        Returns:
            Number of rows removed.
        """
        ...


class CapacityCache(Protocol):
    """Persistent mapping from store identity to maximum name length."""

    def get(self, key: str) -> int | None:
        """Return the stored length, or None if nothing was stored."""
        ...

    def put(self, key: str, value: int) -> None:
        """Store a positive length under ``key``."""
        ...


@runtime_checkable
class StoreIdentitySource(Protocol):
    """Provides the identity (e.g. ICCID) of the attached physical store."""

    def get_store_identity(self) -> str | None:
        """Return the current store identity, or None if unavailable."""
        ...
