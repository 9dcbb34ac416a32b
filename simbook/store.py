"""SQLite-backed stand-in for a SIM card phonebook (ADN table).

Behaves like the platform SIM provider: inserts are rejected without a
diagnostic when a field exceeds the card's limits or the card is full, and a
successful insert is acknowledged with a fixed row URI rather than a usable
identifier. Conforms to ``contracts.phonebook.RecordStore`` and
``contracts.phonebook.StoreIdentitySource``.

Usage:
    store = SQLiteSimStore.provision(path, "8944100000000000001", name_limit=14, capacity=250)
    store.insert({"tag": "Alice", "number": "5550100"})
"""

from __future__ import annotations

import logging
import re
import sqlite3
from collections.abc import Mapping, Sequence
from contextlib import closing
from pathlib import Path
from typing import Any

from contracts.phonebook import COLUMN_ID, COLUMN_NAME, COLUMN_NUMBER
from simbook.config import ICC_ADN_URI
from simbook.errors import (
    ErrorCode,
    StoreError,
    store_not_provisioned,
    store_unavailable,
)

logger = logging.getLogger(__name__)

ADN_COLUMNS = frozenset({COLUMN_ID, COLUMN_NAME, COLUMN_NUMBER})

# GSM 11.11 dialling digits plus the international prefix
_DIALABLE = re.compile(r"[0-9+*#]+")

DEFAULT_NUMBER_LIMIT = 20

SCHEMA_SQL = """
CREATE TABLE IF NOT EXISTS card (
    id INTEGER PRIMARY KEY CHECK (id = 1),
    serial TEXT,
    uri TEXT NOT NULL,
    name_limit INTEGER NOT NULL,
    number_limit INTEGER NOT NULL,
    capacity INTEGER NOT NULL
);

CREATE TABLE IF NOT EXISTS adn (
    _id INTEGER PRIMARY KEY AUTOINCREMENT,
    tag TEXT NOT NULL,
    number TEXT NOT NULL
);
"""


def _check_columns(columns: Sequence[str]) -> None:
    unknown = [c for c in columns if c not in ADN_COLUMNS]
    if unknown:
        raise ValueError(f"Unknown ADN column(s): {', '.join(unknown)}")


class SQLiteSimStore:
    """A simulated SIM card persisted in a SQLite file.

    Attributes:
        path: Database file.
        uri: Provider URI reported in insert acknowledgements.
        name_limit: Longest name the card accepts.
        number_limit: Longest number the card accepts.
        capacity: Maximum number of records.
    """

    def __init__(self, path: Path) -> None:
        """Open a provisioned card.

        Raises:
            StoreError: If the file is missing, unreadable or not a SIM card.
        """
        self.path = Path(path)
        if not self.path.exists():
            raise store_not_provisioned(str(self.path))

        try:
            self._conn = sqlite3.connect(str(self.path))
        except sqlite3.Error as e:
            raise store_unavailable(str(self.path), cause=e) from e
        self._conn.row_factory = sqlite3.Row

        try:
            row = self._conn.execute(
                "SELECT serial, uri, name_limit, number_limit, capacity FROM card WHERE id = 1"
            ).fetchone()
        except sqlite3.Error as e:
            self._conn.close()
            raise store_not_provisioned(str(self.path), cause=e) from e

        if row is None:
            self._conn.close()
            raise store_not_provisioned(str(self.path))

        self._serial: str | None = row["serial"]
        self.uri: str = row["uri"]
        self.name_limit: int = row["name_limit"]
        self.number_limit: int = row["number_limit"]
        self.capacity: int = row["capacity"]

    @classmethod
    def provision(
        cls,
        path: Path,
        serial: str | None,
        *,
        name_limit: int,
        capacity: int,
        number_limit: int = DEFAULT_NUMBER_LIMIT,
        uri: str = ICC_ADN_URI,
    ) -> SQLiteSimStore:
        """Create a blank card at ``path`` and open it.

        Args:
            path: Database file to create.
            serial: Card serial (ICCID). None simulates a card without one.
            name_limit: Longest accepted name.
            capacity: Maximum number of records.
            number_limit: Longest accepted number.
            uri: Provider URI.

        Raises:
            ValueError: If a limit is not positive.
            StoreError: If a card is already provisioned at ``path``.
        """
        if name_limit < 1 or capacity < 1 or number_limit < 1:
            raise ValueError("name_limit, capacity and number_limit must be positive")

        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        try:
            with closing(sqlite3.connect(str(path))) as conn, conn:
                conn.executescript(SCHEMA_SQL)
                existing = conn.execute("SELECT serial FROM card WHERE id = 1").fetchone()
                if existing is not None:
                    raise StoreError(
                        f"A SIM card is already provisioned at: {path}",
                        store_path=str(path),
                        details={"serial": existing[0]},
                    )
                conn.execute(
                    "INSERT INTO card (id, serial, uri, name_limit, number_limit, capacity) "
                    "VALUES (1, ?, ?, ?, ?, ?)",
                    (serial, uri, name_limit, number_limit, capacity),
                )
        except sqlite3.Error as e:
            raise store_unavailable(str(path), cause=e) from e

        logger.info(
            "Provisioned SIM %s at %s (name_limit=%d, capacity=%d)",
            serial,
            path,
            name_limit,
            capacity,
        )
        return cls(path)

    # ------------------------------------------------------------------
    # StoreIdentitySource
    # ------------------------------------------------------------------

    def get_store_identity(self) -> str | None:
        return self._serial or None

    # ------------------------------------------------------------------
    # RecordStore
    # ------------------------------------------------------------------

    def query(
        self, columns: Sequence[str], order_by: str | None = None
    ) -> list[Mapping[str, Any]]:
        _check_columns(columns)
        sql = f"SELECT {', '.join(columns)} FROM adn"
        if order_by is not None:
            _check_columns([order_by])
            sql += f" ORDER BY {order_by}"
        try:
            rows = self._conn.execute(sql).fetchall()
        except sqlite3.Error as e:
            raise StoreError(
                "SIM phonebook query failed",
                store_path=str(self.path),
                code=ErrorCode.STORE_QUERY_FAILED,
                cause=e,
            ) from e
        return [dict(row) for row in rows]

    def insert(self, values: Mapping[str, str]) -> str | None:
        name = values.get(COLUMN_NAME) or ""
        number = values.get(COLUMN_NUMBER) or ""

        if set(values) - {COLUMN_NAME, COLUMN_NUMBER}:
            logger.debug("Rejected insert: unsupported columns %s", sorted(values))
            return None
        if not name or len(name) > self.name_limit:
            logger.debug("Rejected insert: name length %d (limit %d)", len(name), self.name_limit)
            return None
        if len(number) > self.number_limit or not _DIALABLE.fullmatch(number):
            logger.debug("Rejected insert: number %r not storable", number)
            return None

        try:
            with self._conn:
                (count,) = self._conn.execute("SELECT COUNT(*) FROM adn").fetchone()
                if count >= self.capacity:
                    logger.debug("Rejected insert: card full (%d records)", count)
                    return None
                self._conn.execute(
                    "INSERT INTO adn (tag, number) VALUES (?, ?)", (name, number)
                )
        except sqlite3.Error as e:
            logger.warning("SIM insert failed: %s", e)
            return None

        return f"{self.uri}/0"

    def delete(self, where: Mapping[str, str]) -> int:
        if not where:
            raise ValueError("Refusing to delete without a filter")
        _check_columns(list(where))

        clause = " AND ".join(f"{column} = ?" for column in where)
        try:
            with self._conn:
                cursor = self._conn.execute(
                    f"DELETE FROM adn WHERE {clause}", tuple(where.values())
                )
        except sqlite3.Error as e:
            logger.warning("SIM delete failed: %s", e)
            return 0
        return cursor.rowcount

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def close(self) -> None:
        self._conn.close()

    def __enter__(self) -> SQLiteSimStore:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
