"""Persistent capacity caches keyed by SIM card identity.

Both implementations conform to ``contracts.phonebook.CapacityCache``.
Stored values are positive maximum name lengths; anything else reads as
"not yet discovered".
"""

from __future__ import annotations

import json
import logging
import os
import threading
from pathlib import Path

from simbook.errors import CacheError, cache_unreadable, cache_write_failed
from simbook.utils.atomic_write import atomic_write_text
from simbook.utils.latency_tracker import track_latency

logger = logging.getLogger(__name__)


def _check_value(value: int) -> None:
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise ValueError(f"capacity must be a positive int, got {value!r}")


class MemoryCapacityCache:
    """Dict-backed capacity cache for tests and throwaway sessions."""

    def __init__(self, initial: dict[str, int] | None = None) -> None:
        self._data: dict[str, int] = dict(initial or {})
        self._lock = threading.Lock()

    def get(self, key: str) -> int | None:
        with self._lock:
            value = self._data.get(key)
        return value if value and value > 0 else None

    def put(self, key: str, value: int) -> None:
        _check_value(value)
        with self._lock:
            self._data[key] = value

    def entries(self) -> dict[str, int]:
        with self._lock:
            return dict(self._data)


class JsonCapacityCache:
    """Capacity cache persisted as a JSON object ``{identity: length}``.

    The file is re-read on every ``get`` so that external edits (for example
    clearing an entry by hand) are honoured. Writes are atomic and owner-only.

    A missing file is an empty cache. ``get`` raises CacheError for a file
    that cannot be read or parsed; ``put`` replaces such a file.
    """

    def __init__(self, path: Path) -> None:
        self.path = Path(path)
        self._lock = threading.Lock()

    def _load(self) -> dict[str, int]:
        if not self.path.exists():
            return {}
        try:
            with self.path.open(encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise cache_unreadable(str(self.path), cause=e) from e
        if not isinstance(data, dict):
            raise cache_unreadable(str(self.path))
        return {
            str(key): value
            for key, value in data.items()
            if isinstance(value, int) and not isinstance(value, bool)
        }

    def get(self, key: str) -> int | None:
        """Return the cached length for ``key``, or None if absent.

        Raises:
            CacheError: If the cache file exists but is unreadable.
        """
        with track_latency("cache_read"), self._lock:
            value = self._load().get(key)
        return value if value and value > 0 else None

    def put(self, key: str, value: int) -> None:
        """Store ``value`` under ``key``, overwriting any previous entry.

        An unreadable cache file is moved aside to ``<name>.corrupt`` and
        replaced by a fresh one holding only this entry.

        Raises:
            ValueError: If value is not a positive int.
            CacheError: If the file cannot be written.
        """
        _check_value(value)
        with track_latency("cache_write"), self._lock:
            try:
                data = self._load()
            except CacheError as e:
                data = self._quarantine(e)
            data[key] = value
            try:
                atomic_write_text(
                    self.path, json.dumps(data, indent=2, sort_keys=True), mode=0o600
                )
            except OSError as e:
                raise cache_write_failed(str(self.path), cause=e) from e
        logger.debug("Cached capacity %d for store %s in %s", value, key, self.path)

    def entries(self) -> dict[str, int]:
        """Return a copy of every cached entry."""
        with self._lock:
            return self._load()

    def _quarantine(self, error: CacheError) -> dict[str, int]:
        corrupt = self.path.with_name(self.path.name + ".corrupt")
        try:
            os.replace(self.path, corrupt)
        except OSError as e:
            raise cache_write_failed(str(self.path), cause=e) from e
        logger.warning("Moved unreadable capacity cache to %s: %s", corrupt, error)
        return {}
