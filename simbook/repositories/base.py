"""Base repository with shared record store access."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from contracts.phonebook import RecordStore

logger = logging.getLogger(__name__)


class BaseRepository:
    """Base class for repositories that access a phonebook RecordStore.

    The store is always passed in explicitly so tests can substitute a fake.
    """

    def __init__(self, store: RecordStore) -> None:
        self._store = store

    @property
    def store(self) -> RecordStore:
        return self._store
